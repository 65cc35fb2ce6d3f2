from setuptools import setup, find_packages

setup(
    name="doapChanges",
    version="0.1.0",
    description="Render human-readable changelogs from DOAP Change Sets RDF",
    packages=find_packages(include=["doapChanges", "doapChanges.*"]),
    python_requires=">=3.10",
    install_requires=[
        "rdflib>=6.2",
        "click>=8.0",
        "requests>=2.31.0",
        "PyYAML>=6.0",
        "packaging>=21.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": ["doap-changes=doapChanges.cli:main"],
    },
    license="MIT",
)
