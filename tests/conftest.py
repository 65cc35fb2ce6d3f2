from __future__ import annotations

import logging
from pathlib import Path

import pytest

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES


@pytest.fixture
def fixture_copy(tmp_path: Path):
    """Copy a fixture into ``tmp_path`` so relative ``<>`` IRIs resolve there."""

    def _copy(name: str, target: str | None = None) -> Path:
        dest = tmp_path / (target or name)
        dest.write_text((FIXTURES / name).read_text(encoding="utf-8"), encoding="utf-8")
        return dest

    return _copy


@pytest.fixture(autouse=True)
def _reset_logging():
    """Drop stderr handlers installed by CLI runs between tests."""

    yield
    root = logging.getLogger("doapchanges")
    for handler in list(root.handlers):
        if handler.get_name() == "doapchanges.stderr":
            root.removeHandler(handler)
    root.setLevel(logging.NOTSET)
