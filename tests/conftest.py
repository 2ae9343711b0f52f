"""Pytest configuration and fixtures for safefs tests."""

from collections.abc import Callable
from pathlib import Path

import pytest

_SETTINGS_ENV = (
    "SAFEFS_MAX_PATH_LENGTH",
    "SAFEFS_COPY_BUFFER_SIZE",
    "SAFEFS_HTTP_TIMEOUT",
)


@pytest.fixture(autouse=True)
def _clean_settings_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep settings from the developer's environment out of the tests."""
    for name in _SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """A small origin tree with nested directories and files."""
    root = tmp_path / "origin"
    (root / "docs" / "deep").mkdir(parents=True)
    (root / "empty").mkdir()
    (root / "readme.txt").write_text("top level")
    (root / "docs" / "guide.md").write_text("# Guide")
    (root / "docs" / "deep" / "notes.txt").write_text("deep notes")
    return root


@pytest.fixture
def hidden_entries() -> Callable[[Path], list[Path]]:
    """List the hidden temp siblings (``.!*``) left in a directory."""

    def _list(directory: Path) -> list[Path]:
        return [p for p in directory.iterdir() if p.name.startswith(".!")]

    return _list
