"""Shared fixtures for View Engine tests."""

from pathlib import Path

import pytest

from view_engine import ViewEngine


@pytest.fixture
def views_dir(tmp_path: Path) -> Path:
    path = tmp_path / "views"
    path.mkdir()
    return path


@pytest.fixture
def engine(views_dir: Path) -> ViewEngine:
    return ViewEngine(views_path=views_dir)


@pytest.fixture
def write_view(views_dir: Path):
    """Create a view file under the views directory."""
    def _write(relative: str, content: str) -> Path:
        path = views_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path
    return _write
