import click
import pytest
from loguru import logger

from libitemstring import library


@pytest.fixture(autouse=True)
def _unload_library():
    library.reset()
    yield
    library.reset()
    logger.remove()


@pytest.fixture
def app_dir(tmp_path, monkeypatch):
    """Point click.get_app_dir (and so the settings file) at a temp dir."""
    path = tmp_path / "app"
    monkeypatch.setattr(click, "get_app_dir", lambda name: str(path))
    return path
