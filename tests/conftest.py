from pathlib import Path

import pytest

from quickspace.favorites import FavoritesStore
from quickspace.launcher import Launcher
from quickspace.session import Session
from quickspace.settings import Settings
from quickspace.storage import MemoryStore

from helpers import stub_prober


@pytest.fixture
def repo_root(tmp_path: Path) -> Path:
    """
    repos/
    ├── .hidden/
    ├── alpha/
    ├── beta/
    ├── gamma/
    └── notes.txt
    """
    root = tmp_path / "repos"
    for name in ("alpha", "beta", "gamma", ".hidden"):
        (root / name).mkdir(parents=True)
    (root / "notes.txt").write_text("not a directory", encoding="utf-8")
    return root


@pytest.fixture
def store() -> FavoritesStore:
    return FavoritesStore(MemoryStore())


@pytest.fixture
def session(repo_root: Path, store: FavoritesStore) -> Session:
    settings = Settings(repository_directory=str(repo_root))
    return Session(settings, store, Launcher("cursor"), prober=stub_prober)
