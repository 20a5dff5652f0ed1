"""
One interactive run: the scan, the current selection and the user intents
(toggle, favorite, open, rename, remove) the shells forward to the core.
"""
from __future__ import annotations

import logging
import os
from typing import Callable, Iterable, List

from quickspace.errors import InvalidArgument
from quickspace.favorites import FavoritesStore
from quickspace.git_status import probe_directories
from quickspace.launcher import Launcher, directories_label
from quickspace.models import DirectoryEntry, Favorite, LaunchResult
from quickspace.ranker import rank_directories
from quickspace.scanner import list_directories
from quickspace.selection import SelectionSet
from quickspace.settings import Settings

logger = logging.getLogger(__name__)

Prober = Callable[[str, Iterable[str]], List[DirectoryEntry]]


class Session:
    def __init__(self, settings: Settings, favorites: FavoritesStore, launcher: Launcher,
                 prober: Prober = probe_directories):
        self.settings = settings
        self.favorites_store = favorites
        self.launcher = launcher
        self.prober = prober
        self.selection = SelectionSet()

    def root(self) -> str:
        return self.settings.root()

    def path_for(self, name: str) -> str:
        return os.path.abspath(os.path.join(self.root(), name))

    def scan(self) -> List[DirectoryEntry]:
        """List, probe and rank the repository's subdirectories."""
        root = self.root()
        names = list_directories(root, self.settings.show_hidden_directories)
        return rank_directories(self.prober(root, names))

    @property
    def selection_count(self) -> int:
        return len(self.selection)

    def toggle(self, name: str) -> bool:
        return self.selection.toggle(name)

    def favorites(self) -> List[Favorite]:
        return self.favorites_store.load()

    def create_favorite(self) -> Favorite:
        if not self.selection:
            raise InvalidArgument("Please Select At Least One Directory")
        return self.favorites_store.create(self.selection.names())

    def rename_favorite(self, favorite_id: str, new_name: str) -> Favorite:
        return self.favorites_store.rename(favorite_id, new_name)

    def remove_favorite(self, favorite_id: str) -> Favorite:
        return self.favorites_store.remove(favorite_id)

    def open_selection(self) -> LaunchResult:
        """Open every selected directory; the selection is cleared only on success."""
        names = self.selection.names()
        if not names:
            raise InvalidArgument("Please Select At Least One Directory")
        result = self.launcher.launch([self.path_for(n) for n in names], directories_label(len(names)))
        self.selection.clear()
        return result

    def open_favorite(self, favorite_id: str) -> LaunchResult:
        favorite = self.favorites_store.get(favorite_id)
        paths = [self.path_for(n) for n in favorite.directories]
        return self.launcher.launch(paths, favorite.name)

    @classmethod
    def build(cls, settings: Settings, favorites: FavoritesStore) -> "Session":
        return cls(settings, favorites, Launcher(settings.editor))
