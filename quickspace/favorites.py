"""
Persistence of named directory groups ("favorites").

The whole collection is stored as one JSON array under a single key of a
KeyValueStore and rewritten after every create, rename or remove.
"""
from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Iterable, List

from pydantic import ValidationError

from quickspace.errors import InvalidArgument, NotFoundError, StorageError
from quickspace.models import Favorite, FavoriteList
from quickspace.storage import KeyValueStore

logger = logging.getLogger(__name__)

FAVORITES_KEY = "favorites"


def _now_millis() -> int:
    return time.time_ns() // 1_000_000


def default_name(directories: Iterable[str]) -> str:
    return ", ".join(directories)


class FavoritesStore:
    """
    Ordered collection of favorites (creation order; rename keeps position).

    Each mutation re-reads the persisted snapshot, changes it and writes it back
    while holding the store lock, so two mutations from this process never
    drop each other's update.
    """

    def __init__(self, storage: KeyValueStore, key: str = FAVORITES_KEY,
                 clock: Callable[[], int] = _now_millis):
        self.storage = storage
        self.key = key
        self._clock = clock
        self._lock = threading.RLock()
        self._last_id = 0

    def load(self) -> List[Favorite]:
        """Return the persisted favorites; an absent, unreadable or corrupt payload gives an empty list."""
        try:
            raw = self.storage.get(self.key)
        except StorageError as e:
            logger.warning(f"Ignoring unreadable favorites payload under {self.key!r}: {e}")
            return []
        if not raw:
            return []
        try:
            return FavoriteList.validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Ignoring corrupt favorites payload under {self.key!r}: {e}")
            return []

    def get(self, favorite_id: str) -> Favorite:
        for favorite in self.load():
            if favorite.id == favorite_id:
                return favorite
        raise NotFoundError(f"Favorite not found: {favorite_id}")

    def create(self, selected: Iterable[str]) -> Favorite:
        directories = sorted(set(selected))
        if not directories:
            raise InvalidArgument("Please Select At Least One Directory")
        with self._lock:
            favorites = self.load()
            favorite = Favorite(
                id=self._next_id(favorites),
                name=default_name(directories),
                directories=directories,
            )
            favorites.append(favorite)
            self._save(favorites)
        logger.info(f"Created favorite {favorite.id}: {favorite.name}")
        return favorite

    def rename(self, favorite_id: str, new_name: str) -> Favorite:
        name = (new_name or "").strip()
        if not name:
            raise InvalidArgument("Favorite name must not be empty")
        with self._lock:
            favorites = self.load()
            index = self._index_of(favorites, favorite_id)
            renamed = favorites[index].model_copy(update={"name": name})
            favorites[index] = renamed
            self._save(favorites)
        logger.info(f"Renamed favorite {favorite_id} to {name!r}")
        return renamed

    def remove(self, favorite_id: str) -> Favorite:
        """Remove a favorite by id. An unknown id raises NotFoundError."""
        with self._lock:
            favorites = self.load()
            removed = favorites.pop(self._index_of(favorites, favorite_id))
            self._save(favorites)
        logger.info(f"Removed favorite {favorite_id}")
        return removed

    def _index_of(self, favorites: List[Favorite], favorite_id: str) -> int:
        for index, favorite in enumerate(favorites):
            if favorite.id == favorite_id:
                return index
        raise NotFoundError(f"Favorite not found: {favorite_id}")

    def _next_id(self, favorites: List[Favorite]) -> str:
        """Millisecond timestamp, bumped past anything issued or stored before."""
        taken = {f.id for f in favorites}
        floor = self._last_id
        for favorite in favorites:
            if favorite.id.isdigit():
                floor = max(floor, int(favorite.id))
        candidate = max(self._clock(), floor + 1)
        while str(candidate) in taken:
            candidate += 1
        self._last_id = candidate
        return str(candidate)

    def _save(self, favorites: List[Favorite]) -> None:
        payload = FavoriteList.dump_json(favorites).decode("utf-8")
        self.storage.set(self.key, payload)
