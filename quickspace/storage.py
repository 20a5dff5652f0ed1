from abc import ABC, abstractmethod
import os
import re
import tempfile
from pathlib import Path
from typing import Dict, Optional

from quickspace.errors import StorageError

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class KeyValueStore(ABC):
    """
    Raw text persistence keyed by name.
    Callers own the serialization format; a store only reads and writes strings.
    """
    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored text for key, or None if nothing was stored.
        Unreadable data raises StorageError."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Replace the stored text for key."""


class MemoryStore(KeyValueStore):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class FileStore(KeyValueStore):
    """
    Keeps each key in ``<directory>/<key>.json``.
    Writes go to a temporary file in the same directory and are moved into place,
    so a reader never sees a half-written payload.
    """
    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Could not read {path}: {e}") from e

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                os.unlink(tmp_name)
                raise
        except OSError as e:
            raise StorageError(f"Could not write {path}: {e}") from e

