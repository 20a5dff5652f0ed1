# scanner.py
from __future__ import annotations

import logging
import os
import stat
from typing import List

from quickspace.errors import ConfigurationError, NotFoundError, ReadError

logger = logging.getLogger(__name__)


def list_directories(root: str, show_hidden: bool = False) -> List[str]:
    """
    Return the names of the immediate subdirectories of ``root``, sorted.

    Names starting with '.' are skipped unless ``show_hidden`` is set.
    Symlinks are followed; entries that cannot be stat-ed are left out
    instead of failing the whole listing.
    """
    if not root or not str(root).strip():
        raise ConfigurationError("Repository directory not configured")
    if not os.path.exists(root):
        raise NotFoundError(f"Directory does not exist: {root}")

    try:
        entries = os.listdir(root)
    except OSError as e:
        raise ReadError(f"Failed to read directory: {root}") from e

    names: List[str] = []
    for entry in entries:
        if not show_hidden and entry.startswith('.'):
            continue
        try:
            mode = os.stat(os.path.join(root, entry)).st_mode
        except OSError as e:
            logger.debug(f"Skipping {entry!r} in {root}: {e}")
            continue
        if stat.S_ISDIR(mode):
            names.append(entry)

    names.sort()
    logger.info(f"Scanned {root}: {len(names)} directories")
    return names
