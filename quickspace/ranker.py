from typing import Iterable, List

from quickspace.models import DirectoryEntry


def rank_key(entry: DirectoryEntry):
    return (not entry.has_git, entry.name.casefold())


def rank_directories(entries: Iterable[DirectoryEntry]) -> List[DirectoryEntry]:
    """
    Git repositories first, then everything else; case-insensitive by name
    within each group. The sort is stable, so names that only differ in case
    keep their input order.
    """
    return sorted(entries, key=rank_key)
