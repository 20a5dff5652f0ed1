from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from pydantic import BaseModel

from quickspace.errors import NotFoundError
from quickspace.models import DirectoryEntry, Favorite, LaunchResult
from quickspace.session import Session


class PickResult(BaseModel):
    """What an interactive run ended with: a launch, a request to configure, or nothing."""
    launched: Optional[LaunchResult] = None
    configure: bool = False


class Picker(ABC):
    """
    Abstract base class for the shells that drive a Session.
    Concrete strategies decide how directories are chosen and what gets opened.
    """
    @abstractmethod
    def pick(self, session: Session) -> PickResult:
        """
        Let the user choose directories or a favorite from the session
        and open them. Returns how the run ended.
        """


class DefaultPicker(Picker):
    """
    Non-interactive picker: selects the given directory names and opens them.
    Names that are not in the current scan raise NotFoundError.
    """
    def __init__(self, names: Sequence[str]):
        self.names = list(names)

    def pick(self, session: Session) -> PickResult:
        known = {entry.name for entry in session.scan()}
        missing = [n for n in self.names if n not in known]
        if missing:
            raise NotFoundError(f"Directory not found: {', '.join(missing)}")
        for name in self.names:
            session.selection.add(name)
        return PickResult(launched=session.open_selection())


def entry_title(entry: DirectoryEntry) -> str:
    branch = f" [{entry.git_branch}]" if entry.git_branch else ""
    return f"{entry.name}{branch}"


def directory_label(entry: DirectoryEntry, selected: bool) -> str:
    mark = "[x]" if selected else "[ ]"
    return f"{mark} {entry_title(entry)}"


def favorite_label(favorite: Favorite) -> str:
    return f"★ {favorite.name} ({', '.join(favorite.directories)})"


def selection_hint(count: int) -> str:
    if count:
        return f"{count} selected • o to open • f to favorite"
    return "enter to select • r to rename favorites"


def favorites_subtitle(favorites: List[Favorite]) -> str:
    count = len(favorites)
    return f"{count} saved workspace{'' if count == 1 else 's'}"
