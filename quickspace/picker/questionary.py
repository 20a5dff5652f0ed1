from typing import List, Optional

import questionary

from quickspace.errors import ConfigurationError, NotFoundError
from quickspace.models import DirectoryEntry
from .base import Picker, PickResult, entry_title

PICK_DIRECTORIES = "__pick_directories__"


class QuestionaryPicker(Picker):
    """
    Plain terminal prompts: choose a favorite or tick directories in a checkbox,
    optionally save the ticked set as a favorite, then open it.
    """
    def __init__(self, offer_favorite: bool = True):
        self.offer_favorite = offer_favorite

    def pick(self, session) -> PickResult:
        try:
            entries = session.scan()
        except (ConfigurationError, NotFoundError):
            return PickResult(configure=True)

        favorite_id = self._ask_favorite(session)
        if favorite_id is None:
            # User aborted
            return PickResult()
        if favorite_id != PICK_DIRECTORIES:
            return PickResult(launched=session.open_favorite(favorite_id))

        selected = self._ask_directories(entries)
        if not selected:
            return PickResult()
        for name in selected:
            session.selection.add(name)

        if self.offer_favorite and questionary.confirm("Save this selection as a favorite?", default=False).ask():
            session.create_favorite()

        return PickResult(launched=session.open_selection())

    def _ask_favorite(self, session) -> Optional[str]:
        favorites = session.favorites()
        if not favorites:
            return PICK_DIRECTORIES
        choices = [questionary.Choice(title=f"★ {f.name}", value=f.id) for f in favorites]
        choices.append(questionary.Choice(title="Pick directories...", value=PICK_DIRECTORIES))
        return questionary.select("Open a favorite or pick directories:", choices=choices).ask()

    def _ask_directories(self, entries: List[DirectoryEntry]) -> List[str]:
        if not entries:
            return []
        choices = [
            questionary.Choice(title=entry_title(e), value=e.name)
            for e in entries
        ]
        selected = questionary.checkbox("Select directories to open:", choices=choices).ask()
        return selected or []
