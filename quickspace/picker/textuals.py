from typing import List, Optional

from rich.text import Text
from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Footer, Header, Input, Label, Tree
from textual.widgets.tree import TreeNode

from quickspace.errors import (
    ConfigurationError,
    InvalidArgument,
    NotFoundError,
    QuickspaceError,
    ReadError,
)
from quickspace.models import DirectoryEntry, Favorite, LaunchResult
from quickspace.picker.base import (
    Picker,
    PickResult,
    directory_label,
    favorite_label,
    favorites_subtitle,
    selection_hint,
)
from quickspace.session import Session


class TextualPicker(Picker):
    """
    Uses Textual to show favorites and the ranked directories as a tree.
    Directories are toggled with enter; favorites open with enter.
    """
    def pick(self, session: Session) -> PickResult:
        app = _WorkspaceApp(session)
        app.run()
        return app.outcome


class RenameFavoriteScreen(ModalScreen[Optional[str]]):
    """Modal form that returns the new favorite name, or None when cancelled."""
    DEFAULT_CSS = """
    RenameFavoriteScreen {
        align: center middle;
    }
    #rename-dialog {
        width: 60;
        height: auto;
        border: thick $accent;
        background: $surface;
        padding: 1 2;
    }
    """
    BINDINGS = [("escape", "cancel", "Cancel")]

    def __init__(self, current_name: str, **kwargs):
        super().__init__(**kwargs)
        self.current_name = current_name

    def compose(self) -> ComposeResult:
        with Vertical(id="rename-dialog"):
            yield Label("Favorite Name")
            yield Input(value=self.current_name, placeholder="Enter new name for favorite", id="rename-input")

    def on_mount(self) -> None:
        self.query_one(Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        # a blank name keeps the form open
        if event.value.strip():
            self.dismiss(event.value.strip())

    def action_cancel(self) -> None:
        self.dismiss(None)


class _WorkspaceApp(App):
    CSS = """
    #workspace-tree {
        border: solid gray;
        padding: 0 1;
    }
    /* this is the focused row highlight */
    #workspace-tree > .tree--cursor {
        background: blue;
        color: white;
    }
    """
    TITLE = "quickspace"
    AUTO_FOCUS = "#workspace-tree"

    BINDINGS = [
        ("o", "open_selection", "Open selection"),
        ("f", "create_favorite", "Favorite selection"),
        ("r", "rename_favorite", "Rename favorite"),
        ("d", "remove_favorite", "Remove favorite"),
        Binding("p,full_stop", "preferences", "Preferences"),
        ("slash", "search", "Search"),
        ("q", "quit", "Quit"),
    ]

    def __init__(self, session: Session, **kwargs):
        super().__init__(**kwargs)
        self.session = session
        self.entries: List[DirectoryEntry] = []
        self.favorites: List[Favorite] = []
        self.config_error: Optional[str] = None
        self.filter_text = ""
        self.outcome = PickResult()

    def compose(self) -> ComposeResult:
        yield Header()
        yield Input(placeholder="Search directories...", id="search")
        yield Tree("Workspace", id="workspace-tree")
        yield Footer()

    def on_mount(self) -> None:
        tree = self.query_one(Tree)
        tree.show_root = False
        tree.focus()
        self.reload(rescan=True)

    # --- state -> tree -------------------------------------------------

    def reload(self, rescan: bool = False) -> None:
        """Refresh favorites (and the directory scan when asked) and rebuild the tree."""
        if rescan:
            self.config_error = None
            try:
                self.entries = self.session.scan()
            except (ConfigurationError, NotFoundError) as e:
                self.entries = []
                self.config_error = str(e)
            except ReadError as e:
                self.entries = []
                self.notify(str(e), title="Failed to load directories", severity="error")
        self.favorites = self.session.favorites()
        self._build_tree()

    def _build_tree(self) -> None:
        tree = self.query_one(Tree)
        tree.clear()
        if self.config_error:
            tree.root.add_leaf(Text(f"⚠ Configuration Required: {self.config_error}", style="bold yellow"))
            tree.root.expand()
            self.sub_title = "p to open preferences • q to quit"
            return

        if self.favorites:
            section = tree.root.add(Text(f"⭐ Favorites · {favorites_subtitle(self.favorites)}"), expand=True)
            for favorite in self.favorites:
                section.add_leaf(Text(favorite_label(favorite), style="yellow"), data=favorite)

        section = tree.root.add(Text("📁 Directories"), expand=True)
        for entry in self._visible_entries():
            section.add_leaf(self._directory_text(entry), data=entry)
        tree.root.expand()
        self._update_hint()

    def _visible_entries(self) -> List[DirectoryEntry]:
        needle = self.filter_text.strip().casefold()
        if not needle:
            return self.entries
        return [e for e in self.entries if needle in e.name.casefold()]

    def _directory_text(self, entry: DirectoryEntry) -> Text:
        selected = entry.name in self.session.selection
        text = Text(directory_label(entry, selected), style="bold green" if selected else "")
        if entry.git_branch:
            text.stylize("green", len(text) - len(entry.git_branch) - 2)
        return text

    def _update_hint(self) -> None:
        self.sub_title = selection_hint(self.session.selection_count)

    def _cursor_data(self):
        node: Optional[TreeNode] = self.query_one(Tree).cursor_node
        return node.data if node is not None else None

    def _report(self, error: QuickspaceError, title: str) -> None:
        self.notify(str(error), title=title, severity="error")

    def _finish(self, result: LaunchResult) -> None:
        self.outcome = PickResult(launched=result)
        self.exit(self.outcome)

    # --- events and actions ---------------------------------------------

    def on_tree_node_selected(self, event: Tree.NodeSelected) -> None:
        data = event.node.data
        if isinstance(data, DirectoryEntry):
            self.session.toggle(data.name)
            event.node.set_label(self._directory_text(data))
            self._update_hint()
        elif isinstance(data, Favorite):
            self._open_favorite(data)

    @on(Input.Changed, "#search")
    def filter_directories(self, event: Input.Changed) -> None:
        self.filter_text = event.value
        self._build_tree()

    @on(Input.Submitted, "#search")
    def leave_search(self) -> None:
        self.query_one(Tree).focus()

    def _open_favorite(self, favorite: Favorite) -> None:
        try:
            result = self.session.open_favorite(favorite.id)
        except QuickspaceError as e:
            self._report(e, f"Failed To Open In {self.session.settings.editor}")
            return
        self._finish(result)

    def action_open_selection(self) -> None:
        if self.config_error:
            return
        try:
            result = self.session.open_selection()
        except InvalidArgument as e:
            self._report(e, "Nothing To Open")
            return
        except QuickspaceError as e:
            self._report(e, f"Failed To Open In {self.session.settings.editor}")
            return
        self._finish(result)

    def action_create_favorite(self) -> None:
        if self.config_error:
            return
        try:
            favorite = self.session.create_favorite()
        except QuickspaceError as e:
            self._report(e, "Failed to save favorite")
            return
        self.notify(favorite.name, title="Favorite Created")
        self.reload()

    def action_rename_favorite(self) -> None:
        favorite = self._cursor_data()
        if not isinstance(favorite, Favorite):
            self.notify("Highlight a favorite to rename it", severity="warning")
            return

        def _apply(new_name: Optional[str]) -> None:
            if new_name is None:
                return
            try:
                renamed = self.session.rename_favorite(favorite.id, new_name)
            except QuickspaceError as e:
                self._report(e, "Failed to rename favorite")
                return
            self.notify(renamed.name, title="Favorite Renamed")
            self.reload()

        self.push_screen(RenameFavoriteScreen(favorite.name), _apply)

    def action_remove_favorite(self) -> None:
        favorite = self._cursor_data()
        if not isinstance(favorite, Favorite):
            self.notify("Highlight a favorite to remove it", severity="warning")
            return
        try:
            self.session.remove_favorite(favorite.id)
        except QuickspaceError as e:
            self._report(e, "Failed to remove favorite")
            return
        self.notify(favorite.name, title="Favorite Removed")
        self.reload()

    def action_search(self) -> None:
        self.query_one("#search", Input).focus()

    def action_preferences(self) -> None:
        self.outcome = PickResult(configure=True)
        self.exit(self.outcome)
