# main.py
import os
from pathlib import Path
from typing import Optional

# Must be set before GitPython is first imported. Without a git binary the
# probes then report no branch instead of the import failing.
os.environ.setdefault("GIT_PYTHON_REFRESH", "quiet")

import click  # noqa: E402

from quickspace.errors import ConfigurationError, NotFoundError, QuickspaceError  # noqa: E402
from quickspace.favorites import FavoritesStore  # noqa: E402
from quickspace.picker.base import DefaultPicker, PickResult  # noqa: E402
from quickspace.picker.questionary import QuestionaryPicker  # noqa: E402
from quickspace.picker.textuals import TextualPicker  # noqa: E402
from quickspace.session import Session  # noqa: E402
from quickspace.settings import (  # noqa: E402
    Settings,
    config_path,
    default_home,
    load_settings,
    resolve_settings,
    save_settings,
)
from quickspace.storage import FileStore  # noqa: E402
from quickspace.utils import configure_logging  # noqa: E402


class AppContext:
    """Everything a command needs, built lazily from the global options."""

    def __init__(self, home: Path, root: Optional[str] = None, show_hidden: Optional[bool] = None,
                 editor: Optional[str] = None):
        self.home = home
        self.root = root
        self.show_hidden = show_hidden
        self.editor = editor

    def settings(self) -> Settings:
        return resolve_settings(self.home, root=self.root, show_hidden=self.show_hidden, editor=self.editor)

    def favorites(self) -> FavoritesStore:
        return FavoritesStore(FileStore(self.home))

    def session(self) -> Session:
        return Session.build(self.settings(), self.favorites())


pass_app = click.make_pass_decorator(AppContext)


def _fail(error: QuickspaceError) -> None:
    click.secho(f"Error: {error}", fg="red", err=True)
    raise click.exceptions.Exit(1)


def _report(outcome: PickResult) -> None:
    if outcome.launched:
        click.secho(outcome.launched.message, fg="green", err=True)


def _open_preferences(home: Path) -> None:
    path = config_path(home)
    if not path.exists():
        save_settings(home, Settings())
    click.secho(f"Opening preferences: {path}", err=True)
    click.edit(filename=str(path))


@click.group(invoke_without_command=True)
@click.option("-r", "--root", envvar="QUICKSPACE_ROOT", default=None,
              help="Repository directory whose subdirectories are listed (overrides the config file).")
@click.option("--show-hidden/--hide-hidden", "show_hidden", default=None,
              help="Include directories whose name starts with '.'.")
@click.option("-e", "--editor", envvar="QUICKSPACE_EDITOR", default=None,
              help="Editor command used to open directories (default: cursor).")
@click.option("--home", envvar="QUICKSPACE_HOME", default=None,
              type=click.Path(file_okay=False, path_type=Path),
              help="Directory holding config.json and favorites.json.")
@click.option("--plain", is_flag=True,
              help="Use plain terminal prompts instead of the full-screen picker.")
@click.option("-v", "--verbose", is_flag=True,
              help="Echo log messages to stderr.")
@click.pass_context
def cli(ctx, root, show_hidden, editor, home, plain, verbose):
    """
    Pick directories from your repository folder and open them together in your editor.

    Run without a command to start the interactive picker:
    - enter toggles a directory or opens a favorite
    - o opens the selection, f saves it as a favorite
    - r / d rename or remove the highlighted favorite
    - p opens preferences, q quits
    """
    configure_logging(verbose)
    ctx.obj = AppContext(home or default_home(), root=root, show_hidden=show_hidden, editor=editor)

    if ctx.invoked_subcommand is not None:
        return

    app = ctx.obj
    try:
        session = app.session()
    except ConfigurationError as e:
        click.secho(f"Configuration Required: {e}", fg="yellow", err=True)
        _open_preferences(app.home)
        return

    # Choose picker strategy
    picker = QuestionaryPicker() if plain else TextualPicker()
    try:
        outcome = picker.pick(session)
    except QuickspaceError as e:
        _fail(e)
    if outcome.configure:
        _open_preferences(app.home)
    _report(outcome)


@cli.command("list")
@pass_app
def list_cmd(app: AppContext):
    """List the repository's directories, git repositories first."""
    try:
        entries = app.session().scan()
    except QuickspaceError as e:
        _fail(e)
    for entry in entries:
        if entry.git_branch:
            click.echo(f"{entry.name} " + click.style(f"[{entry.git_branch}]", fg="green"))
        else:
            click.echo(entry.name)


@cli.command("open")
@click.argument("names", nargs=-1, required=True)
@pass_app
def open_cmd(app: AppContext, names):
    """Open the named directories in the editor."""
    try:
        outcome = DefaultPicker(names).pick(app.session())
    except QuickspaceError as e:
        _fail(e)
    _report(outcome)


@cli.group("favorites")
def favorites_group():
    """Manage saved groups of directories."""


@favorites_group.command("list")
@pass_app
def favorites_list(app: AppContext):
    favorites = app.favorites().load()
    if not favorites:
        click.secho("No favorites yet.", err=True)
        return
    for favorite in favorites:
        click.echo(f"{favorite.id}\t{favorite.name}\t({', '.join(favorite.directories)})")


@favorites_group.command("add")
@click.argument("names", nargs=-1, required=True)
@pass_app
def favorites_add(app: AppContext, names):
    """Save the named directories as a favorite."""
    try:
        session = app.session()
        known = {entry.name for entry in session.scan()}
        for name in names:
            if name not in known:
                raise NotFoundError(f"Directory not found: {name}")
            session.selection.add(name)
        favorite = session.create_favorite()
    except QuickspaceError as e:
        _fail(e)
    click.secho(f"Favorite Created: {favorite.name}", fg="green", err=True)
    click.echo(favorite.id)


@favorites_group.command("rename")
@click.argument("favorite_id")
@click.argument("name")
@pass_app
def favorites_rename(app: AppContext, favorite_id, name):
    try:
        favorite = app.favorites().rename(favorite_id, name)
    except QuickspaceError as e:
        _fail(e)
    click.secho(f"Favorite Renamed: {favorite.name}", fg="green", err=True)


@favorites_group.command("remove")
@click.argument("favorite_id")
@pass_app
def favorites_remove(app: AppContext, favorite_id):
    try:
        favorite = app.favorites().remove(favorite_id)
    except QuickspaceError as e:
        _fail(e)
    click.secho(f"Favorite Removed: {favorite.name}", fg="green", err=True)


@favorites_group.command("open")
@click.argument("favorite_id")
@pass_app
def favorites_open(app: AppContext, favorite_id):
    try:
        result = app.session().open_favorite(favorite_id)
    except QuickspaceError as e:
        _fail(e)
    _report(PickResult(launched=result))


@cli.command("config")
@click.option("--root", "new_root", default=None, help="Set the repository directory.")
@click.option("--show-hidden/--hide-hidden", "new_show_hidden", default=None,
              help="Set hidden-directory visibility.")
@click.option("--editor", "new_editor", default=None, help="Set the editor command.")
@click.option("--edit", is_flag=True, help="Open config.json in $EDITOR.")
@click.option("--path", "show_path", is_flag=True, help="Print the config file location and exit.")
@pass_app
def config_cmd(app: AppContext, new_root, new_show_hidden, new_editor, edit, show_path):
    """Show or change the stored preferences."""
    if show_path:
        click.echo(str(config_path(app.home)))
        return
    if edit:
        _open_preferences(app.home)
        return
    try:
        settings = load_settings(app.home)
        updated = settings.with_overrides(
            repository_directory=new_root,
            show_hidden_directories=new_show_hidden,
            editor=new_editor,
        )
        if updated != settings:
            save_settings(app.home, updated)
    except QuickspaceError as e:
        _fail(e)
    for key, value in updated.model_dump().items():
        click.echo(f"{key} = {value}")


if __name__ == "__main__":
    cli()
