# settings.py
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import click
from pydantic import BaseModel, ValidationError

from quickspace.errors import ConfigurationError, StorageError

logger = logging.getLogger(__name__)

APP_NAME = "quickspace"
CONFIG_FILENAME = "config.json"
DEFAULT_EDITOR = "cursor"


class Settings(BaseModel):
    """Explicit configuration passed into the scanner, the session and the launcher."""

    repository_directory: str = ""
    show_hidden_directories: bool = False
    editor: str = DEFAULT_EDITOR

    def root(self) -> str:
        """Return the repository directory with a leading ``~`` expanded.

        Raises ConfigurationError when the directory is unset or blank.
        """
        raw = self.repository_directory.strip()
        if not raw:
            raise ConfigurationError("Repository directory not configured")
        return expand_root(raw)

    def with_overrides(self, **overrides) -> "Settings":
        """Return a copy with every non-None override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return self.model_copy(update=changes)


def expand_root(path: str) -> str:
    return os.path.expanduser(path)


def default_home() -> Path:
    return Path(click.get_app_dir(APP_NAME))


def config_path(home: Path) -> Path:
    return Path(home) / CONFIG_FILENAME


def load_settings(home: Path) -> Settings:
    """Load settings from ``<home>/config.json``.

    A missing file yields the defaults. A file that cannot be read or parsed
    raises ConfigurationError so the user is sent back to fix it.
    """
    path = config_path(home)
    if not path.exists():
        return Settings()
    try:
        return Settings.model_validate_json(path.read_text(encoding="utf-8"))
    except (OSError, ValidationError) as e:
        logger.warning(f"Invalid configuration in {path}: {e}")
        raise ConfigurationError(f"Invalid configuration file: {path}") from e


def save_settings(home: Path, settings: Settings) -> Path:
    path = config_path(home)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(settings.model_dump_json(indent=2) + "\n", encoding="utf-8")
    except OSError as e:
        raise StorageError(f"Could not write configuration to {path}: {e}") from e
    return path


def resolve_settings(home: Path, root: Optional[str] = None, show_hidden: Optional[bool] = None,
                     editor: Optional[str] = None) -> Settings:
    """Load the stored settings and overlay the values given for this run."""
    return load_settings(home).with_overrides(
        repository_directory=root,
        show_hidden_directories=show_hidden,
        editor=editor,
    )
