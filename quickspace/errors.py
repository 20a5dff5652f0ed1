"""Exceptions raised by the quickspace core.

Every error carries a user-facing message; the shells decide how to show it.
"""


class QuickspaceError(Exception):
    """Base class for every error the core raises on purpose."""


class ConfigurationError(QuickspaceError):
    """The repository directory (or the editor) is not configured."""


class NotFoundError(QuickspaceError):
    """A root path or a favorite id does not exist."""


class ReadError(QuickspaceError):
    """The repository directory could not be listed."""


class InvalidArgument(QuickspaceError, ValueError):
    """Empty selection or blank name; nothing was changed."""


class LaunchError(QuickspaceError):
    """The editor could not be started or exited with a non-zero status."""


class StorageError(QuickspaceError):
    """The favorites payload could not be written."""
