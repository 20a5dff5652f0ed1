"""Pick directories from a repository folder and open them together in an editor."""

__version__ = "0.1.0"
