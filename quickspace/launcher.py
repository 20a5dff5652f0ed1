# launcher.py
from __future__ import annotations

import logging
import shlex
import subprocess
from typing import List, Optional, Sequence

from quickspace.errors import ConfigurationError, InvalidArgument, LaunchError
from quickspace.models import LaunchResult
from quickspace.settings import DEFAULT_EDITOR

logger = logging.getLogger(__name__)


def format_command(argv: Sequence[str]) -> str:
    """Shell-quoted rendering of an argv, for logs and messages only."""
    return shlex.join(argv)


def directories_label(count: int) -> str:
    return f"{count} {'Directory' if count == 1 else 'Directories'}"


class Launcher:
    """
    Opens directories in an external editor.

    The editor setting may carry its own flags ("code -n"); it is split with
    shell rules and every path is appended as a separate argument. No shell
    is ever involved, so paths with spaces or quotes stay intact.
    """
    def __init__(self, editor: str = DEFAULT_EDITOR):
        self.editor = editor

    def build_command(self, paths: Sequence[str]) -> List[str]:
        if not paths:
            raise InvalidArgument("Please Select At Least One Directory")
        try:
            editor_argv = shlex.split(self.editor or "")
        except ValueError as e:
            raise ConfigurationError(f"Invalid editor command: {e}") from e
        if not editor_argv:
            raise ConfigurationError("Editor command not configured")
        return editor_argv + [str(p) for p in paths]

    def launch(self, paths: Sequence[str], label: Optional[str] = None) -> LaunchResult:
        """Run the editor once and wait for it to exit; raises LaunchError on failure."""
        argv = self.build_command(paths)
        logger.info(f"Launching: {format_command(argv)}")
        try:
            proc = subprocess.run(argv, capture_output=True, text=True, check=False)
        except OSError as e:
            logger.error(f"Could not start {argv[0]!r}: {e}")
            raise LaunchError(str(e)) from e

        if proc.returncode != 0:
            detail = (proc.stderr or "").strip() or (
                f"Command failed with exit code {proc.returncode}: {format_command(argv)}"
            )
            logger.error(f"Editor exited with {proc.returncode}: {detail}")
            raise LaunchError(detail)

        return LaunchResult(
            command=argv,
            count=len(paths),
            label=label or directories_label(len(paths)),
        )
