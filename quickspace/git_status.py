# git_status.py
from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional

from git import Git
from git.exc import GitCommandError, GitCommandNotFound

from quickspace.models import DirectoryEntry

logger = logging.getLogger(__name__)

PROBE_TIMEOUT = 5.0
MAX_WORKERS = 8


def is_git_repository(path: str) -> bool:
    """A '.git' file counts as well as a directory, since worktrees use a file."""
    return os.path.lexists(os.path.join(path, ".git"))


def current_branch(path: str, timeout: float = PROBE_TIMEOUT) -> Optional[str]:
    """
    Return the checked-out branch of the repository at ``path``.

    None means "no branch": not a repository, detached HEAD, git missing,
    a non-zero exit or a probe that ran past ``timeout``.
    """
    if not is_git_repository(path):
        return None
    try:
        output = Git(path).execute(
            ["git", "branch", "--show-current"],
            kill_after_timeout=timeout,
        )
    except (GitCommandError, GitCommandNotFound, OSError) as e:
        logger.debug(f"Branch lookup failed for {path}: {e}")
        return None
    branch = str(output).strip()
    return branch or None


def _probe(root: str, name: str, timeout: float) -> DirectoryEntry:
    return DirectoryEntry(name=name, git_branch=current_branch(os.path.join(root, name), timeout))


def probe_directories(root: str, names: Iterable[str], max_workers: int = MAX_WORKERS,
                      timeout: float = PROBE_TIMEOUT) -> List[DirectoryEntry]:
    """
    Probe every directory concurrently and return entries in input order.

    Returns only after every probe has finished. A probe that raises is logged
    and its entry gets no branch; the other probes are unaffected.
    """
    names = list(names)
    if not names:
        return []

    entries: List[DirectoryEntry] = []
    with ThreadPoolExecutor(max_workers=min(max_workers, len(names))) as pool:
        futures = [pool.submit(_probe, root, name, timeout) for name in names]
        for name, future in zip(names, futures):
            try:
                entries.append(future.result())
            except Exception as e:
                logger.warning(f"Git probe for {name!r} failed: {e}")
                entries.append(DirectoryEntry(name=name))
    return entries
