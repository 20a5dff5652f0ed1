import subprocess
from typing import Iterable, List

from quickspace.models import DirectoryEntry

BRANCHES = {"beta": "main"}


def stub_prober(root: str, names: Iterable[str]) -> List[DirectoryEntry]:
    """Pretend 'beta' is a git checkout on 'main'; nothing else is a repository."""
    return [DirectoryEntry(name=n, git_branch=BRANCHES.get(n)) for n in names]


def completed(returncode: int = 0, stderr: str = "") -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout="", stderr=stderr)
