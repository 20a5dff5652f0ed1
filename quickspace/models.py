"""
where we store the
pydantic data structures
shared by the scanner, the favorites store and the launcher
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class DirectoryEntry(BaseModel):
    """One immediate subdirectory of the repository root, as seen by a single scan."""
    model_config = ConfigDict(frozen=True)

    name: str
    git_branch: Optional[str] = None

    @property
    def has_git(self) -> bool:
        return self.git_branch is not None


class Favorite(BaseModel):
    """A named, persisted group of directory names that are opened together."""

    id: str
    name: str
    directories: List[str] = Field(min_length=1)


FavoriteList = TypeAdapter(List[Favorite])


class LaunchResult(BaseModel):
    command: List[str]
    count: int
    label: str

    @property
    def message(self) -> str:
        return f"Opened {self.label} In {self.command[0]}"
