"""Commit-related info types."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class CommitInfo:
    """A git commit."""

    sha: str
    tree_sha: str
    author: str = ""
    message: str = ""
    created_at: datetime | None = None
    url: str = ""


@dataclass
class CommitFile:
    """A file added to (or read from) a commit."""

    path: str | None = None
    # None deletes the file when committing.
    content: str | None = None
