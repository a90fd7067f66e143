"""Git tree info types."""

from dataclasses import dataclass, field


@dataclass
class TreeEntry:
    """A file (blob), sub-tree or submodule in a git tree."""

    path: str
    # 100644 file, 100755 executable, 040000 subdirectory, 160000 submodule, 120000 symlink
    mode: str
    # "blob", "tree" or "commit"
    type: str
    # Only set for blobs.
    size: int = 0
    sha: str = ""
    url: str = ""


@dataclass
class TreeInfo:
    """A git tree: the hierarchy between files in a repository."""

    # SHA1 of the tree, or a branch name.
    sha: str
    tree: list[TreeEntry] = field(default_factory=list)
    # True when the server cut the entry list short.
    truncated: bool = False
