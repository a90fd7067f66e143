"""Pull request info types."""

from dataclasses import dataclass


@dataclass
class PullRequestInfo:
    """A pull (or merge) request."""

    title: str = ""
    description: str = ""
    merged: bool = False
    # Used to refer to the pull request when merging.
    number: int = 0
    web_url: str = ""
    source_branch: str = ""
    target_branch: str = ""
