"""GitHub commits and branches."""

from datetime import datetime
from typing import Any

from gitprovider.client import BranchClient, CommitClient
from gitprovider.exceptions import InvalidArgumentError, NotFoundError
from gitprovider.github.util import ClientContext
from gitprovider.refs import RepositoryRef
from gitprovider.resources import Commit
from gitprovider.types import CommitFile, CommitInfo

NEW_FILE_MODE = "100644"
BLOB_TYPE = "blob"


def _parse_datetime(value: str | None) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def commit_from_api(api_obj: dict[str, Any]) -> CommitInfo:
    """
    Build a CommitInfo from either shape GitHub returns.

    The commits listing wraps the git commit in a "commit" key; the git data
    API returns the git commit itself.
    """
    git_commit = api_obj.get("commit", api_obj)
    author = git_commit.get("author") or {}
    return CommitInfo(
        sha=api_obj["sha"],
        tree_sha=(git_commit.get("tree") or {}).get("sha", ""),
        author=author.get("name", ""),
        message=git_commit.get("message", ""),
        created_at=_parse_datetime(author.get("date")),
        url=git_commit.get("url") or api_obj.get("url", ""),
    )


class GitHubCommit(Commit):
    def __init__(self, api_obj: dict[str, Any]) -> None:
        self._api_obj = api_obj

    def get(self) -> CommitInfo:
        return commit_from_api(self._api_obj)

    def api_object(self) -> dict[str, Any]:
        return self._api_obj


class GitHubCommitClient(CommitClient):
    def __init__(self, ctx: ClientContext, ref: RepositoryRef) -> None:
        self._ctx = ctx
        self._ref = ref

    @property
    def _repo_path(self) -> str:
        return f"/repos/{self._ref.get_identity()}/{self._ref.get_repository()}"

    def list_page(self, branch: str, per_page: int, page: int) -> list[GitHubCommit]:
        api_objs = self._ctx.transport.request_json(
            "GET",
            f"{self._repo_path}/commits",
            params={"sha": branch, "per_page": per_page, "page": page},
        )
        return [GitHubCommit(api_obj) for api_obj in api_objs or []]

    def create(self, branch: str, message: str, files: list[CommitFile]) -> GitHubCommit:
        """
        Commit files on top of the latest commit of branch and move the branch to it.

        A file with content None is deleted.

        Raises:
            InvalidArgumentError: If files is empty
            NotFoundError: If the branch has no commits
        """
        if not files:
            raise InvalidArgumentError("no files added")

        latest = self.list_page(branch, 1, 1)
        if not latest:
            raise NotFoundError(f"no commits found on branch {branch!r}")
        head = latest[0].get()

        entries = []
        for file in files:
            entry: dict[str, Any] = {"path": file.path, "mode": NEW_FILE_MODE, "type": BLOB_TYPE}
            if file.content is None:
                entry["sha"] = None
            else:
                entry["content"] = file.content
            entries.append(entry)

        transport = self._ctx.transport
        tree = transport.request_json(
            "POST", f"{self._repo_path}/git/trees", body={"base_tree": head.tree_sha, "tree": entries}
        )
        commit = transport.request_json(
            "POST",
            f"{self._repo_path}/git/commits",
            body={"message": message, "tree": tree["sha"], "parents": [head.sha]},
        )
        transport.request(
            "PATCH",
            f"{self._repo_path}/git/refs/heads/{branch}",
            body={"sha": commit["sha"], "force": True},
        )
        return GitHubCommit(commit)


class GitHubBranchClient(BranchClient):
    def __init__(self, ctx: ClientContext, ref: RepositoryRef) -> None:
        self._ctx = ctx
        self._ref = ref

    def create(self, branch: str, sha: str) -> None:
        """
        Raises:
            ValidationError: If the branch exists (GitHub answers "Reference already exists")
        """
        self._ctx.transport.request(
            "POST",
            f"/repos/{self._ref.get_identity()}/{self._ref.get_repository()}/git/refs",
            body={"ref": f"refs/heads/{branch}", "sha": sha},
        )
