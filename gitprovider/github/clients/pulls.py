"""GitHub pull requests."""

from typing import Any

from gitprovider.client import PullRequestClient
from gitprovider.enums import MergeMethod, validate_merge_method
from gitprovider.github.util import ClientContext, list_all
from gitprovider.options import EditOptions
from gitprovider.refs import RepositoryRef
from gitprovider.resources import PullRequest
from gitprovider.types import PullRequestInfo


def pull_request_from_api(api_obj: dict[str, Any]) -> PullRequestInfo:
    head = api_obj.get("head") or {}
    base = api_obj.get("base") or {}
    return PullRequestInfo(
        title=api_obj.get("title") or "",
        description=api_obj.get("body") or "",
        merged=bool(api_obj.get("merged")),
        number=api_obj.get("number") or 0,
        web_url=api_obj.get("html_url") or "",
        source_branch=head.get("ref") or "",
        target_branch=base.get("ref") or "",
    )


class GitHubPullRequest(PullRequest):
    def __init__(self, api_obj: dict[str, Any]) -> None:
        self._api_obj = api_obj

    def get(self) -> PullRequestInfo:
        return pull_request_from_api(self._api_obj)

    def api_object(self) -> dict[str, Any]:
        return self._api_obj


class GitHubPullRequestClient(PullRequestClient):
    def __init__(self, ctx: ClientContext, ref: RepositoryRef) -> None:
        self._ctx = ctx
        self._ref = ref

    @property
    def _path(self) -> str:
        return f"/repos/{self._ref.get_identity()}/{self._ref.get_repository()}/pulls"

    def create(self, title: str, branch: str, base_branch: str, description: str) -> GitHubPullRequest:
        """
        Open a pull request merging branch into base_branch.

        Raises:
            ValidationError: If either branch doesn't exist, or a pull request is already open
        """
        api_obj = self._ctx.transport.request_json(
            "POST",
            self._path,
            body={"title": title, "head": branch, "base": base_branch, "body": description},
        )
        return GitHubPullRequest(api_obj)

    def get(self, number: int) -> GitHubPullRequest:
        return GitHubPullRequest(self._ctx.transport.request_json("GET", f"{self._path}/{number}"))

    def merge(self, number: int, merge_method: MergeMethod | str, message: str) -> None:
        """
        Merge a pull request.

        Raises:
            FieldEnumInvalidError: If merge_method is unknown; nothing is sent
        """
        validate_merge_method(merge_method)
        method = getattr(merge_method, "value", merge_method)
        self._ctx.transport.request(
            "PUT",
            f"{self._path}/{number}/merge",
            body={"commit_message": message, "merge_method": method},
        )

    def edit(self, number: int, opts: EditOptions) -> GitHubPullRequest:
        body = {}
        if opts.title is not None:
            body["title"] = opts.title
        return GitHubPullRequest(self._ctx.transport.request_json("PATCH", f"{self._path}/{number}", body=body))

    def list(self) -> list[GitHubPullRequest]:
        """List the open pull requests."""
        return [GitHubPullRequest(api_obj) for api_obj in list_all(self._ctx.transport, self._path)]
