"""GitHub repository contents and git trees."""

import base64
from typing import Any

from gitprovider.client import FileClient, TreeClient
from gitprovider.exceptions import NotFoundError
from gitprovider.github.util import ClientContext
from gitprovider.options import FilesGetOptions
from gitprovider.refs import RepositoryRef
from gitprovider.types import CommitFile, TreeEntry, TreeInfo


def _decode_content(api_obj: dict[str, Any]) -> str:
    content = api_obj.get("content") or ""
    if api_obj.get("encoding") == "base64":
        return base64.b64decode(content).decode()
    return content


class GitHubFileClient(FileClient):
    def __init__(self, ctx: ClientContext, ref: RepositoryRef) -> None:
        self._ctx = ctx
        self._ref = ref

    def _contents(self, path: str, branch: str) -> Any:
        return self._ctx.transport.request_json(
            "GET",
            f"/repos/{self._ref.get_identity()}/{self._ref.get_repository()}/contents/{path}",
            params={"ref": branch},
        )

    def get(self, path: str, branch: str, *opts: FilesGetOptions) -> list[CommitFile]:
        """
        Get the files in the directory path, with their content.

        Sub-directories are skipped unless an option sets recursive.

        Raises:
            NotFoundError: If there are no files at path
        """
        recursive = any(opt.recursive for opt in opts)

        listing = self._contents(path, branch)
        if isinstance(listing, dict):
            # path is a file, not a directory.
            listing = [listing]
        if not listing:
            raise NotFoundError(f"no files found on this path[{path}]")

        files = []
        for entry in listing:
            if entry.get("type") == "dir":
                if recursive:
                    files.extend(self.get(entry["path"], branch, *opts))
                continue
            if entry.get("type") != "file":
                continue
            # Directory listings don't include file content.
            api_obj = entry if "content" in entry else self._contents(entry["path"], branch)
            files.append(CommitFile(path=entry["path"], content=_decode_content(api_obj)))
        return files


def tree_from_api(api_obj: dict[str, Any]) -> TreeInfo:
    entries = [
        TreeEntry(
            path=entry["path"],
            mode=entry["mode"],
            type=entry["type"],
            size=entry.get("size", 0) if entry["type"] != "tree" else 0,
            sha=entry.get("sha", ""),
            url=entry.get("url", ""),
        )
        for entry in api_obj.get("tree") or []
    ]
    return TreeInfo(sha=api_obj["sha"], tree=entries, truncated=bool(api_obj.get("truncated")))


class GitHubTreeClient(TreeClient):
    def __init__(self, ctx: ClientContext, ref: RepositoryRef) -> None:
        self._ctx = ctx
        self._ref = ref

    @property
    def _path(self) -> str:
        return f"/repos/{self._ref.get_identity()}/{self._ref.get_repository()}/git/trees"

    def create(self, tree: TreeInfo) -> TreeInfo:
        body: dict[str, Any] = {
            "tree": [
                {"path": entry.path, "mode": entry.mode, "type": entry.type, "sha": entry.sha}
                for entry in tree.tree
            ],
        }
        if tree.sha:
            body["base_tree"] = tree.sha
        return tree_from_api(self._ctx.transport.request_json("POST", self._path, body=body))

    def get(self, sha: str, recursive: bool = False) -> TreeInfo:
        """
        Get a tree by its SHA1 or a branch name.

        Raises:
            NotFoundError: If the tree doesn't exist
        """
        params = {"recursive": "1"} if recursive else None
        return tree_from_api(self._ctx.transport.request_json("GET", f"{self._path}/{sha}", params=params))

    def list(self, sha: str, path: str = "", recursive: bool = False) -> list[TreeEntry]:
        return [
            entry
            for entry in self.get(sha, recursive).tree
            if entry.type == "blob" and (not path or entry.path.startswith(path))
        ]
