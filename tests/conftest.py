"""Shared fixtures for the gitprovider test suite."""

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from gitprovider.github import GitHubClient

# Re-export the gitprovider.testing fixtures for pytest discovery
from gitprovider.testing.conftest import (  # noqa: F401
    fake_client,
    fake_org,
    fake_org_repository_ref,
    fake_user_ref,
    fake_user_repository_ref,
    github_client_factory,
    sample_deploy_key_info,
    sample_repository_info,
    sample_team_access_info,
    ssh_key_pair,
)


class FakeGitHubAPI:
    """Routes requests by method and path; unknown routes answer 404 like GitHub."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    def on(
        self,
        method: str,
        path: str,
        status: int = 200,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.routes[(method, path)] = lambda request: httpx.Response(status, json=json, headers=headers)

    def route(self, method: str, path: str):
        def register(fn: Callable[[httpx.Request], httpx.Response]):
            self.routes[(method, path)] = fn
            return fn

        return register

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(404, json={"message": "Not Found"})
        return handler(request)

    def calls(self, method: str, path: str | None = None) -> list[httpx.Request]:
        return [
            r for r in self.requests
            if r.method == method and (path is None or r.url.path == path)
        ]

    def body(self, request: httpx.Request) -> Any:
        return json.loads(request.content)


@pytest.fixture
def github_api() -> FakeGitHubAPI:
    return FakeGitHubAPI()


@pytest.fixture
def github_client(github_client_factory, github_api: FakeGitHubAPI) -> GitHubClient:
    return github_client_factory(github_api)
