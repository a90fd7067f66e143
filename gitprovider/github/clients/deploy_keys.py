"""GitHub repository deploy keys."""

from typing import Any

from gitprovider.client import DeployKeyClient
from gitprovider.exceptions import NotFoundError, UnexpectedEventError
from gitprovider.github.util import ClientContext, list_all, validate_api_object
from gitprovider.reconcile import reconcile
from gitprovider.refs import RepositoryRef
from gitprovider.resources import DeployKey
from gitprovider.types import DeployKeyInfo, validate_and_default_info

# Fields of a GitHub key that are desired state; everything else
# (id, url, created_at, verified, ...) is status set by the server.
DEPLOY_KEY_SPEC_FIELDS = ("title", "key", "read_only")


def validate_deploy_key_api(api_obj: dict[str, Any]) -> None:
    def check(validator):
        for field_name, path in (("id", "ID"), ("title", "Title"), ("key", "Key"), ("read_only", "ReadOnly")):
            if api_obj.get(field_name) is None:
                validator.required(path)

    validate_api_object("GitHub.Key", check)


def deploy_key_from_api(api_obj: dict[str, Any]) -> DeployKeyInfo:
    return DeployKeyInfo(
        name=api_obj["title"],
        key=api_obj["key"].encode(),
        read_only=api_obj.get("read_only"),
    )


def deploy_key_info_to_api(info: DeployKeyInfo, api_obj: dict[str, Any]) -> None:
    api_obj["title"] = info.name
    api_obj["key"] = info.key.decode()
    if info.read_only is not None:
        api_obj["read_only"] = info.read_only


class GitHubDeployKey(DeployKey):
    def __init__(self, client: "GitHubDeployKeyClient", api_obj: dict[str, Any]) -> None:
        self._client = client
        self._api_obj = api_obj

    def get(self) -> DeployKeyInfo:
        return deploy_key_from_api(self._api_obj)

    def set(self, info: DeployKeyInfo) -> None:
        info.validate_info()
        deploy_key_info_to_api(info, self._api_obj)

    def api_object(self) -> dict[str, Any]:
        return self._api_obj

    def repository(self) -> RepositoryRef:
        return self._client.ref

    def update(self) -> None:
        """
        Replace the stored key with the queued state.

        GitHub keys can't be edited in place, so the key is deleted and then
        created again. If the create fails the key stays deleted, and
        api_object() still holds the deleted key's ID; reconcile() again to
        recreate it.
        """
        self.delete()
        self._api_obj = self._client.create_data(self._spec())

    def delete(self) -> None:
        key_id = self._api_obj.get("id")
        if key_id is None:
            raise UnexpectedEventError("didn't expect the deploy key ID to be empty")
        self._client.delete_data(key_id)

    def reconcile(self) -> bool:
        result = reconcile(
            self.get(),
            get=lambda: self._client.get(self._api_obj["title"]),
            create=self._client.create,
            kind="deploy key",
            ref=self._api_obj["title"],
        )
        self._api_obj = result.resource.api_object()
        return result.action_taken

    def _spec(self) -> dict[str, Any]:
        return {k: self._api_obj[k] for k in DEPLOY_KEY_SPEC_FIELDS if k in self._api_obj}


class GitHubDeployKeyClient(DeployKeyClient):
    """Deploy keys of one GitHub repository."""

    def __init__(self, ctx: ClientContext, ref: RepositoryRef) -> None:
        self._ctx = ctx
        self.ref = ref

    @property
    def _path(self) -> str:
        return f"/repos/{self.ref.get_identity()}/{self.ref.get_repository()}/keys"

    def get(self, name: str) -> GitHubDeployKey:
        """
        Get the deploy key titled name.

        Raises:
            NotFoundError: If no key has that title
        """
        for key in self.list():
            if key.get().name == name:
                return key
        raise NotFoundError(f"deploy key {name!r} not found in {self.ref}")

    def create(self, info: DeployKeyInfo) -> GitHubDeployKey:
        """
        Add a deploy key to the repository.

        Raises:
            AlreadyExistsError: If the key is already in use
        """
        info = validate_and_default_info(info)
        api_obj: dict[str, Any] = {}
        deploy_key_info_to_api(info, api_obj)
        return GitHubDeployKey(self, self.create_data(api_obj))

    def reconcile(self, info: DeployKeyInfo) -> tuple[GitHubDeployKey, bool]:
        result = reconcile(
            info,
            get=lambda: self.get(info.name),
            create=self.create,
            kind="deploy key",
            ref=f"{self.ref}/{info.name}",
        )
        return result.resource, result.action_taken

    def create_data(self, data: dict[str, Any]) -> dict[str, Any]:
        api_obj = self._ctx.transport.request_json("POST", self._path, body=data)
        validate_deploy_key_api(api_obj)
        return api_obj

    def delete_data(self, key_id: int) -> None:
        self._ctx.transport.request("DELETE", f"{self._path}/{key_id}")

    def list(self) -> list[GitHubDeployKey]:
        keys = []
        for api_obj in list_all(self._ctx.transport, self._path):
            validate_deploy_key_api(api_obj)
            keys.append(GitHubDeployKey(self, api_obj))
        return keys
