"""
Tests for the generic reconcile engine.
"""

import copy
import logging

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from gitprovider.enums import RepositoryVisibility
from gitprovider.exceptions import InvalidCredentialsError, NotFoundError
from gitprovider.reconcile import ReconcileState, reconcile
from gitprovider.types import RepositoryInfo
from gitprovider.validation import FieldEnumInvalidError


class Resource:
    """A resource holding a RepositoryInfo, counting updates."""

    def __init__(self, info: RepositoryInfo) -> None:
        self.info = copy.deepcopy(info)
        self.updates = 0

    def get(self) -> RepositoryInfo:
        return copy.deepcopy(self.info)

    def set(self, info: RepositoryInfo) -> None:
        self.info = copy.deepcopy(info)

    def update(self) -> None:
        self.updates += 1


class Backend:
    def __init__(self, existing: RepositoryInfo | None = None) -> None:
        self.resource = Resource(existing) if existing is not None else None
        self.gets = 0
        self.creates = 0

    def get(self) -> Resource:
        self.gets += 1
        if self.resource is None:
            raise NotFoundError("no such repository")
        return self.resource

    def create(self, info: RepositoryInfo) -> Resource:
        self.creates += 1
        self.resource = Resource(info)
        return self.resource


def defaulted(info: RepositoryInfo) -> RepositoryInfo:
    info = copy.deepcopy(info)
    info.default()
    return info


def test_create_when_missing() -> None:
    backend = Backend()
    desired = RepositoryInfo(description="hello")

    result = reconcile(desired, backend.get, backend.create)

    assert result.action_taken
    assert result.state == ReconcileState.CREATED
    assert backend.creates == 1
    # Created from the defaulted desired state.
    assert result.resource.get() == RepositoryInfo(
        description="hello", default_branch="main", visibility=RepositoryVisibility.PRIVATE
    )
    assert desired.visibility is None


def test_noop_when_equal() -> None:
    backend = Backend(defaulted(RepositoryInfo(description="hello")))

    result = reconcile(RepositoryInfo(description="hello"), backend.get, backend.create)

    assert not result.action_taken
    assert result.state == ReconcileState.NOOP
    assert backend.creates == 0
    assert backend.resource.updates == 0


def test_update_when_different() -> None:
    backend = Backend(defaulted(RepositoryInfo(description="old")))

    result = reconcile(RepositoryInfo(description="new"), backend.get, backend.create)

    assert result.action_taken
    assert result.state == ReconcileState.UPDATED
    assert backend.resource.updates == 1
    assert backend.resource.info.description == "new"


def test_invalid_desired_state_makes_no_calls() -> None:
    backend = Backend()

    with pytest.raises(FieldEnumInvalidError):
        reconcile(RepositoryInfo(visibility="secret"), backend.get, backend.create)

    assert backend.gets == 0
    assert backend.creates == 0


def test_get_errors_propagate() -> None:
    def get():
        raise InvalidCredentialsError("bad credentials")

    with pytest.raises(InvalidCredentialsError):
        reconcile(RepositoryInfo(), get, lambda info: pytest.fail("create must not be called"))


def test_transitions_are_logged(caplog: pytest.LogCaptureFixture) -> None:
    backend = Backend()

    with caplog.at_level(logging.DEBUG, logger="gitprovider.reconcile"):
        reconcile(RepositoryInfo(), backend.get, backend.create, kind="repository", ref="fluxcd/flux2")

    messages = [r.getMessage() for r in caplog.records if r.name == "gitprovider.reconcile"]
    assert messages == ["repository fluxcd/flux2: not found", "repository fluxcd/flux2: created"]
    created = [r for r in caplog.records if r.getMessage().endswith("created")]
    assert created[0].levelno == logging.INFO


def test_failure_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    def create(info):
        raise InvalidCredentialsError("bad credentials")

    with caplog.at_level(logging.DEBUG, logger="gitprovider.reconcile"):
        with pytest.raises(InvalidCredentialsError):
            reconcile(RepositoryInfo(), Backend().get, create, kind="repository", ref="r")

    assert any("r: failed" in r.getMessage() for r in caplog.records)


optional_text = st.none() | st.text(max_size=20)
visibility_strategy = st.none() | st.sampled_from(list(RepositoryVisibility))


@given(description=optional_text, visibility=visibility_strategy, exists=st.booleans())
@settings(max_examples=100)
def test_second_reconcile_is_noop(description: str | None, visibility: RepositoryVisibility | None, exists: bool) -> None:
    """
    Property: Reconcile is idempotent

    For any valid desired state, reconciling twice in a row SHALL make the
    second call a no-op that takes no action.
    """
    backend = Backend(RepositoryInfo(description="something else") if exists else None)
    desired = RepositoryInfo(description=description, visibility=visibility)

    reconcile(desired, backend.get, backend.create)
    updates = backend.resource.updates
    creates = backend.creates
    second = reconcile(desired, backend.get, backend.create)

    assert not second.action_taken
    assert second.state == ReconcileState.NOOP
    assert backend.resource.updates == updates
    assert backend.creates == creates
