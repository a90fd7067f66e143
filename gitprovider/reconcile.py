"""
The reconcile engine.

Every resource kind (repository, deploy key, team access) is reconciled with
the same algorithm; adapters only supply the get/create callables and
resource objects implementing get/set/update::

    fetch  ──NotFound──▶ create            (action taken)
      │
      └──▶ equal? ──yes──▶ no-op           (no action)
              └────no───▶ set + update     (action taken)

At most one write is made per call. Nothing is retried here.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Protocol, TypeVar

from gitprovider.exceptions import NotFoundError
from gitprovider.logging import log_reconcile_transition
from gitprovider.types.base import InfoRequest, validate_and_default_info

I = TypeVar("I", bound=InfoRequest)
R = TypeVar("R", bound="Reconcilable")


class Reconcilable(Protocol):
    """A resource object the engine can diff and write back."""

    def get(self) -> Any: ...

    def set(self, info: Any) -> None: ...

    def update(self) -> None: ...


class ReconcileState(str, Enum):
    UNKNOWN = "unknown"
    FETCHED = "fetched"
    CREATED = "created"
    UPDATED = "updated"
    NOOP = "noop"
    FAILED = "failed"


@dataclass
class ReconcileResult(Generic[R]):
    """Outcome of one reconcile call."""

    resource: R
    # True if the backend was written to.
    action_taken: bool
    state: ReconcileState


def reconcile(
    desired: I,
    get: Callable[[], R],
    create: Callable[[I], R],
    kind: str = "resource",
    ref: Any = None,
) -> ReconcileResult[R]:
    """
    Make the backend state match desired.

    Args:
        desired: The desired state; validated and defaulted into a copy
        get: Fetches the current resource, raising NotFoundError if absent
        create: Creates the resource from the defaulted desired state
        kind: Resource kind, used in log messages
        ref: Reference of the resource, used in log messages

    Returns:
        The resulting resource, whether an action was taken, and the final state

    Raises:
        FieldValidationError / MultiError: If desired is invalid; no backend call is made
        GitProviderError: Any error from get (other than NotFoundError), create or update
    """
    state = ReconcileState.UNKNOWN
    try:
        desired = validate_and_default_info(desired)

        try:
            actual = get()
        except NotFoundError:
            log_reconcile_transition(kind, ref, "not found")
            resource = create(desired)
            state = ReconcileState.CREATED
            log_reconcile_transition(kind, ref, state.value)
            return ReconcileResult(resource, True, state)

        state = ReconcileState.FETCHED
        log_reconcile_transition(kind, ref, state.value)

        if desired.equals(actual.get()):
            state = ReconcileState.NOOP
            log_reconcile_transition(kind, ref, state.value)
            return ReconcileResult(actual, False, state)

        actual.set(desired)
        actual.update()
        state = ReconcileState.UPDATED
        log_reconcile_transition(kind, ref, state.value)
        return ReconcileResult(actual, True, state)
    except Exception as e:
        log_reconcile_transition(kind, ref, ReconcileState.FAILED.value, f"after {state.value}: {e}")
        raise
