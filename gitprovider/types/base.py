"""The contract every desired-state ("info request") struct implements."""

import copy
from abc import ABC, abstractmethod
from typing import Any, TypeVar

T = TypeVar("T", bound="InfoRequest")


class InfoRequest(ABC):
    """
    Desired, settable state of a resource.

    Optional fields use None for "unspecified", so that an explicitly empty
    string or False is never mistaken for an unset field.
    """

    @abstractmethod
    def validate_info(self) -> None:
        """
        Validate the set fields and the required fields.

        Runs at set() and create time, before defaulting. All violations are
        collected; a single one is raised as-is, several as a MultiError.
        """

    @abstractmethod
    def default(self) -> None:
        """
        Set unset optional fields to their defaults, in place.

        Only called after validate_info() passed. Never overwrites a set
        field, so calling it twice is the same as calling it once.
        """

    def equals(self, actual: Any) -> bool:
        """Whether this desired state matches actual, field by field."""
        return self == actual


def validate_and_default_info(req: T) -> T:
    """Validate req and return a defaulted copy; req itself is left untouched."""
    req.validate_info()
    defaulted = copy.deepcopy(req)
    defaulted.default()
    return defaulted
