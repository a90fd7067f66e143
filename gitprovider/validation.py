"""Field validation helpers shared by every info and ref type.

A :class:`Validator` collects all field violations of one object instead of
stopping at the first one, so the caller learns everything that needs fixing
in one go.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Protocol

from gitprovider.exceptions import GitProviderError, MultiError


class FieldValidationError(GitProviderError):
    """Base class for client-side field validation errors."""

    code = "FIELD_INVALID"
    default_message = "field is invalid"

    def __init__(
        self,
        message: str | None = None,
        field_path: str | None = None,
        value: Any = None,
    ) -> None:
        self.field_path = field_path
        self.value = value
        super().__init__(message)


class FieldRequiredError(FieldValidationError):
    """A required field isn't populated."""

    code = "FIELD_REQUIRED"
    default_message = "field is required"


class FieldInvalidError(FieldValidationError):
    pass


class FieldEnumInvalidError(FieldValidationError):
    """The value isn't one of the known values of the enum."""

    code = "FIELD_ENUM_INVALID"
    default_message = "field value isn't known to this enum"


class ValidateTarget(Protocol):
    """Implemented by nested structs (e.g. refs) that register their own errors."""

    def validate_fields(self, validator: "Validator") -> None: ...


class Validator:
    """Collects validation errors for the object called name."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.errors: list[FieldValidationError] = []

    def append(
        self,
        error: FieldValidationError | type[FieldValidationError] | None,
        value: Any,
        *field_paths: str,
    ) -> None:
        """
        Register a validation error for the given field.

        Args:
            error: The error (or error class) that occurred, None for no error
            value: The offending value, shown in the message if not None
            field_paths: Names of the (nested) fields that caused the error
        """
        if error is None:
            return
        if isinstance(error, type):
            error = error()
        field_path = ".".join([self.name, *field_paths])
        value_str = f" (value: {value})" if value is not None else ""
        wrapped = type(error)(
            f"validation error for {field_path}{value_str}: {error.default_message}",
            field_path=field_path,
            value=value,
        )
        wrapped.__cause__ = error
        self.errors.append(wrapped)

    def required(self, *field_paths: str) -> None:
        self.append(FieldRequiredError, None, *field_paths)

    def invalid(self, value: Any, *field_paths: str) -> None:
        self.append(FieldInvalidError, value, *field_paths)

    @contextmanager
    def collect(self, value: Any, *field_paths: str) -> Iterator[None]:
        """Register a FieldValidationError raised in the block instead of propagating it."""
        try:
            yield
        except FieldValidationError as e:
            self.append(e, value, *field_paths)

    def error(self) -> FieldValidationError | MultiError | None:
        """
        Return the aggregated error, or None if nothing was registered.

        A single error is returned as-is; several are wrapped in a MultiError.
        """
        if not self.errors:
            return None
        if len(self.errors) == 1:
            return self.errors[0]
        return MultiError(list(self.errors))

    def raise_for_errors(self) -> None:
        err = self.error()
        if err is not None:
            raise err


def validate_targets(name: str, *targets: ValidateTarget) -> None:
    """Run validate_fields() for every target and raise the aggregate error."""
    validator = Validator(name)
    for target in targets:
        target.validate_fields(validator)
    validator.raise_for_errors()
