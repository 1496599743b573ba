"""Validation result: immutable container for sanitized data or errors."""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from formschema.diagnostics import Diagnostic


@dataclass(frozen=True, slots=True)
class Violation:
    """A failed check, attached to one field."""

    field: str
    message: str


def format_errors(violations: Iterable[Violation]) -> dict[str, str]:
    """Reduce violations to one message per field.

    A later violation for the same field replaces an earlier one, which is
    how the password confirmation check overrides the field's own error.
    """
    errors: dict[str, str] = {}
    for violation in violations:
        errors[violation.field] = violation.message
    return errors


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """The outcome of validating a record against a compiled schema.

    ``success`` is True when there are no errors.
    The result is falsy when invalid, so you can write::

        result = schema.validate(record)
        if not result:
            return render_form(errors=result.errors)

    ``data`` holds one sanitized value per schema field (only populated
    when there are no errors; ``None`` for absent optional fields).

    ``errors`` maps field names to a single message::

        {"email": "Invalid email format",
         "passwordConfirm": "passwords do not match"}
    """

    data: dict[str, Any]
    errors: dict[str, str]
    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def success(self) -> bool:
        """True if validation passed with no errors."""
        return not self.errors

    @property
    def is_valid(self) -> bool:
        return self.success

    def __bool__(self) -> bool:
        """Falsy when invalid, enabling the ``if not result:`` pattern."""
        return self.success

    def to_dict(self) -> dict[str, Any]:
        """Plain ``{"success": ..., "data"|"errors": ...}`` form, e.g. for JSON."""
        if self.success:
            return {"success": True, "data": dict(self.data)}
        return {"success": False, "errors": dict(self.errors)}
