"""Password confirmation: the one cross-field constraint.

When a ``PasswordField`` sets ``confirm_password=True`` the compiled schema
gains a virtual field, ``<name>Confirm``, that is a required string, plus a
``CrossFieldCheck`` comparing the two raw submitted values.

Only the first marked password field (in declaration order) is honored.
Any later marked field is compiled as an ordinary password field and gets
a ``confirmation-ignored`` diagnostic.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from formschema.config import SchemaConfig
from formschema.diagnostics import (
    CONFIRMATION_IGNORED,
    DUPLICATE_FIELD,
    Diagnostic,
    info,
    warning,
)
from formschema.fields import FieldDescriptor, PasswordField
from formschema.result import Violation
from formschema.validators import MISSING, Validator, string_validator


@dataclass(frozen=True, slots=True)
class CrossFieldCheck:
    """Equality check between a password field and its confirmation."""

    field: str
    confirm_field: str
    message: str

    def __call__(self, record: Mapping[str, Any]) -> Violation | None:
        # Raw values; an absent key only equals another absent key
        if record.get(self.field, MISSING) != record.get(self.confirm_field, MISSING):
            return Violation(self.confirm_field, self.message)
        return None


def find_confirmation(
    descriptors: Sequence[FieldDescriptor],
) -> tuple[PasswordField | None, list[Diagnostic]]:
    """Return the first password field asking for confirmation."""
    found: PasswordField | None = None
    diagnostics: list[Diagnostic] = []
    for field in descriptors:
        if not (isinstance(field, PasswordField) and field.confirm_password):
            continue
        if found is None:
            found = field
        else:
            diagnostics.append(
                info(
                    CONFIRMATION_IGNORED,
                    f"Only '{found.name}' gets a confirmation field; "
                    f"'{field.name}' is validated as a plain password",
                    field=field.name,
                )
            )
    return found, diagnostics


def confirmation_validator(config: SchemaConfig) -> Validator:
    """Required string, no custom rules."""
    return string_validator(config, required_message=config.confirm_required_message)


def confirmation_check(field: PasswordField, config: SchemaConfig) -> CrossFieldCheck:
    return CrossFieldCheck(
        field=field.name,
        confirm_field=f"{field.name}{config.confirm_suffix}",
        message=config.password_mismatch_message,
    )


def inject_confirmation(
    fields: Mapping[str, Validator],
    descriptors: Sequence[FieldDescriptor],
    config: SchemaConfig,
) -> tuple[dict[str, Validator], CrossFieldCheck | None, list[Diagnostic]]:
    """Add the confirmation field and its check, if any field asks for one.

    Returns a new field mapping; *fields* is left untouched.
    """
    target, diagnostics = find_confirmation(descriptors)
    if target is None:
        return dict(fields), None, diagnostics

    check = confirmation_check(target, config)
    if check.confirm_field in fields:
        diagnostics.append(
            warning(
                DUPLICATE_FIELD,
                f"Confirmation field '{check.confirm_field}' replaces a declared field",
                field=check.confirm_field,
            )
        )
    return {**fields, check.confirm_field: confirmation_validator(config)}, check, diagnostics
