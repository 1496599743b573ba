"""Per-field validators and the base validator for each field kind.

A ``Validator`` is an immutable pipeline of ``Step`` objects. Each step is a
``(predicate, message)`` pair with an optional transform::

    Step("min", lambda v: len(v) >= 8, "At least 8 characters")

Calling a validator with a raw value runs the presence check, the type
check, and then every step in order. The first failing step wins and its
message is returned in a ``Rejected``; otherwise the (possibly transformed)
value comes back in a ``Cleaned``::

    outcome = validator("hello")
    match outcome:
        case Cleaned(value):
            ...
        case Rejected(message):
            ...

Validators never raise for bad input. Adding a step returns a new
validator (``with_step``), so a compiled schema can be shared freely.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Never

from formschema.config import SchemaConfig
from formschema.diagnostics import UNSUPPORTED_FIELD_KIND, Diagnostic, warning
from formschema.errors import CompileError
from formschema.fields import (
    FieldDescriptor,
    PasswordField,
    SelectField,
    TextAreaField,
    TextField,
    TextKind,
)


class _Missing:
    """Sentinel for a key absent from the submitted record."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


class Shape(Enum):
    """What kind of value a validator accepts.

    Rules only apply to ``STRING`` validators.
    """

    STRING = "string"
    CHOICE = "choice"
    ANY = "any"


@dataclass(frozen=True, slots=True)
class Step:
    """One check in a validator pipeline."""

    name: str
    predicate: Callable[[str], bool]
    message: str
    transform: Callable[[str], str] | None = None


@dataclass(frozen=True, slots=True)
class Cleaned:
    """Accepted value, after any transforms. ``None`` for an absent optional field."""

    value: Any


@dataclass(frozen=True, slots=True)
class Rejected:
    """The first failure for a field."""

    message: str


type FieldOutcome = Cleaned | Rejected


@dataclass(frozen=True, slots=True)
class Validator:
    """Immutable check pipeline for one field."""

    shape: Shape
    steps: tuple[Step, ...] = ()
    optional: bool = False
    required_message: str = "This field is required"
    type_message: str = "Expected a string"

    @property
    def is_string(self) -> bool:
        """True if string rules can be applied (optional or not)."""
        return self.shape is Shape.STRING

    def with_step(self, step: Step) -> "Validator":
        return replace(self, steps=(*self.steps, step))

    def as_optional(self) -> "Validator":
        return replace(self, optional=True)

    def __call__(self, value: Any = MISSING) -> FieldOutcome:
        if value is MISSING or value is None:
            if self.optional or self.shape is Shape.ANY:
                return Cleaned(None)
            return Rejected(self.required_message)

        if self.shape is Shape.ANY:
            return Cleaned(value)

        if not isinstance(value, str):
            return Rejected(self.type_message)

        current = value
        for step in self.steps:
            if not step.predicate(current):
                return Rejected(step.message)
            if step.transform is not None:
                current = step.transform(current)
        return Cleaned(current)


# ---------------------------------------------------------------------------
# Base validators
# ---------------------------------------------------------------------------


def string_validator(config: SchemaConfig, *, required_message: str | None = None) -> Validator:
    """Accept any string."""
    return Validator(
        shape=Shape.STRING,
        required_message=required_message or config.required_message,
        type_message=config.type_message,
    )


def permissive_validator() -> Validator:
    """Accept anything, including absence. Used for unsupported field kinds."""
    return Validator(shape=Shape.ANY)


def _pattern_step(name: str, pattern: str, message: str) -> Step:
    compiled = re.compile(pattern)
    return Step(name, lambda v: compiled.fullmatch(v) is not None, message)


def _text_validator(field: TextField, config: SchemaConfig) -> Validator | None:
    """Validator for a text field, or ``None`` if its ``kind`` is unknown."""
    base = string_validator(config)
    match field.kind:
        case TextKind.PLAIN:
            return base
        case TextKind.EMAIL:
            step = _pattern_step("email", config.email_pattern, config.email_message)
            return base.with_step(step)
        case TextKind.PHONE:
            step = _pattern_step("phone", config.phone_pattern, config.phone_message)
            return base.with_step(step)
        case _:
            return None


def _select_validator(field: SelectField, config: SchemaConfig) -> Validator:
    values = [option.value for option in field.options]
    if not values:
        msg = f"Select field '{field.name}' must declare at least one option"
        raise CompileError(msg, field=field.name)
    message = config.select_message
    if len(values) == 1:
        only = values[0]
        step = Step("literal", lambda v: v == only, message)
    else:
        allowed = frozenset(values)
        step = Step("one_of", lambda v: v in allowed, message)
    return Validator(
        shape=Shape.CHOICE,
        steps=(step,),
        required_message=message,
        type_message=message,
    )


def _password_validator(config: SchemaConfig) -> Validator:
    message = config.password_required_message
    return string_validator(config, required_message=message).with_step(
        Step("required", lambda v: len(v) > 0, message)
    )


def _fallback(name: str | None, kind: str) -> tuple[Validator, list[Diagnostic]]:
    diagnostic = warning(
        UNSUPPORTED_FIELD_KIND,
        f"Unsupported field kind {kind}; accepting any value",
        field=name,
    )
    return permissive_validator(), [diagnostic]


def _unsupported_field(field: Never) -> tuple[Validator, list[Diagnostic]]:
    # Only reachable at runtime with an object outside FieldDescriptor
    return _fallback(getattr(field, "name", None), type(field).__name__)


def build_base_validator(
    field: FieldDescriptor, config: SchemaConfig
) -> tuple[Validator, list[Diagnostic]]:
    """Return the validator for *field*'s kind, before its rules.

    Raises ``CompileError`` for a select field without options.
    An unsupported kind yields a permissive validator plus a warning
    diagnostic instead of failing.
    """
    match field:
        case TextField():
            validator = _text_validator(field, config)
            if validator is None:
                return _fallback(field.name, f"text/{field.kind!r}")
            return validator, []
        case SelectField():
            return _select_validator(field, config), []
        case TextAreaField():
            return string_validator(config), []
        case PasswordField():
            return _password_validator(config), []
        case _:
            return _unsupported_field(field)
