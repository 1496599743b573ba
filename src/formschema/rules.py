"""Validation rules attached to form fields.

Rules are plain data. Each one names a constraint, carries its parameter
(``value``) where it has one, and the ``message`` returned verbatim when a
submitted value breaks it::

    PasswordField(
        name="password",
        label="Password",
        validations=(
            Min(8, "At least 8 characters"),
            Regex(r".*\\d.*", "Must contain a digit"),
        ),
    )

Nothing here checks parameter shapes. ``Min("8", ...)`` constructs fine and
is rejected when the schema is compiled (see ``formschema.applier``).
"""

import re
from dataclasses import dataclass
from typing import Any, ClassVar


@dataclass(frozen=True, slots=True)
class Min:
    """Value must be at least *value* characters long."""

    kind: ClassVar[str] = "min"
    value: Any
    message: str


@dataclass(frozen=True, slots=True)
class Max:
    """Value must be at most *value* characters long."""

    kind: ClassVar[str] = "max"
    value: Any
    message: str


@dataclass(frozen=True, slots=True)
class Length:
    """Value must be exactly *value* characters long."""

    kind: ClassVar[str] = "length"
    value: Any
    message: str


@dataclass(frozen=True, slots=True)
class Regex:
    """Value must fully match *value* (a pattern string or compiled pattern)."""

    kind: ClassVar[str] = "regex"
    value: str | re.Pattern[str]
    message: str


@dataclass(frozen=True, slots=True)
class StartsWith:
    kind: ClassVar[str] = "starts_with"
    value: Any
    message: str


@dataclass(frozen=True, slots=True)
class EndsWith:
    kind: ClassVar[str] = "ends_with"
    value: Any
    message: str


@dataclass(frozen=True, slots=True)
class Includes:
    kind: ClassVar[str] = "includes"
    value: Any
    message: str


@dataclass(frozen=True, slots=True)
class Uppercase:
    """Value must already be upper case."""

    kind: ClassVar[str] = "uppercase"
    message: str


@dataclass(frozen=True, slots=True)
class Lowercase:
    """Value must already be lower case."""

    kind: ClassVar[str] = "lowercase"
    message: str


type ValidationRule = (
    Min | Max | Length | Regex | StartsWith | EndsWith | Includes | Uppercase | Lowercase
)

# kind -> rule class, for loading rules from plain data
RULE_TYPES: dict[str, type] = {
    cls.kind: cls
    for cls in (Min, Max, Length, Regex, StartsWith, EndsWith, Includes, Uppercase, Lowercase)
}

# Rules that take no parameter
PARAMETERLESS: frozenset[str] = frozenset({Uppercase.kind, Lowercase.kind})
