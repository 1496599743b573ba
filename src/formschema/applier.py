"""Fold a field's validation rules onto its base validator.

Rules are applied in declared order, each adding one ``Step`` to the
validator. At validation time the first failing step wins, so a field
reports at most one message.

Two kinds of problems are treated very differently:

- A rule that is not a known rule type, or whose ``value`` or ``message``
  has the wrong shape, raises ``CompileError``. The form definition is
  broken and must be fixed.
- A well-formed rule attached to a field that does not hold free text
  (a select field, or an unsupported field kind) is skipped with a
  ``rule-skipped`` warning diagnostic.
"""

import re
from typing import Any, Never

from formschema.diagnostics import RULE_SKIPPED, Diagnostic, warning
from formschema.errors import CompileError
from formschema.rules import (
    EndsWith,
    Includes,
    Length,
    Lowercase,
    Max,
    Min,
    Regex,
    StartsWith,
    Uppercase,
    ValidationRule,
)
from formschema.validators import Step, Validator


def _rule_kind(rule: Any) -> str:
    return getattr(rule, "kind", type(rule).__name__)


def _check_message(rule: Any, field: str | None) -> str:
    message = rule.message
    if not isinstance(message, str):
        msg = f"Invalid message for rule '{rule.kind}': str expected, got {type(message).__name__}"
        raise CompileError(msg, field=field, rule=rule.kind)
    return message


def _check_number(rule: Min | Max | Length, field: str | None) -> int | float:
    value = rule.value
    if isinstance(value, bool) or not isinstance(value, int | float):
        msg = f"Invalid value for rule '{rule.kind}': number expected, got {type(value).__name__}"
        raise CompileError(msg, field=field, rule=rule.kind)
    return value


def _check_text(rule: StartsWith | EndsWith | Includes, field: str | None) -> str:
    value = rule.value
    if not isinstance(value, str):
        msg = f"Invalid value for rule '{rule.kind}': str expected, got {type(value).__name__}"
        raise CompileError(msg, field=field, rule=rule.kind)
    return value


def _check_pattern(rule: Regex, field: str | None) -> re.Pattern[str]:
    value = rule.value
    if isinstance(value, re.Pattern) and isinstance(value.pattern, str):
        return value
    if not isinstance(value, str):
        msg = f"Invalid value for rule 'regex': pattern expected, got {type(value).__name__}"
        raise CompileError(msg, field=field, rule=rule.kind)
    try:
        return re.compile(value)
    except re.error as exc:
        msg = f"Invalid pattern for rule 'regex': {exc}"
        raise CompileError(msg, field=field, rule=rule.kind) from exc


def _unknown_rule(rule: Never, field: str | None) -> Never:
    msg = f"Unsupported validation rule type: {_rule_kind(rule)}"
    raise CompileError(msg, field=field, rule=_rule_kind(rule))


def rule_to_step(rule: ValidationRule, *, field: str | None = None) -> Step:
    """Translate one rule into a pipeline step.

    Raises ``CompileError`` for an unknown rule or a malformed parameter.
    """
    match rule:
        case Min():
            n = _check_number(rule, field)
            return Step(rule.kind, lambda v: len(v) >= n, _check_message(rule, field))
        case Max():
            n = _check_number(rule, field)
            return Step(rule.kind, lambda v: len(v) <= n, _check_message(rule, field))
        case Length():
            n = _check_number(rule, field)
            return Step(rule.kind, lambda v: len(v) == n, _check_message(rule, field))
        case Regex():
            pattern = _check_pattern(rule, field)
            return Step(
                rule.kind,
                lambda v: pattern.fullmatch(v) is not None,
                _check_message(rule, field),
            )
        case StartsWith():
            prefix = _check_text(rule, field)
            return Step(rule.kind, lambda v: v.startswith(prefix), _check_message(rule, field))
        case EndsWith():
            suffix = _check_text(rule, field)
            return Step(rule.kind, lambda v: v.endswith(suffix), _check_message(rule, field))
        case Includes():
            part = _check_text(rule, field)
            return Step(rule.kind, lambda v: part in v, _check_message(rule, field))
        case Uppercase():
            return Step(
                rule.kind,
                lambda v: v == v.upper(),
                _check_message(rule, field),
                transform=str.upper,
            )
        case Lowercase():
            return Step(
                rule.kind,
                lambda v: v == v.lower(),
                _check_message(rule, field),
                transform=str.lower,
            )
        case _:
            _unknown_rule(rule, field)


def apply_rule(
    validator: Validator, rule: ValidationRule, *, field: str | None = None
) -> tuple[Validator, Diagnostic | None]:
    """Return *validator* extended with *rule*.

    The rule is always checked first, so a malformed rule is fatal even on
    a field where it would have been skipped.
    """
    step = rule_to_step(rule, field=field)
    if not validator.is_string:
        diagnostic = warning(
            RULE_SKIPPED,
            f"Rule '{rule.kind}' only applies to text fields; skipped",
            field=field,
        )
        return validator, diagnostic
    return validator.with_step(step), None


def apply_rules(
    validator: Validator, rules: tuple[ValidationRule, ...], *, field: str | None = None
) -> tuple[Validator, list[Diagnostic]]:
    """Fold *rules* onto *validator* in declared order."""
    diagnostics: list[Diagnostic] = []
    for rule in rules:
        validator, diagnostic = apply_rule(validator, rule, field=field)
        if diagnostic is not None:
            diagnostics.append(diagnostic)
    return validator, diagnostics
