"""Structured diagnostics for recoverable schema problems.

Compilation never prints or warns through a process-wide channel. Every
recoverable problem (an unsupported field kind, a rule that cannot apply,
a duplicate field name) becomes a ``Diagnostic`` returned alongside the
compiled schema, so the caller decides what to show and where.

Each diagnostic is also mirrored to the ``formschema.compiler`` logger at
DEBUG level.

Usage::

    schema = compile_schema(fields)
    for diagnostic in schema.diagnostics:
        print(diagnostic)
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger("formschema.compiler")


class Severity(Enum):
    """Severity of a diagnostic."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


# Diagnostic codes
UNSUPPORTED_FIELD_KIND = "unsupported-field-kind"
RULE_SKIPPED = "rule-skipped"
DUPLICATE_FIELD = "duplicate-field"
CONFIRMATION_IGNORED = "confirmation-ignored"
INTERNAL_ERROR = "internal-error"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A single recoverable problem found while compiling or validating."""

    severity: Severity
    code: str
    message: str
    field: str | None = None

    def __str__(self) -> str:
        prefix = self.severity.value.upper()
        loc = f" ({self.field})" if self.field else ""
        return f"[{prefix}] {self.code}{loc}: {self.message}"


def diagnose(
    severity: Severity, code: str, message: str, *, field: str | None = None
) -> Diagnostic:
    """Create a diagnostic and mirror it to the compiler logger."""
    diagnostic = Diagnostic(severity=severity, code=code, message=message, field=field)
    logger.debug("%s", diagnostic)
    return diagnostic


def warning(code: str, message: str, *, field: str | None = None) -> Diagnostic:
    return diagnose(Severity.WARNING, code, message, field=field)


def info(code: str, message: str, *, field: str | None = None) -> Diagnostic:
    return diagnose(Severity.INFO, code, message, field=field)


def warnings_in(diagnostics: Iterable[Diagnostic]) -> list[Diagnostic]:
    return [d for d in diagnostics if d.severity is Severity.WARNING]


def summarize(diagnostics: Iterable[Diagnostic], *, field_count: int = 0) -> str:
    """Human-readable summary, one line per diagnostic."""
    items = list(diagnostics)
    errors = [d for d in items if d.severity is Severity.ERROR]
    warnings = warnings_in(items)
    lines = [f"Compiled {field_count} field(s)."]
    if not errors and not warnings:
        lines.append("No issues found.")
    elif not errors:
        lines.append(f"No errors. {len(warnings)} warning(s).")
    else:
        lines.append(f"{len(errors)} error(s), {len(warnings)} warning(s).")
    lines.extend(f"  {d}" for d in items)
    return "\n".join(lines)
