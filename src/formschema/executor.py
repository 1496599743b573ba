"""Run a compiled schema against a submitted record.

Usage::

    from formschema import compile_schema, validate

    schema = compile_schema(fields)
    result = validate(schema, request_data)
    if not result:
        # result.errors == {"email": "Invalid email format"}
        ...
    # result.data has sanitized values

Every field is evaluated, so a record that breaks two fields reports both.
Within a field the first failing check wins.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from formschema.diagnostics import INTERNAL_ERROR, Diagnostic, Severity
from formschema.result import ValidationResult, Violation, format_errors
from formschema.schema import SchemaCache
from formschema.validators import MISSING, Cleaned, Rejected

if TYPE_CHECKING:
    from formschema.fields import FieldDescriptor
    from formschema.schema import CompiledSchema

logger = logging.getLogger("formschema.executor")

GENERAL_ERROR_KEY = "general"

_default_cache = SchemaCache()


def _lookup(record: Mapping[str, Any], name: str, blank_is_missing: bool) -> Any:
    value = record.get(name, MISSING)
    if blank_is_missing and value == "":
        return MISSING
    return value


def _evaluate(schema: "CompiledSchema", record: Mapping[str, Any]) -> ValidationResult:
    blank_is_missing = schema.config.blank_is_missing
    cleaned: dict[str, Any] = {}
    violations: list[Violation] = []

    for name, validator in schema.fields.items():
        match validator(_lookup(record, name, blank_is_missing)):
            case Cleaned(value):
                cleaned[name] = value
            case Rejected(message):
                violations.append(Violation(name, message))

    if schema.cross_check is not None:
        violation = schema.cross_check(record)
        if violation is not None:
            violations.append(violation)

    if violations:
        return ValidationResult(data={}, errors=format_errors(violations))
    return ValidationResult(data=cleaned, errors={})


def validate(schema: "CompiledSchema", record: Mapping[str, Any]) -> ValidationResult:
    """Validate *record* against *schema*.

    Args:
        schema: A schema from ``compile_schema()``.
        record: Any mapping of field names to submitted values. Missing
            keys and ``None`` count as "not present". Keys the schema does
            not know are ignored and dropped from ``data``.

    Returns:
        A ``ValidationResult``: ``data`` with one sanitized value per schema
        field on success, or ``errors`` with one message per failing field.

    Never raises for bad input. An unexpected fault while evaluating is
    logged and reported as ``{"general": ...}``.
    """
    try:
        return _evaluate(schema, record)
    except Exception as exc:
        logger.exception("Unexpected error validating %d field(s)", len(schema.fields))
        diagnostic = Diagnostic(
            severity=Severity.ERROR,
            code=INTERNAL_ERROR,
            message=f"{type(exc).__name__}: {exc}",
        )
        return ValidationResult(
            data={},
            errors={GENERAL_ERROR_KEY: schema.config.general_error_message},
            diagnostics=(diagnostic,),
        )


def validate_form(
    descriptors: "Sequence[FieldDescriptor]",
    record: Mapping[str, Any],
    *,
    cache: SchemaCache | None = None,
) -> ValidationResult:
    """Compile *descriptors* (cached by identity) and validate *record*.

    ``CompileError`` propagates: a broken form definition is not a
    validation failure.
    """
    schema = (cache or _default_cache).get(descriptors)
    return validate(schema, record)
