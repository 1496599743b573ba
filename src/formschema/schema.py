"""Compile field descriptors into an executable schema.

``compile_schema()`` builds one validator per field (base check for the
field kind, then its rules in order), adds the password confirmation field
and check when a password field asks for one, and returns an immutable
``CompiledSchema``::

    schema = compile_schema(fields)
    result = schema.validate({"email": "ada@example.com"})

Compilation is a pure function of the descriptors and the config, so a
schema can be compiled once per form and shared. ``SchemaCache`` does that
keyed on the identity of the descriptor sequence.

Fatal problems raise ``CompileError``. Everything recoverable ends up in
``CompiledSchema.diagnostics``.
"""

import threading
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from formschema.applier import apply_rules
from formschema.config import SchemaConfig
from formschema.confirm import CrossFieldCheck, inject_confirmation
from formschema.diagnostics import DUPLICATE_FIELD, Diagnostic, warning
from formschema.errors import CompileError
from formschema.fields import FieldDescriptor
from formschema.validators import Validator, build_base_validator

if TYPE_CHECKING:
    from formschema.result import ValidationResult


@dataclass(frozen=True, slots=True)
class CompiledSchema:
    """Field name -> validator, plus the optional password confirmation check.

    Immutable and safe to share across threads.
    """

    fields: Mapping[str, Validator]
    cross_check: CrossFieldCheck | None = None
    diagnostics: tuple[Diagnostic, ...] = ()
    config: SchemaConfig = SchemaConfig()

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(self.fields)

    def __contains__(self, name: object) -> bool:
        return name in self.fields

    def __len__(self) -> int:
        return len(self.fields)

    def validate(self, record: Mapping[str, Any]) -> "ValidationResult":
        """Validate *record* against this schema. See ``formschema.executor.validate``."""
        from formschema.executor import validate

        return validate(self, record)


def compile_field(
    field: FieldDescriptor, config: SchemaConfig
) -> tuple[Validator, list[Diagnostic]]:
    """Base validator for *field*, its rules folded on, optionality applied."""
    name = getattr(field, "name", None)
    if not isinstance(name, str):
        msg = f"Field descriptor {type(field).__name__} has no name"
        raise CompileError(msg)

    validator, diagnostics = build_base_validator(field, config)
    rules = getattr(field, "validations", ())
    if rules:
        validator, skipped = apply_rules(validator, tuple(rules), field=name)
        diagnostics.extend(skipped)
    if getattr(field, "optional", False):
        validator = validator.as_optional()
    return validator, diagnostics


def compile_schema(
    descriptors: Sequence[FieldDescriptor], *, config: SchemaConfig | None = None
) -> CompiledSchema:
    """Compile *descriptors* into a ``CompiledSchema``.

    Duplicate names produce a ``duplicate-field`` warning and the later
    declaration wins.

    Raises ``CompileError`` for a select field without options, an unknown
    rule type, or a rule whose value has the wrong shape.
    """
    config = config or SchemaConfig()
    fields: Mapping[str, Validator] = {}
    diagnostics: list[Diagnostic] = []

    for field in descriptors:
        validator, found = compile_field(field, config)
        diagnostics.extend(found)
        if field.name in fields:
            diagnostics.append(
                warning(
                    DUPLICATE_FIELD,
                    f"Field '{field.name}' is declared more than once; the last declaration wins",
                    field=field.name,
                )
            )
        fields = {**fields, field.name: validator}

    fields, cross_check, found = inject_confirmation(fields, descriptors, config)
    diagnostics.extend(found)

    return CompiledSchema(
        fields=MappingProxyType(fields),
        cross_check=cross_check,
        diagnostics=tuple(diagnostics),
        config=config,
    )


class SchemaCache:
    """Compiled schemas keyed by the identity of their descriptor sequence.

    Each entry keeps a reference to its descriptor sequence, so an ``id()``
    cannot be reused while the entry lives. Descriptor sequences are assumed
    not to change after first use; mutate a list in place and the cache will
    keep serving the old schema.
    """

    __slots__ = ("_config", "_entries", "_lock", "_maxsize")

    def __init__(self, config: SchemaConfig | None = None, *, maxsize: int = 128) -> None:
        self._config = config or SchemaConfig()
        self._maxsize = maxsize
        self._lock = threading.Lock()
        # id(descriptors) -> (descriptors, schema), oldest first
        self._entries: dict[int, tuple[Sequence[FieldDescriptor], CompiledSchema]] = {}

    def get(self, descriptors: Sequence[FieldDescriptor]) -> CompiledSchema:
        """Return the schema for *descriptors*, compiling it on first use."""
        key = id(descriptors)
        with self._lock:
            entry = self._entries.get(key)
        if entry is not None and entry[0] is descriptors:
            return entry[1]

        schema = compile_schema(descriptors, config=self._config)
        with self._lock:
            self._entries.pop(key, None)
            self._entries[key] = (descriptors, schema)
            while len(self._entries) > self._maxsize:
                del self._entries[next(iter(self._entries))]
        return schema

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
