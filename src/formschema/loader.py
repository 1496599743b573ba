"""Build descriptors from plain data (parsed JSON, YAML, dicts).

A form document is either a list of field objects or an object with
``fields`` and optional ``title``, ``description`` and ``submit_label``::

    {
      "title": "Sign up",
      "fields": [
        {"type": "text", "name": "email", "label": "Email", "kind": "email"},
        {"type": "password", "name": "password", "label": "Password",
         "confirm_password": true,
         "validations": [{"type": "min", "value": 8, "message": "Too short"}]}
      ]
    }

Structural problems raise ``DescriptorError``. Rule values are passed
through untouched; ``{"type": "min", "value": "8"}`` loads fine and is
rejected by ``compile_schema()``.
"""

import json
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from formschema.errors import DescriptorError
from formschema.fields import (
    FieldDescriptor,
    FormDefinition,
    Option,
    PasswordField,
    SelectField,
    TextAreaField,
    TextField,
    TextKind,
)
from formschema.rules import PARAMETERLESS, RULE_TYPES, ValidationRule

# Display hints copied through unchanged
_COMMON_KEYS = ("placeholder", "success_message")


def _require_mapping(data: Any, what: str, field: str | None = None) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        msg = f"{what} must be an object, got {type(data).__name__}"
        raise DescriptorError(msg, field=field)
    return data


def _require_list(data: Any, what: str, field: str | None = None) -> Sequence[Any]:
    if isinstance(data, str | bytes) or not isinstance(data, Sequence):
        msg = f"{what} must be a list, got {type(data).__name__}"
        raise DescriptorError(msg, field=field)
    return data


def _flag(data: Mapping[str, Any], key: str, field: str) -> bool:
    value = data.get(key, False)
    if not isinstance(value, bool):
        msg = f"'{key}' must be true or false, got {type(value).__name__}"
        raise DescriptorError(msg, field=field)
    return value


def rule_from_data(data: Any, *, field: str | None = None) -> ValidationRule:
    """Build one rule from ``{"type": ..., "value": ..., "message": ...}``."""
    data = _require_mapping(data, "Validation rule", field)
    kind = data.get("type")
    cls = RULE_TYPES.get(kind) if isinstance(kind, str) else None
    if cls is None:
        msg = f"Unsupported validation rule type: {kind!r}"
        raise DescriptorError(msg, field=field, rule=str(kind))
    if "message" not in data:
        msg = f"Validation rule '{kind}' has no message"
        raise DescriptorError(msg, field=field, rule=kind)
    if kind in PARAMETERLESS:
        return cls(message=data["message"])
    if "value" not in data:
        msg = f"Validation rule '{kind}' has no value"
        raise DescriptorError(msg, field=field, rule=kind)
    return cls(value=data["value"], message=data["message"])


def _options_from_data(data: Any, field: str) -> tuple[Option, ...]:
    options: list[Option] = []
    for item in _require_list(data, "Select options", field):
        item = _require_mapping(item, "Select option", field)
        if "value" not in item:
            msg = "Select option has no value"
            raise DescriptorError(msg, field=field)
        value = str(item["value"])
        options.append(Option(label=str(item.get("label", value)), value=value))
    return tuple(options)


def _text_kind(data: Mapping[str, Any]) -> Any:
    kind = data.get("kind", TextKind.PLAIN.value)
    try:
        return TextKind(kind)
    except ValueError:
        # Left as-is: compile_schema() warns and accepts any value
        return kind


def field_from_data(data: Any) -> FieldDescriptor:
    """Build one field descriptor from a plain mapping."""
    data = _require_mapping(data, "Field")
    name = data.get("name")
    if not isinstance(name, str) or not name:
        msg = "Field has no name"
        raise DescriptorError(msg)

    common: dict[str, Any] = {
        "name": name,
        "label": str(data.get("label", name)),
        "optional": _flag(data, "optional", name),
        "disabled": _flag(data, "disabled", name),
        "validations": tuple(
            rule_from_data(rule, field=name)
            for rule in _require_list(data.get("validations", ()), "Validations", name)
        ),
    }
    common.update({key: data[key] for key in _COMMON_KEYS if key in data})

    field_type = data.get("type")
    match field_type:
        case "text":
            return TextField(kind=_text_kind(data), default=data.get("default"), **common)
        case "select":
            return SelectField(
                options=_options_from_data(data.get("options", ()), name),
                default=data.get("default"),
                **common,
            )
        case "textarea":
            return TextAreaField(
                rows=data.get("rows"),
                cols=data.get("cols"),
                default=data.get("default"),
                **common,
            )
        case "password":
            return PasswordField(
                confirm_password=_flag(data, "confirm_password", name),
                **common,
            )
        case _:
            msg = f"Unknown field type {field_type!r}"
            raise DescriptorError(msg, field=name)


def fields_from_data(items: Any) -> tuple[FieldDescriptor, ...]:
    """Build a descriptor tuple from a list of plain mappings."""
    return tuple(field_from_data(item) for item in _require_list(items, "Fields"))


def form_from_data(data: Any) -> FormDefinition:
    """Build a ``FormDefinition`` from a field list or a form object."""
    if not isinstance(data, Mapping):
        return FormDefinition(fields=fields_from_data(data))
    if "fields" not in data:
        msg = "Form has no fields"
        raise DescriptorError(msg)
    return FormDefinition(
        fields=fields_from_data(data["fields"]),
        title=str(data.get("title", "Form")),
        description=data.get("description"),
        submit_label=str(data.get("submit_label", "Submit")),
    )


def load_form(path: str | Path) -> FormDefinition:
    """Read a JSON form document from *path*."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        msg = f"{path}: invalid JSON ({exc})"
        raise DescriptorError(msg) from exc
    return form_from_data(data)
