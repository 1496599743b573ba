"""Field descriptors: data-only description of a form.

A form is a tuple of descriptors, one per field. Descriptors carry no
behavior; ``compile_schema()`` turns them into validators::

    fields = (
        TextField(name="email", label="Email", kind=TextKind.EMAIL),
        SelectField(
            name="role",
            label="Role",
            options=(Option("Admin", "admin"), Option("User", "user")),
        ),
        PasswordField(name="password", label="Password", confirm_password=True),
    )

``FieldDescriptor`` is a closed union. Code that branches on it matches all
four classes and sends the fall-through case to a ``Never``-typed helper, so
adding a fifth class makes the type checker point at every place that still
needs to handle it.

``placeholder``, ``disabled``, ``success_message``, ``rows`` and ``cols``
are display hints for whatever renders the form. The engine ignores them.
"""

from dataclasses import dataclass
from enum import Enum

from formschema.rules import ValidationRule


class TextKind(Enum):
    """Input flavour of a ``TextField``."""

    PLAIN = "plain"
    EMAIL = "email"
    PHONE = "phone"


@dataclass(frozen=True, slots=True)
class Option:
    """One choice of a ``SelectField``."""

    label: str
    value: str


@dataclass(frozen=True, slots=True)
class TextField:
    name: str
    label: str
    kind: TextKind = TextKind.PLAIN
    optional: bool = False
    validations: tuple[ValidationRule, ...] = ()
    default: str | None = None
    placeholder: str | None = None
    disabled: bool = False
    success_message: str | None = None


@dataclass(frozen=True, slots=True)
class SelectField:
    """Choice among ``options``. Option values should be unique."""

    name: str
    label: str
    options: tuple[Option, ...] = ()
    optional: bool = False
    validations: tuple[ValidationRule, ...] = ()
    default: str | None = None
    placeholder: str | None = None
    disabled: bool = False
    success_message: str | None = None


@dataclass(frozen=True, slots=True)
class TextAreaField:
    name: str
    label: str
    optional: bool = False
    validations: tuple[ValidationRule, ...] = ()
    rows: int | None = None
    cols: int | None = None
    default: str | None = None
    placeholder: str | None = None
    disabled: bool = False
    success_message: str | None = None


@dataclass(frozen=True, slots=True)
class PasswordField:
    """Password input. Never carries a default value.

    With ``confirm_password=True`` the compiled schema gains a required
    ``<name>Confirm`` field that must equal this one.
    """

    name: str
    label: str
    confirm_password: bool = False
    optional: bool = False
    validations: tuple[ValidationRule, ...] = ()
    placeholder: str | None = None
    disabled: bool = False
    success_message: str | None = None


type FieldDescriptor = TextField | SelectField | TextAreaField | PasswordField


@dataclass(frozen=True, slots=True)
class FormDefinition:
    """A complete form: its fields plus form-level display text."""

    fields: tuple[FieldDescriptor, ...]
    title: str = "Form"
    description: str | None = None
    submit_label: str = "Submit"

    def initial_values(self) -> dict[str, str]:
        """Default values keyed by field name, for fields that declare one."""
        values: dict[str, str] = {}
        for field in self.fields:
            match field:
                case TextField() | SelectField() | TextAreaField():
                    if field.default is not None:
                        values[field.name] = field.default
                case PasswordField():
                    pass
        return values
