"""formschema: compile declarative form definitions into validators.

Describe a form as data, compile it once, validate submissions against it.

Basic usage::

    from formschema import (
        Min, Option, PasswordField, SelectField, TextField, TextKind,
        compile_schema,
    )

    schema = compile_schema((
        TextField(name="email", label="Email", kind=TextKind.EMAIL),
        SelectField(
            name="role",
            label="Role",
            options=(Option("Admin", "admin"), Option("User", "user")),
        ),
        PasswordField(
            name="password",
            label="Password",
            confirm_password=True,
            validations=(Min(8, "At least 8 characters"),),
        ),
    ))

    result = schema.validate(submitted)
    if not result:
        # result.errors == {"passwordConfirm": "passwords do not match"}
        ...

Forms can also be loaded from JSON with ``load_form()``.
"""

from importlib import import_module

__version__ = "0.1.0"
__all__ = [
    "CompileError",
    "CompiledSchema",
    "CrossFieldCheck",
    "DescriptorError",
    "Diagnostic",
    "EndsWith",
    "FieldDescriptor",
    "FormDefinition",
    "FormSchemaError",
    "Includes",
    "Length",
    "Lowercase",
    "Max",
    "Min",
    "Option",
    "PasswordField",
    "Regex",
    "SchemaCache",
    "SchemaConfig",
    "SelectField",
    "Severity",
    "StartsWith",
    "TextAreaField",
    "TextField",
    "TextKind",
    "Uppercase",
    "ValidationResult",
    "ValidationRule",
    "Validator",
    "Violation",
    "compile_schema",
    "fields_from_data",
    "form_from_data",
    "format_errors",
    "load_form",
    "validate",
    "validate_form",
]

# public name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    # Errors
    "CompileError": "formschema.errors",
    "DescriptorError": "formschema.errors",
    "FormSchemaError": "formschema.errors",
    # Config and diagnostics
    "SchemaConfig": "formschema.config",
    "Diagnostic": "formschema.diagnostics",
    "Severity": "formschema.diagnostics",
    # Descriptors
    "FieldDescriptor": "formschema.fields",
    "FormDefinition": "formschema.fields",
    "Option": "formschema.fields",
    "PasswordField": "formschema.fields",
    "SelectField": "formschema.fields",
    "TextAreaField": "formschema.fields",
    "TextField": "formschema.fields",
    "TextKind": "formschema.fields",
    # Rules
    "EndsWith": "formschema.rules",
    "Includes": "formschema.rules",
    "Length": "formschema.rules",
    "Lowercase": "formschema.rules",
    "Max": "formschema.rules",
    "Min": "formschema.rules",
    "Regex": "formschema.rules",
    "StartsWith": "formschema.rules",
    "Uppercase": "formschema.rules",
    "ValidationRule": "formschema.rules",
    # Compilation
    "CompiledSchema": "formschema.schema",
    "SchemaCache": "formschema.schema",
    "compile_schema": "formschema.schema",
    "CrossFieldCheck": "formschema.confirm",
    "Validator": "formschema.validators",
    # Execution
    "ValidationResult": "formschema.result",
    "Violation": "formschema.result",
    "format_errors": "formschema.result",
    "validate": "formschema.executor",
    "validate_form": "formschema.executor",
    # Loading
    "fields_from_data": "formschema.loader",
    "form_from_data": "formschema.loader",
    "load_form": "formschema.loader",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import formschema`` cheap while providing a flat top-level API.
    """
    module = _LAZY_IMPORTS.get(name)
    if module is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)
    return getattr(import_module(module), name)
