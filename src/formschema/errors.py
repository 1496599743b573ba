"""formschema exception hierarchy.

Only configuration problems are raised. A submitted record that fails
validation is a normal outcome and comes back as a ``ValidationResult``,
never as an exception.
"""


class FormSchemaError(Exception):
    """Base for all formschema-specific errors."""


class CompileError(FormSchemaError):
    """Raised when a form definition cannot be compiled into a schema.

    Covers a select field without options, an unknown rule type, and a rule
    whose value has the wrong shape. These indicate a malformed form
    definition and are never recovered silently.
    """

    def __init__(self, detail: str, *, field: str | None = None, rule: str | None = None) -> None:
        self.detail = detail
        self.field = field
        self.rule = rule
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.field:
            return f"{self.field}: {self.detail}"
        return self.detail


class DescriptorError(CompileError):
    """Raised when plain data cannot be turned into field descriptors.

    Typically raised by ``formschema.loader`` while reading a JSON form
    definition (missing ``name``, unknown field ``type`` and so on).
    """
