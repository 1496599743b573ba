"""Schema configuration.

SchemaConfig is a frozen dataclass: immutable after creation, shared by every
schema compiled with it, no string-key dict lookups.
"""

from dataclasses import dataclass

# Basic email pattern: checks structure, not deliverability
EMAIL_PATTERN = r"^[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}$"

# Optional leading +, then digits, spaces, hyphens and parentheses
PHONE_PATTERN = r"^[+]?[\d\s\-\(\)]+$"


@dataclass(frozen=True, slots=True)
class SchemaConfig:
    """Messages and patterns used by the built-in checks. Immutable after creation.

    All fields have defaults. Override what you need::

        config = SchemaConfig(required_message="Required", blank_is_missing=True)
        schema = compile_schema(fields, config=config)

    Rule messages always come from the field descriptors; this only covers
    the base checks every field kind gets for free.
    """

    # Presence and type
    required_message: str = "This field is required"
    type_message: str = "Expected a string"

    # Text kinds
    email_message: str = "Invalid email format"
    phone_message: str = "Invalid phone number format"
    email_pattern: str = EMAIL_PATTERN
    phone_pattern: str = PHONE_PATTERN

    # Password and confirmation
    password_required_message: str = "password is required"
    confirm_required_message: str = "password confirmation is required"
    password_mismatch_message: str = "passwords do not match"
    confirm_suffix: str = "Confirm"

    # Select
    select_message: str = "Please select a valid option"

    # Returned under the "general" key when validation itself breaks
    general_error_message: str = "Unexpected validation error"

    # Treat "" like an absent value (HTML forms submit empty inputs as "")
    blank_is_missing: bool = False
