"""Tests for formschema.validators: Validator pipeline and base validators."""

from dataclasses import dataclass

import pytest

from formschema.config import SchemaConfig
from formschema.diagnostics import UNSUPPORTED_FIELD_KIND, Severity
from formschema.errors import CompileError
from formschema.fields import (
    Option,
    PasswordField,
    SelectField,
    TextAreaField,
    TextField,
    TextKind,
)
from formschema.validators import (
    MISSING,
    Cleaned,
    Rejected,
    Shape,
    Step,
    Validator,
    build_base_validator,
)

CONFIG = SchemaConfig()


def base(field):
    validator, diagnostics = build_base_validator(field, CONFIG)
    assert diagnostics == []
    return validator


# ---------------------------------------------------------------------------
# Validator pipeline
# ---------------------------------------------------------------------------


class TestValidator:
    def test_missing_required(self) -> None:
        assert Validator(shape=Shape.STRING)(MISSING) == Rejected("This field is required")

    def test_none_counts_as_missing(self) -> None:
        assert Validator(shape=Shape.STRING)(None) == Rejected("This field is required")

    def test_missing_optional(self) -> None:
        assert Validator(shape=Shape.STRING, optional=True)() == Cleaned(None)

    def test_non_string_rejected(self) -> None:
        assert Validator(shape=Shape.STRING)(42) == Rejected("Expected a string")

    def test_empty_string_is_present(self) -> None:
        assert Validator(shape=Shape.STRING)("") == Cleaned("")

    def test_first_failing_step_wins(self) -> None:
        validator = (
            Validator(shape=Shape.STRING)
            .with_step(Step("a", lambda v: False, "first"))
            .with_step(Step("b", lambda v: False, "second"))
        )
        assert validator("x") == Rejected("first")

    def test_transform_feeds_later_steps(self) -> None:
        seen: list[str] = []
        validator = (
            Validator(shape=Shape.STRING)
            .with_step(Step("up", lambda v: True, "", transform=str.upper))
            .with_step(Step("spy", lambda v: seen.append(v) is None, ""))
        )
        assert validator("abc") == Cleaned("ABC")
        assert seen == ["ABC"]

    def test_with_step_returns_new_validator(self) -> None:
        original = Validator(shape=Shape.STRING)
        extended = original.with_step(Step("a", lambda v: True, "m"))
        assert original.steps == ()
        assert len(extended.steps) == 1

    def test_as_optional_keeps_steps(self) -> None:
        validator = Validator(shape=Shape.STRING).with_step(Step("a", lambda v: False, "m"))
        optional = validator.as_optional()
        assert optional() == Cleaned(None)
        assert optional("x") == Rejected("m")
        assert optional.is_string

    def test_frozen(self) -> None:
        validator = Validator(shape=Shape.STRING)
        with pytest.raises(AttributeError):
            validator.optional = True  # type: ignore[misc]

    def test_any_shape_accepts_everything(self) -> None:
        validator = Validator(shape=Shape.ANY)
        assert validator() == Cleaned(None)
        assert validator(42) == Cleaned(42)
        assert not validator.is_string


# ---------------------------------------------------------------------------
# Base validators
# ---------------------------------------------------------------------------


class TestTextBase:
    def test_plain_accepts_any_string(self) -> None:
        validator = base(TextField(name="n", label="N"))
        assert validator("anything at all") == Cleaned("anything at all")

    def test_email_valid(self) -> None:
        validator = base(TextField(name="e", label="E", kind=TextKind.EMAIL))
        assert validator("first.last@sub.example.org") == Cleaned("first.last@sub.example.org")

    @pytest.mark.parametrize(
        "value", ["userexample.com", "user@", "", "a@b", "ada@example.com\n"]
    )
    def test_email_invalid(self, value: str) -> None:
        validator = base(TextField(name="e", label="E", kind=TextKind.EMAIL))
        assert validator(value) == Rejected("Invalid email format")

    @pytest.mark.parametrize("value", ["+33 6 12 34 56 78", "(555) 123-4567", "0612345678"])
    def test_phone_valid(self, value: str) -> None:
        validator = base(TextField(name="p", label="P", kind=TextKind.PHONE))
        assert validator(value) == Cleaned(value)

    @pytest.mark.parametrize("value", ["call me", "12a45", "", "++33", "0612\n"])
    def test_phone_invalid(self, value: str) -> None:
        validator = base(TextField(name="p", label="P", kind=TextKind.PHONE))
        assert validator(value) == Rejected("Invalid phone number format")

    def test_textarea_accepts_any_string(self) -> None:
        validator = base(TextAreaField(name="bio", label="Bio"))
        assert validator("line one\nline two") == Cleaned("line one\nline two")
        assert validator.is_string

    def test_custom_messages(self) -> None:
        config = SchemaConfig(email_message="Bad email")
        validator, _ = build_base_validator(
            TextField(name="e", label="E", kind=TextKind.EMAIL), config
        )
        assert validator("nope") == Rejected("Bad email")

    def test_custom_pattern_matches_whole_value(self) -> None:
        config = SchemaConfig(phone_pattern=r"\d+")
        validator, _ = build_base_validator(
            TextField(name="p", label="P", kind=TextKind.PHONE), config
        )
        assert validator("0612") == Cleaned("0612")
        assert validator("0612 ext") == Rejected("Invalid phone number format")


class TestPasswordBase:
    def test_empty_rejected(self) -> None:
        validator = base(PasswordField(name="pw", label="Password"))
        assert validator("") == Rejected("password is required")

    def test_missing_uses_password_message(self) -> None:
        validator = base(PasswordField(name="pw", label="Password"))
        assert validator() == Rejected("password is required")

    def test_non_empty_accepted(self) -> None:
        validator = base(PasswordField(name="pw", label="Password"))
        assert validator("s3cret") == Cleaned("s3cret")


class TestSelectBase:
    def test_single_option_literal(self) -> None:
        validator = base(SelectField(name="t", label="T", options=(Option("Yes", "yes"),)))
        assert validator("yes") == Cleaned("yes")
        assert validator("no") == Rejected("Please select a valid option")

    def test_multiple_options_membership(self) -> None:
        validator = base(
            SelectField(
                name="role",
                label="Role",
                options=(Option("Admin", "admin"), Option("User", "user")),
            )
        )
        assert validator("admin") == Cleaned("admin")
        assert validator("user") == Cleaned("user")
        assert validator("manager") == Rejected("Please select a valid option")

    def test_label_is_not_a_value(self) -> None:
        validator = base(
            SelectField(name="r", label="R", options=(Option("Admin", "admin"), Option("U", "u")))
        )
        assert isinstance(validator("Admin"), Rejected)

    def test_missing_uses_select_message(self) -> None:
        validator = base(SelectField(name="r", label="R", options=(Option("A", "a"),)))
        assert validator() == Rejected("Please select a valid option")

    def test_choice_shape(self) -> None:
        validator = base(SelectField(name="r", label="R", options=(Option("A", "a"),)))
        assert validator.shape is Shape.CHOICE
        assert not validator.is_string

    def test_zero_options_is_fatal(self) -> None:
        with pytest.raises(CompileError, match="at least one option") as exc_info:
            build_base_validator(SelectField(name="role", label="Role"), CONFIG)
        assert exc_info.value.field == "role"


@dataclass(frozen=True)
class DateField:
    name: str
    label: str


class TestUnsupportedKind:
    def test_unknown_descriptor_falls_back(self) -> None:
        validator, diagnostics = build_base_validator(DateField(name="when", label="When"), CONFIG)
        assert validator.shape is Shape.ANY
        assert validator() == Cleaned(None)
        assert validator(20240101) == Cleaned(20240101)
        assert len(diagnostics) == 1
        assert diagnostics[0].code == UNSUPPORTED_FIELD_KIND
        assert diagnostics[0].severity is Severity.WARNING
        assert diagnostics[0].field == "when"

    def test_unknown_text_kind_falls_back(self) -> None:
        field = TextField(name="site", label="Site", kind="url")  # type: ignore[arg-type]
        validator, diagnostics = build_base_validator(field, CONFIG)
        assert validator("not a url, still fine") == Cleaned("not a url, still fine")
        assert [d.code for d in diagnostics] == [UNSUPPORTED_FIELD_KIND]
