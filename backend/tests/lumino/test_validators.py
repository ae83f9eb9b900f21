"""Unit tests for lumino.validators."""

import pytest

from livedemo.lumino import ValidationRule, Validators


class TestMessages:
    def test_default_messages(self) -> None:
        assert Validators.required().message == "This field is required"
        assert Validators.minLength(3).message == "Must be at least 3 characters"
        assert Validators.max(10).message == "Must be at most 10"

    def test_message_string(self) -> None:
        assert Validators.email("Bad email").message == "Bad email"

    def test_options_dict(self) -> None:
        rule = Validators.required({"message": "Name is required", "skipOn": ["draft"]})
        assert rule.message == "Name is required"
        assert rule.describe() == {"type": "required", "message": "Name is required", "skipOn": ["draft"]}

    def test_placeholders_in_custom_message(self) -> None:
        assert Validators.maxLength(5, "No more than {max}").message == "No more than 5"

    def test_skip_on_and_validate_on_are_exclusive(self) -> None:
        with pytest.raises(ValueError, match="Cannot use both"):
            Validators.required({"skipOn": ["a"], "validateOn": ["b"]})

    def test_bad_options(self) -> None:
        with pytest.raises(TypeError):
            Validators.required(42)


class TestChecks:
    @pytest.mark.parametrize(
        ("rule", "value", "ok"),
        [
            (Validators.required(), "", False),
            (Validators.required(), "  ", False),
            (Validators.required(), [], False),
            (Validators.required(), "x", True),
            (Validators.required(), 0, True),
            (Validators.email(), "a@b.co", True),
            (Validators.email(), "not-an-email", False),
            (Validators.email(), "", True),
            (Validators.pattern("^[A-Z]{2}\\d+$"), "AB12", True),
            (Validators.pattern("^[A-Z]{2}\\d+$"), "ab12", False),
            (Validators.minLength(3), "ab", False),
            (Validators.maxLength(3), "abcd", False),
            (Validators.min(18), 17, False),
            (Validators.min(18), "21", True),
            (Validators.max(65), 66, False),
            (Validators.min(1), "abc", False),
        ],
    )
    def test_check(self, rule: ValidationRule, value: object, ok: bool) -> None:
        assert rule.check(value) is ok

    def test_custom(self) -> None:
        rule = Validators.custom({"validate": lambda v: v == "yes", "message": "Say yes"})
        assert rule.type == "custom"
        assert rule.check("yes")
        assert not rule.check("no")
        assert rule.message == "Say yes"

    def test_custom_requires_function(self) -> None:
        with pytest.raises(ValueError, match="validate function is required"):
            Validators.custom({"message": "x"})
