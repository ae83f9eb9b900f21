"""
Field validation rules for form definitions.

``Validators.required({"message": "Name is required"})`` and
``Validators.email("Invalid email")`` both work: the last argument of every
factory is either a message string or an options dict with ``message``,
``skipOn`` and ``validateOn``.
"""

import math
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

DEFAULT_MESSAGES = {
    "required": "This field is required",
    "email": "Please enter a valid email address",
    "pattern": "Please enter a valid value",
    "minLength": "Must be at least {min} characters",
    "maxLength": "Must be at most {max} characters",
    "min": "Must be at least {min}",
    "max": "Must be at most {max}",
    "custom": "Validation failed",
}

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_PLACEHOLDER_RE = re.compile(r"\{(\w+)\}")


@dataclass(frozen=True)
class ValidationRule:
    type: str
    validate: Callable[[Any], Any] = field(repr=False)
    message: str
    skipOn: list[str] | None = None
    validateOn: list[str] | None = None

    def check(self, value: Any) -> bool:
        return bool(self.validate(value))

    def describe(self) -> dict[str, Any]:
        out: dict[str, Any] = {"type": self.type, "message": self.message}
        if self.skipOn:
            out["skipOn"] = list(self.skipOn)
        if self.validateOn:
            out["validateOn"] = list(self.validateOn)
        return out


def _options(arg: Any) -> dict[str, Any]:
    if arg is None:
        return {}
    if isinstance(arg, str):
        return {"message": arg}
    if isinstance(arg, dict):
        return arg
    raise TypeError("Validator options must be a message string or an options object")


def _format(message: str, params: dict[str, Any]) -> str:
    return _PLACEHOLDER_RE.sub(lambda m: str(params.get(m.group(1), "")), message)


def _rule(kind: str, validate: Callable[[Any], Any], arg: Any, **params: Any) -> ValidationRule:
    options = _options(arg)
    if options.get("skipOn") and options.get("validateOn"):
        raise ValueError(f'Validator "{kind}": Cannot use both "skipOn" and "validateOn" together.')
    message = options.get("message") or DEFAULT_MESSAGES[kind]
    return ValidationRule(
        type=kind,
        validate=validate,
        message=_format(message, params),
        skipOn=options.get("skipOn"),
        validateOn=options.get("validateOn"),
    )


def is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


def _number(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


class Validators:
    @staticmethod
    def required(options: Any = None, *extra: Any) -> ValidationRule:
        return _rule("required", lambda v: not is_empty(v), options)

    @staticmethod
    def email(options: Any = None, *extra: Any) -> ValidationRule:
        return _rule("email", lambda v: is_empty(v) or bool(_EMAIL_RE.match(str(v))), options)

    @staticmethod
    def pattern(regex: Any = None, options: Any = None, *extra: Any) -> ValidationRule:
        """*regex* is a pattern string (the script language's regex literals are not supported)."""
        compiled = re.compile(str(regex))
        return _rule("pattern", lambda v: is_empty(v) or bool(compiled.search(str(v))), options)

    @staticmethod
    def minLength(length: Any = 0, options: Any = None, *extra: Any) -> ValidationRule:
        return _rule("minLength", lambda v: is_empty(v) or len(str(v)) >= length, options, min=length)

    @staticmethod
    def maxLength(length: Any = 0, options: Any = None, *extra: Any) -> ValidationRule:
        return _rule("maxLength", lambda v: is_empty(v) or len(str(v)) <= length, options, max=length)

    @staticmethod
    def min(minimum: Any = 0, options: Any = None, *extra: Any) -> ValidationRule:
        return _rule("min", lambda v: is_empty(v) or _number(v) >= minimum, options, min=minimum)

    @staticmethod
    def max(maximum: Any = 0, options: Any = None, *extra: Any) -> ValidationRule:
        return _rule("max", lambda v: is_empty(v) or _number(v) <= maximum, options, max=maximum)

    @staticmethod
    def custom(config: Any = None, *extra: Any) -> ValidationRule:
        options = _options(config)
        validate = options.get("validate")
        if not callable(validate):
            raise ValueError("Validators.custom: validate function is required")
        return _rule("custom", validate, options)
