"""Declarative validation of request dataclasses with readable messages."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Optional, Union

_RULE_KEY = "besart.validator.rule"

Number = Union[int, float]


@dataclass(frozen=True)
class _Rule:
    json_name: Optional[str]
    required: bool
    gt: Optional[Number]
    length: Optional[int]


def rule(
    *,
    json_name: Optional[str] = None,
    required: bool = False,
    gt: Optional[Number] = None,
    length: Optional[int] = None,
) -> dict[str, Any]:
    """Return field metadata describing how a dataclass field is validated.

    Use as ``field(metadata=rule(json_name="amount", required=True, gt=0))``.
    """
    return {_RULE_KEY: _Rule(json_name, required, gt, length)}


class ValidationError(ValueError):
    """Raised when a value fails validation; holds one message per field."""

    def __init__(self, messages: list[str]) -> None:
        super().__init__("\n".join(messages))
        self.messages = messages


def _display_name(field: dataclasses.Field, spec: Optional[_Rule]) -> str:
    if spec is None or not spec.json_name:
        return field.name
    name = spec.json_name.split(",", 1)[0]
    if not name or name == "-":
        return field.name
    return name


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (str, int, float, bool)):
        return not value
    return False


def _measure(value: Any) -> Number:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    return len(value)


class Validator:
    """Checks dataclass instances against the rules on their fields."""

    templates = {
        "required": "{0} must not be empty.",
        "gt": "{0} must be greater than {1}",
        "len": "{0} must be greater than {1} length",
    }

    def validate(self, obj: Any) -> None:
        """Raise ValidationError listing every field that breaks its rule."""
        if not dataclasses.is_dataclass(obj) or isinstance(obj, type):
            raise TypeError("validate expects a dataclass instance")
        messages = list(self._check(obj))
        if messages:
            raise ValidationError(messages)

    def _check(self, obj: Any):
        for field in dataclasses.fields(obj):
            value = getattr(obj, field.name)
            spec = field.metadata.get(_RULE_KEY)
            if spec is not None:
                message = self._first_failure(_display_name(field, spec), spec, value)
                if message is not None:
                    yield message
                    continue
            if dataclasses.is_dataclass(value) and not isinstance(value, type):
                yield from self._check(value)

    def _first_failure(self, name: str, spec: _Rule, value: Any) -> Optional[str]:
        if spec.required and _is_empty(value):
            return self.templates["required"].format(name)
        if spec.gt is not None and (value is None or not _measure(value) > spec.gt):
            return self.templates["gt"].format(name, spec.gt)
        if spec.length is not None and (value is None or _measure(value) != spec.length):
            return self.templates["len"].format(name, spec.length)
        return None