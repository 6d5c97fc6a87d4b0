"""Declarative field-presence validation for request payloads."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

_MISSING = object()

PresencePredicate = Callable[[Any], bool]


def is_present(value: Any) -> bool:
    """A value is present unless it is absent, ``None`` or the empty string.

    ``0`` and ``False`` count as present.
    """
    if value is _MISSING or value is None:
        return False
    if isinstance(value, str) and value == "":
        return False
    return True


@dataclass(frozen=True, slots=True)
class FieldRule:
    name: str
    predicate: PresencePredicate = is_present

    @property
    def message(self) -> str:
        return f'Please provide a value for "{self.name}"'

    def check(self, payload: Mapping[str, Any]) -> str | None:
        if self.predicate(payload.get(self.name, _MISSING)):
            return None
        return self.message


def required(*names: str) -> tuple[FieldRule, ...]:
    return tuple(FieldRule(name) for name in names)


def collect_violations(payload: Mapping[str, Any], rules: Iterable[FieldRule]) -> list[str]:
    """Return one message per failing rule, in the order the rules were declared."""
    violations: list[str] = []
    for rule in rules:
        message = rule.check(payload)
        if message is not None:
            violations.append(message)
    return violations


USER_SIGNUP_RULES = required("firstName", "lastName", "emailAddress", "password")
COURSE_RULES = required("title", "description")
