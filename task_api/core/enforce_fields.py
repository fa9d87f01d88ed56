"""Field Rule Enforcement — evaluates declarative per-field rules against raw request input.

Invariants:
    - evaluate_rules is PURE: no IO, no exceptions for bad input — returns (values, errors)
    - Every rule is evaluated; errors lists every failing field, not just the first
    - At most one error per rule: the first failing check (presence → type → length) wins
    - Optional fields absent from the input are absent from the returned values

Design Decisions:
    - Rules are frozen dataclasses, not validator chains: a route's contract is a
      plain tuple that can be read, tested and reused without a framework
    - Path values arrive as strings and are converted; body values must already
      carry the right JSON type (no "true"/"1" coercion for booleans)
    - Path integers are ASCII digits only; max_length counts code points, not UTF-16 units
"""

import re
from dataclasses import dataclass
from typing import Any, Mapping

from task_api.core.domain_types import (
    FieldType, Presence, Source, ID_MIN_VALUE, ID_MAX_VALUE,
)
from task_api.core.errors import FieldError


_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_MISSING = object()

_TYPE_PHRASES = {
    FieldType.STRING: "a string",
    FieldType.INTEGER: "an integer",
    FieldType.BOOLEAN: "a boolean",
}


@dataclass(frozen=True)
class FieldRule:
    """Constraint on one input field of one route."""
    source: Source
    field: str
    label: str
    field_type: FieldType
    presence: Presence = Presence.REQUIRED
    max_length: int | None = None
    length_hint: str = ""

    def type_message(self) -> str:
        return f"{self.label} must be {_TYPE_PHRASES[self.field_type]}"

    def length_message(self) -> str:
        msg = f"{self.label} must not exceed {self.max_length} characters"
        return f"{msg} {self.length_hint}" if self.length_hint else msg


def evaluate_rules(
    rules: tuple[FieldRule, ...],
    path_params: Mapping[str, Any],
    body: Mapping[str, Any],
) -> tuple[dict[str, Any], list[FieldError]]:
    """Apply rules in order. Returns converted values and every failure."""
    values: dict[str, Any] = {}
    errors: list[FieldError] = []
    for rule in rules:
        source = path_params if rule.source is Source.PATH else body
        raw = source.get(rule.field, _MISSING)
        result = _check_rule(rule, raw)
        if isinstance(result, FieldError):
            errors.append(result)
        elif result is not _MISSING:
            values[rule.field] = result
    return values, errors


def _check_rule(rule: FieldRule, raw: Any) -> Any:
    """Return the converted value, _MISSING for a skipped optional, or a FieldError."""
    if raw is _MISSING and rule.presence is Presence.OPTIONAL:
        return _MISSING
    shown = None if raw is _MISSING else raw
    if rule.presence is Presence.REQUIRED and raw in (_MISSING, None, ""):
        return _error(rule, f"{rule.label} is required", shown)

    value = _convert(rule.field_type, raw, rule.source)
    if value is _MISSING:
        return _error(rule, rule.type_message(), shown)

    if rule.max_length is not None and len(value) > rule.max_length:
        return _error(rule, rule.length_message(), shown)
    return value


def _convert(field_type: FieldType, raw: Any, source: Source) -> Any:
    """Type-check (and for path strings, parse) a raw value. _MISSING on mismatch."""
    if field_type is FieldType.STRING:
        return raw if isinstance(raw, str) else _MISSING
    if field_type is FieldType.BOOLEAN:
        return raw if isinstance(raw, bool) else _MISSING
    # INTEGER: bool is an int subclass but never a valid id
    if isinstance(raw, bool):
        return _MISSING
    if isinstance(raw, int) and source is Source.BODY:
        value = raw
    elif isinstance(raw, str) and _INT_PATTERN.fullmatch(raw):
        value = int(raw)
    else:
        return _MISSING
    if not ID_MIN_VALUE <= value <= ID_MAX_VALUE:
        return _MISSING
    return value


def _error(rule: FieldRule, message: str, value: Any) -> FieldError:
    return FieldError(
        location=rule.source.value, field=rule.field,
        message=message, value=value,
    )
