"""Request Validation — FastAPI dependency that runs field rules before a handler.

Invariants:
    - Handler never runs if any rule fails (RequestValidationFailed → 400)
    - Body is parsed only for routes that declare body rules
    - Empty body reads as {}; malformed JSON or a non-object body is a body-level error
    - NaN, Infinity and numbers that overflow to inf count as malformed JSON

Design Decisions:
    - Dependency factory over middleware: each route names its own rule tuple
      next to its path, and receives the converted values as a plain dict
"""

import json
import math
import logging
from typing import Any, Awaitable, Callable

from fastapi import Request

from task_api.core.domain_types import Source
from task_api.core.enforce_fields import FieldRule, evaluate_rules
from task_api.core.errors import FieldError, RequestValidationFailed

logger = logging.getLogger(__name__)


def validate_request(
    rules: tuple[FieldRule, ...],
) -> Callable[[Request], Awaitable[dict[str, Any]]]:
    """Build a dependency that returns validated values or raises RequestValidationFailed."""
    reads_body = any(rule.source is Source.BODY for rule in rules)

    async def dependency(request: Request) -> dict[str, Any]:
        body: dict[str, Any] = {}
        if reads_body:
            body = await _read_json_object(request)
        values, errors = evaluate_rules(rules, request.path_params, body)
        if errors:
            raise RequestValidationFailed(errors)
        return values

    return dependency


async def _read_json_object(request: Request) -> dict[str, Any]:
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        body = json.loads(
            raw,
            parse_float=_finite_float,
            parse_constant=_reject_constant,
        )
    except (UnicodeDecodeError, ValueError):
        raise RequestValidationFailed([
            FieldError(location="body", field=None, message="Malformed JSON body"),
        ])
    if not isinstance(body, dict):
        raise RequestValidationFailed([
            FieldError(
                location="body", field=None,
                message="Request body must be a JSON object",
            ),
        ])
    return body


def _finite_float(text: str) -> float:
    # 1e400 parses to inf, which cannot be echoed back in a JSON response
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"non-finite number: {text}")
    return value


def _reject_constant(name: str) -> float:
    raise ValueError(f"{name} is not valid JSON")
