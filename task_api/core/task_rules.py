"""Task Route Rules — the field contract of every /tasks route.

Invariants:
    - Each tuple is evaluated in order by enforce_fields.evaluate_rules
    - Title and color limits come from domain_types (same limits as the DB columns)
"""

from task_api.core.domain_types import (
    FieldType, Presence, Source, TITLE_MAX_LENGTH, COLOR_MAX_LENGTH,
)
from task_api.core.enforce_fields import FieldRule


_ID = FieldRule(Source.PATH, "id", "ID", FieldType.INTEGER)

_COLOR_HINT = "(e.g., #FFFFFF)"

GET_TASK_RULES: tuple[FieldRule, ...] = (_ID,)

CREATE_TASK_RULES: tuple[FieldRule, ...] = (
    FieldRule(
        Source.BODY, "title", "Title", FieldType.STRING,
        max_length=TITLE_MAX_LENGTH,
    ),
    FieldRule(
        Source.BODY, "color", "Color", FieldType.STRING,
        max_length=COLOR_MAX_LENGTH, length_hint=_COLOR_HINT,
    ),
)

UPDATE_TASK_RULES: tuple[FieldRule, ...] = (
    _ID,
    FieldRule(
        Source.BODY, "title", "Title", FieldType.STRING,
        Presence.OPTIONAL, max_length=TITLE_MAX_LENGTH,
    ),
    FieldRule(
        Source.BODY, "color", "Color", FieldType.STRING,
        Presence.OPTIONAL, max_length=COLOR_MAX_LENGTH,
        length_hint=_COLOR_HINT,
    ),
    FieldRule(
        Source.BODY, "completed", "Completed", FieldType.BOOLEAN,
        Presence.OPTIONAL,
    ),
)

DELETE_TASK_RULES: tuple[FieldRule, ...] = (_ID,)
