"""Domain Types — rich types and limits shared by validation, models and schemas.

Invariants:
    - TaskId wraps int — the store-assigned primary key, never reused
    - Length limits defined once here; DB columns and validation rules both read them

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - One canonical title limit for create and update (a title accepted on
      update must also be acceptable on create)
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

TaskId = NewType("TaskId", int)


# ─── Limits ──────────────────────────────────────────────────────

TITLE_MAX_LENGTH = 150
COLOR_MAX_LENGTH = 7          # "#RRGGBB"

# Path ids must fit the store's INTEGER column
ID_MIN_VALUE = -(2 ** 31)
ID_MAX_VALUE = 2 ** 31 - 1


# ─── Enums ───────────────────────────────────────────────────────

class Source(str, Enum):
    """Where a validated value is read from."""
    PATH = "params"
    BODY = "body"


class Presence(str, Enum):
    """Whether a field must be supplied."""
    REQUIRED = "required"
    OPTIONAL = "optional"


class FieldType(str, Enum):
    """Accepted JSON/path value types."""
    STRING = "string"
    INTEGER = "integer"
    BOOLEAN = "boolean"
