"""Domain Types — rich types and constants that replace bare primitives.

Invariants:
    - UserId wraps a positive 64-bit integer assigned by the store
    - Name bounds (2–100 chars after trimming) and MAX_AGE_YEARS are the single source of truth
    - DATE_FORMAT is the only accepted wire format for dates of birth

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)


# ─── Constants ───────────────────────────────────────────────────

MAX_USER_ID: int = 2**63 - 1  # BIGINT upper bound
NAME_MIN_LENGTH: int = 2
NAME_MAX_LENGTH: int = 100
MAX_AGE_YEARS: int = 150
DATE_FORMAT: str = "%Y-%m-%d"


# ─── Enums ───────────────────────────────────────────────────────

class UserField(str, Enum):
    """Wire names of the validated user fields."""
    NAME = "name"
    DATE_OF_BIRTH = "dob"
