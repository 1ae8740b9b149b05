"""User Validator — explicit name and date-of-birth rules, run after generic deserialization.

Invariants:
    - name: str whose trimmed length is within [NAME_MIN_LENGTH, NAME_MAX_LENGTH]
    - date_of_birth text must match YYYY-MM-DD exactly and name a real calendar date
    - date_of_birth <= today, and calculate_age(date_of_birth, today) <= max_age
    - collect_violations never raises; validate_user raises UserValidationError with ALL violations

Design Decisions:
    - Collect-all over fail-fast: a client fixes every field in one round trip
    - Age bound only checked for non-future dates (a future date already has its own violation)
    - Regex guard before date.fromisoformat: fromisoformat also accepts compact
      forms like "20000101" which the wire contract rejects
"""

import re
from dataclasses import dataclass
from datetime import date, datetime

from user_management.core.calculate_age import calculate_age
from user_management.core.domain_types import (
    MAX_AGE_YEARS, NAME_MAX_LENGTH, NAME_MIN_LENGTH, UserField,
)
from user_management.core.errors import FieldViolation, UserValidationError


_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


@dataclass(frozen=True)
class UserFields:
    """Validated, normalized user attributes."""
    name: str
    date_of_birth: date


def parse_date_of_birth(text: str) -> date | None:
    """Strict YYYY-MM-DD parser. Returns None for any other shape or impossible date."""
    if not isinstance(text, str) or not _DATE_PATTERN.fullmatch(text):
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None


def collect_violations(
    name: object,
    date_of_birth: object,
    *,
    today: date,
    max_age: int = MAX_AGE_YEARS,
) -> list[FieldViolation]:
    """Return every violated rule for the given inputs. Pure, never raises."""
    violations = _check_name(name)
    dob, dob_violation = _coerce_date_of_birth(date_of_birth)
    if dob_violation:
        violations.append(dob_violation)
    elif dob > today:
        violations.append(FieldViolation(
            UserField.DATE_OF_BIRTH.value, "date of birth cannot be in the future",
        ))
    elif calculate_age(dob, today) > max_age:
        violations.append(FieldViolation(
            UserField.DATE_OF_BIRTH.value,
            f"date of birth implies an age above {max_age} years",
        ))
    return violations


def validate_user(
    name: object,
    date_of_birth: object,
    *,
    today: date,
    max_age: int = MAX_AGE_YEARS,
) -> UserFields:
    """Validate and normalize user attributes or raise UserValidationError."""
    violations = collect_violations(
        name, date_of_birth, today=today, max_age=max_age,
    )
    if violations:
        raise UserValidationError(violations)
    dob, _ = _coerce_date_of_birth(date_of_birth)
    return UserFields(name=name.strip(), date_of_birth=dob)


def _check_name(name: object) -> list[FieldViolation]:
    if not isinstance(name, str) or not name.strip():
        return [FieldViolation(UserField.NAME.value, "name is required")]
    length = len(name.strip())
    if length < NAME_MIN_LENGTH or length > NAME_MAX_LENGTH:
        return [FieldViolation(
            UserField.NAME.value,
            f"name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters",
        )]
    return []


def _coerce_date_of_birth(
    value: object,
) -> tuple[date | None, FieldViolation | None]:
    if isinstance(value, datetime):
        return value.date(), None
    if isinstance(value, date):
        return value, None
    if value is None or value == "":
        return None, FieldViolation(
            UserField.DATE_OF_BIRTH.value, "date of birth is required",
        )
    parsed = parse_date_of_birth(value)
    if parsed is None:
        return None, FieldViolation(
            UserField.DATE_OF_BIRTH.value,
            "invalid date format, expected YYYY-MM-DD",
        )
    return parsed, None
