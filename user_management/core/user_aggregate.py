"""User Aggregate — the user record plus its invariant-enforcing operations.

Invariants:
    - create_user and apply_update always return a record that passed validate_user
    - apply_update is lenient: None or "" falls back to the stored value, per field
    - The merged record is validated in full BEFORE the shell writes anything
    - to_response is pure and recomputes age on every call (age is a view, never stored)

Design Decisions:
    - id/created_at/updated_at are None until the gateway writes the record
    - A whitespace-only name is NOT an omitted field: it is validated and rejected
    - to_response returns a plain dict so schemas and tests share one projection
"""

from dataclasses import dataclass, replace
from datetime import date, datetime

from user_management.core.calculate_age import calculate_age
from user_management.core.domain_types import DATE_FORMAT, MAX_AGE_YEARS, UserId
from user_management.core.validate_user import validate_user


@dataclass(frozen=True)
class User:
    """User record as seen by the domain."""
    name: str
    date_of_birth: date
    id: UserId | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


def create_user(
    name: object,
    date_of_birth: object,
    *,
    today: date,
    max_age: int = MAX_AGE_YEARS,
) -> User:
    """Build a validated, not-yet-persisted User."""
    fields = validate_user(name, date_of_birth, today=today, max_age=max_age)
    return User(name=fields.name, date_of_birth=fields.date_of_birth)


def apply_update(
    existing: User,
    name: str | None,
    date_of_birth: str | date | None,
    *,
    today: date,
    max_age: int = MAX_AGE_YEARS,
) -> User:
    """Merge an update request onto an existing user, then re-validate the whole record."""
    merged_name = existing.name if _is_omitted(name) else name
    merged_dob = (
        existing.date_of_birth if _is_omitted(date_of_birth) else date_of_birth
    )
    fields = validate_user(merged_name, merged_dob, today=today, max_age=max_age)
    return replace(existing, name=fields.name, date_of_birth=fields.date_of_birth)


def to_response(user: User, as_of: date | None = None) -> dict:
    """Wire-facing projection: formatted date of birth plus age computed now."""
    return {
        "id": user.id,
        "name": user.name,
        "dob": user.date_of_birth.strftime(DATE_FORMAT),
        "age": calculate_age(user.date_of_birth, as_of),
    }


def _is_omitted(value: object) -> bool:
    return value is None or value == ""
