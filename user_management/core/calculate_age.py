"""Age Calculator — whole years elapsed between a date of birth and a reference date.

Invariants:
    - age = as_of.year - dob.year, minus one if (as_of.month, as_of.day) < (dob.month, dob.day)
    - calculate_age(d, d) == 0 and the result never decreases as as_of advances
    - datetime inputs are reduced to their calendar date

Design Decisions:
    - Month/day tuple comparison over day-of-year: day-of-year misorders every date after
      Feb 28 when exactly one of the two years is a leap year
    - Leap-day birthdays (Feb 29) recur on Mar 1 in non-leap years: on Feb 28 the
      birthday has not happened yet
    - as_of defaults to today's UTC date so servers in different zones agree
"""

from datetime import date, datetime, timezone


def utc_today() -> date:
    """Current calendar date in UTC."""
    return datetime.now(timezone.utc).date()


def calculate_age(date_of_birth: date, as_of: date | None = None) -> int:
    """Whole years between date_of_birth and as_of. Pure, no IO."""
    dob = _as_date(date_of_birth)
    ref = _as_date(as_of) if as_of is not None else utc_today()

    age = ref.year - dob.year
    if (ref.month, ref.day) < (dob.month, dob.day):
        age -= 1
    return age


def _as_date(value: date) -> date:
    # datetime is a date subclass; drop the time component
    if isinstance(value, datetime):
        return value.date()
    return value
