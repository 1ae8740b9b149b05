"""Tests for calculate_age — whole years, month/day comparison, leap-day policy."""

from datetime import date, datetime, timedelta

import pytest

from user_management.core.calculate_age import calculate_age, utc_today


def test_birthday_not_yet_reached_this_year():
    assert calculate_age(date(1990, 5, 10), date(2024, 5, 9)) == 33


def test_birthday_reached_today():
    assert calculate_age(date(1990, 5, 10), date(2024, 5, 10)) == 34


def test_born_on_reference_date_is_zero():
    for d in (date(2000, 1, 1), date(2000, 2, 29), date(2023, 12, 31)):
        assert calculate_age(d, d) == 0


def test_one_year_later_is_one():
    assert calculate_age(date(2001, 7, 4), date(2002, 7, 4)) == 1
    assert calculate_age(date(2001, 7, 4), date(2002, 7, 3)) == 0


def test_leap_day_birthday_recurs_on_march_first():
    """Feb 29 births are a year older on Mar 1 in non-leap years, not on Feb 28."""
    dob = date(2000, 2, 29)
    assert calculate_age(dob, date(2001, 2, 28)) == 0
    assert calculate_age(dob, date(2001, 3, 1)) == 1
    assert calculate_age(dob, date(2004, 2, 28)) == 3
    assert calculate_age(dob, date(2004, 2, 29)) == 4


def test_march_first_birthday_in_leap_reference_year():
    """Day-of-year would say Mar 1 birthday already happened on Feb 29; month/day does not."""
    assert calculate_age(date(2001, 3, 1), date(2004, 2, 29)) == 2
    assert calculate_age(date(2001, 3, 1), date(2004, 3, 1)) == 3


def test_march_first_birthday_born_in_leap_year():
    assert calculate_age(date(2000, 3, 1), date(2001, 2, 28)) == 0
    assert calculate_age(date(2000, 3, 1), date(2001, 3, 1)) == 1


def test_age_never_decreases_as_reference_advances():
    dob = date(1996, 2, 29)
    previous = 0
    ref = dob
    while ref < date(2006, 1, 1):
        age = calculate_age(dob, ref)
        assert age >= previous
        assert 0 <= age <= 150
        previous = age
        ref += timedelta(days=17)


def test_datetime_inputs_use_calendar_date():
    assert calculate_age(
        datetime(1990, 5, 10, 23, 59), datetime(2024, 5, 10, 0, 1),
    ) == 34


def test_defaults_to_today():
    today = utc_today()
    assert calculate_age(today) == 0
    assert calculate_age(date(today.year - 30, 1, 1)) in (29, 30)


@pytest.mark.parametrize("years", [1, 18, 150])
def test_exact_anniversaries(years):
    assert calculate_age(date(1850, 6, 15), date(1850 + years, 6, 15)) == years
