"""
Age helpers for decoded birth dates.

Birth dates coming out of the decoder are not calendar-checked (day 31 is
accepted for any month), so they are compared field by field instead of being
parsed into datetime.date.
"""

from __future__ import annotations

from datetime import date
from typing import Optional, Tuple, Union

BirthDate = Union[str, date]

ELDERLY_AGE_THRESHOLD = 60

# (exclusive upper bound, label); anything past the last bound is "80+"
AGE_GROUPS = (
    (18, "أقل من 18"),
    (30, "18-29"),
    (40, "30-39"),
    (50, "40-49"),
    (60, "50-59"),
    (70, "60-69"),
    (80, "70-79"),
)
OLDEST_AGE_GROUP = "80+"


def _birth_fields(birth_date: BirthDate) -> Tuple[int, int, int]:
    if isinstance(birth_date, date):
        return birth_date.year, birth_date.month, birth_date.day
    try:
        year, month, day = (int(part) for part in birth_date.strip().split("-"))
    except (AttributeError, ValueError) as e:
        raise ValueError(f"Birth date must be formatted YYYY-MM-DD, got {birth_date!r}") from e
    return year, month, day


def calculate_age(birth_date: BirthDate, today: Optional[date] = None) -> int:
    """
    Age in completed years on `today` (defaults to date.today()).

    A birthday later in the current year gives 0, never a negative age.

    Raises:
        ValueError: If a string birth date is not formatted YYYY-MM-DD
    """
    today = today or date.today()
    year, month, day = _birth_fields(birth_date)

    age = today.year - year
    if (today.month, today.day) < (month, day):
        age -= 1
    return max(age, 0)


def is_elderly(birth_date: BirthDate, age_threshold: int = ELDERLY_AGE_THRESHOLD, today: Optional[date] = None) -> bool:
    return calculate_age(birth_date, today=today) >= age_threshold


def get_age_group(birth_date: BirthDate, today: Optional[date] = None) -> str:
    """Age bucket label, e.g. "30-39"."""
    age = calculate_age(birth_date, today=today)
    for upper_bound, label in AGE_GROUPS:
        if age < upper_bound:
            return label
    return OLDEST_AGE_GROUP
