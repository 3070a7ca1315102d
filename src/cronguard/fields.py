"""Field-level grammar checks for cron expressions.

Every function here is a pure predicate over a single field string. Malformed
input is reported as ``False``, never as an exception: a value that does not
parse as an integer becomes ``None``, which fails every bound and ordering
comparison.

Syntax Reference:
    Field         Values            Special Characters
    ─────────────────────────────────────────────────
    Second        0-59              * / , -
    Minute        0-59              * / , -
    Hour          0-23              * / , -
    Day of Month  1-31              * / , - ?
    Month         1-12 or JAN-DEC   * / , -
    Day of Week   0-6 or SUN-SAT    * / , - ? #
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum, auto

from cronguard.options import ValidationOptions


# =============================================================================
# Field Types
# =============================================================================


class CronFieldType(Enum):
    """Types of cron fields."""

    SECOND = auto()
    MINUTE = auto()
    HOUR = auto()
    DAY_OF_MONTH = auto()
    MONTH = auto()
    DAY_OF_WEEK = auto()


MONTH_ALIASES: dict[str, str] = {
    "jan": "1", "feb": "2", "mar": "3", "apr": "4",
    "may": "5", "jun": "6", "jul": "7", "aug": "8",
    "sep": "9", "oct": "10", "nov": "11", "dec": "12",
}

WEEKDAY_ALIASES: dict[str, str] = {
    "sun": "0", "mon": "1", "tue": "2", "wed": "3",
    "thu": "4", "fri": "5", "sat": "6",
}


@dataclass(frozen=True)
class FieldConstraints:
    """Constraints for a cron field."""

    min_value: int
    max_value: int
    aliases: dict[str, str] = field(default_factory=dict)
    supports_blank: bool = False
    supports_nth: bool = False


# Day-of-week max is 6 here; 7 is allowed through ValidationOptions.max_weekday.
FIELD_CONSTRAINTS: dict[CronFieldType, FieldConstraints] = {
    CronFieldType.SECOND: FieldConstraints(0, 59),
    CronFieldType.MINUTE: FieldConstraints(0, 59),
    CronFieldType.HOUR: FieldConstraints(0, 23),
    CronFieldType.DAY_OF_MONTH: FieldConstraints(1, 31, supports_blank=True),
    CronFieldType.MONTH: FieldConstraints(1, 12, aliases=MONTH_ALIASES),
    CronFieldType.DAY_OF_WEEK: FieldConstraints(
        0, 6,
        aliases=WEEKDAY_ALIASES,
        supports_blank=True,
        supports_nth=True,
    ),
}

# Occurrence bounds for ``weekday#occurrence``.
NTH_OCCURRENCE_RANGE = (1, 5)

BLANK_MARKER = "?"
WILDCARD = "*"

# Longer digit runs are clamped to OVERFLOW_VALUE, above every field bound.
MAX_SIGNIFICANT_DIGITS = 9
OVERFLOW_VALUE = 10 ** MAX_SIGNIFICANT_DIGITS

_DIGITS = re.compile(r"[0-9]+")
_FORBIDDEN_CHARS = re.compile(r"[^0-9\-,/*]")
_ALIAS_AS_STEP = re.compile(r"/[a-zA-Z]")
_ALIAS_TOKEN = re.compile(r"[a-z]{3}")


# =============================================================================
# Primitives
# =============================================================================


def safe_parse_int(value: str) -> int | None:
    """Parse a run of ASCII digits, or return None.

    Values too long to be any field value parse as ``OVERFLOW_VALUE``.
    """
    if not _DIGITS.fullmatch(value):
        return None
    significant = value.lstrip("0")
    if len(significant) > MAX_SIGNIFICANT_DIGITS:
        return OVERFLOW_VALUE
    return int(significant or "0")


def is_wildcard(value: str) -> bool:
    return value == WILDCARD


def is_question_mark(value: str) -> bool:
    return value == BLANK_MARKER


def is_in_range(value: int | None, start: int, stop: int) -> bool:
    return value is not None and start <= value <= stop


def remap_aliases(value: str, aliases: dict[str, str]) -> str:
    """Lower-case ``value`` and replace known three-letter names.

    Unknown three-letter runs are left as they are so that the numeric
    checks reject them afterwards.
    """
    return _ALIAS_TOKEN.sub(
        lambda match: aliases.get(match.group(0), match.group(0)),
        value.lower(),
    )


# =============================================================================
# Generic Field Validator
# =============================================================================


def is_valid_range(value: str, start: int, stop: int) -> bool:
    """Check a wildcard, a single value or a ``low-high`` range."""
    sides = value.split("-")
    if len(sides) == 1:
        return is_wildcard(value) or is_in_range(safe_parse_int(value), start, stop)
    if len(sides) == 2:
        small, big = (safe_parse_int(side) for side in sides)
        if small is None or big is None:
            return False
        return (
            small <= big
            and is_in_range(small, start, stop)
            and is_in_range(big, start, stop)
        )
    return False


def is_valid_step(value: str | None) -> bool:
    """Check the divisor after ``/``. A missing step is valid."""
    if value is None:
        return True
    step = safe_parse_int(value)
    return step is not None and step > 0


def validate_for_range(value: str, start: int, stop: int) -> bool:
    """Validate a comma-separated list of conditions against ``[start, stop]``.

    Each condition is ``base`` or ``base/step`` where ``base`` is ``*``, a
    number, or ``low-high``.

    Args:
        value: Raw field string.
        start: Lowest accepted value.
        stop: Highest accepted value.

    Returns:
        True if every condition is valid.
    """
    if _FORBIDDEN_CHARS.search(value):
        return False

    for condition in value.split(","):
        # Rejects a dangling step such as `*/`.
        if condition.strip().endswith("/"):
            return False

        splits = condition.split("/")
        # Rejects `*/*/*`.
        if len(splits) > 2:
            return False

        left = splits[0]
        right = splits[1] if len(splits) == 2 else None
        if not (is_valid_range(left, start, stop) and is_valid_step(right)):
            return False

    return True


# =============================================================================
# Field Specializations
# =============================================================================


def _check(value: str, field_type: CronFieldType) -> bool:
    constraints = FIELD_CONSTRAINTS[field_type]
    return validate_for_range(value, constraints.min_value, constraints.max_value)


def has_valid_seconds(seconds: str) -> bool:
    return _check(seconds, CronFieldType.SECOND)


def has_valid_minutes(minutes: str) -> bool:
    return _check(minutes, CronFieldType.MINUTE)


def has_valid_hours(hours: str) -> bool:
    return _check(hours, CronFieldType.HOUR)


def has_valid_days(days: str, allow_blank_day: bool = False) -> bool:
    """Check day-of-month. Any of 1-31 is accepted for every month."""
    constraints = FIELD_CONSTRAINTS[CronFieldType.DAY_OF_MONTH]
    if allow_blank_day and constraints.supports_blank and is_question_mark(days):
        return True
    return validate_for_range(days, constraints.min_value, constraints.max_value)


def has_valid_months(months: str, alias: bool = False) -> bool:
    """Check the month field, resolving JAN-DEC when ``alias`` is set."""
    constraints = FIELD_CONSTRAINTS[CronFieldType.MONTH]

    # Names are never valid step divisors, e.g. `*/jan`.
    if _ALIAS_AS_STEP.search(months):
        return False

    if alias:
        months = remap_aliases(months, constraints.aliases)
    return validate_for_range(months, constraints.min_value, constraints.max_value)


def has_valid_weekdays(weekdays: str, options: ValidationOptions | None = None) -> bool:
    """Check the day-of-week field.

    Handles the blank marker, SUN-SAT names, ``7`` as Sunday and
    ``weekday#occurrence`` according to ``options``.

    Args:
        weekdays: Raw day-of-week field.
        options: Validation options; defaults to all features disabled.

    Returns:
        True if the field is valid.
    """
    options = options or ValidationOptions()
    constraints = FIELD_CONSTRAINTS[CronFieldType.DAY_OF_WEEK]

    if is_question_mark(weekdays):
        return options.allow_blank_day and constraints.supports_blank

    if _ALIAS_AS_STEP.search(weekdays):
        return False

    if options.alias:
        weekdays = remap_aliases(weekdays, constraints.aliases)

    min_weekday = constraints.min_value
    max_weekday = options.max_weekday

    if options.allow_nth_weekday_of_month and constraints.supports_nth and "#" in weekdays:
        parts = weekdays.split("#")
        if len(parts) != 2:
            return False
        weekday, occurrence = parts
        low, high = NTH_OCCURRENCE_RANGE
        return is_in_range(safe_parse_int(occurrence), low, high) and is_in_range(
            safe_parse_int(weekday), min_weekday, max_weekday
        )

    return validate_for_range(weekdays, min_weekday, max_weekday)
