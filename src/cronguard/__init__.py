"""cronguard: cron expression validation.

Answers one question per expression: does it follow the cron grammar?

Supported syntax:
    - Standard 5-field cron (minute hour day month weekday)
    - 6-field cron with a leading seconds field (``seconds=True``)
    - Lists (1,3,5), ranges (1-5), wildcards (*) and steps (*/15)
    - Named months and weekdays (``alias=True``)
    - ``?`` in day-of-month or day-of-week (``allow_blank_day=True``)
    - 7 as Sunday (``allow_seven_as_sunday=True``)
    - Nth weekday of month, e.g. 1#3 (``allow_nth_weekday_of_month=True``)

Usage:
    >>> from cronguard import is_valid_cron, CronValidator
    >>>
    >>> is_valid_cron("*/15 * * * *")
    True
    >>> is_valid_cron("0 0 ? * MON#2", alias=True, allow_blank_day=True,
    ...               allow_nth_weekday_of_month=True)
    True
    >>>
    >>> validator = CronValidator(seconds=True)
    >>> validator("30 */5 * * * *")
    True
"""

from cronguard.cron import (
    CronValidator,
    has_compatible_day_format,
    is_valid_cron,
    split,
)
from cronguard.fields import CronFieldType, FieldConstraints, FIELD_CONSTRAINTS
from cronguard.options import OptionError, ValidationOptions
from cronguard.types import Severity

__version__ = "0.1.0"

__all__ = [
    # Core
    "is_valid_cron",
    "CronValidator",
    "split",
    "has_compatible_day_format",
    # Fields
    "CronFieldType",
    "FieldConstraints",
    "FIELD_CONSTRAINTS",
    # Options
    "ValidationOptions",
    "OptionError",
    # Types
    "Severity",
]
