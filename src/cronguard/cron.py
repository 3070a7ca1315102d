"""Cron expression validation.

Splits an expression into its fields, runs the field checks and the
day-of-month/day-of-week compatibility rule, and answers yes or no.

Design Principles:
    1. Total: every string yields a bool, malformed input never raises
    2. Pure: no state survives a call, so validators are thread-safe
    3. Configurable: optional syntax is switched on through ValidationOptions
"""

from __future__ import annotations

import logging
import re
from typing import Any, Iterable, Mapping

from cronguard.fields import (
    has_valid_days,
    has_valid_hours,
    has_valid_minutes,
    has_valid_months,
    has_valid_seconds,
    has_valid_weekdays,
    is_question_mark,
)
from cronguard.options import ValidationOptions

logger = logging.getLogger(__name__)

# Whitespace as matched by JavaScript `\s`. str.split() differs: it also
# breaks on U+001C-U+001F and U+0085, and does not break on U+FEFF.
WHITESPACE = "".join(
    chr(c)
    for c in (
        0x09, 0x0A, 0x0B, 0x0C, 0x0D, 0x20, 0xA0, 0x1680,
        *range(0x2000, 0x200B),
        0x2028, 0x2029, 0x202F, 0x205F, 0x3000, 0xFEFF,
    )
)
_WHITESPACE_RUN = re.compile(f"[{re.escape(WHITESPACE)}]+")


def split(expression: str) -> list[str]:
    """Split an expression on runs of whitespace, ignoring outer whitespace."""
    stripped = expression.strip(WHITESPACE)
    if not stripped:
        return []
    return _WHITESPACE_RUN.split(stripped)


def has_compatible_day_format(days: str, weekdays: str, allow_blank_day: bool = False) -> bool:
    """Day-of-month and day-of-week must not both be blank."""
    return not (allow_blank_day and is_question_mark(days) and is_question_mark(weekdays))


def is_valid_cron(
    expression: str,
    options: ValidationOptions | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> bool:
    """Check if a cron expression is valid.

    Args:
        expression: Cron expression to check.
        options: Validation options, a mapping of option names, or None for
            the defaults (five fields, no names, no ``?``, no ``#``).
        **overrides: Option values applied on top of ``options``.

    Returns:
        True if valid.

    Raises:
        OptionError: If the options themselves are invalid.

    Example:
        >>> is_valid_cron("*/15 * * * *")
        True
        >>> is_valid_cron("0 0 * JAN *", alias=True)
        True
    """
    options = ValidationOptions.coerce(options, **overrides)

    if not isinstance(expression, str):
        logger.debug("Rejected non-string cron expression: %r", expression)
        return False

    parts = split(expression)
    if len(parts) != options.field_count:
        logger.debug(
            "Rejected cron expression %r: expected %d fields, got %d",
            expression,
            options.field_count,
            len(parts),
        )
        return False

    checks: dict[str, bool] = {}
    if len(parts) == 6:
        checks["second"] = has_valid_seconds(parts.pop(0))

    # Every check runs so the debug log names all failing fields.
    minutes, hours, days, months, weekdays = parts
    checks["minute"] = has_valid_minutes(minutes)
    checks["hour"] = has_valid_hours(hours)
    checks["day_of_month"] = has_valid_days(days, options.allow_blank_day)
    checks["month"] = has_valid_months(months, options.alias)
    checks["day_of_week"] = has_valid_weekdays(weekdays, options)
    checks["day_format"] = has_compatible_day_format(days, weekdays, options.allow_blank_day)

    failed = [name for name, passed in checks.items() if not passed]
    if failed:
        logger.debug("Rejected cron expression %r: invalid %s", expression, ", ".join(failed))
        return False
    return True


class CronValidator:
    """Reusable validator bound to one set of options.

    Example:
        >>> validator = CronValidator(alias=True, allow_blank_day=True)
        >>> validator("0 12 ? * MON")
        True
        >>> validator.invalid(["* * * * *", "61 * * * *"])
        ['61 * * * *']
    """

    __slots__ = ("_options",)

    def __init__(
        self,
        options: ValidationOptions | Mapping[str, Any] | None = None,
        **overrides: Any,
    ) -> None:
        self._options = ValidationOptions.coerce(options, **overrides)

    @property
    def options(self) -> ValidationOptions:
        return self._options

    def is_valid(self, expression: str) -> bool:
        return is_valid_cron(expression, self._options)

    def __call__(self, expression: str) -> bool:
        return self.is_valid(expression)

    def invalid(self, expressions: Iterable[str]) -> list[str]:
        """Return the expressions that fail validation, in input order."""
        return [expr for expr in expressions if not self.is_valid(expr)]

    def __repr__(self) -> str:
        return f"CronValidator({self._options!r})"
