"""Validation options for cron expressions.

Options are an immutable record so a single instance can be shared between
threads and used as a dict key.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Mapping


# =============================================================================
# Exceptions
# =============================================================================


class OptionError(ValueError):
    """Raised when validation options are misconfigured."""

    def __init__(self, message: str, option: str = "") -> None:
        self.option = option
        super().__init__(message)


# =============================================================================
# Options
# =============================================================================


# Option names as spelled by JavaScript cron-validator configs.
CAMEL_CASE_NAMES: dict[str, str] = {
    "alias": "alias",
    "seconds": "seconds",
    "allowBlankDay": "allow_blank_day",
    "allowSevenAsSunday": "allow_seven_as_sunday",
    "allowNthWeekdayOfMonth": "allow_nth_weekday_of_month",
}


@dataclass(frozen=True)
class ValidationOptions:
    """Immutable configuration for cron validation.

    Attributes:
        alias: Accept three-letter month and weekday names (JAN, MON, ...).
        seconds: Expect a leading seconds field (six fields instead of five).
        allow_blank_day: Accept ``?`` in day-of-month or day-of-week.
        allow_seven_as_sunday: Accept 7 as Sunday in day-of-week.
        allow_nth_weekday_of_month: Accept ``weekday#occurrence`` syntax.
    """

    alias: bool = False
    seconds: bool = False
    allow_blank_day: bool = False
    allow_seven_as_sunday: bool = False
    allow_nth_weekday_of_month: bool = False

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, bool):
                raise OptionError(
                    f"{f.name} must be a bool, got {type(value).__name__}",
                    f.name,
                )

    @property
    def max_weekday(self) -> int:
        """Highest accepted day-of-week number."""
        return 7 if self.allow_seven_as_sunday else 6

    @property
    def field_count(self) -> int:
        """Number of whitespace-separated fields an expression must have."""
        return 6 if self.seconds else 5

    def replace(self, **changes: Any) -> "ValidationOptions":
        """Create a new options record with updated values."""
        current = asdict(self)
        current.update(_normalize(changes))
        return ValidationOptions(**current)

    def to_dict(self) -> dict[str, bool]:
        return asdict(self)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "ValidationOptions":
        """Build options from a mapping.

        Both snake_case names and the camelCase names used by JavaScript
        cron-validator configs are accepted.

        Raises:
            OptionError: If a key is not a known option.
        """
        return cls(**_normalize(mapping))

    @classmethod
    def coerce(
        cls,
        value: "ValidationOptions | Mapping[str, Any] | None" = None,
        **overrides: Any,
    ) -> "ValidationOptions":
        """Normalize ``None``, a record or a mapping into options.

        Args:
            value: Existing options, a mapping of option names, or None.
            **overrides: Option values applied on top of ``value``.

        Returns:
            ValidationOptions instance.
        """
        if value is None:
            options = cls()
        elif isinstance(value, cls):
            options = value
        elif isinstance(value, Mapping):
            options = cls.from_mapping(value)
        else:
            raise OptionError(
                f"Expected ValidationOptions or mapping, got {type(value).__name__}"
            )

        if overrides:
            options = options.replace(**overrides)
        return options


def _normalize(mapping: Mapping[str, Any]) -> dict[str, Any]:
    valid_fields = {f.name for f in fields(ValidationOptions)}
    normalized: dict[str, Any] = {}
    for key, value in mapping.items():
        name = CAMEL_CASE_NAMES.get(key, key)
        if name not in valid_fields:
            raise OptionError(f"Unknown validation option: {key!r}", key)
        normalized[name] = value
    return normalized
