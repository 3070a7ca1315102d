"""Base classes for column validators.

Features:
- Immutable configuration (thread-safe)
- Type-safe column filtering
- Column existence checks
"""

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from typing import Any
import logging

import polars as pl

from cronguard.types import Severity


# ============================================================================
# Logging - Uses standard Python logging directly
# ============================================================================

def _get_logger(name: str) -> logging.Logger:
    """Get a logger for the given validator name."""
    return logging.getLogger(f"cronguard.{name}")


# ============================================================================
# Error Types
# ============================================================================

class ColumnNotFoundError(Exception):
    """Raised when a required column is not found in the schema."""

    def __init__(self, column: str, available_columns: list[str]):
        self.column = column
        self.available_columns = available_columns
        super().__init__(
            f"Column '{column}' not found. Available: {available_columns[:10]}"
            + ("..." if len(available_columns) > 10 else "")
        )


# ============================================================================
# Configuration
# ============================================================================

@dataclass(frozen=True)
class ValidatorConfig:
    """Immutable configuration for validators.

    Thread-safe frozen dataclass that can be used as dict keys.
    """

    columns: tuple[str, ...] | None = None
    exclude_columns: tuple[str, ...] | None = None
    severity_override: Severity | None = None
    sample_size: int = 5
    mostly: float | None = None  # Fraction of rows that must pass (0.0 to 1.0)

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.sample_size < 0:
            raise ValueError(f"sample_size must be >= 0, got {self.sample_size}")
        if self.mostly is not None and not (0.0 <= self.mostly <= 1.0):
            raise ValueError(f"mostly must be in [0.0, 1.0], got {self.mostly}")

    def replace(self, **kwargs: Any) -> "ValidatorConfig":
        """Create a new config with updated values."""
        current = asdict(self)
        current.update(kwargs)
        return ValidatorConfig.from_kwargs(**current)

    @classmethod
    def from_kwargs(cls, **kwargs: Any) -> "ValidatorConfig":
        """Create config from kwargs, converting lists to tuples."""
        for key in ("columns", "exclude_columns"):
            if isinstance(kwargs.get(key), list):
                kwargs[key] = tuple(kwargs[key])
        valid_fields = {
            "columns", "exclude_columns", "severity_override", "sample_size", "mostly",
        }
        filtered = {k: v for k, v in kwargs.items() if k in valid_fields}
        return cls(**filtered)


# ============================================================================
# ValidationIssue
# ============================================================================

@dataclass
class ValidationIssue:
    """Represents a single data quality issue found during validation."""

    column: str
    issue_type: str
    count: int
    severity: Severity
    details: str | None = None
    expected: Any | None = None
    actual: Any | None = None
    sample_values: list[Any] | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        result = {
            "column": self.column,
            "issue_type": self.issue_type,
            "count": self.count,
            "severity": self.severity.value,
            "details": self.details,
        }
        if self.expected is not None:
            result["expected"] = self.expected
        if self.actual is not None:
            result["actual"] = self.actual
        if self.sample_values is not None:
            result["sample_values"] = self.sample_values
        return result


# ============================================================================
# Type Filters
# ============================================================================

STRING_TYPES: set[type[pl.DataType]] = {pl.String, pl.Utf8}


# ============================================================================
# Base Validator
# ============================================================================

class Validator(ABC):
    """Abstract base class for column validators.

    Class Attributes:
        name: Unique identifier for this validator
        category: Validator category (format, completeness, ...)

    Example:
        class MyValidator(Validator):
            name = "my_validator"
            category = "custom"

            def validate(self, lf):
                ...
    """

    name: str = "base"
    category: str = "general"

    def __init__(self, config: ValidatorConfig | None = None, **kwargs: Any):
        """Initialize the validator.

        Args:
            config: Immutable validator configuration
            **kwargs: Additional config options (merged into config)
        """
        if config is not None:
            self.config = config.replace(**kwargs) if kwargs else config
        else:
            self.config = ValidatorConfig.from_kwargs(**kwargs)
        self.logger = _get_logger(self.name)

    @abstractmethod
    def validate(self, lf: pl.LazyFrame) -> list[ValidationIssue]:
        """Run validation on the given LazyFrame."""

    def _get_string_columns(self, lf: pl.LazyFrame) -> list[str]:
        """Resolve the string columns this validator should inspect.

        Configured columns must exist, and configured non-string columns are
        skipped with a warning. ``exclude_columns`` is applied last.

        Raises:
            ColumnNotFoundError: If a configured column is missing.
        """
        schema = lf.collect_schema()
        available = list(schema.names())

        if self.config.columns:
            missing = [c for c in self.config.columns if c not in available]
            if missing:
                raise ColumnNotFoundError(missing[0], available)
            columns = list(self.config.columns)
            for c in columns:
                if type(schema[c]) not in STRING_TYPES:
                    self.logger.warning(
                        f"Skipping column '{c}': expected a string column, got {schema[c]}"
                    )
        else:
            columns = available

        columns = [c for c in columns if type(schema[c]) in STRING_TYPES]

        if self.config.exclude_columns:
            excluded = set(self.config.exclude_columns)
            columns = [c for c in columns if c not in excluded]

        return columns

    def _calculate_severity(self, ratio: float) -> Severity:
        if self.config.severity_override is not None:
            return self.config.severity_override
        return Severity.from_ratio(ratio)

    def _passes_mostly(self, failure_count: int, total_count: int) -> bool:
        """Check whether the failure rate is within the ``mostly`` tolerance."""
        if self.config.mostly is None or total_count == 0:
            return False
        pass_ratio = (total_count - failure_count) / total_count
        return pass_ratio >= self.config.mostly

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(config={self.config!r})"
