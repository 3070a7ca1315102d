"""Column validators for data quality checks on schedule data."""

from cronguard.validators.base import (
    ColumnNotFoundError,
    ValidationIssue,
    Validator,
    ValidatorConfig,
)
from cronguard.validators.cron_format import (
    CronExpressionValidator,
    cron_validity_expr,
)

__all__ = [
    # Base
    "ColumnNotFoundError",
    "ValidationIssue",
    "Validator",
    "ValidatorConfig",
    # Cron
    "CronExpressionValidator",
    "cron_validity_expr",
]
