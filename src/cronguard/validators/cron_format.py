"""Cron expression validator for string columns."""

from __future__ import annotations

from typing import Any, Mapping

import polars as pl

from cronguard.cron import CronValidator
from cronguard.options import ValidationOptions
from cronguard.validators.base import ValidationIssue, Validator


def cron_validity_expr(
    column: str,
    options: ValidationOptions | Mapping[str, Any] | None = None,
) -> pl.Expr:
    """Build a boolean expression that flags valid cron expressions.

    Nulls stay null.

    Example:
        >>> df.with_columns(cron_validity_expr("schedule").alias("ok"))
    """
    validator = CronValidator(options)
    return pl.col(column).map_elements(validator.is_valid, return_dtype=pl.Boolean)


class CronExpressionValidator(Validator):
    """Validates that string columns hold well-formed cron expressions."""

    name = "cron_expression"
    category = "format"

    # Column name fragments that suggest a schedule column
    COLUMN_PATTERNS: list[str] = ["cron", "schedule", "crontab", "trigger"]

    def __init__(
        self,
        columns: list[str] | None = None,
        options: ValidationOptions | Mapping[str, Any] | None = None,
        **kwargs: Any,
    ):
        if columns is not None:
            kwargs["columns"] = columns
        super().__init__(**kwargs)
        self.cron = CronValidator(options)

    def _target_columns(self, lf: pl.LazyFrame) -> list[str]:
        columns = self._get_string_columns(lf)
        if self.config.columns:
            return columns
        return [
            c for c in columns
            if any(p in c.lower() for p in self.COLUMN_PATTERNS)
        ]

    def validate(self, lf: pl.LazyFrame) -> list[ValidationIssue]:
        """Check string columns for invalid cron expressions.

        Args:
            lf: Polars LazyFrame to validate.

        Returns:
            List of validation issues, one per column with invalid values.
        """
        issues: list[ValidationIssue] = []

        columns = self._target_columns(lf)
        if not columns:
            self.logger.debug("No schedule columns to validate")
            return issues

        df = lf.select(columns).collect()

        for col in columns:
            values = df.get_column(col).drop_nulls()
            values = values.filter(values.str.strip_chars() != "")
            total = len(values)
            if total == 0:
                continue

            valid = values.map_elements(self.cron.is_valid, return_dtype=pl.Boolean)
            invalid_values = values.filter(~valid)
            invalid_count = len(invalid_values)

            self.logger.debug(
                "Column %s: %d of %d cron expressions invalid", col, invalid_count, total
            )

            if invalid_count == 0 or self._passes_mostly(invalid_count, total):
                continue

            issues.append(
                ValidationIssue(
                    column=col,
                    issue_type="invalid_cron_expression",
                    count=invalid_count,
                    severity=self._calculate_severity(invalid_count / total),
                    details=f"expected {self.cron.options.field_count}-field cron expression",
                    sample_values=invalid_values.head(self.config.sample_size).to_list(),
                )
            )

        return issues
