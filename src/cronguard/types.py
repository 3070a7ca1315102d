"""Type definitions for cronguard."""

from __future__ import annotations

from enum import Enum


class Severity(str, Enum):
    """Severity levels for data quality issues."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @classmethod
    def from_ratio(cls, ratio: float) -> "Severity":
        """Map the fraction of failing values to a severity."""
        if ratio > 0.3:
            return cls.HIGH
        if ratio > 0.1:
            return cls.MEDIUM
        return cls.LOW
