"""Tests for field-level cron grammar checks."""

import pytest

from cronguard.fields import (
    FIELD_CONSTRAINTS,
    OVERFLOW_VALUE,
    MONTH_ALIASES,
    WEEKDAY_ALIASES,
    CronFieldType,
    FieldConstraints,
    has_valid_days,
    has_valid_hours,
    has_valid_minutes,
    has_valid_months,
    has_valid_seconds,
    has_valid_weekdays,
    is_in_range,
    is_valid_range,
    is_valid_step,
    remap_aliases,
    safe_parse_int,
    validate_for_range,
)
from cronguard.options import ValidationOptions


# =============================================================================
# FieldConstraints Tests
# =============================================================================


class TestFieldConstraints:
    """Tests for field constraints."""

    def test_time_field_bounds(self):
        """Test seconds, minutes and hours bounds."""
        assert FIELD_CONSTRAINTS[CronFieldType.SECOND].max_value == 59
        assert FIELD_CONSTRAINTS[CronFieldType.MINUTE].max_value == 59
        assert FIELD_CONSTRAINTS[CronFieldType.HOUR].max_value == 23

    def test_day_of_month_constraints(self):
        """Test day of month field constraints."""
        c = FIELD_CONSTRAINTS[CronFieldType.DAY_OF_MONTH]
        assert c.min_value == 1
        assert c.max_value == 31
        assert c.supports_blank
        assert not c.supports_nth

    def test_month_aliases(self):
        """Test month names map to 1-12."""
        c = FIELD_CONSTRAINTS[CronFieldType.MONTH]
        assert c.aliases is MONTH_ALIASES
        assert sorted(int(v) for v in MONTH_ALIASES.values()) == list(range(1, 13))

    def test_weekday_aliases(self):
        """Test weekday names map to 0-6."""
        c = FIELD_CONSTRAINTS[CronFieldType.DAY_OF_WEEK]
        assert c.aliases is WEEKDAY_ALIASES
        assert WEEKDAY_ALIASES["sun"] == "0"
        assert WEEKDAY_ALIASES["sat"] == "6"
        assert c.supports_nth

    def test_month_check_reads_table(self, monkeypatch):
        """Test that month names come from the constraints table."""
        monkeypatch.setitem(
            FIELD_CONSTRAINTS,
            CronFieldType.MONTH,
            FieldConstraints(1, 12, aliases={"abc": "2"}),
        )
        assert has_valid_months("abc", alias=True)
        assert not has_valid_months("jan", alias=True)

    def test_weekday_check_reads_table(self, monkeypatch):
        """Test that blank and nth support come from the constraints table."""
        monkeypatch.setitem(
            FIELD_CONSTRAINTS,
            CronFieldType.DAY_OF_WEEK,
            FieldConstraints(0, 6, aliases=WEEKDAY_ALIASES),
        )
        options = ValidationOptions(allow_blank_day=True, allow_nth_weekday_of_month=True)
        assert not has_valid_weekdays("?", options)
        assert not has_valid_weekdays("1#3", options)
        assert has_valid_weekdays("1", options)

    def test_day_of_month_check_reads_table(self, monkeypatch):
        monkeypatch.setitem(
            FIELD_CONSTRAINTS, CronFieldType.DAY_OF_MONTH, FieldConstraints(1, 28)
        )
        assert not has_valid_days("?", allow_blank_day=True)
        assert not has_valid_days("29")


# =============================================================================
# Primitive Tests
# =============================================================================


class TestSafeParseInt:
    """Tests for integer parsing."""

    def test_digits(self):
        assert safe_parse_int("0") == 0
        assert safe_parse_int("007") == 7
        assert safe_parse_int("59") == 59

    @pytest.mark.parametrize("value", ["", "-1", "+1", "1.5", " 1", "1\n", "a", "*", "١"])
    def test_non_digits(self, value):
        """Test that anything but ASCII digits yields None."""
        assert safe_parse_int(value) is None

    def test_none_is_never_in_range(self):
        assert not is_in_range(None, 0, 59)
        assert is_in_range(0, 0, 59)
        assert not is_in_range(60, 0, 59)

    def test_long_digit_runs(self):
        """Test that digit runs past the int conversion limit do not raise."""
        assert safe_parse_int("1" * 5000) == OVERFLOW_VALUE
        assert safe_parse_int("9" * 10) == OVERFLOW_VALUE
        assert safe_parse_int("9" * 9) == 999_999_999
        assert not is_in_range(safe_parse_int("1" * 5000), 0, 59)

    def test_leading_zeros_not_counted(self):
        assert safe_parse_int("0" * 5000 + "5") == 5
        assert safe_parse_int("0" * 5000) == 0


class TestRemapAliases:
    """Tests for alias substitution."""

    def test_known_names(self):
        assert remap_aliases("JAN-MAR", MONTH_ALIASES) == "1-3"
        assert remap_aliases("mon,Wed", WEEKDAY_ALIASES) == "1,3"

    def test_unknown_names_kept(self):
        """Test that unknown names stay in place for later rejection."""
        assert remap_aliases("foo", MONTH_ALIASES) == "foo"
        assert remap_aliases("january", MONTH_ALIASES) == "1uary"


# =============================================================================
# Generic Field Validator Tests
# =============================================================================


class TestIsValidRange:
    """Tests for range expressions."""

    def test_wildcard(self):
        assert is_valid_range("*", 0, 59)

    def test_single_value(self):
        assert is_valid_range("5", 0, 59)
        assert not is_valid_range("60", 0, 59)
        assert not is_valid_range("", 0, 59)

    def test_range(self):
        assert is_valid_range("5-10", 0, 59)
        assert is_valid_range("5-5", 0, 59)
        assert not is_valid_range("10-5", 0, 59)
        assert not is_valid_range("5-60", 0, 59)

    def test_malformed_range(self):
        """Test ranges with missing or non-numeric sides."""
        assert not is_valid_range("5-10-15", 0, 59)
        assert not is_valid_range("-5", 0, 59)
        assert not is_valid_range("5-", 0, 59)
        assert not is_valid_range("*-5", 0, 59)


class TestIsValidStep:
    """Tests for step divisors."""

    def test_absent_step(self):
        assert is_valid_step(None)

    def test_positive_step(self):
        assert is_valid_step("5")
        assert is_valid_step("120")

    @pytest.mark.parametrize("value", ["0", "", "-1", "+1", "a", "0" * 5000])
    def test_invalid_step(self, value):
        assert not is_valid_step(value)

    def test_huge_step(self):
        """Test that any non-zero digit run is a valid step."""
        assert is_valid_step("1" * 5000)
        assert is_valid_step("0" * 5000 + "1")


class TestValidateForRange:
    """Tests for the generic list/range/step validator."""

    @pytest.mark.parametrize(
        "value",
        ["*", "0", "59", "1,2,3", "5-10", "*/5", "5/3", "5-10/2", "1,5-10,*/15"],
    )
    def test_valid(self, value):
        assert validate_for_range(value, 0, 59)

    @pytest.mark.parametrize(
        "value",
        ["60", "10-5", "5-10-15", "*/0", "*/", "5/3/2", "*/*/*", "1,,2", ",", "a", "1 2", "?", "#"],
    )
    def test_invalid(self, value):
        assert not validate_for_range(value, 0, 59)

    def test_wildcard_ignores_bounds(self):
        assert validate_for_range("*", 1, 1)


# =============================================================================
# Field Specialization Tests
# =============================================================================


class TestTimeFields:
    """Tests for seconds, minutes and hours."""

    def test_seconds(self):
        assert has_valid_seconds("0")
        assert has_valid_seconds("*/10")
        assert not has_valid_seconds("60")

    def test_minutes(self):
        assert has_valid_minutes("59")
        assert not has_valid_minutes("60")

    def test_hours(self):
        assert has_valid_hours("0-23")
        assert not has_valid_hours("24")


class TestDayOfMonth:
    """Tests for day-of-month."""

    def test_bounds(self):
        assert has_valid_days("1")
        assert has_valid_days("31")
        assert not has_valid_days("0")
        assert not has_valid_days("32")

    def test_blank_day(self):
        assert has_valid_days("?", allow_blank_day=True)
        assert not has_valid_days("?", allow_blank_day=False)


class TestMonth:
    """Tests for the month field."""

    def test_numeric(self):
        assert has_valid_months("1-12")
        assert not has_valid_months("0")
        assert not has_valid_months("13")

    def test_aliases(self):
        assert has_valid_months("JAN", alias=True)
        assert has_valid_months("jan-dec/2", alias=True)
        assert not has_valid_months("JAN", alias=False)
        assert not has_valid_months("foo", alias=True)

    def test_alias_equivalence(self):
        """Test that named months validate like their numbers."""
        assert has_valid_months("jan,mar", alias=True) == has_valid_months("1,3")

    @pytest.mark.parametrize("alias", [True, False])
    def test_alias_as_step_rejected(self, alias):
        assert not has_valid_months("*/jan", alias=alias)
        assert not has_valid_months("*/JAN", alias=alias)


class TestDayOfWeek:
    """Tests for the day-of-week field."""

    def test_bounds(self):
        assert has_valid_weekdays("0-6")
        assert not has_valid_weekdays("7")
        assert has_valid_weekdays("7", ValidationOptions(allow_seven_as_sunday=True))
        assert not has_valid_weekdays("8", ValidationOptions(allow_seven_as_sunday=True))

    def test_blank_day(self):
        assert has_valid_weekdays("?", ValidationOptions(allow_blank_day=True))
        assert not has_valid_weekdays("?")

    def test_aliases(self):
        options = ValidationOptions(alias=True)
        assert has_valid_weekdays("MON-FRI", options)
        assert has_valid_weekdays("sun,sat", options)
        assert not has_valid_weekdays("MON")
        assert not has_valid_weekdays("xyz", options)

    def test_alias_as_step_rejected(self):
        assert not has_valid_weekdays("*/mon", ValidationOptions(alias=True))

    def test_nth_weekday(self):
        options = ValidationOptions(allow_nth_weekday_of_month=True)
        assert has_valid_weekdays("1#3", options)
        assert has_valid_weekdays("0#1", options)
        assert has_valid_weekdays("6#5", options)
        assert not has_valid_weekdays("1#6", options)
        assert not has_valid_weekdays("1#0", options)
        assert not has_valid_weekdays("7#1", options)
        assert not has_valid_weekdays("1#2#3", options)
        assert not has_valid_weekdays("#", options)

    def test_nth_weekday_disabled(self):
        assert not has_valid_weekdays("1#3")

    def test_nth_weekday_does_not_compose(self):
        """Test that nth syntax does not accept lists or ranges."""
        options = ValidationOptions(allow_nth_weekday_of_month=True)
        assert not has_valid_weekdays("1#3,2", options)
        assert not has_valid_weekdays("1-2#3", options)

    def test_nth_weekday_with_alias_and_seven(self):
        options = ValidationOptions(
            alias=True, allow_nth_weekday_of_month=True, allow_seven_as_sunday=True
        )
        assert has_valid_weekdays("MON#2", options)
        assert has_valid_weekdays("7#1", options)
