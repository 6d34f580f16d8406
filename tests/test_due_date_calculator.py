"""
Due date calculator tests

Run with: pytest tests/test_due_date_calculator.py -v
"""

import pytest
from datetime import date, timedelta

from calculators.due_date_calculator import (
    DueDateCalculator,
    calculate_due_dates,
    get_financial_year,
)
from models.filing import FilingFrequency, ReturnType
from utils.exceptions import InvalidFrequencyError, InvalidPeriodError


class TestMonthlyDueDates:
    """Monthly filers: GSTR-1 on the 11th, GSTR-3B on the 20th"""

    def test_standard_month(self):
        info = calculate_due_dates("2024-01", "monthly")

        assert info.month == "2024-01"
        assert info.filing_frequency == FilingFrequency.MONTHLY
        assert info.gstr1_due_date == "2024-02-11"
        assert info.gstr3b_due_date == "2024-02-20"
        assert info.gstr9_due_date is None
        assert info.is_quarter_end is False
        assert info.quarter_end_month is None
        assert info.reminder_date == "2024-02-15"
        assert info.gstr3b_is_advisory is False

    def test_december_rolls_into_next_year(self):
        info = calculate_due_dates("2024-12", FilingFrequency.MONTHLY)

        assert info.gstr1_due_date == "2025-01-11"
        assert info.gstr3b_due_date == "2025-01-20"
        assert info.reminder_date == "2025-01-15"

    def test_leap_year_february_period(self):
        info = calculate_due_dates("2024-02", "monthly")

        assert info.gstr1_due_date == "2024-03-11"
        assert info.gstr3b_due_date == "2024-03-20"

    @pytest.mark.parametrize("year,expected", [
        (2024, "2024-02-24"),  # 29 days in February
        (2023, "2023-02-23"),
    ])
    def test_reminder_lead_crossing_february(self, year, expected):
        """A long lead time steps back across February correctly"""
        calculator = DueDateCalculator({'reminders': {'lead_days': 25}})

        info = calculator.calculate(f"{year}-02", "monthly")

        assert info.gstr3b_due_date == f"{year}-03-20"
        assert info.reminder_date == expected


class TestQuarterlyDueDates:
    """QRMP filers"""

    def test_quarter_end_below_threshold(self):
        info = calculate_due_dates("2024-03", "quarterly", 40_000_000)

        assert info.is_quarter_end is True
        assert info.quarter_end_month == "2024-03"
        assert info.gstr1_due_date == "2024-04-13"
        assert info.gstr3b_due_date == "2024-04-24"
        assert info.reminder_date == "2024-04-19"
        assert info.gstr3b_is_advisory is False

    def test_quarter_end_above_threshold(self):
        info = calculate_due_dates("2024-03", "quarterly", 60_000_000)
        assert info.gstr3b_due_date == "2024-04-22"
        assert info.reminder_date == "2024-04-17"

    @pytest.mark.parametrize("turnover,day", [
        (None, 24),
        (0, 24),
        (50_000_000, 24),  # lower tier is inclusive
        (50_000_000.01, 22),
        (50_000_001, 22),
    ])
    def test_turnover_threshold(self, turnover, day):
        info = calculate_due_dates("2024-06", "quarterly", turnover)
        assert info.gstr3b_due_date == f"2024-07-{day}"

    @pytest.mark.parametrize("month", ["2024-03", "2024-06", "2024-09", "2024-12"])
    def test_quarter_end_months(self, month):
        assert calculate_due_dates(month, "quarterly").is_quarter_end

    def test_december_quarter_end_rolls_over(self):
        info = calculate_due_dates("2024-12", "quarterly")

        assert info.gstr1_due_date == "2025-01-13"
        assert info.gstr3b_due_date == "2025-01-24"

    def test_interim_month_uses_placeholder_dates(self):
        info = calculate_due_dates("2024-04", "quarterly", 60_000_000)

        assert info.is_quarter_end is False
        assert info.quarter_end_month is None
        assert info.gstr1_due_date == "2024-05-13"
        assert info.gstr3b_due_date == "2024-05-25"
        assert info.reminder_date == "2024-05-20"
        assert info.gstr3b_is_advisory is True


class TestAnnualDueDates:
    """Annual filers: GSTR-9 plus reference monthly dates"""

    def test_month_in_second_half_of_fy(self):
        """Jan-Mar belong to the FY ending that March"""
        info = calculate_due_dates("2024-03", "annual")

        assert info.gstr9_due_date == "2025-12-31"
        assert info.gstr1_due_date == "2024-04-11"
        assert info.gstr3b_due_date == "2024-04-20"
        assert info.is_quarter_end is False

    def test_month_in_first_half_of_fy(self):
        info = calculate_due_dates("2024-04", "annual")

        assert info.gstr9_due_date == "2026-12-31"
        assert info.gstr1_due_date == "2024-05-11"

    def test_due_date_for_return_type(self):
        info = calculate_due_dates("2024-04", "annual")

        assert info.due_date_for(ReturnType.GSTR1) == "2024-05-11"
        assert info.due_date_for(ReturnType.GSTR3B) == "2024-05-20"
        assert info.due_date_for(ReturnType.GSTR9) == "2026-12-31"


class TestReminderDate:
    """Reminder is always derived from the GSTR-3B due date"""

    @pytest.mark.parametrize("month,frequency,turnover", [
        ("2024-01", "monthly", None),
        ("2024-03", "quarterly", 10_000_000),
        ("2024-03", "quarterly", 90_000_000),
        ("2024-05", "quarterly", None),
        ("2024-11", "annual", None),
    ])
    def test_reminder_is_five_days_before_gstr3b(self, month, frequency, turnover):
        info = calculate_due_dates(month, frequency, turnover)

        gstr3b = date.fromisoformat(info.gstr3b_due_date)
        assert date.fromisoformat(info.reminder_date) == gstr3b - timedelta(days=5)


class TestInvalidInput:
    """Malformed periods and frequencies raise typed errors"""

    @pytest.mark.parametrize("month", ["2024-13", "2024-00", "2024/03", "24-03", "", "2024-3"])
    def test_invalid_period(self, month):
        with pytest.raises(InvalidPeriodError):
            calculate_due_dates(month, "monthly")

    @pytest.mark.parametrize("month", ["2024-03\n", " 2024-03", "2024-03 "])
    def test_surrounding_whitespace_rejected(self, month):
        with pytest.raises(InvalidPeriodError):
            calculate_due_dates(month, "monthly")

    @pytest.mark.parametrize("month,frequency", [
        ("0000-05", "monthly"),
        ("9999-12", "monthly"),
        ("9998-06", "annual"),
    ])
    def test_year_out_of_range(self, month, frequency):
        with pytest.raises(InvalidPeriodError) as exc_info:
            calculate_due_dates(month, frequency)

        assert exc_info.value.details['reason'] == 'year out of range'

    def test_last_supported_year(self):
        info = calculate_due_dates("9997-12", "annual")
        assert info.gstr9_due_date == "9999-12-31"

    def test_invalid_frequency(self):
        with pytest.raises(InvalidFrequencyError) as exc_info:
            calculate_due_dates("2024-03", "weekly")

        assert exc_info.value.code.value == "INPUT_1003"

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            calculate_due_dates("March 2024", "monthly")


class TestFinancialYear:
    """Financial year labels"""

    @pytest.mark.parametrize("month,expected", [
        ("2024-04", "2024-25"),
        ("2025-03", "2024-25"),
        ("2024-03", "2023-24"),
        ("1999-12", "1999-00"),
    ])
    def test_financial_year(self, month, expected):
        assert get_financial_year(month) == expected


class TestConfiguredDays:
    """Statutory days come from configuration"""

    def test_extended_due_date(self):
        """e.g. a CBIC notification extending GSTR-3B to the 24th"""
        calculator = DueDateCalculator({'due_dates': {'monthly_gstr3b_day': 24}})

        info = calculator.calculate("2024-01", "monthly")

        assert info.gstr1_due_date == "2024-02-11"
        assert info.gstr3b_due_date == "2024-02-24"
        assert info.reminder_date == "2024-02-19"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
