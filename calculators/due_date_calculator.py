"""
Due Date Calculator
Statutory GST return due dates by filing frequency

Rules:
- GSTR-1 (Monthly): 11th of next month
- GSTR-3B (Monthly): 20th of next month
- GSTR-1 (Quarterly): 13th of month following quarter end
- GSTR-3B (Quarterly): 24th (turnover <= 5 crore) / 22nd of month following quarter end
- GSTR-9 (Annual): 31st December following the end of the financial year
"""

from datetime import date, timedelta
from typing import Optional, Union

from loguru import logger

from models.filing import DueDateInfo, FilingFrequency
from utils.config import get_section
from utils.dates import format_date, next_month, parse_period
from utils.exceptions import InvalidFrequencyError

QUARTER_END_MONTHS = (3, 6, 9, 12)


def coerce_frequency(frequency: Union[FilingFrequency, str]) -> FilingFrequency:
    try:
        return FilingFrequency(frequency)
    except ValueError:
        raise InvalidFrequencyError(frequency)


def get_financial_year(month: str) -> str:
    """Financial year label for a period, e.g. '2024-04' -> '2024-25'"""
    year, month_num = parse_period(month)
    start_year = year if month_num >= 4 else year - 1
    return f"{start_year}-{(start_year + 1) % 100:02d}"


class DueDateCalculator:
    """Computes due dates for one filing period"""

    def __init__(self, config: dict = None):
        self.config = config or {}
        self.rules = get_section(self.config, 'due_dates')
        self.reminder_lead_days = get_section(self.config, 'reminders')['lead_days']

    def calculate(
        self,
        month: str,
        filing_frequency: Union[FilingFrequency, str],
        turnover: Optional[float] = None,
    ) -> DueDateInfo:
        year, month_num = parse_period(month)
        frequency = coerce_frequency(filing_frequency)

        # All returns fall due in the month after the period
        due_year, due_month = next_month(year, month_num)

        gstr9_due_date = None
        is_quarter_end = False
        quarter_end_month = None
        gstr3b_is_advisory = False

        if frequency == FilingFrequency.MONTHLY:
            gstr1_day = self.rules['monthly_gstr1_day']
            gstr3b_day = self.rules['monthly_gstr3b_day']

        elif frequency == FilingFrequency.QUARTERLY:
            is_quarter_end = month_num in QUARTER_END_MONTHS

            if is_quarter_end:
                quarter_end_month = month
                gstr1_day = self.rules['quarterly_gstr1_day']
                # Lower tier is inclusive: exactly 5 crore still gets the later date
                if not turnover or turnover <= self.rules['qrmp_turnover_threshold']:
                    gstr3b_day = self.rules['quarterly_gstr3b_day']
                else:
                    gstr3b_day = self.rules['quarterly_gstr3b_day_large']
            else:
                # Interim QRMP month: only IFF is due, GSTR-3B date is a placeholder
                gstr1_day = self.rules['interim_gstr1_day']
                gstr3b_day = self.rules['interim_gstr3b_day']
                gstr3b_is_advisory = True
                logger.debug(f"{month} is an interim QRMP month; GSTR-3B date is advisory")

        else:
            # Financial year runs April to March
            fy_end_year = year + 1 if month_num >= 4 else year
            gstr9_due_date = format_date(date(fy_end_year + 1, 12, 31))

            # Monthly dates kept for reference
            gstr1_day = self.rules['monthly_gstr1_day']
            gstr3b_day = self.rules['monthly_gstr3b_day']

        gstr1_due = date(due_year, due_month, gstr1_day)
        gstr3b_due = date(due_year, due_month, gstr3b_day)
        reminder = gstr3b_due - timedelta(days=self.reminder_lead_days)

        info = DueDateInfo(
            month=month,
            filing_frequency=frequency,
            gstr1_due_date=format_date(gstr1_due),
            gstr3b_due_date=format_date(gstr3b_due),
            gstr9_due_date=gstr9_due_date,
            is_quarter_end=is_quarter_end,
            quarter_end_month=quarter_end_month,
            reminder_date=format_date(reminder),
            gstr3b_is_advisory=gstr3b_is_advisory,
        )
        logger.debug(
            f"Due dates for {month} ({frequency.value}): "
            f"GSTR-1 {info.gstr1_due_date}, GSTR-3B {info.gstr3b_due_date}"
        )
        return info


_default_calculator = DueDateCalculator()


def calculate_due_dates(
    month: str,
    filing_frequency: Union[FilingFrequency, str],
    turnover: Optional[float] = None,
) -> DueDateInfo:
    """Calculate due dates for GST returns based on filing frequency"""
    return _default_calculator.calculate(month, filing_frequency, turnover)
