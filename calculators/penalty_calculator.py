"""
Penalty Calculator
Late fees and interest on overdue GST returns

Rules:
- No late fee if filed on or before due date
- GSTR-1 / GSTR-3B: Rs.50/day (Rs.20/day for nil return), max Rs.10,000
- Late fee accrues separately per return type per period
- Interest: 18% per annum on the tax amount, simple, per day late
"""

import math

from loguru import logger

from models.filing import PenaltyAssessment, PenaltyInput
from utils.config import get_section
from utils.dates import DateLike, days_between


def round_half_up(value: float) -> int:
    """Round to the nearest whole rupee, halves rounding up"""
    return int(math.floor(value + 0.5))


class PenaltyCalculator:
    """Accrues late fees and interest"""

    def __init__(self, config: dict = None):
        self.config = config or {}
        late_fee = get_section(self.config, 'late_fee')
        interest = get_section(self.config, 'interest')

        self.fee_per_day = late_fee['per_day']
        self.nil_fee_per_day = late_fee['nil_per_day']
        self.fee_cap = late_fee['cap']
        self.annual_rate = interest['annual_rate']
        self.days_in_year = interest['days_in_year']

    def days_late(self, due_date: DateLike, event_date: DateLike) -> int:
        return max(days_between(due_date, event_date), 0)

    def calculate_late_fee(
        self,
        due_date: DateLike,
        filed_date: DateLike,
        is_nil_return: bool = False,
    ) -> int:
        days_late = self.days_late(due_date, filed_date)
        if days_late == 0:
            return 0

        fee_per_day = self.nil_fee_per_day if is_nil_return else self.fee_per_day
        late_fee = min(days_late * fee_per_day, self.fee_cap)

        logger.debug(f"Late fee: {days_late} days x Rs.{fee_per_day} -> Rs.{late_fee}")
        return late_fee

    def calculate_interest(
        self,
        tax_amount: float,
        due_date: DateLike,
        paid_date: DateLike,
    ) -> int:
        days_late = self.days_late(due_date, paid_date)
        if days_late == 0 or not tax_amount or tax_amount <= 0:
            return 0

        daily_rate = self.annual_rate / self.days_in_year
        interest = round_half_up(tax_amount * daily_rate * days_late)

        logger.debug(f"Interest: Rs.{tax_amount} for {days_late} days -> Rs.{interest}")
        return interest

    def assess(self, penalty_input: PenaltyInput, include_interest: bool = True) -> PenaltyAssessment:
        """Late fee and (optionally) interest for one return"""
        days_late = self.days_late(penalty_input.due_date, penalty_input.event_date)
        late_fee = self.calculate_late_fee(
            penalty_input.due_date,
            penalty_input.event_date,
            penalty_input.is_nil_return,
        )
        interest = 0
        if include_interest:
            interest = self.calculate_interest(
                penalty_input.amount_basis,
                penalty_input.due_date,
                penalty_input.event_date,
            )
        return PenaltyAssessment(days_late=days_late, late_fee=late_fee, interest=interest)


_default_calculator = PenaltyCalculator()


def calculate_late_fee(due_date: DateLike, filed_date: DateLike, is_nil_return: bool = False) -> int:
    """Calculate late fee based on filing date vs due date"""
    return _default_calculator.calculate_late_fee(due_date, filed_date, is_nil_return)


def calculate_interest(tax_amount: float, due_date: DateLike, paid_date: DateLike) -> int:
    """Calculate interest on late payment of tax"""
    return _default_calculator.calculate_interest(tax_amount, due_date, paid_date)
