"""
Filing data models using Pydantic
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date
from enum import Enum


class FilingFrequency(str, Enum):
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUAL = "annual"


class FilingStatus(str, Enum):
    PENDING = "pending"
    FILED = "filed"
    LATE = "late"
    OVERDUE = "overdue"


class ReturnType(str, Enum):
    GSTR1 = "GSTR-1"
    GSTR3B = "GSTR-3B"
    GSTR9 = "GSTR-9"


class DueDateInfo(BaseModel):
    """Statutory due dates for one filing period"""
    month: str
    filing_frequency: FilingFrequency
    gstr1_due_date: str
    gstr3b_due_date: str
    gstr9_due_date: Optional[str] = None
    is_quarter_end: bool = False
    quarter_end_month: Optional[str] = None
    reminder_date: str

    # Interim QRMP months carry a placeholder GSTR-3B date (only IFF is due)
    gstr3b_is_advisory: bool = False

    def due_date_for(self, return_type: ReturnType) -> Optional[str]:
        """Due date of a given return type, if one applies to this period"""
        if return_type == ReturnType.GSTR1:
            return self.gstr1_due_date
        if return_type == ReturnType.GSTR3B:
            return self.gstr3b_due_date
        return self.gstr9_due_date


class PenaltyInput(BaseModel):
    """Inputs for accruing a late fee or interest on one return"""
    due_date: date
    event_date: date
    amount_basis: float = 0.0  # tax amount for interest; ignored for late fee
    is_nil_return: bool = False


class PenaltyAssessment(BaseModel):
    """Accrued penalties for one return"""
    days_late: int = 0
    late_fee: int = 0
    interest: int = 0

    @property
    def total(self) -> int:
        return self.late_fee + self.interest


class FilingRecord(BaseModel):
    """One client-period row as supplied by the persistence layer"""

    # Client
    client_id: str
    client_name: str = ""
    gstin: str = ""
    filing_frequency: FilingFrequency = FilingFrequency.MONTHLY
    turnover: Optional[float] = None

    # Period
    month: str

    # Filing state
    gstr1_filed: bool = False
    gstr3b_filed: bool = False
    gstr1_filed_date: Optional[date] = None
    gstr3b_filed_date: Optional[date] = None
    is_nil_return: bool = False

    # Tax payment
    tax_amount: float = 0.0
    tax_paid_date: Optional[date] = None


class ClientFilingReport(BaseModel):
    """Client-wise filing status summary"""
    client_id: str
    client_name: str = ""
    gstin: str = ""
    filing_frequency: FilingFrequency = FilingFrequency.MONTHLY
    periods_tracked: int = 0
    last_filed_month: Optional[str] = None
    filed_months: List[str] = Field(default_factory=list)
    pending_months: List[str] = Field(default_factory=list)
    overdue_months: List[str] = Field(default_factory=list)
    late_months: List[str] = Field(default_factory=list)
    total_late_fees: int = 0
    total_interest: int = 0
    compliance_score: int = 100
    total_pending_amount: float = 0.0
    current_period: Optional[str] = None

    @property
    def total_penalties(self) -> int:
        return self.total_late_fees + self.total_interest


class AnnualComplianceSummary(BaseModel):
    """One client's filing record over a financial year"""
    client_id: str
    client_name: str = ""
    financial_year: str
    total_months_tracked: int = 0
    months_filed: int = 0
    months_pending: int = 0
    months_late: int = 0
    total_tax_paid: float = 0.0
    total_late_fees: int = 0
    total_interest: int = 0
    compliance_rate: int = 0
    gstr9_due_date: Optional[str] = None
    gstr9_filed: bool = False
