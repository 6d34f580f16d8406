"""
Filing Status Resolver
Derives a period's filing status from filed flags and dates

Status is never set directly; it is always recomputed from these inputs.
"""

from typing import Optional

from models.filing import DueDateInfo, FilingRecord, FilingStatus
from utils.dates import DateLike, resolve_today, to_optional_date


def _filed_after(filed_date: Optional[DateLike], due_date: Optional[DateLike]) -> bool:
    filed = to_optional_date(filed_date)
    due = to_optional_date(due_date)
    if filed is None or due is None:
        return False
    return filed > due


def get_filing_status(
    gstr1_filed: bool,
    gstr3b_filed: bool,
    gstr1_due_date: Optional[DateLike] = None,
    gstr3b_due_date: Optional[DateLike] = None,
    gstr1_filed_date: Optional[DateLike] = None,
    gstr3b_filed_date: Optional[DateLike] = None,
    today: Optional[DateLike] = None,
) -> FilingStatus:
    """
    Get filing status based on filing state and dates

    Evaluated in order, first match wins:
    1. Both filed -> LATE if either was filed after its due date, else FILED
    2. GSTR-3B due date passed -> OVERDUE
    3. Otherwise -> PENDING
    """
    if gstr1_filed and gstr3b_filed:
        if _filed_after(gstr1_filed_date, gstr1_due_date):
            return FilingStatus.LATE
        if _filed_after(gstr3b_filed_date, gstr3b_due_date):
            return FilingStatus.LATE
        return FilingStatus.FILED

    due = to_optional_date(gstr3b_due_date)
    if due is not None and resolve_today(today) > due:
        return FilingStatus.OVERDUE

    return FilingStatus.PENDING


def is_month_overdue(
    due_date: DateLike,
    filed_date: Optional[DateLike] = None,
    today: Optional[DateLike] = None,
) -> bool:
    """True when nothing has been filed and the due date has passed"""
    if filed_date:
        return False

    due = to_optional_date(due_date)
    if due is None:
        return False
    return resolve_today(today) > due


def resolve_record_status(
    record: FilingRecord,
    due_dates: DueDateInfo,
    today: Optional[DateLike] = None,
) -> FilingStatus:
    """Status of a stored filing record against its computed due dates"""
    return get_filing_status(
        record.gstr1_filed,
        record.gstr3b_filed,
        due_dates.gstr1_due_date,
        due_dates.gstr3b_due_date,
        record.gstr1_filed_date,
        record.gstr3b_filed_date,
        today=today,
    )
