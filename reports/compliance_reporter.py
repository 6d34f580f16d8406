"""
Compliance Reporter
Builds client-wise filing status reports from filing records
"""

import json
from collections import OrderedDict
from typing import Dict, Iterable, List, Optional, Tuple

from loguru import logger

from calculators.due_date_calculator import DueDateCalculator, get_financial_year
from calculators.filing_status_resolver import resolve_record_status
from calculators.penalty_calculator import PenaltyCalculator, round_half_up
from models.filing import (
    AnnualComplianceSummary,
    ClientFilingReport,
    DueDateInfo,
    FilingFrequency,
    FilingRecord,
    FilingStatus,
)
from utils.dates import DateLike, format_period, resolve_today, to_date


class ComplianceReporter:
    """
    Compliance Reporter

    Composes the due date, status and penalty calculators over a client's
    filing history and renders the result:
    - Client report (pending / overdue / late months, penalties, score)
    - Console (colored text)
    - JSON (machine readable)
    """

    def __init__(self, config: dict = None):
        self.config = config or {}
        self.due_date_calculator = DueDateCalculator(self.config)
        self.penalty_calculator = PenaltyCalculator(self.config)

        # ANSI color codes
        self.colors = {
            'green': '\033[92m',
            'red': '\033[91m',
            'yellow': '\033[93m',
            'gray': '\033[90m',
            'bold': '\033[1m',
            'reset': '\033[0m'
        }

    def accrue_late_fees(self, record: FilingRecord, due_dates: DueDateInfo, today: DateLike) -> int:
        """Late fees for both returns, accruing to today for returns still unfiled"""
        # Interim QRMP months only have the optional IFF, which carries no late fee
        if due_dates.gstr3b_is_advisory:
            return 0

        current = to_date(today)
        total = 0
        returns = [
            (record.gstr1_filed, record.gstr1_filed_date, due_dates.gstr1_due_date),
            (record.gstr3b_filed, record.gstr3b_filed_date, due_dates.gstr3b_due_date),
        ]

        for filed, filed_date, due_date in returns:
            if filed and filed_date is None:
                continue
            event_date = filed_date if filed else current
            total += self.penalty_calculator.calculate_late_fee(due_date, event_date, record.is_nil_return)

        return total

    def accrue_interest(self, record: FilingRecord, due_dates: DueDateInfo, today: DateLike) -> int:
        """Interest on the period's tax from the GSTR-3B due date until payment"""
        if not record.tax_amount or due_dates.gstr3b_is_advisory:
            return 0

        # Tax is paid with GSTR-3B when no separate payment date is recorded
        paid_date = record.tax_paid_date or record.gstr3b_filed_date
        if paid_date is None:
            if record.gstr3b_filed:
                # Filed without a date: lateness can't be established
                return 0
            paid_date = to_date(today)

        return self.penalty_calculator.calculate_interest(
            record.tax_amount, due_dates.gstr3b_due_date, paid_date
        )

    def assess_record(self, record: FilingRecord, today: DateLike) -> Tuple[FilingStatus, int, int]:
        """Status, late fees and interest for one period as of today"""
        due_dates = self.due_date_calculator.calculate(
            record.month, record.filing_frequency, record.turnover
        )
        status = resolve_record_status(record, due_dates, today=today)
        late_fees = self.accrue_late_fees(record, due_dates, today)
        interest = self.accrue_interest(record, due_dates, today)
        return status, late_fees, interest

    def build_client_report(
        self,
        records: Iterable[FilingRecord],
        today: Optional[DateLike] = None,
    ) -> ClientFilingReport:
        """Summarise one client's filing records"""
        records = sorted(records, key=lambda r: r.month)
        if not records:
            raise ValueError("Cannot build a report without filing records")

        current = resolve_today(today)
        first = records[0]
        report = ClientFilingReport(
            client_id=first.client_id,
            client_name=first.client_name,
            gstin=first.gstin,
            filing_frequency=first.filing_frequency,
            periods_tracked=len(records),
            current_period=format_period(current.year, current.month),
        )

        on_time = 0
        resolved = 0

        for record in records:
            status, late_fees, interest = self.assess_record(record, current)

            if status == FilingStatus.FILED:
                report.filed_months.append(record.month)
                report.last_filed_month = record.month
                on_time += 1
            elif status == FilingStatus.LATE:
                report.late_months.append(record.month)
                report.last_filed_month = record.month
            elif status == FilingStatus.OVERDUE:
                report.overdue_months.append(record.month)
                report.total_pending_amount += record.tax_amount + late_fees + interest
            else:
                report.pending_months.append(record.month)

            if status != FilingStatus.PENDING:
                resolved += 1

            report.total_late_fees += late_fees
            report.total_interest += interest

        if resolved:
            report.compliance_score = round_half_up(100 * on_time / resolved)

        logger.info(
            f"Report for {report.client_id}: score {report.compliance_score}, "
            f"{len(report.overdue_months)} overdue, penalties Rs.{report.total_penalties:,}"
        )
        return report

    def build_annual_summary(
        self,
        records: Iterable[FilingRecord],
        financial_year: str,
        today: Optional[DateLike] = None,
    ) -> AnnualComplianceSummary:
        """
        Summarise one client's periods falling in a financial year ('2024-25')

        A period counts as filed once both returns are filed, on time or not.
        Late covers periods filed late and periods still overdue.
        """
        records = sorted(records, key=lambda r: r.month)
        if not records:
            raise ValueError("Cannot build a summary without filing records")

        current = resolve_today(today)
        first = records[0]
        start_year = int(financial_year[:4])
        annual_dates = self.due_date_calculator.calculate(
            format_period(start_year + 1, 3), FilingFrequency.ANNUAL
        )
        summary = AnnualComplianceSummary(
            client_id=first.client_id,
            client_name=first.client_name,
            financial_year=financial_year,
            gstr9_due_date=annual_dates.gstr9_due_date,
        )

        in_year = [r for r in records if get_financial_year(r.month) == financial_year]
        for record in in_year:
            status, late_fees, interest = self.assess_record(record, current)

            summary.total_months_tracked += 1
            if status in (FilingStatus.FILED, FilingStatus.LATE):
                summary.months_filed += 1
            else:
                summary.months_pending += 1
            if status in (FilingStatus.LATE, FilingStatus.OVERDUE):
                summary.months_late += 1

            if record.tax_paid_date or record.gstr3b_filed:
                summary.total_tax_paid += record.tax_amount
            summary.total_late_fees += late_fees
            summary.total_interest += interest

        if summary.total_months_tracked:
            summary.compliance_rate = round_half_up(
                100 * summary.months_filed / summary.total_months_tracked
            )

        logger.info(
            f"FY {financial_year} summary for {summary.client_id}: "
            f"{summary.months_filed}/{summary.total_months_tracked} filed"
        )
        return summary

    def build_reports(
        self,
        records: Iterable[FilingRecord],
        today: Optional[DateLike] = None,
    ) -> List[ClientFilingReport]:
        """One report per client, in first-seen order"""
        by_client: Dict[str, List[FilingRecord]] = OrderedDict()
        for record in records:
            by_client.setdefault(record.client_id, []).append(record)

        return [self.build_client_report(client_records, today) for client_records in by_client.values()]

    def generate_console_report(self, report: ClientFilingReport) -> str:
        """Generate client report for the console with colors"""
        c = self.colors
        lines = []

        lines.append("=" * 80)
        lines.append(f"{c['bold']}GST FILING STATUS REPORT{c['reset']}")
        lines.append("=" * 80)
        lines.append(f"  Client: {report.client_name or report.client_id}")
        if report.gstin:
            lines.append(f"  GSTIN: {report.gstin}")
        lines.append(f"  Filing Frequency: {report.filing_frequency.value}")
        lines.append(f"  Periods Tracked: {report.periods_tracked}")
        lines.append(f"  Current Period: {report.current_period or '-'}")
        lines.append(f"  Last Filed: {report.last_filed_month or '-'}")
        lines.append("")

        score_color = self._get_score_color(report.compliance_score)
        lines.append(f"{c['bold']}Compliance Score:{c['reset']} {score_color}{report.compliance_score}{c['reset']}")
        lines.append(f"  Filed on time: {c['green']}{len(report.filed_months)}{c['reset']}")
        lines.append(f"  Filed late: {c['yellow']}{len(report.late_months)}{c['reset']}")
        lines.append(f"  Overdue: {c['red']}{len(report.overdue_months)}{c['reset']}")
        lines.append(f"  Pending: {len(report.pending_months)}")
        lines.append("")

        if report.overdue_months:
            lines.append(f"{c['red']}{c['bold']}OVERDUE PERIODS{c['reset']}")
            for month in report.overdue_months:
                lines.append(f"  • {month}")
            lines.append("")

        if report.late_months:
            lines.append(f"{c['yellow']}Late Filings{c['reset']}")
            for month in report.late_months:
                lines.append(f"  • {month}")
            lines.append("")

        lines.append("-" * 80)
        lines.append(f"  Late Fees: ₹{report.total_late_fees:,}")
        lines.append(f"  Interest: ₹{report.total_interest:,}")
        lines.append(f"  {c['bold']}Total Penalties: ₹{report.total_penalties:,}{c['reset']}")
        lines.append(f"  Pending on Overdue Periods: ₹{report.total_pending_amount:,.0f}")
        lines.append("=" * 80)

        return "\n".join(lines)

    def generate_json_report(self, reports: List[ClientFilingReport]) -> str:
        """Generate machine-readable report for one or more clients"""
        return json.dumps({
            'summary': {
                'clients': len(reports),
                'overdue_periods': sum(len(r.overdue_months) for r in reports),
                'total_late_fees': sum(r.total_late_fees for r in reports),
                'total_interest': sum(r.total_interest for r in reports),
                'total_pending_amount': sum(r.total_pending_amount for r in reports),
            },
            'clients': [r.model_dump(mode='json') for r in reports],
        }, indent=2)

    def _get_score_color(self, score: int) -> str:
        if score >= 90:
            return self.colors['green']
        if score >= 60:
            return self.colors['yellow']
        return self.colors['red']
