"""
GST Compliance Rules Engine - command line

Usage:
    python main.py validate <GSTIN|PAN|ARN>
    python main.py due-dates <YYYY-MM> <monthly|quarterly|annual> [turnover]
    python main.py late-fee <due YYYY-MM-DD> <filed YYYY-MM-DD> [--nil]
    python main.py interest <tax amount> <due YYYY-MM-DD> <paid YYYY-MM-DD>
    python main.py report <register.csv|register.json> [--today YYYY-MM-DD]
"""

import sys
from pathlib import Path

from loguru import logger

from calculators.due_date_calculator import DueDateCalculator, get_financial_year
from calculators.penalty_calculator import PenaltyCalculator
from reports.compliance_reporter import ComplianceReporter
from utils.config import load_config_or_defaults
from utils.data_loaders import FilingRegisterLoader
from utils.exceptions import ComplianceEngineError
from utils.log_setup import configure_logging, is_configured
from validators.identifier_validator import IdentifierValidator

USAGE = """
GST Compliance Rules Engine - Usage

Identifiers:
    python main.py validate 27AAPFU0939F1ZV

Due dates:
    python main.py due-dates 2024-03 quarterly 40000000

Penalties:
    python main.py late-fee 2024-04-20 2024-05-10 [--nil]
    python main.py interest 100000 2024-04-20 2024-05-20

Client reports:
    python main.py report filings.csv [--today 2024-06-30]

Options:
    --help          Show this help message
"""


class ComplianceCLI:
    """Command line front end over the rules engine"""

    def __init__(self, config_path: str = "config.yaml"):
        self.config = load_config_or_defaults(config_path)

        self.identifier_validator = IdentifierValidator(self.config)
        self.due_date_calculator = DueDateCalculator(self.config)
        self.penalty_calculator = PenaltyCalculator(self.config)
        self.reporter = ComplianceReporter(self.config)

    def validate(self, identifier: str) -> int:
        result = self.identifier_validator.validate(identifier.strip().upper())

        print(f"\n🔍 {identifier}: {'VALID' if result.is_valid else 'INVALID'}")
        for error in result.errors:
            print(f"   ❌ {error}")
        for warning in result.warnings:
            print(f"   ⚠️  {warning}")
        return 0 if result.is_valid else 1

    def due_dates(self, month: str, frequency: str, turnover: str = None) -> int:
        info = self.due_date_calculator.calculate(
            month, frequency, float(turnover) if turnover else None
        )

        print(f"\n📅 Due dates for {info.month} ({info.filing_frequency.value}, FY {get_financial_year(month)})")
        print(f"   GSTR-1:  {info.gstr1_due_date}")
        advisory = " (placeholder - interim QRMP month)" if info.gstr3b_is_advisory else ""
        print(f"   GSTR-3B: {info.gstr3b_due_date}{advisory}")
        if info.gstr9_due_date:
            print(f"   GSTR-9:  {info.gstr9_due_date}")
        print(f"   Reminder: {info.reminder_date}")
        return 0

    def late_fee(self, due_date: str, filed_date: str, is_nil_return: bool = False) -> int:
        fee = self.penalty_calculator.calculate_late_fee(due_date, filed_date, is_nil_return)
        print(f"\n💰 Late fee: ₹{fee:,}")
        return 0

    def interest(self, tax_amount: str, due_date: str, paid_date: str) -> int:
        interest = self.penalty_calculator.calculate_interest(float(tax_amount), due_date, paid_date)
        print(f"\n💰 Interest: ₹{interest:,}")
        return 0

    def report(self, register_path: str, today: str = None) -> int:
        loader = FilingRegisterLoader(register_path)
        print(f"\n📦 Loaded {len(loader.records)} filing records for {len(loader.client_ids())} clients")

        reports = self.reporter.build_reports(loader.records, today)
        for client_report in reports:
            print("\n" + self.reporter.generate_console_report(client_report))

        report_file = Path("reports_out") / f"{Path(register_path).stem}_report.json"
        report_file.parent.mkdir(exist_ok=True)
        with open(report_file, 'w') as f:
            f.write(self.reporter.generate_json_report(reports))

        print(f"\n💾 JSON report saved: {report_file}")
        return 0


def _option_value(args, name):
    if name in args:
        idx = args.index(name)
        if idx + 1 < len(args):
            value = args[idx + 1]
            del args[idx:idx + 2]
            return value
    return None


def main(argv=None) -> int:
    """Main entry point"""
    args = list(sys.argv[1:] if argv is None else argv)

    if not args or args[0] in ('--help', '-h'):
        print(USAGE)
        return 0

    command, rest = args[0], args[1:]
    try:
        cli = ComplianceCLI()
        if not is_configured():
            configure_logging(cli.config.get('logging', {}).get('level'))

        if command == 'validate' and len(rest) == 1:
            return cli.validate(rest[0])
        if command == 'due-dates' and len(rest) in (2, 3):
            return cli.due_dates(*rest)
        if command == 'late-fee' and len(rest) >= 2:
            return cli.late_fee(rest[0], rest[1], '--nil' in rest[2:])
        if command == 'interest' and len(rest) == 3:
            return cli.interest(*rest)
        if command == 'report' and rest:
            today = _option_value(rest, '--today')
            return cli.report(rest[0], today)
    except (ComplianceEngineError, FileNotFoundError) as e:
        logger.error(str(e))
        print(f"❌ Error: {e}")
        return 2
    except ValueError as e:
        # float() on a bad amount/turnover
        print(f"❌ Error: {e}")
        return 2

    print(USAGE)
    return 2


if __name__ == "__main__":
    sys.exit(main())
