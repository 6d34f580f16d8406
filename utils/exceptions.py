"""
Exception classes for the GST compliance rules engine.

Validation outcomes are never raised; these cover malformed inputs to the
date/penalty/status calculators and internal inconsistencies.
"""

from enum import Enum
from typing import Optional


class ExceptionCode(Enum):
    """Enumeration of all possible exception codes."""

    # Input errors (INPUT_XXXX)
    INVALID_PERIOD = "INPUT_1001"
    INVALID_DATE = "INPUT_1002"
    INVALID_FREQUENCY = "INPUT_1003"
    INVALID_REGISTER = "INPUT_1004"

    # System errors (SYS_XXXX)
    CONFIGURATION_ERROR = "SYS_4001"
    INTERNAL_ERROR = "SYS_4004"


class ComplianceEngineError(ValueError):
    """Base exception for the compliance rules engine."""

    def __init__(
        self,
        message: str,
        code: ExceptionCode = ExceptionCode.INTERNAL_ERROR,
        details: Optional[dict] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> dict:
        return {
            "error_code": self.code.value,
            "message": self.message,
            "details": self.details,
        }


class InvalidPeriodError(ComplianceEngineError):
    """Filing period is not a valid YYYY-MM calendar month."""

    def __init__(self, period, details: Optional[dict] = None):
        super().__init__(
            f"Invalid filing period: {period!r}. Expected format: YYYY-MM",
            ExceptionCode.INVALID_PERIOD,
            {"period": str(period), **(details or {})},
        )


class InvalidDateError(ComplianceEngineError):
    """Date value is not a valid YYYY-MM-DD calendar date."""

    def __init__(self, value, details: Optional[dict] = None):
        super().__init__(
            f"Invalid date: {value!r}. Expected format: YYYY-MM-DD",
            ExceptionCode.INVALID_DATE,
            {"value": str(value), **(details or {})},
        )


class InvalidFrequencyError(ComplianceEngineError):
    """Filing frequency is not monthly, quarterly or annual."""

    def __init__(self, frequency, details: Optional[dict] = None):
        super().__init__(
            f"Invalid filing frequency: {frequency!r}. "
            "Expected one of: monthly, quarterly, annual",
            ExceptionCode.INVALID_FREQUENCY,
            {"frequency": str(frequency), **(details or {})},
        )


class InvalidRegisterError(ComplianceEngineError):
    """Filing register file could not be read into filing records."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message, ExceptionCode.INVALID_REGISTER, details)


class ChecksumAlphabetError(ComplianceEngineError):
    """Character outside the GSTIN checksum alphabet reached the checksum routine."""

    def __init__(self, char: str, position: int):
        super().__init__(
            f"Character {char!r} at position {position} is outside the checksum alphabet",
            ExceptionCode.INTERNAL_ERROR,
            {"char": char, "position": position},
        )
