"""
Identifier Validator
GSTIN / PAN / ARN structural checks and the GSTIN mod-36 checksum

Inputs are expected to be trimmed and upper-cased by the caller; no case
normalization happens here.
"""

import re
from typing import Dict, Optional

from loguru import logger

from models.validation import ValidationResult
from utils.exceptions import ChecksumAlphabetError


CHECKSUM_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"

STATE_CODES: Dict[str, str] = {
    '01': 'Jammu and Kashmir', '02': 'Himachal Pradesh', '03': 'Punjab',
    '04': 'Chandigarh', '05': 'Uttarakhand', '06': 'Haryana',
    '07': 'Delhi', '08': 'Rajasthan', '09': 'Uttar Pradesh',
    '10': 'Bihar', '11': 'Sikkim', '12': 'Arunachal Pradesh',
    '13': 'Nagaland', '14': 'Manipur', '15': 'Mizoram',
    '16': 'Tripura', '17': 'Meghalaya', '18': 'Assam',
    '19': 'West Bengal', '20': 'Jharkhand', '21': 'Odisha',
    '22': 'Chhattisgarh', '23': 'Madhya Pradesh', '24': 'Gujarat',
    '25': 'Daman and Diu', '26': 'Dadra and Nagar Haveli', '27': 'Maharashtra',
    '28': 'Andhra Pradesh (Old)', '29': 'Karnataka', '30': 'Goa',
    '31': 'Lakshadweep', '32': 'Kerala', '33': 'Tamil Nadu',
    '34': 'Puducherry', '35': 'Andaman and Nicobar Islands', '36': 'Telangana',
    '37': 'Andhra Pradesh (New)', '97': 'Other Territory', '99': 'Centre Jurisdiction',
}

PAN_HOLDER_TYPES: Dict[str, str] = {
    'P': 'Individual/Person',
    'C': 'Company',
    'H': 'HUF (Hindu Undivided Family)',
    'F': 'Firm/Partnership',
    'A': 'Association of Persons',
    'T': 'Trust',
    'B': 'Body of Individuals',
    'L': 'Local Authority',
    'J': 'Artificial Juridical Person',
    'G': 'Government',
}

GSTIN_LENGTH = 15
PAN_LENGTH = 10
ARN_LENGTH = 20


def calculate_gstin_checksum(gstin_without_checksum: str) -> str:
    """
    Mod-36 checksum over the first 14 GSTIN characters.

    Walks right to left; the factor starts at 2 on the last character and
    alternates 2, 1, 2, ... Each product is folded as product // 36 + product % 36.
    """
    factor = 2
    total = 0

    for position in range(len(gstin_without_checksum) - 1, -1, -1):
        char = gstin_without_checksum[position]
        code_point = CHECKSUM_ALPHABET.find(char)
        if code_point < 0:
            raise ChecksumAlphabetError(char, position)

        addend = factor * code_point
        factor = 1 if factor == 2 else 2
        total += addend // 36 + addend % 36

    check_code_point = (36 - total % 36) % 36
    return CHECKSUM_ALPHABET[check_code_point]


class IdentifierValidator:
    """
    Validates government-issued identifiers.

    Checks never raise for bad input: every problem found is accumulated in
    the returned ValidationResult so a form can surface them all at once.
    Only a wrong length short-circuits, since positional checks would be
    meaningless after it.
    """

    def __init__(self, config: dict = None):
        self.config = config or {}

        self.gstin_pattern = re.compile(r'^[0-9]{2}[A-Z]{5}[0-9]{4}[A-Z]{1}[0-9A-Z]{1}Z[0-9A-Z]{1}$')
        self.pan_pattern = re.compile(r'^[A-Z]{5}[0-9]{4}[A-Z]{1}$')
        self.arn_pattern = re.compile(r'^AA[0-9]{2}[0-9]{2}[0-9]{14}$')

    def validate_gstin(self, gstin: str) -> ValidationResult:
        """
        Validate GSTIN format, embedded PAN, state code and checksum

        Format: 2 digits (state) + 10 chars (PAN) + 1 char (entity) + Z + 1 char (checksum)
        Example: 27AAPFU0939F1ZV
        """
        result = ValidationResult()

        if not gstin or len(gstin) != GSTIN_LENGTH:
            result.add_error("GSTIN must be exactly 15 characters long")
            return result

        if not self.gstin_pattern.match(gstin):
            result.add_error("GSTIN format is invalid. Expected format: 22AAAAA0000A1Z5")

        state_code = gstin[:2]
        if state_code not in STATE_CODES:
            result.add_error(f"Invalid state code: {state_code}")

        pan = gstin[2:12]
        if not self.pan_pattern.match(pan):
            result.add_error("Invalid PAN format within GSTIN")

        if gstin[13] != 'Z':
            result.add_warning("14th character should be 'Z' for regular taxpayers")

        checksum_char = gstin[14]
        try:
            expected = calculate_gstin_checksum(gstin[:14])
        except ChecksumAlphabetError as e:
            # Only reachable when the pattern check has already failed
            logger.debug(f"Checksum skipped for {gstin}: {e.message}")
            result.add_error(f"Invalid checksum. Unsupported character in GSTIN: {e.details['char']!r}")
        else:
            if checksum_char != expected:
                result.add_error(f"Invalid checksum. Expected: {expected}, Got: {checksum_char}")

        return result

    def validate_pan(self, pan: str) -> ValidationResult:
        """
        Validate PAN format

        Format: 5 letters + 4 digits + 1 letter
        Example: AAPFU0939F
        """
        result = ValidationResult()

        if not pan or len(pan) != PAN_LENGTH:
            result.add_error("PAN must be exactly 10 characters long")
            return result

        if not self.pan_pattern.match(pan):
            result.add_error("Invalid PAN format. Expected format: AAAAA9999A")

        # Unknown holder types may be newly issued codes, so only warn
        holder_type = pan[3]
        if holder_type not in PAN_HOLDER_TYPES:
            result.add_warning(f"Unusual 4th character '{holder_type}' in PAN")

        return result

    def validate_arn(self, arn: str) -> ValidationResult:
        """
        Validate ARN (Acknowledgement Reference Number) format

        Format: AA + 2-digit state + 2-digit year + 14-digit number
        Example: AA270220231234567890
        """
        result = ValidationResult()

        if not arn or len(arn) != ARN_LENGTH:
            result.add_error("ARN must be exactly 20 characters long")
            return result

        if not self.arn_pattern.match(arn):
            result.add_error("Invalid ARN format. Expected format: AA27022023XXXXXXXXXX")

        state_code = arn[2:4]
        if state_code not in STATE_CODES:
            result.add_warning(f"Unusual state code in ARN: {state_code}")

        return result

    def validate(self, identifier: str) -> ValidationResult:
        """Dispatch on identifier length: 15 -> GSTIN, 10 -> PAN, 20 -> ARN"""
        length = len(identifier or '')
        if length == GSTIN_LENGTH:
            return self.validate_gstin(identifier)
        if length == PAN_LENGTH:
            return self.validate_pan(identifier)
        if length == ARN_LENGTH:
            return self.validate_arn(identifier)
        return ValidationResult.failure(
            f"Unrecognized identifier length {length}: expected 15 (GSTIN), 10 (PAN) or 20 (ARN)"
        )


def get_state_name(state_code: str) -> str:
    """Extract state name from state code"""
    return STATE_CODES.get(state_code, 'Unknown State')


def validate_gstin_state(gstin: str, state_name: str) -> bool:
    """Check if GSTIN state matches provided state"""
    expected_state = get_state_name((gstin or '')[:2]).lower()
    provided = (state_name or '').lower()
    if not provided:
        return False
    return provided in expected_state or expected_state in provided


def get_pan_holder_type(pan: str) -> Optional[str]:
    """Describe the holder type encoded in the PAN's 4th character"""
    if not pan or len(pan) < 4:
        return None
    return PAN_HOLDER_TYPES.get(pan[3])


_default_validator = IdentifierValidator()


# Convenience functions
def validate_gstin(gstin: str) -> ValidationResult:
    return _default_validator.validate_gstin(gstin)


def validate_pan(pan: str) -> ValidationResult:
    return _default_validator.validate_pan(pan)


def validate_arn(arn: str) -> ValidationResult:
    return _default_validator.validate_arn(arn)
