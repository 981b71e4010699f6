"""
SMS Pattern Definitions for the SMS banking engine.

Contains the regex and keyword patterns for extracting transactions:
- Amounts, balances, card limits and reference numbers
- Account suffixes, ATM locations and UPI addresses
- Direction keywords (debit/credit) and payment channels
- Merchant sub-patterns tried in order
- Supported institutions with their sender IDs and overrides
"""

from .sms_patterns import (
    DIRECTION_PATTERNS,
    CHANNEL_PATTERNS,
    MERCHANT_PATTERNS,
    AMOUNT_PATTERN,
    BALANCE_PATTERN,
    REFERENCE_PATTERN,
    UPI_REFERENCE_PATTERN,
)
from .bank_patterns import BANK_DEFINITIONS

__all__ = [
    "DIRECTION_PATTERNS",
    "CHANNEL_PATTERNS",
    "MERCHANT_PATTERNS",
    "AMOUNT_PATTERN",
    "BALANCE_PATTERN",
    "REFERENCE_PATTERN",
    "UPI_REFERENCE_PATTERN",
    "BANK_DEFINITIONS",
]
