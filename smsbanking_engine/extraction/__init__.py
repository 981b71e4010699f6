"""
Extraction module for the SMS banking engine.

This module turns raw bank SMS into structured transactions:
- Amount, balance and reference parsing
- Debit/credit classification
- Ordered merchant strategies
"""

from .extractor import (
    TransactionExtractor,
    ExtractionBatch,
    classify_direction,
    is_upi_message,
    find_vpa,
)
from .preprocess import (
    parse_amount,
    normalize_merchant_name,
    merchant_from_vpa,
    account_suffix,
)
from .strategies import (
    MerchantStrategy,
    RegexMerchantStrategy,
    OverrideMerchantStrategy,
    AnyVpaMerchantStrategy,
    DEFAULT_MERCHANT_STRATEGIES,
    first_match,
)

__all__ = [
    "TransactionExtractor",
    "ExtractionBatch",
    "classify_direction",
    "is_upi_message",
    "find_vpa",
    "parse_amount",
    "normalize_merchant_name",
    "merchant_from_vpa",
    "account_suffix",
    "MerchantStrategy",
    "RegexMerchantStrategy",
    "OverrideMerchantStrategy",
    "AnyVpaMerchantStrategy",
    "DEFAULT_MERCHANT_STRATEGIES",
    "first_match",
]
