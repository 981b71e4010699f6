"""
Sender registry for the SMS banking engine.

Resolves SMS sender IDs to institutions and picks generic or
institution-specific extraction rules.
"""

from .bank_registry import (
    BankPatternRegistry,
    BankIdentity,
    BankResolution,
    ExtractionRuleSet,
    GenericRules,
    OverrideRules,
    GENERIC,
    InvalidPatternError,
    DuplicateSenderAliasError,
    bare_sender_id,
)

__all__ = [
    "BankPatternRegistry",
    "BankIdentity",
    "BankResolution",
    "ExtractionRuleSet",
    "GenericRules",
    "OverrideRules",
    "GENERIC",
    "InvalidPatternError",
    "DuplicateSenderAliasError",
    "bare_sender_id",
]
