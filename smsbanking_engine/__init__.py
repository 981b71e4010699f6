"""
SMS Banking Engine - Transaction extraction from Indian bank SMS alerts.

A modular system for turning raw bank SMS into structured, deduplicated
transactions and suggesting a spending category for each.

Main Components:
    - patterns: SMS regexes, keywords and supported institutions
    - registry: Sender ID resolution and rule-set overrides
    - extraction: SMS to Transaction extraction
    - dedup: Duplicate delivery detection
    - categorisation: Category catalog and suggestion engine
    - config: Policy thresholds and category CSV loader
"""

from typing import Dict, List, Optional, Union
from datetime import datetime

from .models import (
    Direction,
    RejectionReason,
    RawMessage,
    Transaction,
    Rejected,
    ExtractionResult,
)

# Sender resolution
from .registry.bank_registry import (
    BankPatternRegistry,
    BankIdentity,
    BankResolution,
    ExtractionRuleSet,
    GenericRules,
    OverrideRules,
    GENERIC,
    InvalidPatternError,
    DuplicateSenderAliasError,
)

# Extraction
from .extraction.extractor import TransactionExtractor, ExtractionBatch

# Deduplication
from .dedup.dedup_engine import DeduplicationEngine

# Categorisation
from .categorisation.categories import Category, CategoryCatalog, DEFAULT_CATEGORIES
from .categorisation.suggestion_engine import (
    CategorySuggestionEngine,
    CategorySuggestion,
    ConfidenceLevel,
    PatternCache,
    confidence_level,
)

# Configuration
from .config.engine_config import (
    REGISTRY_CONFIG,
    EXTRACTION_CONFIG,
    DEDUP_CONFIG,
    SUGGESTION_CONFIG,
)

from .batch_processor import SmsBatchProcessor, BatchResult, BatchStats, ProcessingError


__version__ = "1.0.0"
__all__ = [
    # Data model
    "Direction",
    "RejectionReason",
    "RawMessage",
    "Transaction",
    "Rejected",
    "ExtractionResult",
    # Registry
    "BankPatternRegistry",
    "BankIdentity",
    "BankResolution",
    "ExtractionRuleSet",
    "GenericRules",
    "OverrideRules",
    "GENERIC",
    "InvalidPatternError",
    "DuplicateSenderAliasError",
    # Extraction
    "TransactionExtractor",
    "ExtractionBatch",
    # Deduplication
    "DeduplicationEngine",
    # Categorisation
    "Category",
    "CategoryCatalog",
    "DEFAULT_CATEGORIES",
    "CategorySuggestionEngine",
    "CategorySuggestion",
    "ConfidenceLevel",
    "PatternCache",
    "confidence_level",
    # Configuration
    "REGISTRY_CONFIG",
    "EXTRACTION_CONFIG",
    "DEDUP_CONFIG",
    "SUGGESTION_CONFIG",
    # Batch processing
    "SmsBatchProcessor",
    "BatchResult",
    "BatchStats",
    "ProcessingError",
    # Main function
    "run_sms_pipeline",
]


def _to_raw_message(message: Union[RawMessage, Dict]) -> RawMessage:
    if isinstance(message, RawMessage):
        return message
    timestamp = message["timestamp"]
    if isinstance(timestamp, str):
        timestamp = datetime.fromisoformat(timestamp)
    return RawMessage(
        message_id=str(message["message_id"]),
        sender=message.get("sender", ""),
        body=message.get("body", ""),
        timestamp=timestamp,
        is_read=bool(message.get("is_read", False)),
    )


def run_sms_pipeline(
    messages: List[Union[RawMessage, Dict]],
    known_transactions: Optional[List[Transaction]] = None,
    suggestion_engine: Optional[CategorySuggestionEngine] = None,
    max_suggestions: int = 3,
) -> Dict:
    """
    Main entry point for SMS transaction extraction.

    This function orchestrates the complete pipeline:
    1. Resolve each sender and extract transactions
    2. Deduplicate repeat deliveries (and against known transactions)
    3. Suggest categories for each new transaction
    4. Return transactions, suggestions and batch statistics

    Args:
        messages: RawMessage objects or dictionaries with keys:
            - message_id: Stable source id
            - sender: SMS sender ID (e.g. "VM-HDFCBK")
            - body: SMS text
            - timestamp: datetime or ISO 8601 string
        known_transactions: Transactions already stored (optional)
        suggestion_engine: Engine to suggest categories with; a cold-start
            engine over the built-in categories is used if omitted
        max_suggestions: Suggestions per transaction

    Returns:
        Dictionary containing:
            - transactions: List of transaction dictionaries
            - suggestions: {external_id: [{category_id, category_name, confidence, confidence_level, reason}]}
            - rejections: {message_id: reason}
            - rejection_summary: Count of rejections per reason
            - stats: Batch counts

    Example:
        >>> result = run_sms_pipeline([
        ...     {
        ...         "message_id": "sms-1",
        ...         "sender": "VM-SBIINB",
        ...         "body": "Rs.500.00 debited from A/c XX1234 on 03-01-26. Avl Bal Rs.10000.00. Ref No 123456789012",
        ...         "timestamp": "2026-01-03T10:00:00",
        ...     }
        ... ])
        >>> result["transactions"][0]["amount"]
        '500.00'
    """
    processor = SmsBatchProcessor()
    batch = processor.process_batch(
        [_to_raw_message(m) for m in messages],
        known=known_transactions,
    )

    engine = suggestion_engine if suggestion_engine is not None else CategorySuggestionEngine()
    suggestions = {}
    for txn in batch.transactions:
        suggestions[txn.external_id] = [
            {
                "category_id": s.category.id,
                "category_name": s.category.name,
                "confidence": round(s.confidence, 4),
                "confidence_level": s.confidence_level.value,
                "reason": s.reason,
            }
            for s in engine.suggest(txn, max_suggestions)
        ]

    return {
        "transactions": [txn.to_dict() for txn in batch.transactions],
        "suggestions": suggestions,
        "rejections": {r.message_id: r.reason.value for r in batch.rejections},
        "rejection_summary": batch.rejection_summary,
        "stats": {
            "total_messages": batch.stats.total_messages,
            "extracted": batch.stats.extracted,
            "rejected": batch.stats.rejected,
            "duplicates": batch.stats.duplicates,
            "failed": batch.stats.failed,
        },
    }
