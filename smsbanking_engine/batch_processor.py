"""
SMS Batch Processor for turning an inbox dump into transactions.
Extracts, counts rejections and deduplicates with per-message error handling.
"""

import logging
import traceback
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional

from .dedup.dedup_engine import DeduplicationEngine
from .extraction.extractor import TransactionExtractor
from .models import RawMessage, Rejected, Transaction

logger = logging.getLogger(__name__)

# Column order of the transactions DataFrame
TRANSACTION_COLUMNS = [
    "External ID", "Timestamp", "Amount", "Direction", "Merchant", "Bank", "Account",
    "Reference", "Balance After", "Payment Method", "UPI ID", "Location",
]


@dataclass
class ProcessingError:
    """Details of a processing error."""
    message_id: str
    error_type: str
    error_message: str
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())


@dataclass
class BatchStats:
    """Statistics for batch processing."""
    total_messages: int = 0
    extracted: int = 0
    rejected: int = 0
    duplicates: int = 0
    failed: int = 0

    # Timing
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    @property
    def unique_transactions(self) -> int:
        return self.extracted - self.duplicates

    @property
    def processing_time(self) -> float:
        """Calculate total processing time in seconds."""
        if self.start_time and self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return 0.0

    @property
    def extraction_rate(self) -> float:
        """Calculate extraction rate as percentage."""
        if self.total_messages == 0:
            return 0.0
        return (self.extracted / self.total_messages) * 100


@dataclass
class BatchResult:
    """Complete result of batch processing."""
    stats: BatchStats
    transactions: List[Transaction]
    rejections: List[Rejected]
    errors: List[ProcessingError]
    rejection_summary: Dict[str, int] = field(default_factory=dict)
    error_summary: Dict[str, int] = field(default_factory=dict)

    def to_dataframe(self):
        """Accepted transactions as a pandas DataFrame."""
        return SmsBatchProcessor.transactions_to_dataframe(self.transactions)


class SmsBatchProcessor:
    """Batch processor for bank SMS messages."""

    def __init__(
        self,
        extractor: Optional[TransactionExtractor] = None,
        dedup_engine: Optional[DeduplicationEngine] = None,
    ):
        """
        Initialize the batch processor.

        Args:
            extractor: Transaction extractor (a default one is built if omitted)
            dedup_engine: Deduplication engine (a default one is built if omitted)
        """
        self.extractor = extractor if extractor is not None else TransactionExtractor()
        self.dedup_engine = dedup_engine if dedup_engine is not None else DeduplicationEngine()

        logger.info(
            f"Initialized batch processor: {self.extractor.registry.bank_count} banks, "
            f"dedup window={self.dedup_engine.tolerance_seconds:.0f}s"
        )

    def process_batch(
        self,
        messages: Iterable[RawMessage],
        known: Optional[Iterable[Transaction]] = None,
        progress_callback: Optional[Callable[[int, int, str], None]] = None
    ) -> BatchResult:
        """
        Process a batch of SMS messages.

        Args:
            messages: Raw SMS messages
            known: Transactions already stored; new ones duplicating them are dropped
            progress_callback: Optional callback(current, total, message)

        Returns:
            BatchResult with unique transactions, rejections and errors
        """
        messages = list(messages)
        stats = BatchStats(
            total_messages=len(messages),
            start_time=datetime.now()
        )

        extracted = []
        rejections = []
        errors = []
        rejection_types = {}
        error_types = {}

        logger.info(f"Starting batch processing of {len(messages)} messages")

        for idx, message in enumerate(messages):
            try:
                if progress_callback:
                    progress_callback(idx + 1, len(messages), f"Processing: {message.message_id}")

                result = self.extractor.extract(message)

                if isinstance(result, Rejected):
                    rejections.append(result)
                    stats.rejected += 1
                    reason = result.reason.value
                    rejection_types[reason] = rejection_types.get(reason, 0) + 1
                    logger.debug(f"Rejected message {message.message_id}: {reason}")
                else:
                    extracted.append(result)
                    stats.extracted += 1

            except Exception as e:
                error = ProcessingError(
                    message_id=getattr(message, "message_id", str(idx)),
                    error_type="PROCESSING_ERROR",
                    error_message=f"{type(e).__name__}: {str(e)}"
                )
                errors.append(error)
                stats.failed += 1
                error_types["PROCESSING_ERROR"] = error_types.get("PROCESSING_ERROR", 0) + 1
                logger.error(f"Processing error in message {error.message_id}: {traceback.format_exc()}")

        if known is not None:
            transactions = self.dedup_engine.dedupe_against(extracted, known)
        else:
            transactions = self.dedup_engine.dedupe(extracted)
        stats.duplicates = len(extracted) - len(transactions)

        stats.end_time = datetime.now()

        logger.info(
            f"Batch processing complete: {stats.extracted}/{stats.total_messages} extracted, "
            f"{stats.duplicates} duplicates, {stats.rejected} rejected, {stats.failed} failed, "
            f"time: {stats.processing_time:.1f}s"
        )

        return BatchResult(
            stats=stats,
            transactions=transactions,
            rejections=rejections,
            errors=errors,
            rejection_summary=rejection_types,
            error_summary=error_types
        )

    @staticmethod
    def transactions_to_dataframe(transactions: List[Transaction]):
        """
        Convert transactions to a pandas DataFrame.

        Args:
            transactions: List of Transaction objects

        Returns:
            pandas DataFrame, one row per transaction
        """
        import pandas as pd

        rows = []
        for txn in transactions:
            rows.append({
                "External ID": txn.external_id,
                "Timestamp": txn.timestamp,
                "Amount": float(txn.amount),
                "Direction": txn.direction.value,
                "Merchant": txn.merchant,
                "Bank": txn.bank_name,
                "Account": txn.account_suffix,
                "Reference": txn.reference_number,
                "Balance After": float(txn.balance_after) if txn.balance_after is not None else None,
                "Payment Method": txn.payment_method,
                "UPI ID": txn.upi_id,
                "Location": txn.location,
            })

        return pd.DataFrame(rows, columns=TRANSACTION_COLUMNS)

    @staticmethod
    def errors_to_dataframe(errors: List[ProcessingError]):
        """
        Convert processing errors to a pandas DataFrame.

        Args:
            errors: List of ProcessingError objects

        Returns:
            pandas DataFrame
        """
        import pandas as pd

        rows = []
        for error in errors:
            row = {
                "Message ID": error.message_id,
                "Error Type": error.error_type,
                "Error Message": error.error_message,
                "Timestamp": error.timestamp,
            }
            rows.append(row)

        return pd.DataFrame(rows)

