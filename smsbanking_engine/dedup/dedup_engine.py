"""
Deduplication Engine for extracted SMS transactions.

Banks re-deliver the same alert and message sources re-sync old inboxes,
so one real transaction often shows up as several near-identical records.
"""

import logging
from datetime import timedelta
from typing import Dict, Iterable, List, Optional, Tuple

from ..config.engine_config import DEDUP_CONFIG, merge_config
from ..models import Transaction

logger = logging.getLogger(__name__)


class DeduplicationEngine:
    """Collapses repeated deliveries of one transaction into one record."""

    def __init__(self, config: Optional[Dict] = None):
        """
        Initialize the engine.

        Args:
            config: Optional overrides for DEDUP_CONFIG

        Raises:
            ValueError: if tolerance_seconds is not positive
        """
        self.config = merge_config(DEDUP_CONFIG, config)
        self.tolerance_seconds = float(self.config["tolerance_seconds"])
        if self.tolerance_seconds <= 0:
            raise ValueError(f"tolerance_seconds must be positive, got {self.tolerance_seconds}")
        self.tolerance = timedelta(seconds=self.tolerance_seconds)

    def is_duplicate_of(self, candidate: Transaction, existing: Transaction) -> bool:
        """
        Check whether two transactions are the same logical transaction.

        When both carry a reference number the references decide alone.
        Otherwise amount, direction and account suffix must match and the
        timestamps must be strictly closer than the tolerance window.

        Args:
            candidate: Transaction being checked
            existing: Transaction already known

        Returns:
            True if duplicate (symmetric in its arguments)
        """
        if candidate.reference_number and existing.reference_number:
            return candidate.reference_number == existing.reference_number

        if candidate.amount != existing.amount:
            return False
        if candidate.direction != existing.direction:
            return False
        if candidate.account_suffix != existing.account_suffix:
            return False

        return abs(candidate.timestamp - existing.timestamp) < self.tolerance

    def duplicate_key(self, transaction: Transaction) -> Tuple:
        """
        Derived grouping key for a transaction.

        Equal keys always mean duplicates, but the time bucket has fixed edges,
        so two duplicates a few seconds apart across an edge get different
        keys. Use the key to group candidates; is_duplicate_of decides.

        Returns:
            ("ref", reference) when a reference is present, else
            ("fallback", amount, direction, account_suffix, time_bucket)
        """
        if transaction.reference_number:
            return ("ref", transaction.reference_number)
        time_bucket = int(transaction.timestamp.timestamp() // self.tolerance_seconds)
        return (
            "fallback",
            transaction.amount,
            transaction.direction,
            transaction.account_suffix,
            time_bucket,
        )

    def dedupe(self, transactions: Iterable[Transaction]) -> List[Transaction]:
        """
        Remove duplicates from a batch.

        The earliest transaction of each duplicate group is kept (input order
        breaks timestamp ties) and survivors come back in input order.

        Args:
            transactions: Transactions to deduplicate

        Returns:
            Deduplicated transactions in input order
        """
        items = list(transactions)
        order = sorted(range(len(items)), key=lambda i: (items[i].timestamp, i))

        kept_indices = []
        for index in order:
            candidate = items[index]
            if any(self.is_duplicate_of(candidate, items[kept]) for kept in kept_indices):
                continue
            kept_indices.append(index)

        survivors = [items[i] for i in sorted(kept_indices)]
        if len(survivors) < len(items):
            logger.debug(f"Dropped {len(items) - len(survivors)} duplicate transactions out of {len(items)}")
        return survivors

    def find_duplicate(self, candidate: Transaction, known: Iterable[Transaction]) -> Optional[Transaction]:
        """First transaction in `known` that `candidate` duplicates, or None."""
        for existing in known:
            if self.is_duplicate_of(candidate, existing):
                return existing
        return None

    def dedupe_against(self, candidates: Iterable[Transaction], known: Iterable[Transaction]) -> List[Transaction]:
        """
        Deduplicate new transactions against an already stored set.

        Args:
            candidates: Newly extracted transactions
            known: Transactions already stored

        Returns:
            Candidates that duplicate neither a known transaction nor each other
        """
        known = list(known)
        fresh = [c for c in self.dedupe(candidates) if self.find_duplicate(c, known) is None]
        return fresh
