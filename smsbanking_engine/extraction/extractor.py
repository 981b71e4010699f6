"""
Transaction Extractor for bank SMS alerts.
Turns one raw SMS into a structured Transaction or a Rejected value.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from decimal import InvalidOperation
from typing import Dict, Iterable, List, Optional, Tuple

from ..config.engine_config import EXTRACTION_CONFIG, merge_config
from ..models import (
    Direction,
    ExtractionResult,
    RawMessage,
    Rejected,
    RejectionReason,
    Transaction,
)
from ..patterns.sms_patterns import (
    ACCOUNT_RE,
    AMOUNT_RE,
    BALANCE_RE,
    CHANNEL_RES,
    DIRECTION_RES,
    LIMIT_RE,
    LOCATION_RE,
    OTP_RE,
    REFERENCE_RE,
    UPI_KEYWORD_RE,
    UPI_REFERENCE_RE,
    UPI_SENDER_RE,
    VPA_RE,
    VPA_WITH_CONTEXT_RE,
)
from ..registry.bank_registry import BankPatternRegistry, BankResolution, RuleResolution
from .preprocess import (
    MAX_MERCHANT_LENGTH,
    account_suffix,
    normalize_merchant_name,
    parse_amount,
    parse_optional_amount,
)
from .strategies import DEFAULT_MERCHANT_STRATEGIES, MerchantStrategy, first_match

logger = logging.getLogger(__name__)


@dataclass
class ExtractionBatch:
    """Per-item results of extracting a batch of messages."""
    transactions: List[Transaction] = field(default_factory=list)
    rejections: List[Rejected] = field(default_factory=list)
    rejection_summary: Dict[str, int] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return len(self.transactions) + len(self.rejections)


class TransactionExtractor:
    """Extracts structured transactions from bank SMS messages."""

    def __init__(
        self,
        registry: Optional[BankPatternRegistry] = None,
        config: Optional[Dict] = None,
        merchant_strategies: Optional[List[MerchantStrategy]] = None,
    ):
        """
        Initialize the extractor.

        Args:
            registry: Sender registry; a default registry is built if omitted
            config: Optional overrides for EXTRACTION_CONFIG
            merchant_strategies: Ordered merchant strategies; defaults to
                DEFAULT_MERCHANT_STRATEGIES
        """
        self.registry = registry if registry is not None else BankPatternRegistry()
        self.config = merge_config(EXTRACTION_CONFIG, config)
        self.max_merchant_length = int(self.config["max_merchant_length"])
        self.account_suffix_length = int(self.config["account_suffix_length"])
        self.amount_decimal_places = int(self.config["amount_decimal_places"])
        if self.max_merchant_length < 1 or self.account_suffix_length < 1 or self.amount_decimal_places < 0:
            raise ValueError(f"Invalid extraction config: {self.config}")
        self.merchant_strategies = list(
            DEFAULT_MERCHANT_STRATEGIES if merchant_strategies is None else merchant_strategies
        )

    def extract(self, message: RawMessage) -> ExtractionResult:
        """
        Extract a transaction from one SMS.

        Args:
            message: Raw SMS

        Returns:
            Transaction on success, Rejected otherwise (never raises for bad text)
        """
        body = message.body or ""
        if not body.strip():
            return Rejected(message.message_id, RejectionReason.EMPTY_BODY)

        resolution = self.registry.resolve(message.sender)
        rules = resolution.rules

        if OTP_RE.search(body):
            return Rejected(message.message_id, RejectionReason.OTP_MESSAGE)

        direction = classify_direction(body)

        raw_amount = self._find_amount(body, rules)
        if raw_amount is None:
            return Rejected(message.message_id, RejectionReason.NO_AMOUNT)
        try:
            amount = parse_amount(raw_amount, self.amount_decimal_places)
        except InvalidOperation:
            return Rejected(message.message_id, RejectionReason.INVALID_AMOUNT, raw_amount)
        if amount <= 0:
            return Rejected(message.message_id, RejectionReason.NON_POSITIVE_AMOUNT, raw_amount)

        is_upi = is_upi_message(message.sender, body)
        merchant, strategy = first_match(
            body, rules, self.merchant_strategies, self.max_merchant_length
        )
        if merchant:
            logger.debug(f"Message {message.message_id}: merchant '{merchant}' via {strategy}")

        return Transaction(
            external_id=message.message_id,
            amount=amount,
            direction=direction,
            timestamp=message.timestamp,
            raw_text=body,
            sender_identity=_sender_identity(message.sender, resolution),
            merchant=merchant,
            account_suffix=self._find_account_suffix(body),
            reference_number=_find_reference(body, rules, is_upi),
            balance_after=self._find_balance(body, rules),
            location=_find_location(body, self.max_merchant_length),
            upi_id=find_vpa(body),
            payment_method="UPI" if is_upi else _find_channel(body),
            bank_name=resolution.identity.display_name if resolution.identity else None,
        )

    def extract_batch(self, messages: Iterable[RawMessage]) -> ExtractionBatch:
        """
        Extract every message in a batch.

        Args:
            messages: Raw SMS messages

        Returns:
            ExtractionBatch with transactions, rejections and a per-reason count
        """
        batch = ExtractionBatch()
        reasons = Counter()
        for message in messages:
            result = self.extract(message)
            if isinstance(result, Rejected):
                batch.rejections.append(result)
                reasons[result.reason.value] += 1
            else:
                batch.transactions.append(result)
        batch.rejection_summary = dict(reasons)
        logger.debug(
            f"Extracted {len(batch.transactions)} transactions, rejected {len(batch.rejections)}"
        )
        return batch

    def is_transaction_message(self, message: RawMessage) -> bool:
        """
        Cheap check whether an SMS looks like a transaction alert.

        False for OTP messages, and for messages without an amount or a
        debit/credit keyword.
        """
        body = message.body or ""
        if not body.strip() or OTP_RE.search(body):
            return False
        rules = self.registry.resolve(message.sender).rules
        if self._find_amount(body, rules) is None:
            return False
        return classify_direction(body) != Direction.UNKNOWN

    def _find_amount(self, body: str, rules: RuleResolution) -> Optional[str]:
        """Captured amount text, skipping balances and card limits."""
        if rules.is_override:
            regex = rules.rule_set.compiled("amount_pattern")
            if regex is not None:
                match = regex.search(body)
                if match:
                    return match.group(1)

        masked = [m.span() for m in BALANCE_RE.finditer(body)]
        masked.extend(m.span() for m in LIMIT_RE.finditer(body))
        for match in AMOUNT_RE.finditer(body):
            start = match.start()
            if any(lo <= start < hi for lo, hi in masked):
                continue
            return match.group(1)
        return None

    def _find_account_suffix(self, body: str) -> Optional[str]:
        match = ACCOUNT_RE.search(body)
        if not match:
            return None
        return account_suffix(match.group(1), self.account_suffix_length)

    def _find_balance(self, body: str, rules: RuleResolution):
        if rules.is_override:
            regex = rules.rule_set.compiled("balance_pattern")
            if regex is not None:
                match = regex.search(body)
                if match:
                    return parse_optional_amount(match.group(1), self.amount_decimal_places)
        match = BALANCE_RE.search(body)
        if not match:
            return None
        return parse_optional_amount(match.group(1), self.amount_decimal_places)


def classify_direction(body: str) -> Direction:
    """
    Classify money movement from keywords.

    Strong verbs ("debited", "credited", "spent") are checked before weak
    nouns ("debit", "payment"). Within a tier the keyword that occurs first
    in the body wins; debit wins a tie at the same position.

    Args:
        body: SMS body

    Returns:
        Direction (UNKNOWN when no keyword matched)
    """
    for tier in ("strong", "weak"):
        earliest: Optional[Tuple[int, Direction]] = None
        for direction in (Direction.DEBIT, Direction.CREDIT):
            for regex in DIRECTION_RES[direction.value.lower()][tier]:
                match = regex.search(body)
                if match and (earliest is None or match.start() < earliest[0]):
                    earliest = (match.start(), direction)
        if earliest is not None:
            return earliest[1]
    return Direction.UNKNOWN


def is_upi_message(sender: str, body: str) -> bool:
    """True if the sender is a UPI app/bank UPI ID or the body mentions UPI."""
    return bool(UPI_SENDER_RE.search((sender or "").strip()) or UPI_KEYWORD_RE.search(body))


def find_vpa(body: str) -> Optional[str]:
    """UPI address in the message, preferring one with payee/payer context."""
    match = VPA_WITH_CONTEXT_RE.search(body) or VPA_RE.search(body)
    return match.group(1).lower() if match else None


def _find_reference(body: str, rules: RuleResolution, is_upi: bool) -> Optional[str]:
    regexes = []
    if rules.is_override and rules.rule_set.compiled("reference_pattern") is not None:
        regexes.append(rules.rule_set.compiled("reference_pattern"))
    if is_upi:
        regexes.append(UPI_REFERENCE_RE)
    regexes.append(REFERENCE_RE)

    for regex in regexes:
        match = regex.search(body)
        if match:
            return match.group(1)
    return None


def _find_location(body: str, max_length: int = MAX_MERCHANT_LENGTH) -> Optional[str]:
    match = LOCATION_RE.search(body)
    if not match:
        return None
    return normalize_merchant_name(match.group(1), max_length)


def _find_channel(body: str) -> Optional[str]:
    for channel, regexes in CHANNEL_RES:
        if any(regex.search(body) for regex in regexes):
            return channel
    return None


def _sender_identity(sender: str, resolution: BankResolution) -> str:
    if resolution.identity is not None:
        return resolution.identity.canonical_name
    return (sender or "").strip().upper()
