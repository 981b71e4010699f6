"""
Core data model for the SMS banking pipeline.

Messages come in as RawMessage values, the extractor turns them into
Transaction values or Rejected values, and both are immutable once built.
"""

from dataclasses import dataclass, asdict
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Dict, Optional, Union


class Direction(Enum):
    """Money movement relative to the user's account."""
    DEBIT = "DEBIT"
    CREDIT = "CREDIT"
    UNKNOWN = "UNKNOWN"


class RejectionReason(Enum):
    """Why a message did not yield a transaction."""
    EMPTY_BODY = "EMPTY_BODY"
    OTP_MESSAGE = "OTP_MESSAGE"
    NO_AMOUNT = "NO_AMOUNT"
    INVALID_AMOUNT = "INVALID_AMOUNT"
    NON_POSITIVE_AMOUNT = "NON_POSITIVE_AMOUNT"


@dataclass(frozen=True)
class RawMessage:
    """An SMS as delivered by the message source."""
    message_id: str
    sender: str
    body: str
    timestamp: datetime
    is_read: bool = False


@dataclass(frozen=True)
class Transaction:
    """A structured transaction extracted from one bank SMS."""
    external_id: str
    amount: Decimal
    direction: Direction
    timestamp: datetime
    raw_text: str
    sender_identity: str
    merchant: Optional[str] = None
    account_suffix: Optional[str] = None
    reference_number: Optional[str] = None
    balance_after: Optional[Decimal] = None
    location: Optional[str] = None
    upi_id: Optional[str] = None
    payment_method: Optional[str] = None
    bank_name: Optional[str] = None

    def __post_init__(self):
        if self.amount is None or self.amount <= 0:
            raise ValueError(f"Transaction amount must be positive, got {self.amount}")

    def to_dict(self) -> Dict:
        """Flatten into plain values (enum as its value, decimals as strings)."""
        data = asdict(self)
        data["direction"] = self.direction.value
        data["amount"] = str(self.amount)
        data["balance_after"] = str(self.balance_after) if self.balance_after is not None else None
        return data


@dataclass(frozen=True)
class Rejected:
    """Signal that a message is not a usable bank transaction."""
    message_id: str
    reason: RejectionReason
    detail: str = ""


ExtractionResult = Union[Transaction, Rejected]
