"""
Preprocessing utilities for SMS transaction extraction.
Handles amount parsing, merchant name normalization and VPA handling.
"""

import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional

from ..patterns.sms_patterns import MERCHANT_NOISE_RE


MAX_MERCHANT_LENGTH = 50

# Minimum length of a VPA username worth turning into a merchant name
MIN_VPA_USERNAME_LENGTH = 3

_CURRENCY_MARKERS_RE = re.compile(r"(?i)Rs\.?|₹|INR|\s")


def parse_amount(raw: Optional[str], places: int = 2) -> Decimal:
    """
    Parse an amount string captured from an SMS.

    Args:
        raw: Captured amount text, e.g. "5,00,000.00" or "Rs.500"
        places: Decimal places to quantize to (half-up)

    Returns:
        Decimal amount (may be zero or negative; callers decide validity)

    Raises:
        InvalidOperation: if the text is not a number

    Example:
        >>> parse_amount("1,23,456.789")
        Decimal('123456.79')
    """
    if raw is None:
        raise InvalidOperation("no amount text")
    cleaned = _CURRENCY_MARKERS_RE.sub("", raw).replace(",", "")
    if not cleaned:
        raise InvalidOperation(f"empty amount: {raw!r}")
    value = Decimal(cleaned)
    if not value.is_finite():
        raise InvalidOperation(f"non-finite amount: {raw!r}")
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def parse_optional_amount(raw: Optional[str], places: int = 2) -> Optional[Decimal]:
    """Parse an optional amount field; anything unparseable becomes None."""
    try:
        return parse_amount(raw, places)
    except InvalidOperation:
        return None


def account_suffix(digits: Optional[str], length: int = 4) -> Optional[str]:
    """Last `length` digits of an account or card number."""
    if not digits:
        return None
    digits = re.sub(r"\D", "", digits)
    if len(digits) < length:
        return None
    return digits[-length:]


def normalize_merchant_name(merchant_name: Optional[str], max_length: int = MAX_MERCHANT_LENGTH) -> Optional[str]:
    """
    Clean a raw merchant name captured from an SMS.

    Args:
        merchant_name: Raw merchant text

    Returns:
        Title-cased merchant name without company suffixes, or None if nothing is left

    Example:
        >>> normalize_merchant_name("  AMAZON   SELLER SERVICES PVT LTD  ")
        'Amazon Seller Services'
    """
    if not merchant_name or not merchant_name.strip():
        return None

    normalized = re.sub(r"\s+", " ", merchant_name.strip())
    normalized = MERCHANT_NOISE_RE.sub("", normalized)

    # "..." -> ".", "---" -> "-"
    normalized = re.sub(r"\.{2,}", ".", normalized)
    normalized = re.sub(r"-{2,}", "-", normalized)
    normalized = re.sub(r"_{2,}", "_", normalized)

    normalized = re.sub(r"[.,\-_]+$", "", normalized)
    normalized = re.sub(r"^[.,\-_]+", "", normalized)
    normalized = normalized.strip()

    if not normalized:
        return None

    normalized = " ".join(word[:1].upper() + word[1:].lower() for word in normalized.split(" "))
    return normalized[:max_length]


def merchant_from_vpa(vpa: Optional[str]) -> Optional[str]:
    """
    Derive a readable merchant name from a UPI address.

    Args:
        vpa: UPI virtual payment address, e.g. "amazon.pay@icici"

    Returns:
        Normalized merchant name, or None if the username is too short

    Example:
        >>> merchant_from_vpa("book-my-show@okaxis")
        'Book My Show'
    """
    if not vpa or not vpa.strip():
        return None

    username = vpa.split("@", 1)[0].strip()
    if len(username) < MIN_VPA_USERNAME_LENGTH:
        return None

    name = re.sub(r"[._-]", " ", username)

    # Drop digits only if something meaningful remains ("merchant123" but not "ab12")
    without_digits = re.sub(r"\d+", "", name).strip()
    if len(without_digits) >= MIN_VPA_USERNAME_LENGTH:
        name = without_digits

    return normalize_merchant_name(name)


def normalize_text(text: Optional[str]) -> str:
    """Lowercase and trim text for matching."""
    if not text:
        return ""
    return text.lower().strip()
