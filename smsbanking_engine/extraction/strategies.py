"""
Merchant extraction strategies.

Each strategy is a small named object that looks for the merchant in one
way. The extractor tries them in order and keeps the first non-empty name.
"""

from typing import List, Optional, Pattern, Tuple

from ..patterns.sms_patterns import MERCHANT_RES, VPA_RE, VPA_WITH_CONTEXT_RE
from ..registry.bank_registry import GENERIC, RuleResolution
from .preprocess import MAX_MERCHANT_LENGTH, merchant_from_vpa, normalize_merchant_name


class MerchantStrategy:
    """Base class for a merchant extraction strategy."""

    name = "base"

    def extract(self, body: str, rules: RuleResolution = GENERIC,
                max_length: int = MAX_MERCHANT_LENGTH) -> Optional[str]:
        raise NotImplementedError

    def __repr__(self):
        return f"{self.__class__.__name__}({self.name!r})"


class RegexMerchantStrategy(MerchantStrategy):
    """Merchant captured by the first group of a regex."""

    def __init__(self, name: str, regex: Pattern, from_vpa: bool = False):
        self.name = name
        self.regex = regex
        # Capture is a VPA username rather than a display name
        self.from_vpa = from_vpa

    def extract(self, body, rules=GENERIC, max_length=MAX_MERCHANT_LENGTH):
        match = self.regex.search(body)
        if not match:
            return None
        if self.from_vpa:
            return merchant_from_vpa(match.group(1))
        return normalize_merchant_name(match.group(1), max_length)


class OverrideMerchantStrategy(MerchantStrategy):
    """Merchant pattern from the institution's rule-set override."""

    name = "override"

    def extract(self, body, rules=GENERIC, max_length=MAX_MERCHANT_LENGTH):
        if not rules.is_override:
            return None
        regex = rules.rule_set.compiled("merchant_pattern")
        if regex is None:
            return None
        match = regex.search(body)
        if not match:
            return None
        return normalize_merchant_name(match.group(1), max_length)


class AnyVpaMerchantStrategy(MerchantStrategy):
    """Last resort: derive the merchant from any UPI address in the message."""

    name = "any_vpa"

    def extract(self, body, rules=GENERIC, max_length=MAX_MERCHANT_LENGTH):
        match = VPA_WITH_CONTEXT_RE.search(body) or VPA_RE.search(body)
        if not match:
            return None
        return merchant_from_vpa(match.group(1))


DEFAULT_MERCHANT_STRATEGIES: Tuple[MerchantStrategy, ...] = (
    OverrideMerchantStrategy(),
    RegexMerchantStrategy("payee_phrase", MERCHANT_RES["payee_phrase"]),
    RegexMerchantStrategy("vpa", MERCHANT_RES["vpa"], from_vpa=True),
    RegexMerchantStrategy("at", MERCHANT_RES["at"]),
    RegexMerchantStrategy("to_from", MERCHANT_RES["to_from"]),
    RegexMerchantStrategy("info", MERCHANT_RES["info"]),
    AnyVpaMerchantStrategy(),
)


def first_match(
    body: str,
    rules: RuleResolution = GENERIC,
    strategies: Optional[List[MerchantStrategy]] = None,
    max_length: int = MAX_MERCHANT_LENGTH,
) -> Tuple[Optional[str], Optional[str]]:
    """
    Run merchant strategies in order.

    Args:
        body: SMS body
        rules: Resolved rules for the sender
        strategies: Strategies to try; defaults to DEFAULT_MERCHANT_STRATEGIES

    Returns:
        Tuple of (merchant, strategy_name), both None if nothing matched
    """
    for strategy in (DEFAULT_MERCHANT_STRATEGIES if strategies is None else strategies):
        merchant = strategy.extract(body, rules, max_length)
        if merchant:
            return merchant, strategy.name
    return None, None
