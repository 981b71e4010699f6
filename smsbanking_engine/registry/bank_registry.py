"""
Bank Pattern Registry for SMS sender resolution.

Maps an SMS sender ID (e.g. "VM-HDFCBK", "JD-SBIINB-S") to the institution
that sent it and to the extraction rules the extractor should apply.
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Pattern, Tuple, Union

from ..config.engine_config import REGISTRY_CONFIG, merge_config
from ..patterns.bank_patterns import BANK_DEFINITIONS
from ..patterns.sms_patterns import CARRIER_PREFIX_RE, TRAI_SUFFIX_RE

logger = logging.getLogger(__name__)


class InvalidPatternError(ValueError):
    """Raised when an override rule set contains an unusable regex."""
    pass


class DuplicateSenderAliasError(ValueError):
    """Raised when two institutions claim the same sender alias."""
    pass


@dataclass(frozen=True)
class BankIdentity:
    """An institution and every sender ID it sends alerts from."""
    canonical_name: str
    display_name: str
    sender_aliases: frozenset


@dataclass(frozen=True)
class ExtractionRuleSet:
    """
    Institution-specific replacements for generic extraction patterns.

    Each pattern is a regex string whose first capturing group holds the
    value. Unset patterns fall through to the generic ones. Patterns are
    compiled once here so a broken rule fails at load time, not per message.
    """
    amount_pattern: Optional[str] = None
    balance_pattern: Optional[str] = None
    reference_pattern: Optional[str] = None
    merchant_pattern: Optional[str] = None

    def __post_init__(self):
        compiled = {}
        for name in ("amount_pattern", "balance_pattern", "reference_pattern", "merchant_pattern"):
            pattern = getattr(self, name)
            if pattern is None:
                continue
            try:
                regex = re.compile(pattern)
            except re.error as e:
                raise InvalidPatternError(f"{name} does not compile: {e}") from e
            if regex.groups < 1:
                raise InvalidPatternError(f"{name} needs a capturing group: {pattern!r}")
            compiled[name] = regex
        object.__setattr__(self, "_compiled", compiled)

    def compiled(self, name: str) -> Optional[Pattern]:
        """Compiled regex for a pattern field, or None when not overridden."""
        return self._compiled.get(name)

    @classmethod
    def from_dict(cls, data: Dict) -> "ExtractionRuleSet":
        unknown = set(data) - {"amount_pattern", "balance_pattern", "reference_pattern", "merchant_pattern"}
        if unknown:
            raise InvalidPatternError(f"Unknown rule set keys: {sorted(unknown)}")
        return cls(**data)


@dataclass(frozen=True)
class GenericRules:
    """The institution follows the common SMS format."""
    rule_set: None = None

    @property
    def is_override(self) -> bool:
        return False


@dataclass(frozen=True)
class OverrideRules:
    """The institution needs its own patterns for some fields."""
    rule_set: ExtractionRuleSet

    @property
    def is_override(self) -> bool:
        return True


GENERIC = GenericRules()

RuleResolution = Union[GenericRules, OverrideRules]


@dataclass(frozen=True)
class BankResolution:
    """Result of resolving a sender ID."""
    identity: Optional[BankIdentity]
    rules: RuleResolution
    matched_by: str  # 'exact', 'bare', 'contains', 'none'

    @property
    def is_known(self) -> bool:
        return self.identity is not None


def bare_sender_id(sender: str) -> str:
    """
    Strip carrier decorations from a normalized sender ID.

    Args:
        sender: Uppercase sender ID

    Returns:
        Sender ID without the carrier prefix ("VM-") or TRAI suffix ("-S")

    Example:
        >>> bare_sender_id("JD-HDFCBK-S")
        'HDFCBK'
    """
    bare = CARRIER_PREFIX_RE.sub("", sender)
    return TRAI_SUFFIX_RE.sub("", bare)


class BankPatternRegistry:
    """Resolves SMS sender IDs to institutions and extraction rules."""

    def __init__(self, definitions: Optional[Dict[str, Dict]] = None, config: Optional[Dict] = None):
        """
        Build the registry from institution definitions.

        Args:
            definitions: Mapping of bank name to {"display_name", "sender_ids", "patterns"};
                defaults to BANK_DEFINITIONS
            config: Optional overrides for REGISTRY_CONFIG
        """
        self.config = merge_config(REGISTRY_CONFIG, config)
        self.min_contains_alias_length = int(self.config["min_contains_alias_length"])
        if self.min_contains_alias_length < 1:
            raise ValueError("min_contains_alias_length must be at least 1")

        self._banks: List[Tuple[BankIdentity, RuleResolution]] = []
        self._exact: Dict[str, Tuple[BankIdentity, RuleResolution]] = {}
        self._bare: Dict[str, Tuple[BankIdentity, RuleResolution]] = {}
        self._contains_sorted: List[Tuple[str, Tuple[BankIdentity, RuleResolution]]] = []

        for bank_name, info in (BANK_DEFINITIONS if definitions is None else definitions).items():
            identity = BankIdentity(
                canonical_name=bank_name,
                display_name=info.get("display_name", bank_name),
                sender_aliases=frozenset(alias.strip().upper() for alias in info["sender_ids"]),
            )
            patterns = info.get("patterns")
            rule_set = ExtractionRuleSet.from_dict(patterns) if patterns else None
            self.register_bank(identity, rule_set)

        logger.debug(f"Bank registry loaded: {self.bank_count} institutions, {len(self._exact)} sender IDs")

    def register_bank(self, identity: BankIdentity, rule_set: Optional[ExtractionRuleSet] = None) -> None:
        """
        Register an institution with its optional rule-set override.

        Raises:
            DuplicateSenderAliasError: if an alias already belongs to another institution
        """
        rules = OverrideRules(rule_set) if rule_set is not None else GENERIC
        entry = (identity, rules)

        for alias in identity.sender_aliases:
            for index, key in ((self._exact, alias), (self._bare, bare_sender_id(alias))):
                owner = index.get(key)
                if owner is not None and owner[0].canonical_name != identity.canonical_name:
                    raise DuplicateSenderAliasError(
                        f"Sender ID '{alias}' of {identity.canonical_name} "
                        f"already belongs to {owner[0].canonical_name}"
                    )

        for alias in identity.sender_aliases:
            self._exact[alias] = entry
            self._bare[bare_sender_id(alias)] = entry

        self._banks.append(entry)

        # Longest first so "HDFCBANK" wins over "HDFCBK"-like prefixes
        self._contains_sorted = sorted(
            (
                (bare, bank_entry)
                for bare, bank_entry in self._bare.items()
                if len(bare) >= self.min_contains_alias_length
            ),
            key=lambda item: len(item[0]),
            reverse=True,
        )

    def resolve(self, sender: str) -> BankResolution:
        """
        Resolve a sender ID to an institution and its rules.

        Matching order: exact alias, bare sender ID (carrier prefix and TRAI
        suffix stripped), then containment of a known alias. An unknown
        sender is not an error; it resolves to the generic rules.

        Args:
            sender: SMS sender ID/address

        Returns:
            BankResolution (identity is None for unknown senders)
        """
        normalized = (sender or "").strip().upper()
        if not normalized:
            return BankResolution(identity=None, rules=GENERIC, matched_by="none")

        entry = self._exact.get(normalized)
        if entry is not None:
            return BankResolution(identity=entry[0], rules=entry[1], matched_by="exact")

        bare = bare_sender_id(normalized)
        entry = self._bare.get(bare)
        if entry is not None:
            return BankResolution(identity=entry[0], rules=entry[1], matched_by="bare")

        for alias, entry in self._contains_sorted:
            if alias in bare:
                logger.debug(f"Sender '{sender}' matched alias '{alias}' by containment")
                return BankResolution(identity=entry[0], rules=entry[1], matched_by="contains")

        return BankResolution(identity=None, rules=GENERIC, matched_by="none")

    def all_banks(self) -> List[BankIdentity]:
        """All registered institutions in registration order."""
        return [identity for identity, _ in self._banks]

    @property
    def bank_count(self) -> int:
        return len(self._banks)
