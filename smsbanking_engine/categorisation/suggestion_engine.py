"""
Category Suggestion Engine for SMS transactions.

Ranks candidate categories for an uncategorized transaction using:
- Historical merchant assignments (exact, then fuzzy)
- Category keyword matching against the SMS text
- Keywords learned from previously categorized SMS
"""

import logging
import re
import threading
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from ..config.engine_config import SUGGESTION_CONFIG, merge_config, validate_ratio
from ..models import Transaction
from .categories import DEFAULT_CATEGORIES, Category
from .similarity import string_similarity

logger = logging.getLogger(__name__)

_KEYWORD_SPLIT_RE = re.compile(r"[\s\-_.,;:()\[\]{}]+")
_NUMERIC_RE = re.compile(r"\d+")


class ConfidenceLevel(Enum):
    """Display band for a suggestion's confidence."""
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


def confidence_level(confidence: float, config: Optional[Dict] = None) -> ConfidenceLevel:
    """
    Band a confidence score for display.

    Args:
        confidence: Score in [0, 1]
        config: Optional overrides for SUGGESTION_CONFIG

    Returns:
        HIGH (>= 0.7), MEDIUM (>= 0.4) or LOW
    """
    bands = merge_config(SUGGESTION_CONFIG, config)["confidence_bands"]
    if confidence >= bands["high"]:
        return ConfidenceLevel.HIGH
    if confidence >= bands["medium"]:
        return ConfidenceLevel.MEDIUM
    return ConfidenceLevel.LOW


@dataclass(frozen=True)
class CategorySuggestion:
    """A suggested category with its confidence and a readable reason."""
    category: Category
    confidence: float
    reason: str

    @property
    def confidence_level(self) -> ConfidenceLevel:
        return confidence_level(self.confidence)


def extract_keywords(text: str, stop_words: Iterable[str] = (), min_length: int = 3) -> List[str]:
    """
    Tokens of an SMS worth learning from.

    Args:
        text: Raw SMS text
        stop_words: Words never returned
        min_length: Shortest token kept

    Returns:
        Distinct lowercase tokens in order of first appearance

    Example:
        >>> extract_keywords("Paid Rs.300 to SWIGGY", ["to", "rs"])
        ['paid', 'swiggy']
    """
    stop = set(stop_words)
    keywords = []
    seen = set()
    for word in _KEYWORD_SPLIT_RE.split((text or "").lower()):
        if len(word) < min_length or _NUMERIC_RE.fullmatch(word) or word in stop:
            continue
        if word not in seen:
            seen.add(word)
            keywords.append(word)
    return keywords


@dataclass(frozen=True)
class PatternCache:
    """
    Learned category assignments.

    merchant_to_category: normalized merchant -> {category id -> count}
    keyword_to_category: SMS token -> {category id -> count}

    Treated as a value: learn() returns a new cache and leaves this one alone.
    """
    merchant_to_category: Dict[str, Dict[str, int]] = field(default_factory=dict)
    keyword_to_category: Dict[str, Dict[str, int]] = field(default_factory=dict)

    @classmethod
    def build(cls, assignments: Iterable[Tuple[Optional[str], List[str], str]]) -> "PatternCache":
        """Build a cache from (merchant, keywords, category_id) assignments."""
        merchants: Dict[str, Dict[str, int]] = {}
        tokens: Dict[str, Dict[str, int]] = {}
        for merchant, keywords, category_id in assignments:
            if merchant:
                counts = merchants.setdefault(merchant, {})
                counts[category_id] = counts.get(category_id, 0) + 1
            for keyword in keywords:
                counts = tokens.setdefault(keyword, {})
                counts[category_id] = counts.get(category_id, 0) + 1
        return cls(merchant_to_category=merchants, keyword_to_category=tokens)

    def learn(self, merchant: Optional[str], keywords: List[str], category_id: str) -> "PatternCache":
        merchants = dict(self.merchant_to_category)
        if merchant:
            counts = dict(merchants.get(merchant, {}))
            counts[category_id] = counts.get(category_id, 0) + 1
            merchants[merchant] = counts

        tokens = dict(self.keyword_to_category)
        for keyword in keywords:
            counts = dict(tokens.get(keyword, {}))
            counts[category_id] = counts.get(category_id, 0) + 1
            tokens[keyword] = counts

        return PatternCache(merchant_to_category=merchants, keyword_to_category=tokens)


@dataclass(frozen=True)
class _EngineState:
    categories: Tuple[Category, ...]
    cache: PatternCache


def _normalize_merchant(merchant: Optional[str]) -> str:
    return (merchant or "").lower().strip()


class CategorySuggestionEngine:
    """Suggests categories for transactions from history and keywords."""

    def __init__(
        self,
        category_loader: Optional[Callable[[], List[Category]]] = None,
        override_loader: Optional[Callable[[], Dict[str, str]]] = None,
        transaction_loader: Optional[Callable[[], List[Transaction]]] = None,
        config: Optional[Dict] = None,
    ):
        """
        Initialize the engine. Nothing is loaded until initialize() or the first suggest().

        Args:
            category_loader: Returns the category set; defaults to DEFAULT_CATEGORIES
            override_loader: Returns {external_id: category_id} manual assignments
            transaction_loader: Returns stored transactions to learn from
            config: Optional overrides for SUGGESTION_CONFIG

        Raises:
            ValueError: if a threshold is outside [0, 1] or a weight is negative
        """
        self.category_loader = category_loader
        self.override_loader = override_loader
        self.transaction_loader = transaction_loader

        self.config = merge_config(SUGGESTION_CONFIG, config)
        self.weights = self.config["weights"]
        for name, weight in self.weights.items():
            if weight < 0:
                raise ValueError(f"weight {name} must not be negative, got {weight}")
        self.merchant_threshold = validate_ratio(
            "merchant_similarity", self.config["thresholds"]["merchant_similarity"]
        )
        self.keyword_threshold = validate_ratio(
            "keyword_similarity", self.config["thresholds"]["keyword_similarity"]
        )
        self.max_suggestions = int(self.config["max_suggestions"])
        self.min_token_length = int(self.config["min_token_length"])
        self.stop_words = frozenset(word.lower() for word in self.config["stop_words"])

        self._lock = threading.Lock()
        self._state: Optional[_EngineState] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self) -> None:
        """Load categories and build the pattern cache from stored history."""
        with self._lock:
            self._state = self._load_state()

    def refresh(self) -> None:
        """Reload categories and rebuild the pattern cache."""
        self.initialize()

    def record_categorization(self, transaction: Transaction, category_id: str) -> None:
        """
        Learn from a manual categorization.

        The next suggest() call sees the new assignment.

        Args:
            transaction: The categorized transaction
            category_id: Category the user assigned
        """
        keywords = self._keywords(transaction.raw_text)
        with self._lock:
            state = self._state if self._state is not None else self._load_state()
            cache = state.cache.learn(_normalize_merchant(transaction.merchant), keywords, category_id)
            self._state = replace(state, cache=cache)
        logger.debug(f"Recorded categorization of {transaction.external_id} as '{category_id}'")

    def _load_state(self) -> _EngineState:
        categories = self._call_loader(self.category_loader, "categories", DEFAULT_CATEGORIES)
        overrides = self._call_loader(self.override_loader, "category overrides", {})
        transactions = self._call_loader(self.transaction_loader, "transactions", [])

        by_id = {tx.external_id: tx for tx in transactions}
        cache = PatternCache.build(
            (
                _normalize_merchant(by_id[external_id].merchant),
                self._keywords(by_id[external_id].raw_text),
                category_id,
            )
            for external_id, category_id in dict(overrides).items()
            if external_id in by_id
        )

        logger.debug(
            f"Built pattern cache: {len(cache.merchant_to_category)} merchants, "
            f"{len(cache.keyword_to_category)} keywords, {len(categories)} categories"
        )
        return _EngineState(categories=tuple(categories), cache=cache)

    @staticmethod
    def _call_loader(loader, what: str, default):
        if loader is None:
            return default
        try:
            result = loader()
        except Exception as e:
            logger.warning(f"Failed to load {what} for suggestion engine: {e}")
            return type(default)()
        return result if result is not None else type(default)()

    def _current_state(self) -> _EngineState:
        state = self._state
        if state is None:
            with self._lock:
                if self._state is None:
                    self._state = self._load_state()
                state = self._state
        return state

    # ------------------------------------------------------------------
    # Suggestions
    # ------------------------------------------------------------------

    def suggest(self, transaction: Transaction, max_suggestions: Optional[int] = None) -> List[CategorySuggestion]:
        """
        Rank categories for a transaction.

        Args:
            transaction: Transaction to suggest categories for
            max_suggestions: Maximum number of suggestions (default from config, 3)

        Returns:
            Suggestions sorted by confidence, highest first; ties keep category order
        """
        limit = self.max_suggestions if max_suggestions is None else max_suggestions
        if limit <= 0:
            return []

        # One snapshot for the whole call; concurrent updates swap in a new state
        state = self._current_state()

        suggestions = []
        for category in state.categories:
            score = self._score(transaction, category, state.cache)
            if score > 0.0:
                suggestions.append(CategorySuggestion(
                    category=category,
                    confidence=score,
                    reason=self._reason(transaction, category, score, state.cache),
                ))

        suggestions.sort(key=lambda s: s.confidence, reverse=True)
        return suggestions[:limit]

    def _score(self, transaction: Transaction, category: Category, cache: PatternCache) -> float:
        score = self._score_historical_merchant(transaction, category.id, cache)
        score += self._score_keyword_match(transaction, category)
        score += self._score_learned_keywords(transaction, category.id, cache)
        return min(score, 1.0)

    def _score_historical_merchant(self, transaction: Transaction, category_id: str, cache: PatternCache) -> float:
        """Score from earlier assignments of this merchant (0.0 - 0.5)."""
        merchant = _normalize_merchant(transaction.merchant)
        if not merchant:
            return 0.0

        counts = cache.merchant_to_category.get(merchant)
        if counts and counts.get(category_id, 0) > 0:
            return self.weights["historical_merchant"] * counts[category_id] / sum(counts.values())

        best = 0.0
        for known_merchant, known_counts in cache.merchant_to_category.items():
            count = known_counts.get(category_id, 0)
            if count == 0:
                continue
            similarity = string_similarity(merchant, known_merchant)
            if similarity >= self.merchant_threshold:
                partial = self.weights["fuzzy_merchant"] * similarity * count / sum(known_counts.values())
                best = max(best, partial)
        return best

    def _score_keyword_match(self, transaction: Transaction, category: Category) -> float:
        """Score from the category's own keywords (0.0 - 0.3)."""
        if not category.keywords:
            return 0.0

        search_text = self._search_text(transaction)
        words = search_text.split()
        match_count = 0
        total_weight = 0.0

        for keyword in category.keywords:
            keyword = keyword.lower()
            if keyword in search_text:
                match_count += 1
                total_weight += 1.0
                continue
            for word in words:
                similarity = string_similarity(word, keyword)
                if similarity >= self.keyword_threshold:
                    match_count += 1
                    total_weight += similarity
                    break

        if match_count == 0:
            return 0.0

        density = match_count / len(category.keywords)
        return self.weights["keyword_match"] * density * (total_weight / match_count)

    def _score_learned_keywords(self, transaction: Transaction, category_id: str, cache: PatternCache) -> float:
        """Score from tokens seen in earlier categorized SMS (0.0 - 0.2)."""
        total = 0.0
        matching = 0
        for keyword in self._keywords(transaction.raw_text):
            counts = cache.keyword_to_category.get(keyword)
            if not counts or counts.get(category_id, 0) == 0:
                continue
            matching += 1
            total += counts[category_id] / sum(counts.values())

        if matching == 0:
            return 0.0
        return self.weights["learned_keyword"] * total / matching

    def _reason(self, transaction: Transaction, category: Category, score: float, cache: PatternCache) -> str:
        merchant = _normalize_merchant(transaction.merchant)
        if merchant and cache.merchant_to_category.get(merchant, {}).get(category.id, 0) > 0:
            return f"Previously categorized similar transactions from '{transaction.merchant}'"

        bands = self.config["reason_bands"]
        if score > bands["strong"]:
            return "Strong match based on transaction details"
        if score > bands["likely"]:
            return "Likely match based on keywords and patterns"
        return "Possible match based on transaction analysis"

    @staticmethod
    def _search_text(transaction: Transaction) -> str:
        parts = [transaction.merchant, transaction.location, transaction.raw_text]
        return " ".join(part.lower() for part in parts if part)

    def _keywords(self, text: str) -> List[str]:
        return extract_keywords(text, self.stop_words, self.min_token_length)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def categories(self) -> List[Category]:
        state = self._state
        return list(state.categories) if state is not None else []

    @property
    def merchant_pattern_count(self) -> int:
        state = self._state
        return len(state.cache.merchant_to_category) if state is not None else 0

    @property
    def keyword_pattern_count(self) -> int:
        state = self._state
        return len(state.cache.keyword_to_category) if state is not None else 0
