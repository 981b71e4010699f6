"""
Test suite for category suggestions.

Covers scoring from merchant history, fuzzy merchant matches, category
keywords and learned keywords, plus lazy loading, loader failures and
learning from manual categorizations.
"""

import threading
import unittest
from datetime import datetime
from decimal import Decimal

from smsbanking_engine.categorisation.categories import Category
from smsbanking_engine.categorisation.suggestion_engine import (
    CategorySuggestionEngine,
    ConfidenceLevel,
    PatternCache,
    confidence_level,
    extract_keywords,
)
from smsbanking_engine.models import Direction, Transaction


def txn(external_id, merchant=None, raw_text="Rs.100 debited"):
    return Transaction(
        external_id=external_id,
        amount=Decimal("100.00"),
        direction=Direction.DEBIT,
        timestamp=datetime(2026, 1, 3, 10, 0, 0),
        raw_text=raw_text,
        sender_identity="HDFC Bank",
        merchant=merchant,
    )


def swiggy_history():
    history = [txn(f"h{i}", "Swiggy", "Paid Rs.300 to SWIGGY") for i in range(1, 4)]
    overrides = {t.external_id: "food" for t in history}
    return history, overrides


class TestScoring(unittest.TestCase):
    """Test cases for suggestion scores."""

    def setUp(self):
        """Set up test fixtures."""
        history, overrides = swiggy_history()
        self.engine = CategorySuggestionEngine(
            override_loader=lambda: overrides,
            transaction_loader=lambda: history,
        )

    def test_exact_merchant_history(self):
        """Test a merchant seen three times as food."""
        suggestions = self.engine.suggest(txn("new", "Swiggy", "Paid Rs.450 to SWIGGY"))

        self.assertEqual(len(suggestions), 1)
        top = suggestions[0]
        self.assertEqual(top.category.id, "food")
        self.assertAlmostEqual(top.confidence, 0.5 + 0.3 / 14 + 0.2, places=6)
        self.assertEqual(top.confidence_level, ConfidenceLevel.HIGH)
        self.assertEqual(top.reason, "Previously categorized similar transactions from 'Swiggy'")

    def test_fuzzy_merchant_history(self):
        """Test a misspelled merchant scores lower than the exact one."""
        exact = self.engine.suggest(txn("a", "Swiggy", "Paid Rs.450 to SWIGGY"))[0]
        fuzzy = self.engine.suggest(txn("b", "Swigy", "Paid Rs.450 to SWIGY"))[0]

        self.assertEqual(fuzzy.category.id, "food")
        expected = 0.3 * (5 / 6) + 0.3 * (1 / 14) * (5 / 6) + 0.2
        self.assertAlmostEqual(fuzzy.confidence, expected, places=6)
        self.assertGreater(fuzzy.confidence, 0.0)
        self.assertLess(fuzzy.confidence, exact.confidence)
        self.assertEqual(fuzzy.confidence_level, ConfidenceLevel.MEDIUM)
        self.assertEqual(fuzzy.reason, "Likely match based on keywords and patterns")

    def test_cold_start_keyword_only(self):
        """Test an engine without history still suggests from keywords."""
        engine = CategorySuggestionEngine()
        suggestions = engine.suggest(txn("new", None, "Paid Rs.250 to ZOMATO"))

        self.assertEqual([s.category.id for s in suggestions], ["food"])
        self.assertAlmostEqual(suggestions[0].confidence, 0.3 / 14, places=6)
        self.assertEqual(suggestions[0].confidence_level, ConfidenceLevel.LOW)
        self.assertEqual(suggestions[0].reason, "Possible match based on transaction analysis")

    def test_cold_start_restaurant_keyword(self):
        """Test a category keyword in the raw text alone puts food on top."""
        engine = CategorySuggestionEngine()
        suggestions = engine.suggest(txn("new", None, "Rs.1,200 spent at restaurant"))

        self.assertEqual(engine.merchant_pattern_count, 0)
        self.assertEqual(suggestions[0].category.id, "food")
        self.assertAlmostEqual(suggestions[0].confidence, 0.3 / 14, places=6)

    def test_ties_keep_category_order(self):
        categories = [Category("a", "A", ("alpha",)), Category("b", "B", ("alpha",))]
        engine = CategorySuggestionEngine(category_loader=lambda: categories)
        reversed_engine = CategorySuggestionEngine(category_loader=lambda: list(reversed(categories)))
        tx = txn("new", None, "Rs.10 paid at ALPHA")

        self.assertEqual([s.category.id for s in engine.suggest(tx)], ["a", "b"])
        self.assertEqual([s.category.id for s in reversed_engine.suggest(tx)], ["b", "a"])

    def test_max_suggestions(self):
        categories = [Category(c, c.upper(), ("alpha",)) for c in ("a", "b", "c", "d")]
        engine = CategorySuggestionEngine(category_loader=lambda: categories)
        tx = txn("new", None, "alpha")

        self.assertEqual(len(engine.suggest(tx)), 3)
        self.assertEqual(len(engine.suggest(tx, 1)), 1)
        self.assertEqual(engine.suggest(tx, 0), [])
        self.assertEqual(engine.suggest(tx, -1), [])

    def test_confidence_never_exceeds_one(self):
        categories = [Category("a", "A", ("alpha",))]
        config = {"weights": {"historical_merchant": 2.0, "keyword_match": 2.0}}
        history = [txn("h1", "Alpha", "alpha")]
        engine = CategorySuggestionEngine(
            category_loader=lambda: categories,
            override_loader=lambda: {"h1": "a"},
            transaction_loader=lambda: history,
            config=config,
        )

        self.assertEqual(engine.suggest(txn("new", "Alpha", "alpha"))[0].confidence, 1.0)


class TestLifecycle(unittest.TestCase):
    """Test cases for loading, refreshing and learning."""

    def test_lazy_initialization(self):
        calls = []

        def load_transactions():
            calls.append(1)
            return []

        engine = CategorySuggestionEngine(transaction_loader=load_transactions)
        self.assertEqual(engine.categories, [])
        self.assertEqual(calls, [])

        engine.suggest(txn("a"))
        engine.suggest(txn("b"))

        self.assertEqual(len(calls), 1)
        self.assertEqual(len(engine.categories), 9)

    def test_transaction_loader_failure_is_logged(self):
        def broken():
            raise RuntimeError("database is locked")

        engine = CategorySuggestionEngine(transaction_loader=broken, override_loader=lambda: {"x": "food"})
        with self.assertLogs("smsbanking_engine.categorisation.suggestion_engine", level="WARNING") as logs:
            engine.initialize()

        self.assertIn("database is locked", logs.output[0])
        self.assertEqual(engine.merchant_pattern_count, 0)
        suggestions = engine.suggest(txn("new", None, "Paid Rs.250 to ZOMATO"))
        self.assertEqual(suggestions[0].category.id, "food")

    def test_category_loader_failure_gives_no_suggestions(self):
        def broken():
            raise OSError("file missing")

        engine = CategorySuggestionEngine(category_loader=broken)
        with self.assertLogs("smsbanking_engine.categorisation.suggestion_engine", level="WARNING"):
            suggestions = engine.suggest(txn("new", None, "Paid Rs.250 to ZOMATO"))

        self.assertEqual(suggestions, [])

    def test_override_for_missing_transaction_is_skipped(self):
        history = [txn("h1", "Swiggy", "Paid Rs.300 to SWIGGY")]
        engine = CategorySuggestionEngine(
            override_loader=lambda: {"h1": "food", "missing": "shopping"},
            transaction_loader=lambda: history,
        )
        engine.initialize()

        self.assertEqual(engine.merchant_pattern_count, 1)

    def test_record_categorization_raises_confidence(self):
        engine = CategorySuggestionEngine()
        tx = txn("new", "Chai Point", "Paid Rs.80 to CHAI POINT")
        before = [s for s in engine.suggest(tx) if s.category.id == "food"]

        engine.record_categorization(tx, "food")
        after = [s for s in engine.suggest(tx) if s.category.id == "food"]

        self.assertEqual(before, [])
        self.assertEqual(len(after), 1)
        self.assertAlmostEqual(after[0].confidence, 0.7, places=6)
        self.assertEqual(after[0].reason, "Previously categorized similar transactions from 'Chai Point'")
        self.assertEqual(engine.merchant_pattern_count, 1)
        self.assertEqual(engine.keyword_pattern_count, 3)

    def test_record_before_initialize_keeps_history(self):
        history, overrides = swiggy_history()
        engine = CategorySuggestionEngine(
            override_loader=lambda: overrides,
            transaction_loader=lambda: history,
        )

        engine.record_categorization(txn("new", "Chai Point", "Paid Rs.80 to CHAI POINT"), "food")

        self.assertEqual(engine.merchant_pattern_count, 2)

    def test_refresh_rebuilds_from_loaders(self):
        history, overrides = swiggy_history()
        engine = CategorySuggestionEngine(
            override_loader=lambda: overrides,
            transaction_loader=lambda: history,
        )
        engine.initialize()
        engine.record_categorization(txn("new", "Chai Point", "Paid Rs.80 to CHAI POINT"), "food")
        self.assertEqual(engine.merchant_pattern_count, 2)

        engine.refresh()

        self.assertEqual(engine.merchant_pattern_count, 1)

    def test_concurrent_record_and_suggest(self):
        engine = CategorySuggestionEngine()
        engine.initialize()
        errors = []

        def record(i):
            try:
                tx = txn(f"t{i}", f"Merchant {i}", f"Paid Rs.10 to MERCHANT {i}")
                engine.record_categorization(tx, "shopping")
                engine.suggest(tx)
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=record, args=(i,)) for i in range(20)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(errors, [])
        self.assertEqual(engine.merchant_pattern_count, 20)


class TestHelpers(unittest.TestCase):
    """Test cases for module-level helpers."""

    def test_confidence_level_bands(self):
        self.assertEqual(confidence_level(0.7), ConfidenceLevel.HIGH)
        self.assertEqual(confidence_level(0.69), ConfidenceLevel.MEDIUM)
        self.assertEqual(confidence_level(0.4), ConfidenceLevel.MEDIUM)
        self.assertEqual(confidence_level(0.39), ConfidenceLevel.LOW)
        self.assertEqual(confidence_level(0.8, {"confidence_bands": {"high": 0.9}}), ConfidenceLevel.MEDIUM)

    def test_invalid_config(self):
        with self.assertRaises(ValueError):
            CategorySuggestionEngine(config={"weights": {"historical_merchant": -0.1}})
        with self.assertRaises(ValueError):
            CategorySuggestionEngine(config={"thresholds": {"merchant_similarity": 1.5}})

    def test_extract_keywords(self):
        self.assertEqual(extract_keywords("Paid Rs.300 to SWIGGY", ["to", "rs"]), ["paid", "swiggy"])
        self.assertEqual(extract_keywords("swiggy SWIGGY swiggy"), ["swiggy"])
        self.assertEqual(extract_keywords("12345 ab abc"), ["abc"])
        self.assertEqual(extract_keywords(""), [])

    def test_pattern_cache_learn_is_copy_on_write(self):
        cache = PatternCache.build([("swiggy", ["paid"], "food")])
        learned = cache.learn("swiggy", ["paid", "lunch"], "food")

        self.assertEqual(cache.merchant_to_category, {"swiggy": {"food": 1}})
        self.assertEqual(learned.merchant_to_category, {"swiggy": {"food": 2}})
        self.assertEqual(learned.keyword_to_category["lunch"], {"food": 1})
        self.assertNotIn("lunch", cache.keyword_to_category)


if __name__ == "__main__":
    unittest.main()
