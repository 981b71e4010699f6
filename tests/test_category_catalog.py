"""
Test suite for the category catalog and the category CSV loader.
"""

import os
import tempfile
import unittest
from datetime import datetime
from decimal import Decimal

from smsbanking_engine.categorisation.categories import (
    DEFAULT_CATEGORIES,
    OTHER_CATEGORY_ID,
    Category,
    CategoryCatalog,
)
from smsbanking_engine.categorisation.suggestion_engine import CategorySuggestionEngine
from smsbanking_engine.config.category_loader import get_category, index_categories, load_categories_csv
from smsbanking_engine.models import Direction, Transaction


def txn(raw_text, merchant=None, external_id="t1"):
    return Transaction(
        external_id=external_id,
        amount=Decimal("100.00"),
        direction=Direction.DEBIT,
        timestamp=datetime(2026, 1, 3, 10, 0, 0),
        raw_text=raw_text,
        sender_identity="HDFC Bank",
        merchant=merchant,
    )


class TestCategoryCatalog(unittest.TestCase):
    """Test cases for CategoryCatalog."""

    def setUp(self):
        """Set up test fixtures."""
        self.catalog = CategoryCatalog()

    def test_default_categories(self):
        self.assertEqual(len(DEFAULT_CATEGORIES), 9)
        self.assertEqual(self.catalog.get("food").name, "Food & Dining")
        self.assertIsNone(self.catalog.get("missing"))
        self.assertEqual(len(self.catalog.root_categories()), 9)
        self.assertEqual(self.catalog.subcategories("food"), [])

    def test_keyword_in_merchant(self):
        self.assertEqual(self.catalog.categorize(txn("Rs.100 debited", merchant="Uber India")).id, "transport")

    def test_keyword_in_sms_text(self):
        self.assertEqual(self.catalog.categorize(txn("Rs.100 spent at NETFLIX")).id, "entertainment")

    def test_no_keyword_is_other(self):
        self.assertEqual(self.catalog.categorize(txn("Rs.100 debited")).id, OTHER_CATEGORY_ID)

    def test_override_wins(self):
        tx = txn("Rs.100 spent at NETFLIX")

        self.assertEqual(self.catalog.categorize(tx, {"t1": "food"}).id, "food")
        self.assertEqual(self.catalog.categorize(tx, {"t1": "no-such-category"}).id, "entertainment")

    def test_subcategory_checked_first(self):
        catalog = CategoryCatalog([
            Category("food", "Food", ("starbucks", "cafe")),
            Category("coffee", "Coffee", ("starbucks",), parent_id="food"),
            Category(OTHER_CATEGORY_ID, "Other"),
        ])

        self.assertEqual(catalog.categorize(txn("Rs.250 spent at STARBUCKS")).id, "coffee")
        self.assertEqual(catalog.categorize(txn("Rs.250 spent at CAFE DAY")).id, "food")
        self.assertEqual([c.id for c in catalog.subcategories("food")], ["coffee"])


class TestCategoryLoader(unittest.TestCase):
    """Test cases for load_categories_csv."""

    def setUp(self):
        """Set up test fixtures."""
        self.tmpdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmpdir.cleanup()

    def write_csv(self, content):
        path = os.path.join(self.tmpdir.name, "categories.csv")
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        return path

    def test_load(self):
        path = self.write_csv(
            "id,name,keywords,parent_id\n"
            "food,Food & Dining,Swiggy|zomato; restaurant,\n"
            "coffee,Coffee,starbucks|chaayos,food\n"
            ",Ignored,nothing,\n"
        )

        categories = load_categories_csv(path)

        self.assertEqual([c.id for c in categories], ["food", "coffee"])
        self.assertEqual(categories[0].keywords, ("swiggy", "zomato", "restaurant"))
        self.assertIsNone(categories[0].parent_id)
        self.assertEqual(categories[1].parent_id, "food")
        self.assertFalse(categories[1].is_system)

        mapping = index_categories(categories)
        self.assertEqual(get_category("coffee", mapping).name, "Coffee")
        self.assertIsNone(get_category("tea", mapping))

    def test_duplicate_id(self):
        path = self.write_csv("id,name,keywords,parent_id\nfood,Food,,\nfood,Food again,,\n")

        with self.assertRaises(ValueError):
            load_categories_csv(path)

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_categories_csv(os.path.join(self.tmpdir.name, "missing.csv"))

    def test_as_suggestion_engine_loader(self):
        path = self.write_csv("id,name,keywords,parent_id\nchai,Chai,chai|tea,\n")
        engine = CategorySuggestionEngine(category_loader=lambda: load_categories_csv(path))

        suggestions = engine.suggest(txn("Paid Rs.20 to CHAI POINT"))

        self.assertEqual([s.category.id for s in suggestions], ["chai"])
        self.assertAlmostEqual(suggestions[0].confidence, 0.3 * 0.5, places=6)


if __name__ == "__main__":
    unittest.main()
