"""
Spending categories for SMS transactions.
Defines the built-in category catalog and a keyword categorizer over it.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ..models import Transaction


@dataclass(frozen=True)
class Category:
    """A spending category offered for suggestion."""
    id: str
    name: str
    keywords: Tuple[str, ...] = ()
    parent_id: Optional[str] = None
    is_system: bool = True


OTHER_CATEGORY_ID = "other"

# Built-in categories. Declaration order is the tie-break order for suggestions.
DEFAULT_CATEGORIES = (
    Category(
        id="food",
        name="Food & Dining",
        keywords=(
            "swiggy", "zomato", "restaurant", "cafe", "food", "dining", "pizza", "burger",
            "biryani", "dominos", "kfc", "mcdonalds", "starbucks", "chaayos",
        ),
    ),
    Category(
        id="shopping",
        name="Shopping",
        keywords=(
            "amazon", "flipkart", "myntra", "ajio", "shop", "store", "mall", "mart",
            "reliance", "dmart", "bigbasket", "grofers", "blinkit", "zepto",
        ),
    ),
    Category(
        id="transport",
        name="Transport",
        keywords=(
            "uber", "ola", "rapido", "metro", "fuel", "petrol", "diesel", "iocl", "bpcl",
            "hpcl", "parking", "fastag", "toll",
        ),
    ),
    Category(
        id="bills",
        name="Bills & Utilities",
        keywords=(
            "electricity", "water", "gas", "broadband", "mobile", "recharge", "airtel", "jio",
            "vi", "bsnl", "tata", "adani", "bescom", "bill",
        ),
    ),
    Category(
        id="entertainment",
        name="Entertainment",
        keywords=(
            "netflix", "prime", "spotify", "hotstar", "movie", "game", "pvr", "inox",
            "bookmyshow", "youtube", "disney",
        ),
    ),
    Category(
        id="health",
        name="Health",
        keywords=(
            "pharmacy", "hospital", "doctor", "medical", "apollo", "medplus", "netmeds",
            "pharmeasy", "practo", "clinic", "diagnostic",
        ),
    ),
    Category(
        id="transfer",
        name="Transfers",
        keywords=("transfer", "sent to", "received from", "upi", "imps", "neft", "rtgs"),
    ),
    Category(
        id="atm",
        name="ATM & Cash",
        keywords=("atm", "withdrawal", "cash", "withdraw"),
    ),
    Category(id=OTHER_CATEGORY_ID, name="Other"),
)


class CategoryCatalog:
    """Holds a category set and assigns categories by keyword."""

    def __init__(self, categories: Optional[List[Category]] = None):
        self.categories = list(DEFAULT_CATEGORIES if categories is None else categories)
        self._by_id: Dict[str, Category] = {category.id: category for category in self.categories}

    def get(self, category_id: str) -> Optional[Category]:
        return self._by_id.get(category_id)

    def root_categories(self) -> List[Category]:
        return [c for c in self.categories if c.parent_id is None]

    def subcategories(self, parent_id: str) -> List[Category]:
        return [c for c in self.categories if c.parent_id == parent_id]

    def categorize(self, transaction: Transaction, overrides: Optional[Dict[str, str]] = None) -> Category:
        """
        Assign a category to a transaction.

        A manual override wins. Otherwise the first category with a keyword
        in the merchant or SMS text is used, subcategories before root
        categories, and "other" when nothing matches.

        Args:
            transaction: Transaction to categorize
            overrides: Optional {external_id: category_id} manual assignments

        Returns:
            Assigned category
        """
        if overrides:
            override = self._by_id.get(overrides.get(transaction.external_id, ""))
            if override is not None:
                return override

        search_text = f"{(transaction.merchant or '').lower()} {transaction.raw_text.lower()}"

        subcategories = [c for c in self.categories if c.parent_id is not None]
        for category in subcategories + self.root_categories():
            if any(keyword.lower() in search_text for keyword in category.keywords):
                return category

        return self._by_id.get(OTHER_CATEGORY_ID) or Category(id=OTHER_CATEGORY_ID, name="Other")
