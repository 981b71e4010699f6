"""
Category catalog loader.
Loads CSV files describing the spending categories offered for suggestion.
"""

import csv
import re
from typing import Dict, List, Optional
from pathlib import Path

from ..categorisation.categories import Category

KEYWORD_SEPARATOR = re.compile(r"[|;]")


def load_categories_csv(csv_path: str) -> List[Category]:
    """
    Load a category catalog from a CSV file.

    Args:
        csv_path: Path to CSV file containing category definitions

    Returns:
        Categories in file order (file order is the tie-break order for suggestions)

    Example CSV format:
        id,name,keywords,parent_id
        food,Food & Dining,swiggy|zomato|restaurant,
        coffee,Coffee,starbucks|chaayos,food
    """
    csv_file = Path(csv_path)
    if not csv_file.exists():
        raise FileNotFoundError(f"Category file not found: {csv_path}")

    categories = []
    seen_ids = set()

    with open(csv_path, 'r', encoding='utf-8') as f:
        reader = csv.DictReader(f)
        for line_no, row in enumerate(reader, start=2):
            category_id = (row.get('id') or '').strip()
            if not category_id:
                continue
            if category_id in seen_ids:
                raise ValueError(f"Duplicate category id '{category_id}' on line {line_no} of {csv_path}")
            seen_ids.add(category_id)

            keywords = tuple(
                keyword.strip().lower()
                for keyword in KEYWORD_SEPARATOR.split(row.get('keywords') or '')
                if keyword.strip()
            )
            parent_id = (row.get('parent_id') or '').strip() or None

            categories.append(Category(
                id=category_id,
                name=(row.get('name') or category_id).strip(),
                keywords=keywords,
                parent_id=parent_id,
                is_system=False,
            ))

    return categories


def index_categories(categories: List[Category]) -> Dict[str, Category]:
    """Map category ids to categories."""
    return {category.id: category for category in categories}


def get_category(category_id: str, mapping: Dict[str, Category]) -> Optional[Category]:
    """
    Get a category by id.

    Args:
        category_id: Category id to look up
        mapping: Index built by index_categories

    Returns:
        Category or None if not found
    """
    return mapping.get(category_id)
