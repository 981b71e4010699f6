"""
Categorisation module for the SMS banking engine.

This module contains:
- Category catalog and keyword categorizer
- Category suggestion engine with learned patterns
- String similarity used for fuzzy matching
"""

from .categories import Category, CategoryCatalog, DEFAULT_CATEGORIES, OTHER_CATEGORY_ID
from .similarity import string_similarity
from .suggestion_engine import (
    CategorySuggestionEngine,
    CategorySuggestion,
    ConfidenceLevel,
    PatternCache,
    confidence_level,
    extract_keywords,
)

__all__ = [
    "Category",
    "CategoryCatalog",
    "DEFAULT_CATEGORIES",
    "OTHER_CATEGORY_ID",
    "string_similarity",
    "CategorySuggestionEngine",
    "CategorySuggestion",
    "ConfidenceLevel",
    "PatternCache",
    "confidence_level",
    "extract_keywords",
]
