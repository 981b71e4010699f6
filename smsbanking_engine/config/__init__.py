"""
Configuration module for the SMS banking engine.

This module contains all configuration dictionaries for extraction,
deduplication and category suggestion.
"""

from .engine_config import (
    REGISTRY_CONFIG,
    EXTRACTION_CONFIG,
    DEDUP_CONFIG,
    SUGGESTION_CONFIG,
    merge_config,
)
from .category_loader import load_categories_csv, index_categories, get_category

__all__ = [
    "REGISTRY_CONFIG",
    "EXTRACTION_CONFIG",
    "DEDUP_CONFIG",
    "SUGGESTION_CONFIG",
    "merge_config",
    "load_categories_csv",
    "index_categories",
    "get_category",
]
