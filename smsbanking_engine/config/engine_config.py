"""
Engine configuration for the SMS banking pipeline.
Contains policy thresholds, score weights and tolerance windows.
"""

import copy
from typing import Dict, Optional

# Sender resolution
REGISTRY_CONFIG = {
    # Shortest alias allowed to match by containment ("HDFCBK" inside "JM-HDFCBKX")
    "min_contains_alias_length": 5,
}

# Message extraction
EXTRACTION_CONFIG = {
    "max_merchant_length": 50,
    "account_suffix_length": 4,
    "amount_decimal_places": 2,
}

# Deduplication
DEDUP_CONFIG = {
    # Re-deliveries of the same SMS arrive within seconds; 60s apart is a new transaction
    "tolerance_seconds": 60,
}

# Category suggestion
SUGGESTION_CONFIG = {
    "weights": {
        "historical_merchant": 0.5,
        "fuzzy_merchant": 0.3,
        "keyword_match": 0.3,
        "learned_keyword": 0.2,
    },
    "thresholds": {
        "merchant_similarity": 0.7,
        "keyword_similarity": 0.8,
    },
    "max_suggestions": 3,
    "min_token_length": 3,

    # Banking boilerplate never learned as a category signal
    "stop_words": [
        "the", "and", "or", "to", "from", "in", "on", "at", "is", "was", "are", "were",
        "rs", "inr", "upi", "txn", "ref", "a/c", "ac", "debited", "credited", "transaction",
    ],

    # Display bands, derived from the score on demand
    "confidence_bands": {
        "high": 0.7,
        "medium": 0.4,
    },

    "reason_bands": {
        "strong": 0.7,
        "likely": 0.4,
    },
}


def merge_config(defaults: Dict, overrides: Optional[Dict] = None) -> Dict:
    """
    Merge user overrides over a default configuration dictionary.

    Nested dictionaries are merged key by key; any other value replaces
    the default outright. Neither input is modified.

    Args:
        defaults: Default configuration dictionary
        overrides: Optional partial configuration

    Returns:
        New merged configuration dictionary
    """
    merged = copy.deepcopy(defaults)
    if not overrides:
        return merged

    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def validate_ratio(name: str, value: float) -> float:
    """Raise ValueError unless value is a ratio in [0, 1]."""
    if not 0.0 <= float(value) <= 1.0:
        raise ValueError(f"{name} must be between 0 and 1, got {value}")
    return float(value)
