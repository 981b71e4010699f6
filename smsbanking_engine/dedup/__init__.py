"""
Deduplication for the SMS banking engine.
"""

from .dedup_engine import DeduplicationEngine

__all__ = ["DeduplicationEngine"]
