"""
FinEduca Catalog - Course catalog reconciliation and on-demand generation.

This module provides:
- CatalogLoader: cached + generated course catalog
- Pacer: spacing between generator calls
- Seed topics and topic id normalization
"""

from .loader import CatalogLoader

from .pacing import Pacer, DEFAULT_PACING_SECONDS

from .topics import (
    SeedTopic,
    SEED_TOPICS,
    USER_TOPIC_PREFIX,
    normalize_topic,
    topic_id_for,
)

__all__ = [
    "CatalogLoader",
    "Pacer",
    "DEFAULT_PACING_SECONDS",
    "SeedTopic",
    "SEED_TOPICS",
    "USER_TOPIC_PREFIX",
    "normalize_topic",
    "topic_id_for",
]
