"""Process-wide singletons shared by every classification call.

Repositories are bound to a session and rebuilt per unit of work; the
normalization and pattern caches are not, so they live here.
"""

import logging
from functools import lru_cache

from recova.domain.classification.services import PatternCache, TextNormalizer

logger = logging.getLogger(__name__)


@lru_cache()
def get_text_normalizer(cache_size: int) -> TextNormalizer:
    """Return the shared normalizer for a given cache capacity."""
    logger.debug("Creating text normalizer (cache_size=%d)", cache_size)
    return TextNormalizer(cache_size=cache_size)


@lru_cache()
def get_pattern_cache() -> PatternCache:
    return PatternCache()


def reset_shared_caches() -> None:
    """Forget the shared instances (useful for tests)."""
    get_text_normalizer.cache_clear()
    get_pattern_cache.cache_clear()
