import logging
from typing import Iterable, Optional

from shared.modules.cache.cache_key_generator import CacheKeyGenerator
from shared.modules.cache.cache_store import CacheStore

logger = logging.getLogger(__name__)


class CacheInvalidator:
    """
    Removes the cached reads derived from an entity after it was written.

    Always called after the store write succeeded. Invalidation is idempotent
    and best effort: failures are logged by the cache store and reported as
    False here, but never raised to the caller.
    """

    def __init__(self, cache: CacheStore, keys: CacheKeyGenerator):
        self.cache = cache
        self.keys = keys

    def school_changed(self, *slugs: Optional[str]) -> bool:
        """
        A school was created, updated or deleted. ``slugs`` are its old and new slugs.
        School lists, course lists (active-school filter), countries, cities and
        the detail pages all derive from it.
        """
        ok = self._delete_patterns(
            self.keys.school_list_pattern(),
            self.keys.course_list_pattern(),
            self.keys.cities_pattern(),
        )
        ok = self.cache.delete(self.keys.countries(), *self._detail_keys(self.keys.school_detail, slugs)) and ok
        logger.info(f"Invalidated school caches for {self._names(slugs)} (complete={ok})")
        return ok

    def course_changed(self, school_slug: Optional[str]) -> bool:
        """
        A course changed. School lists depend on courses through the course type
        filter and ``price_from``; the owning school's detail embeds its courses.
        """
        ok = self._delete_patterns(
            self.keys.course_list_pattern(),
            self.keys.school_list_pattern(),
        )
        if school_slug:
            ok = self.cache.delete(self.keys.school_detail(school_slug)) and ok
        logger.info(f"Invalidated course caches for school '{school_slug}' (complete={ok})")
        return ok

    def blog_post_changed(self, *slugs: Optional[str]) -> bool:
        ok = self.cache.delete(self.keys.blog_list(), *self._detail_keys(self.keys.blog_detail, slugs))
        logger.info(f"Invalidated blog caches for {self._names(slugs)} (complete={ok})")
        return ok

    # -------------------------------------------------------------------------
    def _delete_patterns(self, *patterns: str) -> bool:
        results = [self.cache.delete_pattern(pattern) for pattern in patterns]
        return all(results)

    @staticmethod
    def _detail_keys(key_builder, slugs: Iterable[Optional[str]]):
        return [key_builder(slug) for slug in dict.fromkeys(s for s in slugs if s)]

    @staticmethod
    def _names(slugs):
        return sorted({s for s in slugs if s})
