"""
Cache store interface.

Values are opaque strings (the read services store JSON). Implementations must
never raise on cache failures: a broken cache degrades to a miss.
"""
from typing import Optional


class CacheStore:
    def get(self, cache_key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, cache_key: str, value: str, ttl_seconds: int) -> bool:
        raise NotImplementedError

    def delete(self, *cache_keys: str) -> bool:
        """Remove exact keys. Returns False if the cache could not be reached."""
        raise NotImplementedError

    def delete_pattern(self, pattern: str) -> bool:
        """Remove every key matching a glob pattern (e.g. ``prefix:schools:list:*``)."""
        raise NotImplementedError

    def close(self) -> None:
        pass


class NullCacheStore(CacheStore):
    """
    Used when no cache is configured. Every read is a miss, so read paths
    always go to the store.
    """

    def get(self, cache_key):
        return None

    def set(self, cache_key, value, ttl_seconds):
        return False

    def delete(self, *cache_keys):
        return True

    def delete_pattern(self, pattern):
        return True
