import logging
from typing import Optional

import backoff
import redis

from shared.modules.cache.cache_store import CacheStore

logger = logging.getLogger(__name__)


def _on_backoff(details):
    logger.info(
        "Backing off {wait:0.2f} seconds after {tries} tries calling {target.__name__}".format(**details)
    )


class RedisCacheStore(CacheStore):
    """
    Redis implementation of the cache store.

    Reads and writes swallow RedisError (logged) so the caller falls back to the
    database. Deletes are retried with exponential backoff because a missed
    invalidation leaves stale data around for up to one TTL.
    """

    def __init__(self, client: redis.StrictRedis, max_tries: int = 3, backoff_factor: float = 0.1):
        self.redis = client
        self.max_tries = max_tries
        self.backoff_factor = backoff_factor

    def get(self, cache_key: str) -> Optional[str]:
        try:
            return self.redis.get(cache_key)
        except redis.exceptions.RedisError as e:
            logger.warning(f"Cache read failed for '{cache_key}', falling back to the store: {e}")
            return None

    def set(self, cache_key: str, value: str, ttl_seconds: int) -> bool:
        try:
            self.redis.set(cache_key, value, ex=ttl_seconds)
            return True
        except redis.exceptions.RedisError as e:
            logger.warning(f"Cache write failed for '{cache_key}': {e}")
            return False

    def delete(self, *cache_keys: str) -> bool:
        if not cache_keys:
            return True
        try:
            self._retrying(self._delete_keys)(list(cache_keys))
            return True
        except redis.exceptions.RedisError as e:
            logger.warning(f"Cache invalidation failed for {list(cache_keys)}: {e}")
            return False

    def delete_pattern(self, pattern: str) -> bool:
        try:
            removed = self._retrying(self._delete_matching)(pattern)
            logger.debug(f"Removed {removed} cache entries matching '{pattern}'")
            return True
        except redis.exceptions.RedisError as e:
            logger.warning(f"Cache invalidation failed for pattern '{pattern}': {e}")
            return False

    def close(self) -> None:
        try:
            self.redis.close()
        except redis.exceptions.RedisError as e:
            logger.warning(f"Error while closing the cache connection: {e}")

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------
    def _retrying(self, func):
        return backoff.on_exception(
            backoff.expo,
            redis.exceptions.RedisError,
            max_tries=self.max_tries,
            factor=self.backoff_factor,
            on_backoff=_on_backoff,
        )(func)

    def _delete_keys(self, cache_keys):
        return self.redis.delete(*cache_keys)

    def _delete_matching(self, pattern: str) -> int:
        keys = list(self.redis.scan_iter(match=pattern, count=500))
        if keys:
            self.redis.delete(*keys)
        return len(keys)
