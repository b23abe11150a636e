"""
Cache-through (cache-aside) reads.

On a hit the cached JSON is decoded and returned. On a miss the loader queries
the store, the result is serialised once and that same text is both cached and
decoded for the caller, so hits and misses return identical values.
"""
import json
import logging
from datetime import date, datetime
from enum import Enum
from typing import Any, Callable, Optional

from shared.modules.cache.cache_store import CacheStore

logger = logging.getLogger(__name__)


def _json_default(value):
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def serialize(value: Any) -> str:
    return json.dumps(value, default=_json_default, separators=(",", ":"))


def get_or_populate(
    cache: CacheStore,
    cache_key: str,
    ttl_seconds: int,
    loader: Callable[[], Optional[Any]],
) -> Optional[Any]:
    """
    Return the cached value for ``cache_key`` or load, cache and return it.

    A loader result of ``None`` means "not found" and is never cached.
    """
    cached = cache.get(cache_key)
    if cached is not None:
        try:
            logger.debug(f"Cache hit: {cache_key}")
            return json.loads(cached)
        except ValueError:
            logger.warning(f"Discarding undecodable cache entry '{cache_key}'")

    logger.debug(f"Cache miss: {cache_key}")
    value = loader()
    if value is None:
        return None

    payload = serialize(value)
    cache.set(cache_key, payload, ttl_seconds)
    return json.loads(payload)
