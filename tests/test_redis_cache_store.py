from unittest import mock

import redis

from shared.modules.cache.cache_store import NullCacheStore
from shared.modules.cache.redis_cache_store import RedisCacheStore


def broken_client():
    client = mock.MagicMock()
    error = redis.exceptions.ConnectionError("connection refused")
    client.get.side_effect = error
    client.set.side_effect = error
    client.delete.side_effect = error
    client.scan_iter.side_effect = error
    return client


def test_set_and_get_with_ttl(cache_store, redis_client):
    assert cache_store.set("k", "value", 300)
    assert cache_store.get("k") == "value"
    assert 0 < redis_client.ttl("k") <= 300


def test_delete_and_delete_pattern(cache_store, redis_client):
    redis_client.set("p:schools:list:Ireland:all:all", "[]")
    redis_client.set("p:schools:list:Malta:all:all", "[]")
    redis_client.set("p:schools:detail:atlas", "{}")

    assert cache_store.delete_pattern("p:schools:list:*")
    assert redis_client.get("p:schools:list:Ireland:all:all") is None
    assert redis_client.get("p:schools:list:Malta:all:all") is None
    assert redis_client.get("p:schools:detail:atlas") == "{}"

    assert cache_store.delete("p:schools:detail:atlas", "p:missing")
    assert redis_client.get("p:schools:detail:atlas") is None


def test_unreachable_cache_degrades_to_misses():
    store = RedisCacheStore(broken_client(), max_tries=2, backoff_factor=0.01)
    assert store.get("k") is None
    assert store.set("k", "v", 60) is False


def test_failed_invalidation_is_retried_then_reported():
    client = broken_client()
    store = RedisCacheStore(client, max_tries=3, backoff_factor=0.01)

    assert store.delete("k") is False
    assert client.delete.call_count == 3
    assert store.delete_pattern("p:*") is False


def test_transient_invalidation_error_recovers():
    client = mock.MagicMock()
    client.delete.side_effect = [redis.exceptions.TimeoutError("slow"), 1]
    store = RedisCacheStore(client, max_tries=3, backoff_factor=0.01)

    assert store.delete("k") is True
    assert client.delete.call_count == 2


def test_null_cache_store_always_misses():
    store = NullCacheStore()
    assert store.set("k", "v", 10) is False
    assert store.get("k") is None
    assert store.delete("k")
    assert store.delete_pattern("*")
