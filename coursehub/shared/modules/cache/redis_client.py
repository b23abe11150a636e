import os
import redis


def create_redis_client(url: str = None, socket_timeout: float = 2.0) -> redis.StrictRedis:
    """
    Build a pooled Redis client from a connection URL.

    The client connects lazily, so an unreachable server only shows up on the
    first command (where RedisCacheStore turns it into a cache miss).
    """
    url = url or os.environ.get("CACHE_URL", "redis://localhost:6379/0")
    return redis.StrictRedis.from_url(
        url,
        decode_responses=True,
        socket_timeout=socket_timeout,
        socket_connect_timeout=socket_timeout,
    )
