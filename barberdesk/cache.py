"""
Redis caching for dashboard figures.
Fails open: without REDIS_URL, or when Redis is unreachable, every read is a miss.
"""
import json
import logging
from typing import Any, Optional

import redis

from .config import REDIS_URL

logger = logging.getLogger(__name__)

DASHBOARD_STATS_KEY = "dashboard:stats"
DASHBOARD_STATS_TTL = 300


def get_redis_client() -> Optional[redis.Redis]:
    """Create a Redis client, or None when caching is not configured"""
    if not REDIS_URL:
        return None

    client = redis.from_url(
        REDIS_URL,
        decode_responses=True,
        socket_connect_timeout=5,
        socket_timeout=5,
        retry_on_timeout=True,
        health_check_interval=30,
    )
    client.ping()
    logger.info("Redis connected successfully via URL")
    return client


class Cache:
    """Redis cache wrapper with automatic serialization"""

    def __init__(self):
        self.redis_client = None
        self._unavailable = False

    def _get_client(self):
        """Lazy load Redis client"""
        if self.redis_client is None and not self._unavailable:
            try:
                self.redis_client = get_redis_client()
            except redis.RedisError as e:
                logger.warning(f"⚠️ Redis cache unavailable: {e}")
                self._unavailable = True
                return None
            if self.redis_client is None:
                self._unavailable = True
        return self.redis_client

    def is_available(self) -> bool:
        return self._get_client() is not None

    def get(self, key: str) -> Optional[Any]:
        """Get value from cache"""
        client = self._get_client()
        if not client:
            return None

        try:
            value = client.get(key)
            if value:
                logger.debug(f"✅ Cache HIT: {key}")
                return json.loads(value)
            logger.debug(f"❌ Cache MISS: {key}")
            return None
        except redis.RedisError as e:
            logger.error(f"❌ Cache get error for {key}: {e}")
            return None

    def set(self, key: str, value: Any, ttl: int = 3600) -> bool:
        """Set value in cache with TTL (default 1 hour)"""
        client = self._get_client()
        if not client:
            return False

        try:
            client.setex(key, ttl, json.dumps(value, default=str))
            logger.debug(f"✅ Cache SET: {key} (TTL: {ttl}s)")
            return True
        except redis.RedisError as e:
            logger.error(f"❌ Cache set error for {key}: {e}")
            return False

    def delete(self, key: str) -> bool:
        """Delete value from cache"""
        client = self._get_client()
        if not client:
            return False

        try:
            client.delete(key)
            logger.debug(f"✅ Cache DELETE: {key}")
            return True
        except redis.RedisError as e:
            logger.error(f"❌ Cache delete error for {key}: {e}")
            return False


# Global cache instance
cache = Cache()


def get_dashboard_stats_cached() -> Optional[dict]:
    return cache.get(DASHBOARD_STATS_KEY)


def set_dashboard_stats_cached(stats: dict) -> bool:
    return cache.set(DASHBOARD_STATS_KEY, stats, DASHBOARD_STATS_TTL)


def invalidate_dashboard_cache() -> bool:
    """Drop cached dashboard figures after any write"""
    return cache.delete(DASHBOARD_STATS_KEY)
