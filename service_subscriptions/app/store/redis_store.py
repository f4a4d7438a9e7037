"""
Redis store for Subscriptions Service.
"""

from typing import Optional, Union

import redis

from shared.config import BaseConfig
from shared.logging import get_logger
from .base import RecordNotFound


class RedisSubscriptionStore:
    """Reads subscription records from Redis hashes.

    Each namespace is a hash; each record is a field holding the JSON
    payload written by the provisioning system.
    """

    def __init__(
        self,
        redis_url: Optional[str] = None,
        client: Optional[redis.Redis] = None,
        socket_timeout: float = 5.0
    ):
        if client is None and not redis_url:
            raise ValueError("redis_url or client is required")

        self.redis_url = redis_url
        self.logger = get_logger("subscriptions.store.redis")
        self.redis = client or redis.Redis.from_url(
            redis_url,
            socket_connect_timeout=socket_timeout,
            socket_timeout=socket_timeout,
            health_check_interval=30
        )

    @classmethod
    def from_config(cls, config: BaseConfig) -> "RedisSubscriptionStore":
        return cls(redis_url=config.redis_url, socket_timeout=config.redis_socket_timeout)

    def get_record(self, namespace: str, key: str) -> Union[bytes, str]:
        """Fetch one raw record. Redis errors propagate unchanged."""
        raw = self.redis.hget(namespace, key)
        if raw is None:
            self.logger.debug("Subscription record missing", namespace=namespace, key=key)
            raise RecordNotFound(namespace, key)
        return raw

    def health_check(self) -> bool:
        """Check Redis health."""
        try:
            return bool(self.redis.ping())
        except redis.RedisError as e:
            self.logger.warning("Redis health check failed", error=str(e))
            return False

    def close(self):
        """Close the underlying connection pool."""
        self.redis.close()
        self.logger.info("Redis store closed")
