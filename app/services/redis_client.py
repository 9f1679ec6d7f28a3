"""Redis-backed request budget per client."""
import logging
from typing import Optional

import redis

from app.config import settings

logger = logging.getLogger(__name__)


class RedisRateLimiter:
    """
    Fixed-window request budget keyed by client id.

    The first request in a window seeds the counter with the full budget;
    every request decrements it. A client is allowed while the remaining
    count is not negative.
    """

    key_prefix = "ratelimit"

    def __init__(
        self,
        client: Optional[redis.Redis] = None,
        limit: Optional[int] = None,
        window_seconds: Optional[int] = None,
    ):
        self.client = client or redis.Redis(
            host=settings.redis_host,
            port=settings.redis_port,
            db=settings.redis_db,
            password=settings.redis_password,
            decode_responses=True,
        )
        self.limit = settings.rate_limit_requests if limit is None else limit
        self.window_seconds = (
            settings.rate_limit_window_seconds if window_seconds is None else window_seconds
        )

    def allow(self, client_id: str) -> bool:
        """Consume one request from `client_id`'s budget."""
        key = f"{self.key_prefix}:{client_id}"
        try:
            pipe = self.client.pipeline(transaction=True)
            pipe.set(key, self.limit, ex=self.window_seconds, nx=True)
            pipe.decr(key)
            pipe.ttl(key)
            _, remaining, ttl = pipe.execute()

            if ttl == -1:
                # Key expired between SET and DECR; DECR recreated it without a TTL
                logger.info(f"Rate limit window for {client_id} rolled over mid-request, reseeding")
                remaining = self.limit - 1
                self.client.set(key, remaining, ex=self.window_seconds)
        except redis.RedisError as e:
            # Limiter outage must not take the API down
            logger.warning(f"Rate limiter unavailable, allowing {client_id}: {e}")
            return True

        if remaining < 0:
            logger.info(f"Rate limit exceeded for {client_id}")
            return False
        return True

    def ping(self) -> bool:
        """Check if Redis is connected."""
        try:
            return self.client.ping()
        except redis.RedisError:
            return False


# Global rate limiter instance (connects lazily)
rate_limiter = RedisRateLimiter()
