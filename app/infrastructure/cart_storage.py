import logging

import redis
from redis.exceptions import RedisError

from app.core.config import settings

logger = logging.getLogger(__name__)


class CartStorage:
    """One named slot holding the JSON-serialized cart.

    Redis when available, RAM otherwise. After any Redis error the storage
    stays in RAM mode; writes never raise.
    """

    def __init__(self, redis_url: str | None = None, key: str | None = None, client=None):
        self.key = key or settings.CART_STORAGE_KEY
        self._memory_store: dict[str, str] = {}
        self.redis = client
        self.redis_available = False

        if self.redis is None and redis_url:
            try:
                self.redis = redis.from_url(
                    redis_url,
                    decode_responses=True,
                    socket_connect_timeout=1  # Fail fast if Redis is down
                )
            except (RedisError, ValueError) as e:
                logger.warning(f"⚠️ CartStorage: bad Redis URL ({e}). Using RAM fallback.")
                self.redis = None

        if self.redis is not None:
            try:
                self.redis.ping()
                self.redis_available = True
                logger.info("✅ CartStorage: Connected to Redis.")
            except RedisError as e:
                logger.warning(f"⚠️ CartStorage: Redis unreachable ({e}). Using RAM fallback.")

    def read(self) -> str | None:
        """Raw slot content, or None when the slot is empty."""
        if self.redis_available:
            try:
                data = self.redis.get(self.key)
                if data is not None:
                    return data
            except RedisError as e:
                self._handle_redis_error(e)

        return self._memory_store.get(self.key)

    def write(self, payload: str):
        if self.redis_available:
            try:
                self.redis.set(self.key, payload)
            except RedisError as e:
                self._handle_redis_error(e)

        # Always keep RAM in sync in case Redis drops later
        self._memory_store[self.key] = payload

    def _handle_redis_error(self, e):
        logger.error(f"❌ Redis Error: {e}. Switching to RAM mode.")
        self.redis_available = False
