import redis
from typing import Optional, TypeVar, Type
from pydantic import BaseModel
from career_compass.config import get_settings

T = TypeVar("T", bound=BaseModel)

KEY_PREFIX = "career_compass"


class RedisCache:
    """Pydantic models stored as JSON strings under a service-wide key prefix."""

    def __init__(self, url: Optional[str] = None, prefix: str = KEY_PREFIX):
        self.prefix = prefix
        self.client = redis.from_url(
            url or get_settings().REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=5,
        )

    def _key(self, key: str) -> str:
        return f"{self.prefix}:{key}" if self.prefix else key

    def get(self, key: str, model: Type[T]) -> Optional[T]:
        """Get cached item and deserialize to Pydantic model."""
        data = self.client.get(self._key(key))
        if data:
            return model.model_validate_json(data)
        return None

    def set(self, key: str, value: BaseModel, ttl_seconds: int) -> None:
        """Cache Pydantic model with TTL."""
        self.client.setex(self._key(key), ttl_seconds, value.model_dump_json())

    def delete(self, key: str) -> None:
        """Invalidate single cache entry."""
        self.client.delete(self._key(key))

    def ping(self) -> bool:
        return bool(self.client.ping())
