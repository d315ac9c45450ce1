import json
import logging
import zlib
from typing import Optional, Any
import redis
from .config import get_settings

logger = logging.getLogger(__name__)


class CacheService:
    """Redis JSON cache (zlib compressed). Disabled when no URL is configured."""

    def __init__(self, url: Optional[str] = None, compress: bool = True):
        settings = get_settings()
        url = url or settings.REDIS_URL
        self.redis = redis.Redis.from_url(url, decode_responses=False) if url else None
        self.compress = compress

    @property
    def enabled(self) -> bool:
        return self.redis is not None

    def get_json(self, key: str) -> Optional[Any]:
        if not self.enabled:
            return None
        try:
            data = self.redis.get(key)
        except redis.RedisError as e:
            logger.warning(f"Cache read failed for {key}: {str(e)}")
            return None
        if data is None:
            return None
        if self.compress:
            try:
                data = zlib.decompress(data)
            except zlib.error:
                pass
        try:
            return json.loads(data.decode("utf-8") if isinstance(data, bytes) else data)
        except ValueError:
            return None

    def set_json(self, key: str, value: Any, ttl_seconds: int) -> bool:
        if not self.enabled:
            return False
        raw = json.dumps(value, ensure_ascii=False).encode("utf-8")
        payload = zlib.compress(raw) if self.compress else raw
        try:
            self.redis.setex(key, ttl_seconds, payload)
        except redis.RedisError as e:
            logger.warning(f"Cache write failed for {key}: {str(e)}")
            return False
        return True
