import logging
from typing import Optional
from redis.asyncio import Redis
from onstreet_mock.core.config import settings

logger = logging.getLogger(__name__)

redis: Optional[Redis] = None

async def init_redis(url: Optional[str] = None) -> Optional[Redis]:
    global redis
    url = url or settings.REDIS_URL
    if not url:
        logger.info("REDIS_URL not set, rate limiting disabled")
        return None
    try:
        redis = Redis.from_url(url, decode_responses=False)
        await redis.ping()
        logger.info("Connected to Redis")
        return redis
    except Exception as e:
        logger.error(f"Failed to connect to Redis: {e}")
        redis = None
        raise

async def close_redis():
    global redis
    if redis:
        await redis.aclose()
        redis = None

def get_redis() -> Optional[Redis]:
    return redis
