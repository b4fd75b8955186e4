import logging
from fastapi import HTTPException, Request
from onstreet_mock.core.redis import get_redis
from onstreet_mock.core.config import settings
from onstreet_mock.core.metrics import rate_limit_exceeded

logger = logging.getLogger(__name__)


async def check_rate_limit(client_id: str):
    redis = get_redis()
    if redis is None:
        return
    key = f"rl:{client_id}"
    try:
        current = await redis.get(key)
        if current is None:
            await redis.set(key, "1", ex=settings.RATE_LIMIT_WINDOW)
            return
        count = int(current)
        if count >= settings.RATE_LIMIT:
            rate_limit_exceeded.inc()
            raise HTTPException(status_code=429, detail="Rate limit exceeded")
        await redis.incr(key)
    except HTTPException:
        raise
    except Exception as e:
        logger.warning(f"Rate limit check failed for {client_id}: {e}")


async def rate_limit_by_client(request: Request):
    client_id = request.client.host if request.client else "anonymous"
    await check_rate_limit(client_id)
