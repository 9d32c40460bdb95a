from redis.asyncio import Redis

from .redis_client import get_redis_client


async def get_redis() -> Redis:
    """
    FastAPI dependency that provides the shared Redis client.

    Tests override this dependency with an in-memory fake.
    """
    return get_redis_client()
