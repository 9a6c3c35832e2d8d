# luxematch/utils/locks.py
from __future__ import annotations
from typing import Optional
from redis.asyncio import Redis
import uuid

class RedisLock:
    """
    Simple, single-instance lock using SET NX EX.
    The stored token identifies the holder, so a late release from a
    previous holder never frees somebody else's lock.
    """
    def __init__(self, redis: Redis, key: str, ttl: int = 20):
        self.redis = redis
        self.key = f"lock:{key}"
        self.ttl = ttl
        self._token: Optional[str] = None

    async def acquire(self, token: Optional[str] = None) -> bool:
        token = token or uuid.uuid4().hex
        ok = await self.redis.set(self.key, token, nx=True, ex=self.ttl)
        if ok:
            self._token = token
            return True
        return False

    async def release(self, token: Optional[str] = None) -> bool:
        """Delete the lock only if it is still held with `token`."""
        token = token or self._token
        if token is None:
            return False
        # GET + DEL is not atomic; a lock expiring in between is harmless here
        if await self.redis.get(self.key) == token:
            await self.redis.delete(self.key)
            return True
        return False

    async def force_release(self) -> None:
        await self.redis.delete(self.key)
