"""
Publisher registration locks

Item ids are derived from a collection's item count, so two registrations for
the same publisher must never run at once. A lock is taken per publisher for
the whole write sequence; a second attempt fails fast with
RegistrationContention instead of waiting.

- InProcessPublisherLock: one process, one event loop
- RedisPublisherLock: several processes sharing a Redis (SET NX PX)
"""
import logging
import secrets
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import Optional, Set

import redis.asyncio as redis

from edunews.errors import RegistrationContention

logger = logging.getLogger(__name__)


class PublisherLock(ABC):

    @abstractmethod
    async def acquire(self, publisher: str) -> Optional[str]:
        """Try to take the lock. Returns a release token, or None if held."""

    @abstractmethod
    async def release(self, publisher: str, token: str):
        """Release a lock taken with `token`."""

    @asynccontextmanager
    async def hold(self, publisher: str):
        """
        Hold the publisher lock for the duration of the block.

        Raises:
            RegistrationContention: Lock already held
        """
        token = await self.acquire(publisher)
        if token is None:
            logger.warning(f"⚠️  Registration already in progress for {publisher}")
            raise RegistrationContention(publisher)
        try:
            yield token
        finally:
            await self.release(publisher, token)


class InProcessPublisherLock(PublisherLock):
    """Lock table for registrations running in this event loop."""

    def __init__(self):
        self.held: Set[str] = set()

    async def acquire(self, publisher: str) -> Optional[str]:
        if publisher in self.held:
            return None
        self.held.add(publisher)
        return publisher

    async def release(self, publisher: str, token: str):
        self.held.discard(publisher)

    def is_held(self, publisher: str) -> bool:
        return publisher in self.held


# Delete the key only if it still holds our token
RELEASE_SCRIPT = """
if redis.call("get", KEYS[1]) == ARGV[1] then
    return redis.call("del", KEYS[1])
else
    return 0
end
"""


class RedisPublisherLock(PublisherLock):
    """
    Redis-based lock shared across processes

    Keys: lock:register:{publisher}
    The TTL bounds how long a crashed registration can block its publisher.
    """

    def __init__(self, redis_url: str, ttl_seconds: int = 600, client=None):
        self.redis_url = redis_url
        self.ttl_seconds = ttl_seconds
        self.redis = client

    async def connect(self):
        """Initialize Redis connection"""
        if self.redis is None:
            self.redis = redis.from_url(self.redis_url, decode_responses=True)

    async def close(self):
        """Close Redis connection"""
        if self.redis is not None:
            await self.redis.aclose()
            self.redis = None

    @staticmethod
    def key(publisher: str) -> str:
        return f"lock:register:{publisher}"

    async def acquire(self, publisher: str) -> Optional[str]:
        await self.connect()
        token = secrets.token_hex(16)
        acquired = await self.redis.set(
            self.key(publisher),
            token,
            nx=True,
            px=self.ttl_seconds * 1000
        )
        return token if acquired else None

    async def release(self, publisher: str, token: str):
        released = await self.redis.eval(RELEASE_SCRIPT, 1, self.key(publisher), token)
        if not released:
            logger.warning(f"⚠️  Lock for {publisher} expired before release")


def create_publisher_lock(redis_url: Optional[str] = None, ttl_seconds: int = 600) -> PublisherLock:
    """Redis lock when a Redis URL is configured, in-process lock otherwise."""
    if redis_url:
        return RedisPublisherLock(redis_url, ttl_seconds=ttl_seconds)
    return InProcessPublisherLock()
