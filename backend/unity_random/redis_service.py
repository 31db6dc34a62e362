"""Redis service for stream state, per-stream locking and idempotency."""
import hashlib
import json
import time
import uuid
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any

import redis.asyncio as redis

from unity_random.config import settings
from unity_random.errors import ErrorCode, RandomError
from unity_random.logic.state import State


@dataclass
class LockMetrics:
    """Metrics from lock acquisition for telemetry."""

    acquire_ms: float


class RedisService:
    """Redis client for stream states, stream locks and the idempotency cache."""

    # Key prefixes
    IDEMPOTENCY_PREFIX = "idem:"
    LOCK_PREFIX = "lock:stream:"
    STATE_PREFIX = "state:stream:"

    # TTLs in seconds
    IDEMPOTENCY_TTL = settings.idempotency_ttl_seconds
    LOCK_TTL = settings.lock_ttl_seconds
    STATE_TTL = settings.stream_state_ttl_seconds

    # Token-safe lock release (compare-and-delete)
    RELEASE_LOCK_SCRIPT = """
    if redis.call("get", KEYS[1]) == ARGV[1] then
        return redis.call("del", KEYS[1])
    else
        return 0
    end
    """

    def __init__(self, redis_url: str | None = None):
        self._url = redis_url or settings.redis_url
        self._client: redis.Redis | None = None

    async def connect(self) -> None:
        """Connect to Redis."""
        if self._client is None:
            self._client = redis.from_url(self._url, decode_responses=True)

    async def close(self) -> None:
        """Close Redis connection."""
        if self._client:
            await self._client.close()
            self._client = None

    @property
    def client(self) -> redis.Redis:
        """Get Redis client, raise if not connected."""
        if self._client is None:
            raise RuntimeError("Redis not connected")
        return self._client

    def _payload_hash(self, payload: dict[str, Any]) -> str:
        """Create deterministic hash of payload for conflict detection."""
        canonical = json.dumps(payload, sort_keys=True, separators=(",", ":"))
        return hashlib.sha256(canonical.encode()).hexdigest()[:16]

    def _idempotency_key(self, stream_id: str, request_id: str) -> str:
        return f"{self.IDEMPOTENCY_PREFIX}{stream_id}:{request_id}"

    async def check_idempotency(
        self, stream_id: str, request_id: str, payload: dict[str, Any]
    ) -> dict[str, Any] | None:
        """
        Check idempotency cache.

        Returns the cached response if request_id was seen for this stream
        with the same payload, None if not seen. Raises IDEMPOTENCY_CONFLICT
        when the payload differs.
        """
        cached = await self.client.get(self._idempotency_key(stream_id, request_id))

        if cached is None:
            return None

        data = json.loads(cached)
        if data.get("payload_hash") != self._payload_hash(payload):
            raise RandomError(
                ErrorCode.IDEMPOTENCY_CONFLICT,
                "Same clientRequestId used with different payload.",
            )

        return data.get("response")

    async def store_idempotency(
        self,
        stream_id: str,
        request_id: str,
        payload: dict[str, Any],
        response: dict[str, Any],
    ) -> None:
        """Store response in idempotency cache."""
        data = {
            "payload_hash": self._payload_hash(payload),
            "response": response,
        }
        await self.client.setex(
            self._idempotency_key(stream_id, request_id),
            self.IDEMPOTENCY_TTL,
            json.dumps(data),
        )

    async def acquire_stream_lock(self, stream_id: str) -> str | None:
        """
        Attempt to acquire the per-stream lock with a unique token.

        Returns the token if acquired, None if already locked.
        """
        key = f"{self.LOCK_PREFIX}{stream_id}"
        token = str(uuid.uuid4())
        acquired = await self.client.set(key, token, nx=True, ex=self.LOCK_TTL)
        return token if acquired is True else None

    async def release_stream_lock(self, stream_id: str, token: str) -> bool:
        """Release the per-stream lock only if token matches."""
        key = f"{self.LOCK_PREFIX}{stream_id}"
        result = await self.client.eval(self.RELEASE_LOCK_SCRIPT, 1, key, token)
        return result == 1

    @asynccontextmanager
    async def stream_lock(self, stream_id: str):
        """
        Context manager for the stream lock.

        Raises STREAM_BUSY if the lock is held. Yields LockMetrics and
        releases the lock on exit.
        """
        t0 = time.monotonic()
        token = await self.acquire_stream_lock(stream_id)
        if token is None:
            raise RandomError(
                ErrorCode.STREAM_BUSY,
                "Another draw is in progress for this stream.",
            )
        metrics = LockMetrics(acquire_ms=(time.monotonic() - t0) * 1000)
        try:
            yield metrics
        finally:
            await self.release_stream_lock(stream_id, token)

    async def get_stream_state(self, stream_id: str) -> State | None:
        """Load a stream's state; None if unknown or expired."""
        cached = await self.client.get(f"{self.STATE_PREFIX}{stream_id}")
        if cached is None:
            return None
        return State.from_words(json.loads(cached))

    async def save_stream_state(self, stream_id: str, state: State) -> None:
        """Persist a stream's state as [s0, s1, s2, s3] with TTL."""
        await self.client.setex(
            f"{self.STATE_PREFIX}{stream_id}",
            self.STATE_TTL,
            json.dumps(list(state.words())),
        )

    async def delete_stream_state(self, stream_id: str) -> bool:
        """Delete a stream's state; False if it did not exist."""
        deleted = await self.client.delete(f"{self.STATE_PREFIX}{stream_id}")
        return deleted == 1


# Global instance
redis_service = RedisService()
