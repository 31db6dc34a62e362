"""RedisService tests against the in-memory mock."""
import asyncio
import dataclasses

import pytest

from unity_random.errors import ErrorCode, RandomError
from unity_random.logic.stream import init_state
from unity_random.redis_service import LockMetrics, RedisService


def run(coro):
    return asyncio.run(coro)


class TestStreamState:
    def test_save_and_load(self, redis_service_with_mock: RedisService):
        state = init_state(42)
        run(redis_service_with_mock.save_stream_state("abc", state))
        assert run(redis_service_with_mock.get_stream_state("abc")) == state

    def test_missing_stream_is_none(self, redis_service_with_mock: RedisService):
        assert run(redis_service_with_mock.get_stream_state("nope")) is None

    def test_delete(self, redis_service_with_mock: RedisService):
        run(redis_service_with_mock.save_stream_state("abc", init_state(1)))
        assert run(redis_service_with_mock.delete_stream_state("abc")) is True
        assert run(redis_service_with_mock.delete_stream_state("abc")) is False

    def test_malformed_persisted_state_raises(self, redis_service_with_mock, mock_redis):
        mock_redis._store["state:stream:bad"] = "[1, 2, 3]"
        with pytest.raises(ValueError):
            run(redis_service_with_mock.get_stream_state("bad"))


class TestStreamLock:
    def test_lock_is_exclusive(self, redis_service_with_mock: RedisService):
        async def scenario():
            async with redis_service_with_mock.stream_lock("s1") as metrics:
                assert metrics.acquire_ms >= 0
                with pytest.raises(RandomError) as exc_info:
                    async with redis_service_with_mock.stream_lock("s1"):
                        pass
                return exc_info.value

        error = run(scenario())
        assert error.code == ErrorCode.STREAM_BUSY

    def test_lock_metrics_carry_acquire_time_only(self):
        assert [f.name for f in dataclasses.fields(LockMetrics)] == ["acquire_ms"]

    def test_release_requires_matching_token(self, redis_service_with_mock, mock_redis):
        token = run(redis_service_with_mock.acquire_stream_lock("s1"))
        assert token is not None
        assert run(redis_service_with_mock.release_stream_lock("s1", "wrong")) is False
        assert run(redis_service_with_mock.release_stream_lock("s1", token)) is True
        assert "lock:stream:s1" not in mock_redis._store


class TestIdempotency:
    def test_cache_round_trip(self, redis_service_with_mock: RedisService):
        payload = {"distribution": "value", "count": 1}
        response = {"values": [0.5]}
        run(redis_service_with_mock.store_idempotency("s", "r", payload, response))
        assert run(redis_service_with_mock.check_idempotency("s", "r", payload)) == response

    def test_conflicting_payload(self, redis_service_with_mock: RedisService):
        run(redis_service_with_mock.store_idempotency("s", "r", {"count": 1}, {}))
        with pytest.raises(RandomError) as exc_info:
            run(redis_service_with_mock.check_idempotency("s", "r", {"count": 2}))
        assert exc_info.value.code == ErrorCode.IDEMPOTENCY_CONFLICT

    def test_unseen_request(self, redis_service_with_mock: RedisService):
        assert run(redis_service_with_mock.check_idempotency("s", "r", {})) is None

    def test_client_required(self):
        with pytest.raises(RuntimeError, match="not connected"):
            RedisService().client
