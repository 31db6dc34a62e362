"""Pytest fixtures for backend tests."""
import json
from pathlib import Path
from typing import Any, Generator

import pytest
from fastapi.testclient import TestClient

from unity_random.main import app
from unity_random.redis_service import RedisService
from unity_random.telemetry import telemetry_service

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class MockRedis:
    """Mock Redis client for testing."""

    def __init__(self):
        self._store: dict[str, str] = {}
        self._last_set_ex: int | None = None

    async def get(self, key: str) -> str | None:
        return self._store.get(key)

    async def set(
        self, key: str, value: str, nx: bool = False, ex: int | None = None
    ) -> bool | None:
        if nx and key in self._store:
            return None
        self._store[key] = value
        self._last_set_ex = ex
        return True

    async def setex(self, key: str, ttl: int, value: str) -> bool:
        self._store[key] = value
        return True

    async def delete(self, key: str) -> int:
        if key in self._store:
            del self._store[key]
            return 1
        return 0

    async def eval(self, script: str, numkeys: int, *args) -> int:
        """Compare-and-delete, as RELEASE_LOCK_SCRIPT does."""
        key = args[0]
        expected_value = args[1]
        if self._store.get(key) == expected_value:
            del self._store[key]
            return 1
        return 0

    async def close(self) -> None:
        pass

    def clear(self) -> None:
        self._store.clear()
        self._last_set_ex = None


class RecordingTelemetrySink:
    """Telemetry sink that keeps every emitted event."""

    def __init__(self):
        self.events: list[tuple[str, dict[str, Any]]] = []

    def emit(self, event_name: str, data: dict[str, Any]) -> None:
        self.events.append((event_name, data))

    def get_events(self, event_name: str) -> list[dict[str, Any]]:
        return [data for name, data in self.events if name == event_name]


@pytest.fixture(scope="session")
def reference_vectors() -> dict[str, Any]:
    """Load recorded reference vectors."""
    with open(FIXTURES_DIR / "reference_vectors.json") as f:
        return json.load(f)


@pytest.fixture
def mock_redis() -> MockRedis:
    """Create a fresh mock Redis for each test."""
    return MockRedis()


@pytest.fixture
def redis_service_with_mock(mock_redis: MockRedis) -> Generator[RedisService, None, None]:
    """Create RedisService with mock client."""
    service = RedisService()
    service._client = mock_redis
    yield service
    mock_redis.clear()


@pytest.fixture
def client_with_mock_redis(mock_redis: MockRedis) -> Generator[TestClient, None, None]:
    """Create TestClient with mocked Redis."""
    from unity_random.redis_service import redis_service

    original_client = redis_service._client
    redis_service._client = mock_redis

    with TestClient(app) as client:
        yield client

    redis_service._client = original_client
    mock_redis.clear()


@pytest.fixture
def client_with_recording_telemetry(
    mock_redis: MockRedis,
) -> Generator[tuple[TestClient, RecordingTelemetrySink, MockRedis], None, None]:
    """TestClient with mocked Redis and a recording telemetry sink."""
    from unity_random.redis_service import redis_service

    original_client = redis_service._client
    original_sink = telemetry_service._sink
    redis_service._client = mock_redis
    sink = RecordingTelemetrySink()
    telemetry_service.set_sink(sink)

    with TestClient(app) as client:
        yield client, sink, mock_redis

    telemetry_service.set_sink(original_sink)
    redis_service._client = original_client
    mock_redis.clear()


@pytest.fixture
def test_client() -> TestClient:
    """Create basic TestClient (for tests that don't need Redis)."""
    return TestClient(app)
