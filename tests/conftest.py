"""
테스트 설정 및 픽스처

이 모듈은 pytest 설정과 공통 픽스처를 제공합니다.
"""

import asyncio
import pytest
from fastapi.testclient import TestClient
from kvq.adapters.storage.memory_store import InMemoryStore
from kvq.api.app import create_app
from kvq.ports.kvstore import StoreOperationError, StoreUnavailableError
from kvq.settings import Settings


class FakeClock:
    """테스트용 수동 시계"""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FailingStore:
    """모든 호출에서 지정한 예외를 발생시키는 저장소"""

    def __init__(self, error: Exception):
        self.error = error
        self.closed = False

    async def set(self, command):
        raise self.error

    async def get(self, key):
        raise self.error

    async def push(self, key, raw_value):
        raise self.error

    async def pop(self, key):
        raise self.error

    async def ping(self):
        return False

    async def close(self):
        self.closed = True


class SlowStore(InMemoryStore):
    """응답이 지연되는 저장소"""

    def __init__(self, delay: float):
        super().__init__()
        self.delay = delay

    async def get(self, key):
        await asyncio.sleep(self.delay)
        return await super().get(key)


@pytest.fixture
def sample_settings():
    """테스트용 설정"""
    settings = Settings()
    settings.store.backend = "memory"
    settings.store.timeout_sec = 1.0
    settings.observability.service_name = "test-service"
    settings.observability.build_version = "1.0.0"
    settings.observability.log_level = "INFO"
    return settings


@pytest.fixture
def fake_clock():
    """테스트용 시계"""
    return FakeClock()


@pytest.fixture
def memory_store(fake_clock):
    """테스트용 메모리 저장소"""
    return InMemoryStore(clock=fake_clock)


@pytest.fixture
def client(sample_settings, memory_store):
    """메모리 저장소를 주입한 테스트 클라이언트"""
    return TestClient(create_app(sample_settings, memory_store))


@pytest.fixture
def slow_store():
    """타임아웃보다 느린 저장소"""
    return SlowStore(delay=1.0)


@pytest.fixture
def unavailable_store():
    return FailingStore(StoreUnavailableError("connection refused"))


@pytest.fixture
def rejecting_store():
    return FailingStore(StoreOperationError("WRONGTYPE Operation against a key holding the wrong kind of value"))


# pytest 설정
def pytest_configure(config):
    """pytest 설정"""
    config.addinivalue_line(
        "markers", "asyncio: 비동기 테스트 마커"
    )
    config.addinivalue_line(
        "markers", "integration: 통합 테스트 마커"
    )


def pytest_collection_modifyitems(config, items):
    """테스트 아이템 수정"""
    for item in items:
        # 비동기 테스트에 asyncio 마커 추가
        if asyncio.iscoroutinefunction(getattr(item, "function", None)):
            item.add_marker(pytest.mark.asyncio)

        # 통합 테스트 마커 추가
        if "integration" in item.name:
            item.add_marker(pytest.mark.integration)
