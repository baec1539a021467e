"""
Redis-backed key-value and queue store for KVQ.

This module implements KVStorePort on top of the redis-py asyncio
client. The client keeps a connection pool and is shared by all
concurrent requests.
"""

from contextlib import contextmanager
from typing import Iterator, Optional

from redis.asyncio import Redis
from redis.exceptions import (
    ConnectionError as RedisConnectionError,
    RedisError,
    ResponseError,
    TimeoutError as RedisTimeoutError,
)

from kvq.core.commands import split_elements
from kvq.core.models import Condition, SetCommand
from kvq.observability.logging_setup import get_logger
from kvq.ports.kvstore import StoreError, StoreOperationError, StoreUnavailableError
from kvq.settings import StoreConfig

log = get_logger("kvq.redis")

@contextmanager
def _translate(operation: str, key: str) -> Iterator[None]:
    """redis 예외를 StoreError 계열로 변환합니다."""
    try:
        yield
    except (RedisConnectionError, RedisTimeoutError) as e:
        log.error(f"Redis 연결 오류 op:{operation} key:{key} error:{e}")
        raise StoreUnavailableError(str(e)) from e
    except ResponseError as e:
        log.warning(f"Redis 명령 거부 op:{operation} key:{key} error:{e}")
        raise StoreOperationError(str(e)) from e
    except RedisError as e:
        log.error(f"Redis 오류 op:{operation} key:{key} error:{e}")
        raise StoreError(str(e)) from e

class RedisStore:
    """Redis 기반 KVStorePort 구현"""

    def __init__(self, client: Redis):
        """
        초기화합니다.

        Args:
            client: redis.asyncio 클라이언트 (decode_responses=False)
        """
        self._redis = client

    @classmethod
    def from_config(cls, config: StoreConfig) -> "RedisStore":
        """설정으로부터 클라이언트를 생성합니다."""
        if config.url:
            client = Redis.from_url(
                config.url,
                socket_timeout=config.timeout_sec,
                socket_connect_timeout=config.timeout_sec,
            )
            log.info("Redis 클라이언트 생성 (URL)")
        else:
            client = Redis(
                host=config.host,
                port=config.port,
                password=config.password or None,
                db=config.db,
                socket_timeout=config.timeout_sec,
                socket_connect_timeout=config.timeout_sec,
            )
            log.info(f"Redis 클라이언트 생성 {config.host}:{config.port} db:{config.db}")
        return cls(client)

    async def set(self, command: SetCommand) -> bool:
        # ex=0은 Redis가 거부하므로 만료 없음은 None으로 전달
        with _translate("set", command.key):
            result = await self._redis.set(
                command.key,
                command.value,
                ex=command.expiry or None,
                nx=command.condition is Condition.NX,
                xx=command.condition is Condition.XX,
            )
        return bool(result)

    async def get(self, key: str) -> Optional[bytes]:
        with _translate("get", key):
            return await self._redis.get(key)

    async def push(self, key: str, raw_value: str) -> int:
        elements = split_elements(raw_value)
        if not elements:
            return 0
        with _translate("push", key):
            return await self._redis.rpush(key, *elements)

    async def pop(self, key: str) -> Optional[str]:
        with _translate("pop", key):
            result = await self._redis.lpop(key)
        if result is None:
            return None
        return result.decode("utf-8", errors="replace")

    async def ping(self) -> bool:
        try:
            return bool(await self._redis.ping())
        except RedisError as e:
            log.warning(f"Redis ping 실패: {e}")
            return False

    async def close(self) -> None:
        await self._redis.aclose()
        log.info("Redis 연결 종료")
