"""
In-memory key-value and queue store for KVQ.

This module implements KVStorePort without an external server. It is
used for local development (STORE_BACKEND=memory) and in tests, and
mirrors the Redis semantics the HTTP layer relies on: conditional SET,
expiry in seconds, FIFO lists and WRONGTYPE errors.
"""

import asyncio
import time
from collections import deque
from typing import Callable, Deque, Dict, Optional, Tuple, Union

from kvq.core.commands import split_elements
from kvq.core.models import Condition, SetCommand
from kvq.observability.logging_setup import get_logger
from kvq.ports.kvstore import StoreOperationError

log = get_logger("kvq.memory")

WRONGTYPE = "WRONGTYPE Operation against a key holding the wrong kind of value"

Entry = Union[bytes, Deque[str]]

class InMemoryStore:
    """메모리 기반 KVStorePort 구현"""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        """
        초기화합니다.

        Args:
            clock: 만료 계산에 사용할 시계 (초 단위)
        """
        self._clock = clock
        self._data: Dict[str, Tuple[Entry, Optional[float]]] = {}
        self._lock = asyncio.Lock()
        log.info("InMemoryStore 초기화")

    def _lookup(self, key: str) -> Optional[Entry]:
        """만료된 항목은 제거하고 None을 반환합니다. 락 안에서 호출."""
        item = self._data.get(key)
        if item is None:
            return None
        entry, deadline = item
        if deadline is not None and self._clock() >= deadline:
            del self._data[key]
            return None
        return entry

    async def set(self, command: SetCommand) -> bool:
        async with self._lock:
            exists = self._lookup(command.key) is not None
            if command.condition is Condition.NX and exists:
                return False
            if command.condition is Condition.XX and not exists:
                return False
            deadline = self._clock() + command.expiry if command.expiry else None
            self._data[command.key] = (command.value.encode("utf-8"), deadline)
            return True

    async def get(self, key: str) -> Optional[bytes]:
        async with self._lock:
            entry = self._lookup(key)
        if entry is None:
            return None
        if not isinstance(entry, bytes):
            raise StoreOperationError(WRONGTYPE)
        return entry

    async def push(self, key: str, raw_value: str) -> int:
        elements = split_elements(raw_value)
        if not elements:
            return 0
        async with self._lock:
            entry = self._lookup(key)
            if entry is None:
                entry = deque()
                self._data[key] = (entry, None)
            elif isinstance(entry, bytes):
                raise StoreOperationError(WRONGTYPE)
            entry.extend(elements)
            return len(entry)

    async def pop(self, key: str) -> Optional[str]:
        async with self._lock:
            entry = self._lookup(key)
            if entry is None:
                return None
            if isinstance(entry, bytes):
                raise StoreOperationError(WRONGTYPE)
            element = entry.popleft()
            # 빈 리스트는 키와 함께 사라짐 (Redis 동작)
            if not entry:
                del self._data[key]
            return element

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        async with self._lock:
            self._data.clear()
