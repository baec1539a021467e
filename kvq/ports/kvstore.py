"""
Key-value and queue store port interface.

This module defines the protocol for the backing store together with
the error types every adapter raises.
"""

from typing import Protocol, Optional
from kvq.core.models import SetCommand

class StoreError(Exception):
    """저장소 오류 기본 클래스"""

class StoreUnavailableError(StoreError):
    """저장소에 연결할 수 없거나 응답 시간이 초과된 경우"""

class StoreOperationError(StoreError):
    """저장소가 명령을 거부한 경우 (메시지는 클라이언트에 노출 가능)"""

class KVStorePort(Protocol):
    """키-값/큐 저장소 포트 인터페이스"""

    async def set(self, command: SetCommand) -> bool:
        """
        조건과 만료 시간을 적용해 값을 저장합니다.

        Args:
            command: SET 명령

        Returns:
            실제로 저장되었는지 여부 (조건 불충족 시 False)
        """
        ...

    async def get(self, key: str) -> Optional[bytes]:
        """
        키로 값을 조회합니다.

        Args:
            key: 조회할 키

        Returns:
            값 또는 None (키가 없는 경우)
        """
        ...

    async def push(self, key: str, raw_value: str) -> int:
        """
        공백으로 분리한 요소들을 큐 뒤쪽에 추가합니다.

        Args:
            key: 큐 키
            raw_value: 공백으로 구분된 요소들

        Returns:
            추가 후 큐 길이 (추가할 요소가 없으면 0)
        """
        ...

    async def pop(self, key: str) -> Optional[str]:
        """
        큐 앞쪽에서 요소 하나를 꺼냅니다.

        Args:
            key: 큐 키

        Returns:
            꺼낸 요소 또는 None (큐가 비어 있는 경우)
        """
        ...

    async def ping(self) -> bool:
        """저장소 연결 상태를 확인합니다."""
        ...

    async def close(self) -> None:
        """연결을 정리합니다."""
        ...
