"""
Core domain models for KVQ.

This module defines the command and response models using Pydantic v2
for type safety and validation.
"""

from enum import Enum
from pydantic import BaseModel, Field

class Condition(str, Enum):
    """SET 조건"""
    NONE = ""
    NX = "NX"   # 키가 없을 때만
    XX = "XX"   # 키가 있을 때만

class Outcome(Enum):
    """응답 카테고리 (메시지, HTTP 상태 코드)"""
    INVALID_REQUEST = ("invalid command", 400)
    TRY_AGAIN = ("try again", 500)
    SUCCESS = ("command successfully executed", 200)

    @property
    def message(self) -> str:
        return self.value[0]

    @property
    def status_code(self) -> int:
        return self.value[1]

    @property
    def field(self) -> str:
        """JSON 응답 필드 이름"""
        return "value" if self is Outcome.SUCCESS else "err"

class SetCommand(BaseModel):
    """SET 요청 모델"""
    key: str
    value: str
    expiry: int = Field(default=0, ge=0)      # 초, 0이면 만료 없음
    condition: Condition = Condition.NONE
