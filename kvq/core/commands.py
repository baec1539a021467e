"""
Form field to command translation for KVQ.

This module converts raw form values into validated store commands.
All functions are pure and independent of the HTTP framework.
"""

import re
from typing import List, Optional
from .models import Condition, SetCommand

# 부호 있는 10진 정수
_INT_RE = re.compile(r"[+-]?[0-9]+")
# Redis는 현재 시각(ms) + EX*1000 이 int64 를 넘으면 SET 을 거부함.
# 2**32 초 여유로 2106년까지의 현재 시각을 흡수
MAX_EXPIRY = (2 ** 63 - 1) // 1000 - 2 ** 32

class InvalidCommandError(ValueError):
    """요청 필드가 유효하지 않을 때 발생"""

def parse_expiry(raw: Optional[str]) -> int:
    """
    만료 시간 필드를 파싱합니다.

    Args:
        raw: 폼 필드 값 (없거나 빈 문자열이면 0)

    Returns:
        만료 시간 (초)

    Raises:
        InvalidCommandError: 정수가 아니거나 음수이거나 MAX_EXPIRY 를 넘는 경우
    """
    if raw is None or raw == "":
        return 0
    if not _INT_RE.fullmatch(raw):
        raise InvalidCommandError(f"expiry is not an integer: {raw!r}")
    expiry = int(raw)
    if expiry < 0 or expiry > MAX_EXPIRY:
        raise InvalidCommandError(f"expiry out of range: {expiry}")
    return expiry

def parse_condition(raw: Optional[str]) -> Condition:
    """NX/XX 외의 값은 무조건 SET으로 처리합니다."""
    if raw == Condition.NX.value:
        return Condition.NX
    if raw == Condition.XX.value:
        return Condition.XX
    return Condition.NONE

def build_set_command(key: str, value: str, expiry: Optional[str] = None,
                      condition: Optional[str] = None) -> SetCommand:
    """폼 필드로부터 SetCommand를 생성합니다."""
    return SetCommand(
        key=key,
        value=value,
        expiry=parse_expiry(expiry),
        condition=parse_condition(condition),
    )

def split_elements(raw_value: str) -> List[str]:
    """
    큐에 넣을 값을 공백 기준으로 분리합니다.

    연속된 공백은 빈 요소를 만들지 않습니다.
    """
    return raw_value.split()
