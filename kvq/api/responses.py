"""
JSON response shapes for KVQ.

Every handler answers with one of these: a canned outcome, a value,
or a specific error message.
"""

from fastapi.responses import JSONResponse
from kvq.core.models import Outcome

KEY_NOT_FOUND = "Key not found"
QUEUE_EMPTY = "queue is empty"

def outcome_response(outcome: Outcome) -> JSONResponse:
    """카테고리별 고정 응답"""
    return JSONResponse({outcome.field: outcome.message}, status_code=outcome.status_code)

def value_response(value: str) -> JSONResponse:
    return JSONResponse({"value": value}, status_code=200)

def error_response(message: str, status_code: int = 400) -> JSONResponse:
    return JSONResponse({"err": message}, status_code=status_code)
