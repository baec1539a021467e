"""
HTTP command handlers for KVQ.

This module translates form-encoded requests into store commands
(set, get, qpush, qpop) and store results back into JSON. GET on the
same paths serves the matching HTML form.
"""

import asyncio
import time
from pathlib import Path
from typing import Awaitable, Optional, TypeVar

from fastapi import APIRouter, Depends, Request
from fastapi.responses import FileResponse, JSONResponse
from starlette.datastructures import FormData

from kvq.api.responses import (
    KEY_NOT_FOUND, QUEUE_EMPTY, error_response, outcome_response, value_response,
)
from kvq.core.commands import InvalidCommandError, build_set_command
from kvq.core.models import Outcome
from kvq.observability.logging_setup import get_logger, with_context
from kvq.observability.metrics import command_seconds, commands_total, store_errors
from kvq.ports.kvstore import KVStorePort, StoreError, StoreOperationError, StoreUnavailableError

log = get_logger("kvq.api")

T = TypeVar("T")

STATIC_DIR = Path(__file__).resolve().parent.parent / "static"

router = APIRouter()

def get_store(request: Request) -> KVStorePort:
    """앱에 주입된 저장소를 반환합니다."""
    return request.app.state.store

def _store_timeout(request: Request) -> float:
    return request.app.state.settings.store.timeout_sec

async def _call_store(awaitable: Awaitable[T], timeout: float) -> T:
    """저장소 호출에 요청 단위 타임아웃을 적용합니다."""
    try:
        return await asyncio.wait_for(awaitable, timeout)
    except asyncio.TimeoutError as e:
        raise StoreUnavailableError(f"store call timed out after {timeout}s") from e

async def _read_form(request: Request, command: str) -> Optional[FormData]:
    """폼 본문을 파싱합니다. 실패하면 None."""
    try:
        return await request.form()
    except Exception as e:
        log.warning(f"폼 파싱 실패 command:{command} error:{e}")
        return None

def _field(form: FormData, request: Request, name: str) -> str:
    """폼 값 → 쿼리 파라미터 → 빈 문자열 순으로 찾습니다."""
    value = form.get(name)
    if isinstance(value, str):
        return value
    return request.query_params.get(name, "")

def _finish(command: str, response: JSONResponse, started: float) -> JSONResponse:
    """메트릭 기록 후 응답을 반환합니다."""
    if response.status_code < 400:
        outcome = "ok"
    elif response.status_code < 500:
        outcome = "client_error"
    else:
        outcome = "server_error"
    commands_total.labels(command=command, outcome=outcome).inc()
    command_seconds.labels(command=command).observe(time.perf_counter() - started)
    return response

def _store_failed(operation: str, key: str, e: StoreError) -> None:
    store_errors.labels(operation=operation, kind=type(e).__name__).inc()
    log.error(f"저장소 오류 op:{operation} key:{key} error:{e}")

# ---- 명령 ----

@router.post("/set")
async def set_value(request: Request, store: KVStorePort = Depends(get_store)):
    """조건/만료 시간을 적용해 값을 저장합니다."""
    started = time.perf_counter()
    form = await _read_form(request, "set")
    if form is None:
        return _finish("set", outcome_response(Outcome.TRY_AGAIN), started)

    key = _field(form, request, "key")
    try:
        command = build_set_command(
            key=key,
            value=_field(form, request, "value"),
            expiry=_field(form, request, "expiry"),
            condition=_field(form, request, "condition"),
        )
    except InvalidCommandError as e:
        log.info(f"잘못된 set 요청 key:{key} reason:{e}")
        return _finish("set", outcome_response(Outcome.INVALID_REQUEST), started)

    with with_context(operation="set", key=command.key):
        log.info(f"set key:{command.key} expiry:{command.expiry} condition:{command.condition.value}")
        log.debug(f"set value:{command.value}")
        try:
            written = await _call_store(store.set(command), _store_timeout(request))
        except StoreError as e:
            _store_failed("set", command.key, e)
            return _finish("set", outcome_response(Outcome.TRY_AGAIN), started)

        if not written:
            log.info(f"조건 불충족으로 저장 생략 key:{command.key} condition:{command.condition.value}")
        return _finish("set", outcome_response(Outcome.SUCCESS), started)

@router.post("/get")
async def get_value(request: Request, store: KVStorePort = Depends(get_store)):
    """키로 값을 조회합니다."""
    started = time.perf_counter()
    form = await _read_form(request, "get")
    if form is None:
        return _finish("get", outcome_response(Outcome.TRY_AGAIN), started)

    key = _field(form, request, "key")
    with with_context(operation="get", key=key):
        try:
            value = await _call_store(store.get(key), _store_timeout(request))
        except StoreError as e:
            _store_failed("get", key, e)
            return _finish("get", outcome_response(Outcome.TRY_AGAIN), started)

        if value is None:
            log.info(f"키 없음 key:{key}")
            return _finish("get", error_response(KEY_NOT_FOUND, 400), started)

        log.info(f"get key:{key}")
        return _finish("get", value_response(value.decode("utf-8", errors="replace")), started)

@router.post("/qpush")
async def qpush(request: Request, store: KVStorePort = Depends(get_store)):
    """공백으로 구분된 요소들을 큐에 추가합니다."""
    started = time.perf_counter()
    form = await _read_form(request, "qpush")
    if form is None:
        return _finish("qpush", outcome_response(Outcome.TRY_AGAIN), started)

    key = _field(form, request, "key")
    with with_context(operation="push", key=key):
        try:
            length = await _call_store(store.push(key, _field(form, request, "value")), _store_timeout(request))
        except StoreError as e:
            _store_failed("push", key, e)
            return _finish("qpush", outcome_response(Outcome.TRY_AGAIN), started)

        log.info(f"qpush key:{key} length:{length}")
        return _finish("qpush", outcome_response(Outcome.SUCCESS), started)

@router.post("/qpop")
async def qpop(request: Request, store: KVStorePort = Depends(get_store)):
    """큐 앞쪽에서 요소 하나를 꺼냅니다."""
    started = time.perf_counter()
    form = await _read_form(request, "qpop")
    if form is None:
        return _finish("qpop", outcome_response(Outcome.TRY_AGAIN), started)

    key = _field(form, request, "key")
    with with_context(operation="pop", key=key):
        try:
            element = await _call_store(store.pop(key), _store_timeout(request))
        except StoreOperationError as e:
            _store_failed("pop", key, e)
            return _finish("qpop", error_response(str(e), 400), started)
        except StoreError as e:
            _store_failed("pop", key, e)
            return _finish("qpop", outcome_response(Outcome.TRY_AGAIN), started)

        if element is None:
            log.info(f"빈 큐 key:{key}")
            return _finish("qpop", error_response(QUEUE_EMPTY, 400), started)

        log.info(f"qpop key:{key}")
        return _finish("qpop", value_response(element), started)

# ---- 정적 폼 ----

@router.get("/")
async def home_page():
    """홈 페이지"""
    return FileResponse(STATIC_DIR / "homePage.html")

@router.get("/set")
async def set_form():
    """SET 입력 폼"""
    return FileResponse(STATIC_DIR / "setForm.html")

@router.get("/get")
async def get_form():
    """GET 입력 폼"""
    return FileResponse(STATIC_DIR / "getForm.html")

@router.get("/qpush")
async def qpush_form():
    """QPUSH 입력 폼"""
    return FileResponse(STATIC_DIR / "qpushForm.html")

@router.get("/qpop")
async def qpop_form():
    """QPOP 입력 폼"""
    return FileResponse(STATIC_DIR / "qpopForm.html")
