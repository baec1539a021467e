"""
FastAPI application factory for KVQ.

The store adapter is constructed by the caller and injected here, so
tests can pass an in-memory substitute.
"""

import time
from contextlib import asynccontextmanager
from fastapi import FastAPI
from kvq.api.routes import router as command_router
from kvq.observability.health import create_router
from kvq.observability.logging_setup import get_logger
from kvq.ports.kvstore import KVStorePort
from kvq.settings import Settings

log = get_logger("kvq.app")

def create_app(settings: Settings, store: KVStorePort) -> FastAPI:
    """FastAPI 애플리케이션을 생성합니다."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        # 종료 시 저장소 연결 정리
        await store.close()
        log.info("저장소 종료 완료")

    app = FastAPI(
        title=settings.observability.service_name,
        version=settings.observability.build_version,
        description="Key-value and queue store over HTTP",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store

    app.include_router(create_router(time.time()))
    app.include_router(command_router)
    return app
