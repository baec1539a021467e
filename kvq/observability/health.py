"""
HTTP endpoints for KVQ observability.

This module implements health, readiness, metrics, and info endpoints
for monitoring and operational visibility.
"""

import time
from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import Response, JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from kvq.observability.logging_setup import get_logger

log = get_logger("kvq.observability")

def create_router(started_at: float) -> APIRouter:
    """관측성 라우터를 생성합니다."""
    router = APIRouter()

    @router.get("/health")
    async def health(request: Request):
        """헬스 체크 엔드포인트"""
        settings = request.app.state.settings
        return JSONResponse({
            "status": "ok",
            "service": settings.observability.service_name,
            "timestamp": time.time()
        })

    @router.get("/ready")
    async def ready(request: Request):
        """레디니스 체크 엔드포인트 (저장소 ping)"""
        settings = request.app.state.settings
        store_ok = await request.app.state.store.ping()
        return JSONResponse({
            "status": "ready" if store_ok else "unavailable",
            "service": settings.observability.service_name,
            "store": settings.store.backend,
            "timestamp": time.time()
        }, status_code=200 if store_ok else 503)

    @router.get("/metrics")
    async def metrics(request: Request):
        """Prometheus 메트릭 엔드포인트"""
        if not request.app.state.settings.observability.metrics_enabled:
            raise HTTPException(status_code=503, detail="Metrics disabled")

        return Response(
            generate_latest(),
            media_type=CONTENT_TYPE_LATEST
        )

    @router.get("/info")
    async def info(request: Request):
        """서비스 정보 엔드포인트"""
        settings = request.app.state.settings
        return JSONResponse({
            "service": settings.observability.service_name,
            "version": settings.observability.build_version,
            "uptime_seconds": int(time.time() - started_at),
            "store": settings.store.backend,
            "metrics_enabled": settings.observability.metrics_enabled,
            "log_level": settings.observability.log_level
        })

    return router
