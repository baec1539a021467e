# kvq/main.py
import os, asyncio
import uvicorn
from kvq.adapters.storage import build_store
from kvq.api.app import create_app
from kvq.common.retry import retry_with_backoff
from kvq.observability.logging_setup import setup_logging, get_logger
from kvq.ports.kvstore import KVStorePort, StoreUnavailableError
from kvq.settings import Settings, StoreConfig

log = get_logger("kvq.main")

def _b(name, default=False): return os.getenv(name, str(default)).lower() in ("1","true","yes","on")

def build_settings() -> Settings:
    s = Settings()

    # 저장소
    s.store.backend = os.getenv("STORE_BACKEND", s.store.backend)
    s.store.url = os.getenv("REDIS_URL", s.store.url)
    s.store.host = os.getenv("REDIS_HOST", s.store.host)
    s.store.port = int(os.getenv("REDIS_PORT", s.store.port))
    s.store.password = os.getenv("REDIS_PASSWORD", s.store.password)
    s.store.db = int(os.getenv("REDIS_DB", s.store.db))
    s.store.timeout_sec = float(os.getenv("STORE_TIMEOUT_SEC", s.store.timeout_sec))
    s.store.connect_retries = int(os.getenv("STORE_CONNECT_RETRIES", s.store.connect_retries))

    # HTTP
    s.http.host = os.getenv("HTTP_HOST", s.http.host)
    s.http.port = int(os.getenv("HTTP_PORT", s.http.port))

    # 관측성
    s.observability.service_name = os.getenv("SERVICE_NAME", s.observability.service_name)
    s.observability.log_level = os.getenv("LOG_LEVEL", s.observability.log_level)
    s.observability.log_json = _b("LOG_JSON", s.observability.log_json)
    s.observability.metrics_enabled = _b("METRICS_ENABLED", s.observability.metrics_enabled)

    return s

async def wait_for_store(store: KVStorePort, config: StoreConfig) -> bool:
    """저장소가 응답할 때까지 백오프로 재시도합니다. 끝내 실패해도 기동은 계속."""
    async def _ping():
        if not await store.ping():
            raise StoreUnavailableError("store ping failed")
        return True

    try:
        await retry_with_backoff(
            _ping,
            max_retries=config.connect_retries,
            base_delay=config.backoff_initial_sec,
            max_delay=config.backoff_max_sec,
        )
        log.info(f"저장소 연결 확인 backend:{config.backend}")
        return True
    except StoreUnavailableError:
        log.warning(f"저장소 연결 실패, /ready 에서 unavailable 보고 backend:{config.backend}")
        return False

async def serve(s: Settings) -> None:
    store = build_store(s.store)
    await wait_for_store(store, s.store)
    app = create_app(s, store)

    log.info(f"HTTP 서버 시작 중 host:{s.http.host} port:{s.http.port}")
    await uvicorn.Server(uvicorn.Config(
        app,
        host=s.http.host,
        port=s.http.port,
        log_level=s.observability.log_level.lower(),
        access_log=True,
        log_config=None,  # loguru 인터셉트 유지
    )).serve()

def main():
    s = build_settings()
    setup_logging(s.observability.log_level, json=s.observability.log_json)
    log.info("설정 로드 완료")
    asyncio.run(serve(s))

if __name__ == "__main__":
    main()
