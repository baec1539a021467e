from __future__ import annotations
import logging
import sys
from loguru import logger

# ---- stdlib logging → loguru 인터셉트 ----
class InterceptHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())

def _hook_stdlib_logging() -> None:
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    # uvicorn/redis 로거도 loguru로 흡수
    for noisy in ("uvicorn", "uvicorn.error", "uvicorn.access", "asyncio", "redis"):
        l = logging.getLogger(noisy)
        l.handlers = [InterceptHandler()]
        l.propagate = False

# ---- 개발 콘솔 포맷(사람 친화) ----
DEV_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level:<7}</level> | "
    "<cyan>{extra[name]}</cyan> | "
    "<cyan>{file}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

def setup_logging(log_level: str = "INFO", json: bool = False) -> None:
    """
    loguru 초기화.
    - json=False: 콘솔 컬러 출력
    - json=True: 한 줄 JSON (컨테이너 로그 수집용)
    - stdlib logging 흡수
    """
    logger.remove()  # 기본 sink 제거
    logger.configure(extra={"name": "kvq"})
    if json:
        logger.add(
            sink=sys.stdout,
            serialize=True,
            backtrace=False,
            diagnose=False,
            level=log_level.upper(),
            enqueue=False,
        )
    else:
        logger.add(
            sink=lambda m: print(m, end=""),
            format=DEV_FORMAT,
            colorize=True,
            backtrace=True,
            diagnose=False,   # 요청 값 노출 방지
            level=log_level.upper(),
            enqueue=False,
        )
    _hook_stdlib_logging()

def get_logger(name: str = "kvq", **ctx):
    """선택적으로 컨텍스트를 바인딩한 logger 반환."""
    return logger.bind(name=name, **ctx)

def with_context(**ctx):
    """컨텍스트 매니저로 일시 컨텍스트 부여."""
    return logger.contextualize(**ctx)
