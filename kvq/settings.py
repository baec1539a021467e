# kvq/settings.py
from __future__ import annotations
from pydantic import BaseModel, Field

class StoreConfig(BaseModel):
    backend: str = "redis"                    # redis | memory
    url: str | None = None                    # redis://... 가 있으면 host/port/db 무시
    host: str = "redis"
    port: int = 6379
    password: str | None = None
    db: int = 0
    timeout_sec: float = 2.0
    connect_retries: int = 5
    backoff_initial_sec: float = 0.5
    backoff_max_sec: float = 5.0

class HTTPConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 3000

class Observability(BaseModel):
    metrics_enabled: bool = True
    service_name: str = "kvq"
    build_version: str = "0.1.0"
    log_level: str = "INFO"
    log_json: bool = False

class Settings(BaseModel):
    store: StoreConfig = Field(default_factory=StoreConfig)
    http: HTTPConfig = Field(default_factory=HTTPConfig)
    observability: Observability = Field(default_factory=Observability)
