"""
Storage adapters for KVQ hexagonal architecture.

This module contains the KVStorePort implementations: the Redis
client adapter and an in-memory substitute.
"""

from kvq.settings import StoreConfig
from .redis_store import RedisStore
from .memory_store import InMemoryStore

def build_store(config: StoreConfig):
    """설정된 백엔드에 맞는 저장소를 생성합니다."""
    if config.backend == "memory":
        return InMemoryStore()
    if config.backend == "redis":
        return RedisStore.from_config(config)
    raise ValueError(f"unknown store backend: {config.backend}")

__all__ = ["RedisStore", "InMemoryStore", "build_store"]
