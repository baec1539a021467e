"""
Adapters for KVQ hexagonal architecture.

This module contains the concrete implementations of port interfaces
that handle external I/O and infrastructure concerns.
"""

from .storage import RedisStore, InMemoryStore, build_store

__all__ = ["RedisStore", "InMemoryStore", "build_store"]
