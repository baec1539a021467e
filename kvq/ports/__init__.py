"""
Port interfaces for KVQ hexagonal architecture.

This module defines the port interfaces (Protocols) that define
the contracts between the HTTP layer and external adapters.
"""

from .kvstore import KVStorePort, StoreError, StoreOperationError, StoreUnavailableError

__all__ = ["KVStorePort", "StoreError", "StoreOperationError", "StoreUnavailableError"]
