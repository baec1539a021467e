"""
HTTP layer for KVQ.

This module contains the FastAPI application factory and the command
handlers that translate form requests into store operations.
"""

from .app import create_app

__all__ = ["create_app"]
