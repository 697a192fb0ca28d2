"""
Middleware Package
==================

- error_handler: Centralized handling of exceptions no route handled
- response_cache: Read-through caching of whole JSON responses in Redis

Registration order lives in application/app.py (Starlette runs the last
registered middleware first, so the error handler is added last).
"""

from .error_handler import ErrorHandlingMiddleware
from .response_cache import ResponseCacheMiddleware, response_cache_key

__all__ = [
    "ErrorHandlingMiddleware",
    "ResponseCacheMiddleware",
    "response_cache_key",
]
