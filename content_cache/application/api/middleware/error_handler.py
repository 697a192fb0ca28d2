"""
Error Handling Middleware
=========================

Last line of defense for exceptions that nothing else handled.

WHERE DOES AN ERROR END UP?
---------------------------
1. Route handler raises StoreError / NotFoundError
   -> app exception handlers (app.py) -> {"success": false, "error": ...}
2. Another middleware raises (e.g. a malformed cached body in the
   read-through cache)
   -> this middleware -> 500 with the same envelope
3. Anything unexpected anywhere
   -> this middleware -> 500

This middleware must be registered LAST so that it wraps every other
middleware (Starlette runs the most recently added middleware first).
"""

import traceback
from collections.abc import Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from content_cache.content.responses import error_response
from content_cache.core.logging.logger import get_logger
from content_cache.infrastructure.monitoring.metrics_collector import get_metrics_collector

logger = get_logger(__name__)


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """
    Converts unhandled exceptions into a 500 JSON response.

    Internal details stay in the logs; the client only sees a generic message
    and the error type, plus the traceback when ``include_traceback`` is set
    (development only).
    """

    def __init__(self, app, include_traceback: bool = False):
        super().__init__(app)
        self.include_traceback = include_traceback

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)

        except Exception as e:
            method = request.method
            path = request.url.path
            error_type = type(e).__name__

            logger.error(
                f"Unhandled exception in request: {method} {path}",
                method=method,
                path=path,
                error_type=error_type,
                error_message=str(e),
                exc_info=True,
            )
            get_metrics_collector().record_error(error_type, "unhandled_exception")

            content = error_response("An unexpected error occurred while processing your request")
            content["error_type"] = error_type

            if self.include_traceback:
                content["traceback"] = traceback.format_exc()
                content["detail"] = str(e)

            return JSONResponse(status_code=500, content=content)
