"""
Error Handling Middleware - Educational Documentation
======================================================

WHAT IS CENTRALIZED ERROR HANDLING?
------------------------------------
Centralized error handling provides a consistent way to handle exceptions
across the application. Instead of try/except in every route handler, this
middleware catches whatever escaped the route and formats it consistently.

FASTAPI ERROR HANDLING:
-----------------------
Two layers are used in this service:

1. Exception handlers (registered in app.py) map the domain hierarchy:
   - ListingNotFoundError     → 404
   - ListingValidationError   → 422
   - ListingsCacheBaseError   → 500 with ``to_dict()`` body
2. This middleware is the catch-all for anything else (500).

Cache backend failures never reach either layer: the cache service resolves
them to a miss or a no-op before they can.
"""

import traceback
from collections.abc import Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from listings_cache.core.logging.logger import get_logger, get_request_id

logger = get_logger(__name__)


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """
    Last line of defense for unhandled exceptions.

    It ensures:
    - No unhandled exception crashes the server
    - All errors are logged with the request id
    - Clients get a generic JSON body
    - Tracebacks are only exposed when explicitly enabled (development)
    """

    def __init__(self, app, include_traceback: bool = False):
        """
        Args:
            app: The ASGI application
            include_traceback: Whether to include stack traces in error responses
                              (should be False in production)
        """
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

            error_response = {
                "error": "internal_server_error",
                "message": "An unexpected error occurred while processing your request",
                "error_type": error_type,
                "request_id": get_request_id(),
            }

            if self.include_traceback:
                error_response["traceback"] = traceback.format_exc()
                error_response["detail"] = str(e)

            return JSONResponse(status_code=500, content=error_response)
