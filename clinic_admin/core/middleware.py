"""
Middleware for request logging and error handling
"""
import time
import logging
from typing import Callable
from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from clinic_admin.core.exceptions import ClinicException

logger = logging.getLogger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Log every request with status and duration

    Bodies are never logged: they carry patient data and credentials.
    """

    SENSITIVE_HEADERS = ['authorization', 'cookie', 'x-api-key', 'api-key']

    def mask_sensitive_headers(self, headers: dict) -> dict:
        """Mask sensitive header values"""
        masked = {}
        for key, value in headers.items():
            if key.lower() in self.SENSITIVE_HEADERS:
                masked[key] = "***MASKED***"
            else:
                masked[key] = value
        return masked

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()
        client = request.client.host if request.client else "Unknown"

        logger.info(f"🔵 {request.method} {request.url.path} from {client}")
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"📋 Headers: {self.mask_sensitive_headers(dict(request.headers))}")
            if request.query_params:
                logger.debug(f"🔍 Query Params: {dict(request.query_params)}")

        try:
            response = await call_next(request)
        except Exception as e:
            duration = time.time() - start_time
            logger.error(f"❌ REQUEST FAILED: {request.method} {request.url.path} ({duration:.3f}s): {e}")
            raise

        duration = time.time() - start_time
        logger.info(f"🟢 {request.method} {request.url.path} -> {response.status_code} ({duration:.3f}s)")
        response.headers["X-Process-Time"] = str(duration)
        return response


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Middleware to handle exceptions that escape the route handlers"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)

        except ClinicException as e:
            # Handle custom application exceptions
            return JSONResponse(
                status_code=e.status_code,
                content={
                    "error": e.message,
                    "status_code": e.status_code,
                    "path": request.url.path,
                }
            )

        except Exception as e:
            # Handle unexpected errors
            logger.exception(f"Unexpected error: {str(e)}")
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "error": "Internal server error",
                    "status_code": 500,
                    "path": request.url.path,
                }
            )
