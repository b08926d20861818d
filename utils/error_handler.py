"""
Global error handler middleware
"""

import traceback
import sentry_sdk
from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from datetime import datetime, timezone

from utils.error_codes import error_code_for
from utils.exceptions import (
    AuthenticationError,
    SiteContentException,
    describe_exception,
    status_for_exception,
)
from utils.logging import get_logger
from utils.monitoring import track_request_metrics

logger = get_logger(__name__)


class GlobalExceptionHandler(BaseHTTPMiddleware):
    """Global exception handling middleware with Sentry integration"""

    async def dispatch(self, request: Request, call_next):
        try:
            response = await call_next(request)
            return response
        except HTTPException:
            # Re-raise HTTP exceptions as-is
            raise
        except Exception as e:
            return await self._handle_exception(request, e)

    async def _handle_exception(self, request: Request, exc: Exception) -> JSONResponse:
        """Handle and log exceptions with Sentry integration"""
        request_id = getattr(request.state, "request_id", "unknown")
        status_code = status_for_exception(exc)

        # Rejected credentials are routine, not worth an error report
        if not isinstance(exc, AuthenticationError):
            with sentry_sdk.new_scope() as scope:
                scope.set_tag("request_id", request_id)
                scope.set_context("request", {
                    "method": request.method,
                    "url": str(request.url),
                })
                sentry_sdk.capture_exception(exc)

        log = logger.warning if status_code < 500 else logger.error
        log(
            f"Unhandled exception in {request.method} {request.url.path}",
            extra={
                "request_id": request_id,
                "exception_type": type(exc).__name__,
                "exception_message": str(exc),
                "traceback": traceback.format_exc(),
                "user_agent": request.headers.get("user-agent"),
                "ip_address": request.client.host if request.client else None
            }
        )

        if isinstance(exc, SiteContentException):
            message = describe_exception(exc)
        else:
            message = "Internal server error"

        track_request_metrics(
            method=request.method,
            endpoint=request.url.path,
            status_code=status_code,
            duration=0  # Duration not available in error case
        )

        return self._create_error_response(
            status_code,
            message,
            {"request_id": request_id, "code": error_code_for(exc).value}
        )

    def _create_error_response(
        self,
        status_code: int,
        message: str,
        details: dict
    ) -> JSONResponse:
        """Create standardized error response"""
        return JSONResponse(
            status_code=status_code,
            content={
                "error": message,
                "details": details,
                "status_code": status_code,
                "timestamp": datetime.now(timezone.utc).isoformat()
            }
        )
