"""
Response envelope for the admin console endpoints
"""

from typing import Any, Optional, Dict
from pydantic import BaseModel
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from utils.error_codes import ERROR_MESSAGES, ErrorCode


class ApiResponse(BaseModel):
    """Standard API response envelope"""
    success: bool
    data: Optional[Any] = None
    error: Optional[Dict[str, Any]] = None
    meta: Optional[Dict[str, Any]] = None


class ResponseFormatter:
    """Global response formatter"""

    @staticmethod
    def success(data: Any = None, meta: Dict[str, Any] = None) -> ApiResponse:
        return ApiResponse(success=True, data=data, meta=meta)

    @staticmethod
    def error(
        message: str,
        code: str = ErrorCode.SYSTEM_INTERNAL_ERROR.value,
        details: Dict[str, Any] = None,
        status_code: int = 500
    ) -> JSONResponse:
        """Error envelope wrapped in a JSONResponse with the given status"""
        response = error_response(code, message, details)
        return JSONResponse(
            status_code=status_code,
            content=response.model_dump()
        )


def format_success_response(data: Any = None, meta: Dict[str, Any] = None) -> Dict[str, Any]:
    """Helper function to format success responses"""
    return ResponseFormatter.success(data, meta).model_dump()


def error_response(
    error_code: Any,
    message: str = None,
    details: Dict[str, Any] = None
) -> ApiResponse:
    """Error envelope; an ErrorCode without a message gets its default text"""
    code = error_code.value if isinstance(error_code, ErrorCode) else str(error_code)
    if message is None:
        message = ERROR_MESSAGES.get(error_code, "") if isinstance(error_code, ErrorCode) else ""
    error_body: Dict[str, Any] = {
        'code': code,
        'message': message
    }
    if details is not None:
        error_body['details'] = details

    return ApiResponse(
        success=False,
        data=None,
        error=error_body
    )


def handle_api_exception(
    exc: Exception,
    debug: bool = False
) -> ApiResponse:
    """Convert exceptions into a standardized envelope"""
    if isinstance(exc, HTTPException):
        return error_response(f'HTTP_{exc.status_code}', exc.detail)
    msg = str(exc) if debug else ERROR_MESSAGES[ErrorCode.SYSTEM_INTERNAL_ERROR]
    return error_response(ErrorCode.SYSTEM_INTERNAL_ERROR, msg)
