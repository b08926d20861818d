"""
Standard error code taxonomy
"""

from enum import Enum

from utils.exceptions import (
    AuthenticationError,
    AuthRequiredError,
    ConfigurationError,
    ExternalServiceError,
    PersistenceError,
    RemoteRejected,
    RemoteUnavailable,
    SerializationError,
    ValidationError,
)


class ErrorCode(str, Enum):
    """Standardized error codes"""

    # Authentication & Authorization
    AUTH_REQUIRED = "AUTH_REQUIRED"
    AUTH_INVALID_CREDENTIALS = "AUTH_INVALID_CREDENTIALS"

    # Content synchronization
    CONTENT_REMOTE_UNAVAILABLE = "CONTENT_REMOTE_UNAVAILABLE"
    CONTENT_REMOTE_REJECTED = "CONTENT_REMOTE_REJECTED"
    CONTENT_SERIALIZATION_FAILED = "CONTENT_SERIALIZATION_FAILED"
    CONTENT_PERSIST_FAILED = "CONTENT_PERSIST_FAILED"

    # Data Validation
    VALIDATION_INVALID_INPUT = "VALIDATION_INVALID_INPUT"
    VALIDATION_MISSING_FIELD = "VALIDATION_MISSING_FIELD"

    # External Services
    EXTERNAL_SERVICE_UNAVAILABLE = "EXTERNAL_SERVICE_UNAVAILABLE"

    # System Errors
    SYSTEM_CONFIGURATION_ERROR = "SYSTEM_CONFIGURATION_ERROR"
    SYSTEM_INTERNAL_ERROR = "SYSTEM_INTERNAL_ERROR"


ERROR_MESSAGES = {
    ErrorCode.AUTH_REQUIRED: "An editor session is required for this operation",
    ErrorCode.AUTH_INVALID_CREDENTIALS: "Invalid credentials",

    ErrorCode.CONTENT_REMOTE_UNAVAILABLE: "Content backend is unavailable",
    ErrorCode.CONTENT_REMOTE_REJECTED: "Content backend rejected the request",
    ErrorCode.CONTENT_SERIALIZATION_FAILED: "Content document could not be encoded or decoded",
    ErrorCode.CONTENT_PERSIST_FAILED: "Failed to save site content",

    ErrorCode.VALIDATION_INVALID_INPUT: "Input validation failed",
    ErrorCode.VALIDATION_MISSING_FIELD: "Required field is missing",

    ErrorCode.EXTERNAL_SERVICE_UNAVAILABLE: "External service is unavailable",

    ErrorCode.SYSTEM_CONFIGURATION_ERROR: "System configuration error",
    ErrorCode.SYSTEM_INTERNAL_ERROR: "Internal system error"
}


def error_code_for(exc: Exception) -> ErrorCode:
    """Map an exception to its error code"""
    if isinstance(exc, PersistenceError):
        return ErrorCode.CONTENT_PERSIST_FAILED
    if isinstance(exc, AuthRequiredError):
        return ErrorCode.AUTH_REQUIRED
    if isinstance(exc, AuthenticationError):
        return ErrorCode.AUTH_INVALID_CREDENTIALS
    if isinstance(exc, RemoteUnavailable):
        return ErrorCode.CONTENT_REMOTE_UNAVAILABLE
    if isinstance(exc, RemoteRejected):
        return ErrorCode.CONTENT_REMOTE_REJECTED
    if isinstance(exc, SerializationError):
        return ErrorCode.CONTENT_SERIALIZATION_FAILED
    if isinstance(exc, ValidationError):
        return ErrorCode.VALIDATION_INVALID_INPUT
    if isinstance(exc, ExternalServiceError):
        return ErrorCode.EXTERNAL_SERVICE_UNAVAILABLE
    if isinstance(exc, ConfigurationError):
        return ErrorCode.SYSTEM_CONFIGURATION_ERROR
    return ErrorCode.SYSTEM_INTERNAL_ERROR
