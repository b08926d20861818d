"""
Centralized exception handling and custom exceptions
"""

from typing import Any, Dict, Optional
from fastapi import status


class SiteContentException(Exception):
    """Base exception for the site content service"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(SiteContentException):
    """Missing or invalid deployment settings"""
    pass


class AuthenticationError(SiteContentException):
    """Credential verification failed"""
    pass


class ValidationError(SiteContentException):
    """Data validation error"""
    pass


class ExternalServiceError(SiteContentException):
    """External service integration error (mail relay)"""
    pass


class ContentSyncError(SiteContentException):
    """Base for content synchronization failures"""
    pass


class RemoteUnavailable(ContentSyncError):
    """Transport failure talking to the content backend"""
    pass


class RemoteRejected(ContentSyncError):
    """Backend refused the call (authorization, validation or conflict)"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, status_code: Optional[int] = None):
        super().__init__(message, details)
        self.status_code = status_code


class SerializationError(ContentSyncError):
    """Document could not be encoded or decoded"""
    pass


class AuthRequiredError(ContentSyncError):
    """Write attempted without an editor session"""
    pass


class PersistenceError(ContentSyncError):
    """Write to the backend failed; the local snapshot was rolled back"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, reason: Optional[Exception] = None):
        super().__init__(message, details)
        self.reason = reason


def status_for_exception(exc: Exception) -> int:
    """HTTP status code for a service exception"""
    if isinstance(exc, AuthRequiredError) or isinstance(exc, AuthenticationError):
        return status.HTTP_401_UNAUTHORIZED
    if isinstance(exc, ValidationError):
        return status.HTTP_422_UNPROCESSABLE_ENTITY
    if isinstance(exc, PersistenceError):
        reason = exc.reason
        if isinstance(reason, (AuthRequiredError, AuthenticationError)):
            return status.HTTP_401_UNAUTHORIZED
        if isinstance(reason, (ConfigurationError, SerializationError)):
            return status.HTTP_500_INTERNAL_SERVER_ERROR
        return status.HTTP_502_BAD_GATEWAY
    if isinstance(exc, (RemoteUnavailable, RemoteRejected, ExternalServiceError)):
        return status.HTTP_502_BAD_GATEWAY
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def describe_exception(exc: Exception) -> str:
    """Short diagnostic string suitable for showing to an editor"""
    if isinstance(exc, PersistenceError) and exc.reason is not None:
        return f"{exc.message}: {describe_exception(exc.reason)}"
    if isinstance(exc, SiteContentException):
        return exc.message
    return str(exc) or type(exc).__name__
