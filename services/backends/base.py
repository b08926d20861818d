"""
Base content backend interface with strict abstraction
"""

import time
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import Any, Awaitable, Callable, Dict, Optional

import httpx
from pydantic import BaseModel

from schemas.site_content import SiteContent
from utils.auth import EditorSession
from utils.exceptions import RemoteRejected, RemoteUnavailable
from utils.monitoring import track_content_operation

DEFAULT_COMMIT_MESSAGE = "chore(content): update site content"

DocumentCallback = Callable[[Dict[str, Any]], None]


class FetchResult(BaseModel):
    """Remote document (possibly partial) or not-found"""
    document: Optional[Dict[str, Any]] = None
    version: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.document is not None


class PersistResult(BaseModel):
    """Outcome of a successful write"""
    version: Optional[str] = None
    commit_url: Optional[str] = None
    path: Optional[str] = None


class Subscription:
    """Handle for a live change feed; close() stops delivery"""

    def __init__(self, closer: Callable[[], Awaitable[None]]):
        self._closer = closer
        self.closed = False

    async def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        await self._closer()


class BaseBackendAdapter(ABC):
    """Abstract base class for all content persistence backends"""

    @property
    @abstractmethod
    def backend_name(self) -> str:
        """Backend identifier"""
        pass

    @abstractmethod
    async def fetch_document(self) -> FetchResult:
        """Read the current remote document"""
        pass

    @abstractmethod
    async def persist_document(
        self,
        document: SiteContent,
        session: EditorSession,
        message: Optional[str] = None
    ) -> PersistResult:
        """Overwrite the remote document"""
        pass

    @property
    def supports_subscription(self) -> bool:
        """Whether the backend pushes changes instead of being polled"""
        return False

    async def subscribe(self, callback: DocumentCallback, seed: SiteContent) -> Subscription:
        """Deliver the current document and every later change to callback.

        ``seed`` is written when the remote document does not exist yet.
        """
        raise NotImplementedError(f"{self.backend_name} backend does not push changes")

    async def aclose(self) -> None:
        """Release connections"""
        pass

    @asynccontextmanager
    async def track(self, operation: str):
        """Record duration and outcome of one backend call"""
        started = time.perf_counter()
        outcome = "error"
        try:
            yield
            outcome = "success"
        finally:
            track_content_operation(self.backend_name, operation, outcome, time.perf_counter() - started)


def _body_excerpt(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text[:200]


def check_response(response: httpx.Response, action: str) -> None:
    """Translate a non-2xx response into the content sync taxonomy"""
    if response.is_success:
        return
    code = response.status_code
    details = {"status_code": code, "body": _body_excerpt(response)}
    if code >= 500 or code == 429:
        raise RemoteUnavailable(f"{action} failed with HTTP {code}", details)
    raise RemoteRejected(f"{action} rejected with HTTP {code}", details, status_code=code)


def transport_failure(exc: httpx.HTTPError, action: str) -> RemoteUnavailable:
    """Wrap an httpx transport error"""
    return RemoteUnavailable(f"{action} failed: {exc.__class__.__name__}", {"error": str(exc)})
