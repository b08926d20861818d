"""
REST backend: talks to a content API that owns the durable write path
"""

from typing import Any, Dict, Optional

import httpx

from .base import BaseBackendAdapter, FetchResult, PersistResult, check_response, transport_failure
from schemas.site_content import SiteContent, serialize_document
from utils.auth import EditorSession
from utils.exceptions import AuthRequiredError, ConfigurationError, SerializationError
from utils.http_client import get_async_client
from utils.logging import get_logger

logger = get_logger(__name__)


class RestContentAdapter(BaseBackendAdapter):
    """Client for GET/POST {base_url}/api/content"""

    def __init__(
        self,
        base_url: str,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ):
        if not base_url:
            raise ConfigurationError("CONTENT_API_BASE_URL is required for the rest content backend")
        self.endpoint = f"{base_url.rstrip('/')}/api/content"
        self._owns_client = client is None
        self.client = client or get_async_client(timeout=timeout)

    @property
    def backend_name(self) -> str:
        return "rest"

    def _json(self, response: httpx.Response, action: str) -> Dict[str, Any]:
        try:
            data = response.json()
        except ValueError as e:
            raise SerializationError(f"{action} returned invalid JSON: {e}")
        if not isinstance(data, dict):
            raise SerializationError(f"{action} returned a non-object body")
        return data

    async def fetch_document(self) -> FetchResult:
        async with self.track("fetch"):
            try:
                response = await self.client.get(self.endpoint)
            except httpx.HTTPError as e:
                raise transport_failure(e, "Content API read")
            if response.status_code == 404:
                return FetchResult()
            check_response(response, "Content API read")
            data = self._json(response, "Content API read")
            content = data.get("content")
            if content is not None and not isinstance(content, dict):
                raise SerializationError("Content API returned a non-object document")
            return FetchResult(document=content, version=data.get("sha"))

    async def persist_document(
        self,
        document: SiteContent,
        session: EditorSession,
        message: Optional[str] = None
    ) -> PersistResult:
        """POST the whole document with the editor's Basic credential"""
        if session is None or session.credential is None:
            raise AuthRequiredError("The content API requires an editor credential")
        async with self.track("persist"):
            body: Dict[str, Any] = {
                "content": serialize_document(document),
                "email": session.identity.email,
            }
            if message:
                body["message"] = message
            try:
                response = await self.client.post(
                    self.endpoint,
                    json=body,
                    headers={"Authorization": session.credential.authorization_header()}
                )
            except httpx.HTTPError as e:
                raise transport_failure(e, "Content API write")
            check_response(response, "Content API write")
            data = self._json(response, "Content API write")
            logger.info(f"Content API committed {data.get('path')}: {data.get('commitUrl')}")
            return PersistResult(
                version=data.get("sha"),
                commit_url=data.get("commitUrl"),
                path=data.get("path"),
            )

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()
