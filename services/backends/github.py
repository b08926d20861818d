"""
GitHub hosted-file backend: one JSON file in a repository is the document
"""

import base64
import binascii
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from .base import (
    DEFAULT_COMMIT_MESSAGE,
    BaseBackendAdapter,
    FetchResult,
    PersistResult,
    check_response,
    transport_failure,
)
from schemas.site_content import SiteContent, decode_document, encode_document
from utils.auth import EditorSession
from utils.exceptions import ConfigurationError, SerializationError
from utils.http_client import get_async_client
from utils.logging import get_logger

logger = get_logger(__name__)

GITHUB_API_VERSION = "2022-11-28"


class GitHubContentsAdapter(BaseBackendAdapter):
    """Reads and commits the content file through the GitHub Contents API.

    Every successful persist creates a commit on the configured branch. The
    file's blob SHA is re-read right before writing and sent back as the
    concurrency guard; a stale SHA makes GitHub refuse the write, which
    surfaces as RemoteRejected (no retry).
    """

    def __init__(
        self,
        token: str,
        repo: str,
        branch: str = "main",
        path: str = "content/site-content.json",
        committer_name: str = "JaipurTV Bot",
        committer_email: str = "bot@jaipurtv.in",
        api_url: str = "https://api.github.com",
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ):
        owner, _, name = (repo or "").partition("/")
        if not token:
            raise ConfigurationError("GITHUB_TOKEN is required for the github content backend")
        if not owner or not name or "/" in name:
            raise ConfigurationError(
                f'Expected GITHUB_REPO in the form "owner/repo", received "{repo}"'
            )
        self.owner = owner
        self.repo = name
        self.branch = branch
        self.path = path
        self.committer = {"name": committer_name, "email": committer_email}
        self.contents_url = f"{api_url.rstrip('/')}/repos/{owner}/{name}/contents/{quote(path, safe='/')}"
        self._owns_client = client is None
        self.client = client or get_async_client(timeout=timeout)
        self._headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
        }

    @property
    def backend_name(self) -> str:
        return "github"

    def _json(self, response: httpx.Response, action: str) -> Dict[str, Any]:
        try:
            data = response.json()
        except ValueError as e:
            raise SerializationError(f"{action} returned invalid JSON: {e}")
        if not isinstance(data, dict):
            raise SerializationError("unexpected-github-response", {"path": self.path, "received": type(data).__name__})
        return data

    async def _get_file(self) -> Optional[Dict[str, Any]]:
        """Raw contents entry for the file, None on 404"""
        try:
            response = await self.client.get(
                self.contents_url,
                params={"ref": self.branch},
                headers=self._headers
            )
        except httpx.HTTPError as e:
            raise transport_failure(e, "GitHub content read")
        if response.status_code == 404:
            return None
        check_response(response, "GitHub content read")
        data = self._json(response, "GitHub content read")
        if "sha" not in data:
            raise SerializationError("unexpected-github-response", {"path": self.path})
        return data

    async def fetch_document(self) -> FetchResult:
        """Read and decode the file at branch/path"""
        async with self.track("fetch"):
            data = await self._get_file()
            if data is None:
                logger.info(f"Content file {self.path} not found on {self.owner}/{self.repo}@{self.branch}")
                return FetchResult()
            if data.get("encoding") != "base64" or "content" not in data:
                raise SerializationError("unexpected-github-response", {"encoding": data.get("encoding")})
            try:
                raw = base64.b64decode(data["content"])
            except (binascii.Error, ValueError) as e:
                raise SerializationError(f"Failed to decode GitHub file content: {e}")
            return FetchResult(document=decode_document(raw), version=data["sha"])

    async def current_version(self) -> Optional[str]:
        """Blob SHA of the file right now, None when it does not exist"""
        data = await self._get_file()
        return data["sha"] if data else None

    def _author_for(self, session: Optional[EditorSession]) -> Dict[str, str]:
        if session is None:
            return dict(self.committer)
        identity = session.identity
        return {"name": identity.name or identity.email, "email": identity.email}

    async def persist_document(
        self,
        document: SiteContent,
        session: EditorSession,
        message: Optional[str] = None
    ) -> PersistResult:
        """Commit the serialized document; creates the file if it is missing"""
        async with self.track("persist"):
            encoded = base64.b64encode(encode_document(document).encode("utf-8")).decode("ascii")
            sha = await self.current_version()
            body: Dict[str, Any] = {
                "message": message or DEFAULT_COMMIT_MESSAGE,
                "content": encoded,
                "branch": self.branch,
                "committer": self.committer,
                "author": self._author_for(session),
            }
            if sha:
                body["sha"] = sha
            try:
                response = await self.client.put(self.contents_url, json=body, headers=self._headers)
            except httpx.HTTPError as e:
                raise transport_failure(e, "GitHub content commit")
            check_response(response, "GitHub content commit")
            data = self._json(response, "GitHub content commit")
            result = PersistResult(
                version=(data.get("content") or {}).get("sha"),
                commit_url=(data.get("commit") or {}).get("html_url"),
                path=self.path,
            )
            logger.info(
                f"{'Updated' if sha else 'Created'} {self.path} on {self.owner}/{self.repo}@{self.branch}: {result.commit_url}"
            )
            return result

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()
