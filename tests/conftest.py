"""
Pytest configuration and shared fixtures for site content tests
"""

import asyncio
import copy
from typing import Any, Dict, List, Optional, Tuple

import pytest

from schemas.site_content import SiteContent, serialize_document
from services.backends.base import BaseBackendAdapter, FetchResult, PersistResult
from services.content.defaults import default_site_content
from utils.auth import (
    AdminUserRecord,
    AdminUserRegistry,
    EditorCredential,
    EditorIdentity,
    EditorSession,
    hash_password,
)
from utils.config import Config

ADMIN_EMAIL = "admin@jaipurtv.in"
ADMIN_PASSWORD = "pink-city-2024"


class MemoryBackendAdapter(BaseBackendAdapter):
    """In-memory backend; failures and a persist gate are set per test"""

    def __init__(self, document: Optional[Dict[str, Any]] = None):
        self.document = document
        self.fetch_error: Optional[Exception] = None
        self.persist_error: Optional[Exception] = None
        self.persist_gate: Optional[asyncio.Event] = None
        self.persist_started = asyncio.Event()
        self.persisted: List[Tuple[SiteContent, EditorSession, Optional[str]]] = []
        self.fetch_calls = 0
        self.closed = False

    @property
    def backend_name(self) -> str:
        return "memory"

    async def fetch_document(self) -> FetchResult:
        self.fetch_calls += 1
        if self.fetch_error is not None:
            raise self.fetch_error
        if self.document is None:
            return FetchResult()
        return FetchResult(document=copy.deepcopy(self.document), version=f"v{len(self.persisted)}")

    async def persist_document(self, document, session, message=None) -> PersistResult:
        self.persist_started.set()
        if self.persist_gate is not None:
            await self.persist_gate.wait()
        self.persisted.append((document, session, message))
        if self.persist_error is not None:
            raise self.persist_error
        self.document = serialize_document(document)
        return PersistResult(version=f"v{len(self.persisted)}", path="memory://site-content")

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def defaults() -> SiteContent:
    return default_site_content()


@pytest.fixture
def memory_adapter() -> MemoryBackendAdapter:
    return MemoryBackendAdapter()


@pytest.fixture
def editor_session() -> EditorSession:
    """Signed-in editor with a credential"""
    return EditorSession(
        identity=EditorIdentity(email=ADMIN_EMAIL, name="JaipurTV Admin", role="Owner"),
        credential=EditorCredential(email=ADMIN_EMAIL, password=ADMIN_PASSWORD)
    )


@pytest.fixture(scope="session")
def admin_password_hash() -> str:
    return hash_password(ADMIN_PASSWORD)


@pytest.fixture
def admin_registry(admin_password_hash) -> AdminUserRegistry:
    return AdminUserRegistry(
        "unused.json",
        users=[AdminUserRecord(email=ADMIN_EMAIL, password_hash=admin_password_hash, name="JaipurTV Admin", role="Owner")]
    )


@pytest.fixture
def auth_headers(editor_session) -> Dict[str, str]:
    return {"Authorization": editor_session.credential.authorization_header()}


@pytest.fixture
def test_config(tmp_path) -> Config:
    """Configuration independent of the environment"""
    return Config(
        _env_file=None,
        content_backend="static",
        static_content_path=str(tmp_path / "site-content.json"),
        GITHUB_TOKEN="ghp_test_token",
        GITHUB_REPO="jaipurtv/site",
        GITHUB_BRANCH="main",
        admin_users_path=str(tmp_path / "admin-users.json"),
        smtp_host="smtp.example.com",
        smtp_port=465,
        smtp_user="sameer@jaipurtv.in",
        smtp_pass="smtp-secret",
        environment="test",
    )
