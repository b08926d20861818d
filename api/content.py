"""
Content API: GitHub-backed read/commit of the site content document
"""

import asyncio
from typing import Any, Callable, Dict, Optional

from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import JSONResponse, Response
from pydantic import ValidationError as PydanticValidationError

from schemas.requests import ContentCommitRequest
from schemas.responses import ContentCommitResponse, ContentReadResponse
from schemas.site_content import SiteContent
from services.backends.base import BaseBackendAdapter
from services.backends.registry import get_backend_adapter
from utils.auth import AdminUserRegistry, EditorSession, get_admin_registry
from utils.config import get_config
from utils.exceptions import ConfigurationError, ContentSyncError, describe_exception
from utils.logging import get_logger
from utils.structured_logging import set_editor_context

logger = get_logger(__name__)

router = APIRouter()

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
    "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
}

AdapterFactory = Callable[[], BaseBackendAdapter]


def get_content_adapter_factory() -> AdapterFactory:
    """Dependency injection function: builds the GitHub adapter per request"""
    config = get_config()
    return lambda: get_backend_adapter(config, name="github")


def _json(status_code: int, body: Dict[str, Any]) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body, headers=CORS_HEADERS)


def _open_adapter(factory: AdapterFactory) -> BaseBackendAdapter:
    try:
        return factory()
    except ConfigurationError as e:
        logger.error(f"🚨 Content API misconfigured: {e.message}")
        raise


async def _read_payload(request: Request) -> Optional[ContentCommitRequest]:
    try:
        raw = await request.json()
        return ContentCommitRequest.model_validate(raw)
    except (ValueError, PydanticValidationError) as e:
        logger.warning(f"Failed to parse content payload: {e}")
        return None


@router.options("/content")
async def content_options() -> Response:
    """CORS preflight"""
    return Response(status_code=204, headers=CORS_HEADERS)


@router.get("/content", response_model=ContentReadResponse)
async def read_content(factory: AdapterFactory = Depends(get_content_adapter_factory)):
    """Current content file and its blob SHA"""
    try:
        adapter = _open_adapter(factory)
    except ConfigurationError as e:
        return _json(500, {"error": "content-api-misconfigured", "details": e.message})

    try:
        result = await adapter.fetch_document()
    except ContentSyncError as e:
        logger.error(f"Failed to read content from GitHub: {describe_exception(e)}")
        return _json(500, {"error": "failed-to-read-content", "details": describe_exception(e)})
    finally:
        await adapter.aclose()

    if not result.found:
        logger.error("Content file not found in the repository")
        return _json(500, {"error": "failed-to-read-content", "details": "Content file not found"})
    return _json(200, ContentReadResponse(content=result.document, sha=result.version).model_dump())


@router.post("/content", response_model=ContentCommitResponse)
async def commit_content(
    request: Request,
    authorization: Optional[str] = Header(default=None),
    factory: AdapterFactory = Depends(get_content_adapter_factory),
    registry: AdminUserRegistry = Depends(get_admin_registry)
):
    """Commit a full content document on behalf of an admin user"""
    try:
        adapter = _open_adapter(factory)
    except ConfigurationError as e:
        return _json(500, {"error": "content-api-misconfigured", "details": e.message})

    try:
        session = await asyncio.to_thread(registry.authenticate, authorization)
        if session is None:
            return _json(401, {"error": "unauthorized"})
        set_editor_context(session.identity.email)

        payload = await _read_payload(request)
        if payload is None or not payload.content:
            return _json(400, {"error": "missing-content"})

        try:
            document = SiteContent.model_validate(payload.content)
        except PydanticValidationError as e:
            return _json(400, {
                "error": "invalid-content",
                "details": [f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors()]
            })

        # Commit author follows the email in the payload when one is given
        if payload.email:
            session = EditorSession(
                identity=session.identity.model_copy(update={"email": payload.email, "name": None}),
                credential=session.credential
            )

        try:
            result = await adapter.persist_document(document, session, payload.message)
        except ContentSyncError as e:
            logger.error(f"Failed to commit content: {describe_exception(e)}")
            return _json(500, {"error": "failed-to-commit-content", "details": describe_exception(e)})
    finally:
        await adapter.aclose()

    logger.info(f"✅ Content committed by {session.identity.email}: {result.commit_url}")
    return _json(200, ContentCommitResponse(
        path=result.path,
        commit_url=result.commit_url,
        sha=result.version
    ).model_dump(by_alias=True))
