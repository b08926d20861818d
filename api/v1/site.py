"""
Admin console endpoints over the process-wide ContentStore
"""

from typing import Any, Awaitable, Callable, Dict, Optional

from fastapi import APIRouter, Depends, Request

from schemas.requests import HeroPatchRequest, ResetRequest, SectionUpdateRequest
from schemas.responses import SectionResponse, SiteSnapshotResponse
from schemas.site_content import SECTION_KEYS, serialize_document, serialize_section
from services.backends.base import PersistResult
from services.content.store import ContentStore
from utils.auth import EditorSession, get_optional_editor_session
from utils.error_codes import error_code_for
from utils.exceptions import PersistenceError, describe_exception, status_for_exception
from utils.response_envelope import ResponseFormatter, format_success_response
from utils.structured_logging import get_structured_logger

logger = get_structured_logger(__name__)

router = APIRouter()


def get_content_store(request: Request) -> ContentStore:
    """Dependency injection function for the shared ContentStore"""
    return request.app.state.content_store


def _section_payload(store: ContentStore, section: Optional[str]) -> Any:
    if section is None:
        return serialize_document(store.content)
    return serialize_section(section, store.section(section))


async def _write(
    store: ContentStore,
    section: Optional[str],
    operation: Callable[[], Awaitable[PersistResult]]
):
    """Run a store write; failures answer with the reverted value"""
    label = section or "document"
    try:
        result = await operation()
    except PersistenceError as e:
        status_code = status_for_exception(e)
        logger.warning("Admin content write failed", section=label, status_code=status_code, error=describe_exception(e))
        return ResponseFormatter.error(
            describe_exception(e),
            error_code_for(e).value,
            {"section": label, "reverted": _section_payload(store, section)},
            status_code=status_code
        )

    return format_success_response(SectionResponse(
        section=label,
        value=_section_payload(store, section),
        version=result.version,
        commit_url=result.commit_url
    ).model_dump())


@router.get("/content")
async def get_site_content(store: ContentStore = Depends(get_content_store)) -> Dict[str, Any]:
    """Current snapshot plus load status"""
    snapshot = SiteSnapshotResponse(
        ready=store.ready,
        state=store.state.value,
        version=store.version,
        load_error=describe_exception(store.load_error) if store.load_error else None,
        content=serialize_document(store.content)
    )
    return format_success_response(snapshot.model_dump())


@router.get("/sections")
async def list_sections() -> Dict[str, Any]:
    return format_success_response(list(SECTION_KEYS))


@router.get("/content/{section}")
async def get_section(section: str, store: ContentStore = Depends(get_content_store)) -> Dict[str, Any]:
    return format_success_response(
        SectionResponse(section=section, value=_section_payload(store, section), version=store.version).model_dump()
    )


@router.put("/content/{section}")
async def update_section(
    section: str,
    request: SectionUpdateRequest,
    store: ContentStore = Depends(get_content_store),
    session: Optional[EditorSession] = Depends(get_optional_editor_session)
):
    """Replace one section and persist the document"""
    return await _write(
        store,
        section,
        lambda: store.update_section(section, request.value, session=session, message=request.message)
    )


@router.patch("/content/hero")
async def patch_hero(
    request: HeroPatchRequest,
    store: ContentStore = Depends(get_content_store),
    session: Optional[EditorSession] = Depends(get_optional_editor_session)
):
    """Change individual hero fields"""
    return await _write(
        store,
        "hero",
        lambda: store.update_hero(request.changes(), session=session, message=request.message)
    )


@router.post("/content/reset")
async def reset_all_content(
    request: Optional[ResetRequest] = None,
    store: ContentStore = Depends(get_content_store),
    session: Optional[EditorSession] = Depends(get_optional_editor_session)
):
    """Restore every section to the defaults"""
    return await _write(
        store,
        None,
        lambda: store.reset_all(session=session, message=request.message if request else None)
    )


@router.post("/content/{section}/reset")
async def reset_section(
    section: str,
    request: Optional[ResetRequest] = None,
    store: ContentStore = Depends(get_content_store),
    session: Optional[EditorSession] = Depends(get_optional_editor_session)
):
    """Restore one section to its default value"""
    return await _write(
        store,
        section,
        lambda: store.reset_section(section, session=session, message=request.message if request else None)
    )
