"""
Response schemas for all API endpoints
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field


class ContentReadResponse(BaseModel):
    """GET /api/content"""
    content: Dict[str, Any] = Field(..., description="Site content document (camelCase)")
    sha: Optional[str] = Field(None, description="Blob SHA of the content file")


class ContentCommitResponse(BaseModel):
    """POST /api/content"""
    model_config = ConfigDict(populate_by_name=True)

    status: str = Field("committed")
    path: Optional[str] = None
    commit_url: Optional[str] = Field(None, alias="commitUrl")
    sha: Optional[str] = None


class ApiErrorResponse(BaseModel):
    error: str
    details: Optional[Any] = None


class ContactResponse(BaseModel):
    message: str
    details: Optional[Any] = None


class SiteSnapshotResponse(BaseModel):
    """Admin console view of the store"""
    ready: bool
    state: str
    version: Optional[str] = None
    load_error: Optional[str] = None
    content: Dict[str, Any]


class SectionResponse(BaseModel):
    section: str
    value: Any
    version: Optional[str] = None
    commit_url: Optional[str] = None


class HealthResponse(BaseModel):
    status: str = Field(..., description="Overall health status")
    service: str
    backend: Optional[str] = None
    store_ready: bool = False
