"""
Request schemas for all API endpoints
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from schemas.site_content import HeroStat


class ContentCommitRequest(BaseModel):
    """Body of POST /api/content. ``content`` is checked by hand so a missing
    document answers 400 missing-content rather than a validation error."""
    content: Optional[Dict[str, Any]] = Field(None, description="Full site content document")
    message: Optional[str] = Field(None, description="Commit message")
    email: Optional[str] = Field(None, description="Editor email used for attribution")


class ContactRequest(BaseModel):
    """Contact form submission"""
    name: Optional[str] = None
    email: Optional[str] = None
    subject: Optional[str] = None
    message: Optional[str] = None

    @field_validator("name", "email", "subject", "message")
    @classmethod
    def strip_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None

    def missing_fields(self) -> List[str]:
        return [field for field in ("name", "email", "message") if not getattr(self, field)]


class SectionUpdateRequest(BaseModel):
    """Replace one section of the site content"""
    value: Any = Field(..., description="New section value (camelCase keys)")
    message: Optional[str] = Field(None, max_length=500, description="Change note / commit message")


class HeroPatchRequest(BaseModel):
    """Partial hero edit; omitted fields keep their current value"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    headline: Optional[str] = None
    description: Optional[str] = None
    primary_cta_label: Optional[str] = None
    primary_cta_link: Optional[str] = None
    secondary_cta_label: Optional[str] = None
    secondary_cta_link: Optional[str] = None
    trending_badge: Optional[str] = None
    stats: Optional[List[HeroStat]] = None
    message: Optional[str] = Field(None, max_length=500)

    def changes(self) -> Dict[str, Any]:
        """Fields the caller actually sent, camelCase"""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True, exclude={"message"})


class ResetRequest(BaseModel):
    message: Optional[str] = Field(None, max_length=500)
