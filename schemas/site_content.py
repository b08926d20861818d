"""
Site content document schemas

One SiteContent document holds every editable section of the public site.
Python attributes are snake_case; the persisted JSON (and every API payload)
uses camelCase keys, produced by the alias generator.
"""

import copy
import json
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from utils.exceptions import SerializationError, ValidationError


class ContentModel(BaseModel):
    """Base for document models: camelCase on the wire, snake_case in Python"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HeroStat(ContentModel):
    label: str
    value: str


class HeroContent(ContentModel):
    """Home page hero block"""
    headline: str
    description: str
    primary_cta_label: str
    primary_cta_link: str
    secondary_cta_label: str
    secondary_cta_link: str
    trending_badge: str
    stats: List[HeroStat] = Field(default_factory=list)


class VideoEntry(ContentModel):
    """YouTube video or short"""
    id: str = Field(..., description="Platform video identifier")
    title: str
    category: str
    type: Literal["video", "short"]
    views: Optional[str] = None
    duration: Optional[str] = None
    thumbnail: Optional[str] = None
    url: Optional[str] = None


class ReelEntry(ContentModel):
    """Instagram reel"""
    id: str
    url: str
    thumbnail: str
    caption: str
    likes: Optional[str] = None
    comments: Optional[str] = None
    username: Optional[str] = None
    category: Optional[str] = None


class GalleryItem(ContentModel):
    id: str
    type: Literal["image", "video"]
    title: str
    description: str
    image_url: str
    video_url: Optional[str] = None
    source_url: Optional[str] = None
    likes: Optional[str] = None
    comments: Optional[str] = None
    category: str
    featured: Optional[bool] = None
    published_at: Optional[str] = None


class PostEntry(ContentModel):
    id: str
    title: str
    slug: str
    excerpt: str
    content: str = Field(..., description="Raw markup or text")
    status: Literal["draft", "published"]
    published_at: Optional[str] = None
    tags: Optional[List[str]] = None


class AdminUserEntry(ContentModel):
    """Admin console user listing (display only, no credentials)"""
    id: str
    name: str
    email: str
    role: Literal["Owner", "Editor", "Contributor"]
    status: Literal["active", "invited", "suspended"]
    last_login: Optional[str] = None


class ContactContent(ContentModel):
    """Contact page copy"""
    hero_title: str
    hero_highlight: str
    hero_description: str
    email_label: str
    email_address: str
    location_label: str
    location_line1: str
    location_line2: str
    business_label: str
    business_note: str
    phone_label: str
    phone_number: str
    follow_label: str
    follow_note: str


class ThemeSettings(ContentModel):
    primary_color: str
    accent_color: str
    background_style: str


class BrandingSettings(ContentModel):
    logo_path: str
    favicon_path: str


class SocialSettings(ContentModel):
    youtube: str
    instagram_one: str
    instagram_two: str
    shorts_playlist_id: Optional[str] = None
    uploads_playlist_id: Optional[str] = None


class NewsletterSettings(ContentModel):
    provider: str
    signup_link: str


class SettingsContent(ContentModel):
    theme: ThemeSettings
    branding: BrandingSettings
    socials: SocialSettings
    newsletter: NewsletterSettings


class IntegrationSettings(ContentModel):
    """Placeholder API keys; not wired to any live sync"""
    youtube_api_key: str
    youtube_channel_id: str
    instagram_access_token: str
    email_provider_api_key: str
    last_synced_at: Optional[str] = None


class SiteContent(ContentModel):
    """The single root content document"""
    hero: HeroContent
    videos: List[VideoEntry]
    shorts: List[VideoEntry]
    reels: List[ReelEntry]
    gallery: List[GalleryItem]
    posts: List[PostEntry]
    users: List[AdminUserEntry]
    contact: ContactContent
    settings: SettingsContent
    integrations: IntegrationSettings


SECTION_KEYS = (
    "hero",
    "videos",
    "shorts",
    "reels",
    "gallery",
    "posts",
    "users",
    "contact",
    "settings",
    "integrations",
)

LIST_SECTIONS = ("videos", "shorts", "reels", "gallery", "posts", "users")

SectionValue = Union[
    HeroContent,
    List[VideoEntry],
    List[ReelEntry],
    List[GalleryItem],
    List[PostEntry],
    List[AdminUserEntry],
    ContactContent,
    SettingsContent,
    IntegrationSettings,
]

_SECTION_ADAPTERS: Dict[str, TypeAdapter] = {
    key: TypeAdapter(SiteContent.model_fields[key].annotation) for key in SECTION_KEYS
}


def validate_section(key: str, value: Any) -> SectionValue:
    """Validate a raw value (or model) against the type of one section.

    Returns an independent copy so later mutation of ``value`` by the caller
    cannot leak into a stored snapshot.
    """
    adapter = _SECTION_ADAPTERS.get(key)
    if adapter is None:
        raise ValidationError(f"Unknown section: {key}", {"section": key, "allowed": list(SECTION_KEYS)})
    try:
        validated = adapter.validate_python(value)
    except PydanticValidationError as e:
        raise ValidationError(
            f"Invalid value for section '{key}'",
            {"section": key, "errors": [f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors()]}
        )
    return copy.deepcopy(validated)


def serialize_section(key: str, value: SectionValue) -> Any:
    """JSON-ready camelCase form of one section value"""
    return _SECTION_ADAPTERS[key].dump_python(value, mode="json", by_alias=True, exclude_none=True)


def serialize_document(content: SiteContent) -> Dict[str, Any]:
    """JSON-ready camelCase mapping of the whole document"""
    return content.model_dump(mode="json", by_alias=True, exclude_none=True)


def encode_document(content: Union[SiteContent, Dict[str, Any]]) -> str:
    """Pretty-printed JSON text of a document, as stored in files and commits"""
    payload = serialize_document(content) if isinstance(content, SiteContent) else content
    try:
        return json.dumps(payload, indent=2, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Failed to encode site content: {e}")


def decode_document(raw: Union[str, bytes]) -> Dict[str, Any]:
    """Parse stored JSON text into a raw (possibly partial) document mapping"""
    try:
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        data = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise SerializationError(f"Failed to decode site content: {e}")
    if not isinstance(data, dict):
        raise SerializationError(
            "Site content document must be a JSON object",
            {"received": type(data).__name__}
        )
    return data
