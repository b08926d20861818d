"""
Merge a partial remote document over the compiled-in defaults
"""

from typing import Any, Dict, Mapping, Optional

from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from schemas.site_content import LIST_SECTIONS, SECTION_KEYS, SiteContent, serialize_document
from utils.exceptions import SerializationError

SETTINGS_GROUPS = ("theme", "branding", "socials", "newsletter")

# Single records merged one field at a time; list sections are replaced wholesale.
RECORD_SECTIONS = ("hero", "contact", "integrations")


def _wire_key(key: str) -> str:
    if key.startswith("_") or "_" not in key:
        return key
    return to_camel(key)


def normalize_keys(mapping: Mapping[str, Any]) -> Dict[str, Any]:
    """camelCase the snake_case keys of a mapping (leading-underscore keys untouched)"""
    return {_wire_key(k): v for k, v in mapping.items()}


def _merge_record(base: Dict[str, Any], override: Any, path: str) -> Dict[str, Any]:
    if override is None:
        return dict(base)
    if not isinstance(override, Mapping):
        raise SerializationError(f"Section '{path}' must be an object", {"received": type(override).__name__})
    merged = dict(base)
    for key, value in normalize_keys(override).items():
        if value is not None:
            merged[key] = value
    return merged


def merge_with_defaults(defaults: SiteContent, partial: Optional[Mapping[str, Any]]) -> SiteContent:
    """Overlay a partial document on the defaults.

    List sections are taken wholesale when present. ``hero``, ``contact`` and
    ``integrations`` fall back field by field (hero ``stats`` is a single
    value: replaced or defaulted, never merged). ``settings`` merges each of
    its groups field by field. Null values count as absent and unknown keys
    are dropped.

    Raises SerializationError when the result is not a valid document.
    """
    if not partial:
        return defaults.model_copy(deep=True)
    if not isinstance(partial, Mapping):
        raise SerializationError("Site content document must be an object", {"received": type(partial).__name__})

    base = serialize_document(defaults)
    overrides = normalize_keys(partial)
    merged: Dict[str, Any] = dict(base)

    for key in SECTION_KEYS:
        override = overrides.get(key)
        if override is None:
            continue
        if key in LIST_SECTIONS:
            merged[key] = override
        elif key in RECORD_SECTIONS:
            merged[key] = _merge_record(base[key], override, key)
        elif key == "settings":
            if not isinstance(override, Mapping):
                raise SerializationError("Section 'settings' must be an object", {"received": type(override).__name__})
            override = normalize_keys(override)
            merged[key] = {
                group: _merge_record(base[key][group], override.get(group), f"settings.{group}")
                for group in SETTINGS_GROUPS
            }

    try:
        return SiteContent.model_validate(merged)
    except PydanticValidationError as e:
        raise SerializationError(
            "Remote site content does not match the document shape",
            {"errors": [f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors()]}
        )
