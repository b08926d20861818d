"""
Unit tests for merging remote content over the defaults
"""

import pytest

from schemas.site_content import LIST_SECTIONS, serialize_document, serialize_section
from services.content.merge import merge_with_defaults, normalize_keys
from utils.exceptions import SerializationError


NEW_VIDEOS = [
    {"id": "abc123XYZ00", "title": "Hawa Mahal at Dawn", "category": "Heritage", "type": "video"}
]


class TestMergeWithDefaults:
    """Partial remote documents fall back to the compiled-in defaults"""

    def test_empty_partial_returns_defaults(self, defaults):
        """
        Business Critical: No remote document means the site renders the defaults
        """
        assert merge_with_defaults(defaults, None) == defaults
        assert merge_with_defaults(defaults, {}) == defaults

    def test_result_is_independent_of_defaults(self, defaults):
        merged = merge_with_defaults(defaults, None)
        merged.hero.headline = "changed"
        assert defaults.hero.headline != "changed"

    def test_serialized_defaults_round_trip(self, defaults):
        """
        Business Critical: Persisting the defaults and loading them back changes nothing
        """
        assert merge_with_defaults(defaults, serialize_document(defaults)) == defaults

    @pytest.mark.parametrize("key", LIST_SECTIONS)
    def test_list_sections_replaced_wholesale(self, defaults, key):
        """
        Business Critical: List sections are taken exactly as stored, including empty lists
        """
        merged = merge_with_defaults(defaults, {key: []})
        assert getattr(merged, key) == []

    def test_list_section_value_is_kept(self, defaults):
        merged = merge_with_defaults(defaults, {"videos": NEW_VIDEOS})
        assert serialize_section("videos", merged.videos) == NEW_VIDEOS
        assert merged.shorts == defaults.shorts

    def test_hero_fields_fall_back_independently(self, defaults):
        """
        Business Critical: A partial hero keeps default values for fields it omits
        """
        merged = merge_with_defaults(defaults, {"hero": {"headline": "Namaste Jaipur"}})

        assert merged.hero.headline == "Namaste Jaipur"
        assert merged.hero.description == defaults.hero.description
        assert merged.hero.primary_cta_link == defaults.hero.primary_cta_link
        assert merged.hero.stats == defaults.hero.stats

    def test_hero_stats_replaced_wholesale(self, defaults):
        stats = [{"label": "Subscribers", "value": "1M+"}]
        merged = merge_with_defaults(defaults, {"hero": {"stats": stats}})

        assert len(merged.hero.stats) == 1
        assert merged.hero.stats[0].label == "Subscribers"
        assert merged.hero.headline == defaults.hero.headline

    def test_contact_fields_fall_back_independently(self, defaults):
        """
        Business Critical: Changing one contact field keeps every other contact field
        """
        merged = merge_with_defaults(defaults, {"contact": {"emailAddress": "new@x.com"}})

        assert merged.contact.email_address == "new@x.com"
        expected = defaults.contact.model_copy(update={"email_address": "new@x.com"})
        assert merged.contact == expected

    def test_settings_groups_merge_field_by_field(self, defaults):
        merged = merge_with_defaults(defaults, {
            "settings": {"theme": {"primaryColor": "#ff0066"}, "socials": {"youtube": "https://youtube.com/@new"}}
        })

        assert merged.settings.theme.primary_color == "#ff0066"
        assert merged.settings.theme.accent_color == defaults.settings.theme.accent_color
        assert merged.settings.socials.youtube == "https://youtube.com/@new"
        assert merged.settings.socials.instagram_one == defaults.settings.socials.instagram_one
        assert merged.settings.branding == defaults.settings.branding
        assert merged.settings.newsletter == defaults.settings.newsletter

    def test_null_values_count_as_absent(self, defaults):
        merged = merge_with_defaults(defaults, {
            "videos": None,
            "hero": {"headline": None, "description": "Fresh"},
        })

        assert merged.videos == defaults.videos
        assert merged.hero.headline == defaults.hero.headline
        assert merged.hero.description == "Fresh"

    def test_unknown_and_bookkeeping_keys_ignored(self, defaults):
        merged = merge_with_defaults(defaults, {
            "_updatedAt": "2024-01-01T00:00:00Z",
            "_updatedBy": "admin@jaipurtv.in",
            "legacyBanner": {"text": "old"},
        })
        assert merged == defaults

    def test_snake_case_keys_accepted(self, defaults):
        merged = merge_with_defaults(defaults, {"contact": {"email_address": "snake@x.com"}})
        assert merged.contact.email_address == "snake@x.com"

    def test_invalid_section_shape_raises_serialization_error(self, defaults):
        """
        Business Critical: A malformed stored document is reported, not half-applied
        """
        with pytest.raises(SerializationError):
            merge_with_defaults(defaults, {"videos": [{"id": "only-an-id"}]})

        with pytest.raises(SerializationError):
            merge_with_defaults(defaults, {"hero": "not an object"})

    def test_non_mapping_document_raises_serialization_error(self, defaults):
        with pytest.raises(SerializationError):
            merge_with_defaults(defaults, ["not", "a", "document"])


class TestNormalizeKeys:

    def test_snake_case_becomes_camel_case(self):
        assert normalize_keys({"primary_cta_label": 1, "headline": 2}) == {"primaryCtaLabel": 1, "headline": 2}

    def test_leading_underscore_keys_untouched(self):
        assert normalize_keys({"_updated_at": 1}) == {"_updated_at": 1}
