"""
Unit tests for backend selection
"""

import pytest

from services.backends.github import GitHubContentsAdapter
from services.backends.redis_store import RedisDocumentAdapter
from services.backends.registry import BackendRegistry, get_backend_adapter
from services.backends.rest import RestContentAdapter
from services.backends.static import StaticFileAdapter
from utils.exceptions import ConfigurationError


class TestBackendRegistry:
    """CONTENT_BACKEND picks exactly one adapter"""

    def test_lists_supported_backends(self):
        assert sorted(BackendRegistry().list_backends()) == ["github", "redis", "rest", "static"]

    def test_static_is_default(self, test_config):
        adapter = get_backend_adapter(test_config)
        assert isinstance(adapter, StaticFileAdapter)
        assert str(adapter.path) == test_config.static_content_path

    @pytest.mark.asyncio
    async def test_github_built_from_config(self, test_config):
        adapter = get_backend_adapter(test_config, name="github")
        assert isinstance(adapter, GitHubContentsAdapter)
        assert adapter.owner == "jaipurtv"
        assert adapter.repo == "site"
        assert adapter.branch == "main"
        await adapter.aclose()

    @pytest.mark.asyncio
    async def test_redis_built_from_config(self, test_config):
        adapter = get_backend_adapter(test_config, name="redis")
        assert isinstance(adapter, RedisDocumentAdapter)
        assert adapter.key == "site:content"
        assert adapter.supports_subscription
        await adapter.aclose()

    def test_rest_without_base_url_is_configuration_error(self, test_config):
        """
        Business Critical: Missing settings surface as ConfigurationError, not a crash later
        """
        with pytest.raises(ConfigurationError):
            get_backend_adapter(test_config, name="rest")

    @pytest.mark.asyncio
    async def test_rest_built_from_config(self, test_config):
        test_config.content_api_base_url = "https://jaipurtv.in"
        adapter = get_backend_adapter(test_config, name="rest")
        assert isinstance(adapter, RestContentAdapter)
        assert adapter.endpoint == "https://jaipurtv.in/api/content"
        await adapter.aclose()

    def test_github_without_token_is_configuration_error(self, test_config):
        test_config.github_token = None
        with pytest.raises(ConfigurationError):
            get_backend_adapter(test_config, name="github")

    def test_unknown_backend_is_configuration_error(self, test_config):
        with pytest.raises(ConfigurationError) as exc_info:
            BackendRegistry().create("firestore", test_config)
        assert "static" in exc_info.value.details["supported"]

    def test_custom_backend_can_be_registered(self, test_config, memory_adapter):
        registry = BackendRegistry()
        registry.register("Memory", lambda config: memory_adapter)
        assert registry.create("memory", test_config) is memory_adapter
