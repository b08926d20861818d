"""
Unit tests for configuration bootstrap - critical for preventing startup with invalid config
"""

import pytest
from unittest.mock import patch

from utils.config import Config
from utils.config_bootstrap import ConfigBootstrap, validate_config_on_startup
from utils.exceptions import ConfigurationError


class TestConfigBootstrap:
    """Test fail-fast configuration validation"""

    @pytest.fixture
    def content_api_config(self, test_config):
        test_config.content_api_enabled = True
        return test_config

    def test_validate_startup_config_success(self, content_api_config):
        """
        Business Critical: Valid configuration should pass validation without errors
        """
        with patch('utils.config_bootstrap.logger') as mock_logger:
            result = ConfigBootstrap(content_api_config).validate_startup_config()

        assert result is content_api_config
        mock_logger.info.assert_called_with("✅ All configuration validation passed")

    def test_missing_github_token_aborts(self, content_api_config):
        """
        Business Critical: The content API must not start without GitHub credentials
        """
        content_api_config.github_token = None

        with pytest.raises(ConfigurationError) as exc_info:
            validate_config_on_startup(content_api_config)

        assert "CRITICAL: Missing required secrets" in exc_info.value.message
        assert "GITHUB_TOKEN" in exc_info.value.message

    def test_blank_repo_aborts(self, content_api_config):
        content_api_config.github_repo = "   "

        with patch.object(ConfigBootstrap, '_abort_startup', side_effect=ConfigurationError("aborted")) as mock_abort:
            with pytest.raises(ConfigurationError):
                ConfigBootstrap(content_api_config).validate_startup_config()

        assert "GITHUB_REPO" in mock_abort.call_args[0][0]

    def test_malformed_repo_aborts(self, content_api_config):
        content_api_config.github_repo = "jaipurtv-site"

        with pytest.raises(ConfigurationError) as exc_info:
            validate_config_on_startup(content_api_config)

        assert 'owner/repo' in exc_info.value.message

    def test_github_backend_requires_credentials(self, test_config):
        test_config.content_backend = "github"
        test_config.github_token = ""

        with pytest.raises(ConfigurationError):
            validate_config_on_startup(test_config)

    def test_static_backend_needs_no_github(self, test_config):
        test_config.github_token = None
        test_config.github_repo = None

        assert validate_config_on_startup(test_config) is test_config

    def test_rest_backend_requires_base_url(self, test_config):
        test_config.content_backend = "rest"

        with pytest.raises(ConfigurationError) as exc_info:
            validate_config_on_startup(test_config)

        assert "CONTENT_API_BASE_URL" in exc_info.value.message

    def test_unloadable_config_aborts(self):
        """
        Business Critical: Invalid environment values stop startup with a clear message
        """
        with patch('utils.config_bootstrap.get_config', side_effect=RuntimeError("Configuration validation failed: bad")):
            with pytest.raises(ConfigurationError) as exc_info:
                ConfigBootstrap().validate_startup_config()

        assert "Configuration validation failed" in exc_info.value.message


class TestConfig:

    def test_vite_prefixed_names_accepted(self, monkeypatch):
        monkeypatch.setenv("VITE_GITHUB_TOKEN", "ghp_from_vite")
        monkeypatch.setenv("VITE_GITHUB_REPO", "jaipurtv/site")
        monkeypatch.setenv("VITE_GITHUB_BRANCH", "content")

        config = Config(_env_file=None)

        assert config.github_token == "ghp_from_vite"
        assert config.github_owner_and_repo == ("jaipurtv", "site")
        assert config.github_branch == "content"

    def test_unknown_backend_rejected(self):
        with pytest.raises(Exception):
            Config(_env_file=None, content_backend="firestore")

    def test_defaults_match_content_file_layout(self, monkeypatch):
        for name in ("CONTENT_FILE_PATH", "GIT_COMMIT_AUTHOR_NAME", "GIT_COMMIT_AUTHOR_EMAIL", "CONTENT_BACKEND"):
            monkeypatch.delenv(name, raising=False)

        config = Config(_env_file=None)

        assert config.content_file_path == "content/site-content.json"
        assert config.git_commit_author_name == "JaipurTV Bot"
        assert config.git_commit_author_email == "bot@jaipurtv.in"
        assert config.content_backend == "static"
