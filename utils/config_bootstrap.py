"""
Fail-fast configuration validation for server-side processes
"""

import sys
from typing import List
from utils.config import Config, get_config
from utils.exceptions import ConfigurationError
from utils.logging import get_logger

logger = get_logger(__name__)


class ConfigBootstrap:
    """Fail-fast configuration validator"""

    CONTENT_API_SECRETS = [
        "GITHUB_TOKEN",
        "GITHUB_REPO",
    ]

    def __init__(self, config: Config = None):
        self._config = config

    def validate_startup_config(self) -> Config:
        """Validate all required configuration on startup"""
        try:
            config = self._config or get_config()
        except RuntimeError as e:
            self._abort_startup(str(e))

        if config.content_api_enabled or config.content_backend == "github":
            missing = self._check_content_api_secrets(config)
            if missing:
                self._abort_startup(f"CRITICAL: Missing required secrets: {', '.join(missing)}")
            if config.github_owner_and_repo is None:
                self._abort_startup(
                    f'Expected GITHUB_REPO in the form "owner/repo", received "{config.github_repo}"'
                )

        if config.content_backend == "rest" and not config.content_api_base_url:
            self._abort_startup("CONTENT_API_BASE_URL is required for the rest content backend")

        logger.info("✅ All configuration validation passed")
        return config

    def _check_content_api_secrets(self, config: Config) -> List[str]:
        """Check the GitHub credentials the content API writes with"""
        missing = []
        for secret in self.CONTENT_API_SECRETS:
            value = getattr(config, secret.lower(), None)
            if not value or len(value.strip()) == 0:
                missing.append(secret)
        return missing

    def _abort_startup(self, message: str) -> None:
        """Abort application startup with error message"""
        logger.error(f"🚨 STARTUP ABORTED: {message}")
        raise ConfigurationError(message)


def validate_config_on_startup(config: Config = None) -> Config:
    """Entry point for startup config validation"""
    bootstrap = ConfigBootstrap(config)
    return bootstrap.validate_startup_config()


# CLI script for ops validation
if __name__ == "__main__":
    print("🔍 Validating site content configuration...")
    try:
        validate_config_on_startup()
        print("✅ All configuration is valid!")
    except ConfigurationError:
        print("❌ Configuration validation failed!")
        sys.exit(1)
