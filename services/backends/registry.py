"""
Content backend registry for dependency injection
"""

from typing import Callable, Dict, List, Optional

from .base import BaseBackendAdapter
from .github import GitHubContentsAdapter
from .redis_store import RedisDocumentAdapter
from .rest import RestContentAdapter
from .static import StaticFileAdapter
from utils.config import Config, get_config
from utils.exceptions import ConfigurationError

BackendFactory = Callable[[Config], BaseBackendAdapter]


def _static(config: Config) -> BaseBackendAdapter:
    return StaticFileAdapter(config.static_content_path, read_only=config.static_content_read_only)


def _redis(config: Config) -> BaseBackendAdapter:
    return RedisDocumentAdapter(
        url=config.redis_url,
        key=config.content_redis_key,
        channel=config.content_redis_channel,
    )


def _rest(config: Config) -> BaseBackendAdapter:
    return RestContentAdapter(config.content_api_base_url, timeout=config.http_timeout_seconds)


def _github(config: Config) -> BaseBackendAdapter:
    return GitHubContentsAdapter(
        token=config.github_token,
        repo=config.github_repo,
        branch=config.github_branch,
        path=config.content_file_path,
        committer_name=config.git_commit_author_name,
        committer_email=config.git_commit_author_email,
        api_url=config.github_api_url,
        timeout=config.http_timeout_seconds,
    )


class BackendRegistry:
    """Registry for content backends"""

    def __init__(self):
        self._factories: Dict[str, BackendFactory] = {
            "static": _static,
            "redis": _redis,
            "rest": _rest,
            "github": _github,
        }

    def register(self, name: str, factory: BackendFactory) -> None:
        self._factories[name.lower()] = factory

    def create(self, name: str, config: Config) -> BaseBackendAdapter:
        """Build the named backend from configuration"""
        factory = self._factories.get(name.lower())
        if factory is None:
            raise ConfigurationError(
                f"Unsupported content backend: {name}",
                {"supported": self.list_backends()}
            )
        return factory(config)

    def list_backends(self) -> List[str]:
        """List all supported backends"""
        return list(self._factories.keys())


# Global registry instance
backend_registry = BackendRegistry()


def get_backend_adapter(config: Optional[Config] = None, name: Optional[str] = None) -> BaseBackendAdapter:
    """Backend selected by CONTENT_BACKEND (or an explicit name)"""
    config = config or get_config()
    return backend_registry.create(name or config.content_backend, config)
