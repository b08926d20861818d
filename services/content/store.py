"""
ContentStore: the authoritative in-memory site content document

Reads come from a snapshot merged over the compiled-in defaults. Writes are
optimistic: the new snapshot is visible at once, and it is reverted if the
backend refuses or fails to persist it.
"""

import asyncio
import copy
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, TypeVar

from .defaults import default_site_content
from .merge import merge_with_defaults, normalize_keys
from schemas.site_content import (
    SECTION_KEYS,
    SectionValue,
    SiteContent,
    serialize_section,
    validate_section,
)
from services.backends.base import BaseBackendAdapter, PersistResult, Subscription
from utils.auth import EditorSession
from utils.exceptions import (
    AuthRequiredError,
    ConfigurationError,
    ContentSyncError,
    PersistenceError,
    SerializationError,
    ValidationError,
    describe_exception,
)
from utils.monitoring import STORE_READY, track_rollback
from utils.structured_logging import get_structured_logger

logger = get_structured_logger(__name__)

T = TypeVar("T")

Listener = Callable[[SiteContent], None]

RESET_ALL_MESSAGE = "chore(content): reset site content to defaults"


def update_message(key: str) -> str:
    return f"chore(content): update {key}"


def reset_message(key: str) -> str:
    return f"chore(content): reset {key} to defaults"


class StoreState(str, Enum):
    LOADING = "loading"
    READY = "ready"


async def run_optimistic(
    apply: Callable[[SiteContent], None],
    current: SiteContent,
    proposed: SiteContent,
    persist: Callable[[], Awaitable[T]],
    label: str = "document",
) -> T:
    """Show ``proposed`` now, keep it if ``persist`` succeeds, else restore ``current``.

    Any persist failure is re-raised as PersistenceError chained to the cause.
    """
    apply(proposed)
    try:
        return await persist()
    except Exception as exc:
        apply(current)
        track_rollback(label)
        logger.warning(
            "Content write failed, snapshot reverted",
            section=label,
            error=describe_exception(exc),
            error_type=type(exc).__name__
        )
        if isinstance(exc, PersistenceError):
            raise
        raise PersistenceError(
            f"Failed to save {label}",
            {"section": label, "error_type": type(exc).__name__},
            reason=exc
        ) from exc


class ContentStore:
    """Owns the site content snapshot and keeps it in sync with one backend"""

    def __init__(
        self,
        adapter: Optional[BaseBackendAdapter] = None,
        defaults: Optional[SiteContent] = None,
        session: Optional[EditorSession] = None,
    ):
        self.adapter = adapter
        self._defaults = defaults.model_copy(deep=True) if defaults else default_site_content()
        self._content = self._defaults.model_copy(deep=True)
        self._session = session
        self._state = StoreState.LOADING
        self._ready_event = asyncio.Event()
        self._load_error: Optional[Exception] = None
        self._version: Optional[str] = None
        self._listeners: List[Listener] = []
        self._subscription: Optional[Subscription] = None
        self._started = False

    # Read side

    @property
    def state(self) -> StoreState:
        return self._state

    @property
    def ready(self) -> bool:
        return self._state is StoreState.READY

    @property
    def load_error(self) -> Optional[Exception]:
        """Read failure absorbed during the initial load, if any"""
        return self._load_error

    @property
    def version(self) -> Optional[str]:
        """Last version token reported by the backend"""
        return self._version

    @property
    def defaults(self) -> SiteContent:
        return self._defaults.model_copy(deep=True)

    @property
    def content(self) -> SiteContent:
        return self.snapshot()

    def snapshot(self) -> SiteContent:
        """Independent copy of the current document"""
        return self._content.model_copy(deep=True)

    def section(self, key: str) -> SectionValue:
        if key not in SECTION_KEYS:
            raise ValidationError(f"Unknown section: {key}", {"section": key, "allowed": list(SECTION_KEYS)})
        return copy.deepcopy(getattr(self._content, key))

    async def wait_ready(self) -> None:
        await self._ready_event.wait()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with every new snapshot; returns an unsubscribe function"""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # Session

    @property
    def session(self) -> Optional[EditorSession]:
        return self._session

    def attach_session(self, session: EditorSession) -> None:
        self._session = session

    def clear_session(self) -> None:
        self._session = None

    # Lifecycle

    async def initialize(self) -> SiteContent:
        """Load (or subscribe to) the remote document. Never raises for read failures."""
        if self._started:
            await self.wait_ready()
            return self.snapshot()
        self._started = True

        try:
            adapter = self._require_adapter()
            if adapter.supports_subscription:
                self._subscription = await adapter.subscribe(self._on_remote_document, seed=self._defaults)
            else:
                result = await adapter.fetch_document()
                if result.found:
                    self._apply(merge_with_defaults(self._defaults, result.document))
                    self._version = result.version
                else:
                    logger.info("No remote site content yet, serving defaults", backend=adapter.backend_name)
        except (ContentSyncError, ConfigurationError) as e:
            self._load_error = e
            logger.warning(
                "Site content load failed, serving defaults",
                error=describe_exception(e),
                error_type=type(e).__name__
            )
        finally:
            self._mark_ready()
        return self.snapshot()

    async def close(self) -> None:
        """Stop the live change feed, if one is open"""
        if self._subscription is not None:
            await self._subscription.close()
            self._subscription = None
        self._listeners.clear()
        STORE_READY.set(0)

    # Write side

    async def update_section(
        self,
        key: str,
        value: Any,
        session: Optional[EditorSession] = None,
        message: Optional[str] = None,
    ) -> PersistResult:
        """Replace one section and persist the whole document"""
        validated = validate_section(key, value)
        session = self._require_session(session)
        current = self._content
        proposed = current.model_copy(update={key: validated})
        return await run_optimistic(
            self._apply,
            current,
            proposed,
            lambda: self._persist(proposed, session, message or update_message(key)),
            label=key,
        )

    async def update_hero(
        self,
        partial: Mapping[str, Any],
        session: Optional[EditorSession] = None,
        message: Optional[str] = None,
    ) -> PersistResult:
        """Patch individual hero fields; ``stats`` is kept unless given"""
        hero: Dict[str, Any] = serialize_section("hero", self._content.hero)
        for field, value in normalize_keys(partial).items():
            if value is not None:
                hero[field] = value
        return await self.update_section("hero", hero, session, message)

    async def reset_section(
        self,
        key: str,
        session: Optional[EditorSession] = None,
        message: Optional[str] = None,
    ) -> PersistResult:
        if key not in SECTION_KEYS:
            raise ValidationError(f"Unknown section: {key}", {"section": key, "allowed": list(SECTION_KEYS)})
        return await self.update_section(
            key,
            getattr(self._defaults, key),
            session,
            message or reset_message(key)
        )

    async def reset_all(
        self,
        session: Optional[EditorSession] = None,
        message: Optional[str] = None,
    ) -> PersistResult:
        """Replace the whole document with the defaults and persist it"""
        session = self._require_session(session)
        current = self._content
        proposed = self._defaults.model_copy(deep=True)
        return await run_optimistic(
            self._apply,
            current,
            proposed,
            lambda: self._persist(proposed, session, message or RESET_ALL_MESSAGE),
        )

    # Internals

    def _require_adapter(self) -> BaseBackendAdapter:
        if self.adapter is None:
            raise ConfigurationError("No content backend is configured")
        return self.adapter

    def _require_session(self, session: Optional[EditorSession]) -> EditorSession:
        session = session or self._session
        if session is None or not session.is_authenticated:
            raise AuthRequiredError("Sign in as an editor to change site content")
        return session

    async def _persist(self, document: SiteContent, session: EditorSession, message: str) -> PersistResult:
        adapter = self._require_adapter()
        result = await adapter.persist_document(document, session, message)
        if result.version:
            self._version = result.version
        logger.info(
            "Site content saved",
            backend=adapter.backend_name,
            editor=session.identity.email,
            commit_message=message,
            version=result.version
        )
        return result

    def _apply(self, content: SiteContent) -> None:
        self._content = content
        for listener in list(self._listeners):
            try:
                listener(self.snapshot())
            except Exception as e:
                logger.error("Content listener failed", error=str(e), listener=repr(listener))

    def _mark_ready(self) -> None:
        if self._state is StoreState.READY:
            return
        self._state = StoreState.READY
        self._ready_event.set()
        STORE_READY.set(1)
        logger.info(
            "Content store ready",
            backend=self.adapter.backend_name if self.adapter else None,
            load_failed=self._load_error is not None
        )

    def _on_remote_document(self, document: Dict[str, Any]) -> None:
        """Re-merge a document pushed by a subscription backend"""
        try:
            merged = merge_with_defaults(self._defaults, document)
        except SerializationError as e:
            self._load_error = e
            logger.error("Ignoring malformed remote site content", error=describe_exception(e))
            return
        self._apply(merged)
        logger.debug("Applied remote site content update")
