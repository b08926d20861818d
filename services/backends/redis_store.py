"""
Subscription backend: document kept in Redis, changes pushed over pub/sub
"""

import asyncio
import hashlib
from contextlib import suppress
from datetime import datetime, timezone
from typing import Any, Awaitable, Optional

import redis.asyncio as redis
from redis.exceptions import AuthenticationError as RedisAuthenticationError
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from .base import BaseBackendAdapter, DocumentCallback, FetchResult, PersistResult, Subscription
from schemas.site_content import SiteContent, decode_document, encode_document, serialize_document
from utils.auth import EditorSession
from utils.exceptions import RemoteRejected, RemoteUnavailable, SerializationError
from utils.logging import get_logger

logger = get_logger(__name__)


def _version_of(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()[:12]


class RedisDocumentAdapter(BaseBackendAdapter):
    """Live document store.

    The serialized document sits under ``key``; every write also publishes
    the full document on ``channel`` so subscribers can re-merge it without
    another read.
    """

    def __init__(
        self,
        url: str = "redis://localhost:6379",
        key: str = "site:content",
        channel: str = "site:content:updates",
        client: Optional[redis.Redis] = None,
    ):
        self.key = key
        self.channel = channel
        self._owns_client = client is None
        self.client = client or redis.from_url(url, decode_responses=True)

    @property
    def backend_name(self) -> str:
        return "redis"

    @property
    def supports_subscription(self) -> bool:
        return True

    async def _call(self, awaitable: Awaitable[Any], action: str) -> Any:
        try:
            return await awaitable
        except RedisAuthenticationError as e:
            raise RemoteRejected(f"Redis {action} rejected: {e}")
        except (RedisConnectionError, RedisTimeoutError) as e:
            raise RemoteUnavailable(f"Redis {action} failed: {e}")
        except RedisError as e:
            raise RemoteRejected(f"Redis {action} failed: {e}")

    def _stamped(self, document: SiteContent, session: Optional[EditorSession]) -> str:
        payload = serialize_document(document)
        payload["_updatedAt"] = datetime.now(timezone.utc).isoformat()
        if session is not None:
            payload["_updatedBy"] = session.identity.email
        return encode_document(payload)

    async def fetch_document(self) -> FetchResult:
        async with self.track("fetch"):
            raw = await self._call(self.client.get(self.key), "read")
            if raw is None:
                return FetchResult()
            return FetchResult(document=decode_document(raw), version=_version_of(raw))

    async def _store_and_publish(self, text: str) -> None:
        """SET and PUBLISH in one MULTI/EXEC so a document is never stored unannounced"""
        async with self.client.pipeline(transaction=True) as pipe:
            pipe.set(self.key, text)
            pipe.publish(self.channel, text)
            await pipe.execute()

    async def persist_document(
        self,
        document: SiteContent,
        session: EditorSession,
        message: Optional[str] = None
    ) -> PersistResult:
        async with self.track("persist"):
            text = self._stamped(document, session)
            await self._call(self._store_and_publish(text), "write")
            logger.info(f"Stored site content under {self.key} ({message or 'no message'})")
            return PersistResult(version=_version_of(text), path=self.key)

    async def _seed_or_read(self, seed: SiteContent) -> str:
        raw = await self._call(self.client.get(self.key), "read")
        if raw is not None:
            return raw
        text = self._stamped(seed, None)
        created = await self._call(self.client.set(self.key, text, nx=True), "seed")
        if created:
            logger.info(f"Seeded {self.key} with default site content")
            return text
        # Another process seeded it between our read and write.
        raw = await self._call(self.client.get(self.key), "read")
        return raw if raw is not None else text

    async def _listen(self, pubsub: Any, callback: DocumentCallback) -> None:
        try:
            async for message in pubsub.listen():
                if message.get("type") != "message":
                    continue
                try:
                    document = decode_document(message["data"])
                except SerializationError as e:
                    logger.error(f"Ignoring undecodable content update on {self.channel}: {e.message}")
                    continue
                callback(document)
        except RedisError as e:
            logger.error(f"Content change feed on {self.channel} stopped: {e}")

    async def subscribe(self, callback: DocumentCallback, seed: SiteContent) -> Subscription:
        """Seed if missing, deliver the current document, then relay pushes"""
        pubsub = self.client.pubsub()
        try:
            # Subscribe before reading so no change between the two is lost.
            await self._call(pubsub.subscribe(self.channel), "subscribe")
            raw = await self._seed_or_read(seed)
            callback(decode_document(raw))
        except BaseException:
            with suppress(RedisError):
                await pubsub.aclose()
            raise

        task = asyncio.create_task(self._listen(pubsub, callback))

        async def closer() -> None:
            task.cancel()
            with suppress(asyncio.CancelledError):
                await task
            with suppress(RedisError):
                await pubsub.unsubscribe(self.channel)
                await pubsub.aclose()

        return Subscription(closer)

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()
