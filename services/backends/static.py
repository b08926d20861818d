"""
Static JSON backend: the document lives in a local file
"""

import asyncio
import hashlib
import os
import tempfile
from pathlib import Path
from typing import Optional

from .base import BaseBackendAdapter, FetchResult, PersistResult
from schemas.site_content import SiteContent, decode_document, encode_document
from utils.auth import EditorSession
from utils.exceptions import RemoteRejected, RemoteUnavailable
from utils.logging import get_logger

logger = get_logger(__name__)


def _version_of(raw: bytes) -> str:
    return hashlib.sha256(raw).hexdigest()[:12]


def _atomic_write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(text)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


class StaticFileAdapter(BaseBackendAdapter):
    """Bundled JSON file; writable unless read_only"""

    def __init__(self, path: str, read_only: bool = False):
        self.path = Path(path)
        self.read_only = read_only

    @property
    def backend_name(self) -> str:
        return "static"

    async def fetch_document(self) -> FetchResult:
        async with self.track("fetch"):
            try:
                raw = await asyncio.to_thread(self.path.read_bytes)
            except FileNotFoundError:
                return FetchResult()
            except OSError as e:
                raise RemoteUnavailable(f"Failed to read {self.path}: {e}")
            return FetchResult(document=decode_document(raw), version=_version_of(raw))

    async def persist_document(
        self,
        document: SiteContent,
        session: EditorSession,
        message: Optional[str] = None
    ) -> PersistResult:
        if self.read_only:
            raise RemoteRejected(f"Static content at {self.path} is read-only")
        async with self.track("persist"):
            text = encode_document(document) + "\n"
            try:
                await asyncio.to_thread(_atomic_write, self.path, text)
            except OSError as e:
                raise RemoteUnavailable(f"Failed to write {self.path}: {e}")
            logger.info(f"Wrote site content to {self.path} ({message or 'no message'})")
            return PersistResult(version=_version_of(text.encode("utf-8")), path=str(self.path))
