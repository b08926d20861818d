"""
Editor authentication and session values

Credentials are checked against a local JSON list of admin users
(bcrypt hashes). A verified editor is represented by an explicit
EditorSession that callers hand to the ContentStore for every write.
"""

import asyncio
import base64
import binascii
import json
from functools import lru_cache
from pathlib import Path
from typing import List, Optional, Tuple

import bcrypt
from fastapi import Depends, Header
from pydantic import BaseModel, ConfigDict, Field, SecretStr
from pydantic import ValidationError as PydanticValidationError

from utils.config import get_config
from utils.exceptions import AuthenticationError, ConfigurationError
from utils.logging import get_logger
from utils.structured_logging import set_editor_context

logger = get_logger(__name__)


class EditorIdentity(BaseModel):
    """Who is editing; used for commit attribution"""
    email: str
    name: Optional[str] = None
    role: str = "Editor"

    @property
    def display_name(self) -> str:
        return self.name or self.email


class EditorCredential(BaseModel):
    """Credential material forwarded to backends that authenticate writes"""
    email: str
    password: SecretStr

    def authorization_header(self) -> str:
        """HTTP Basic authorization header value"""
        raw = f"{self.email}:{self.password.get_secret_value()}".encode("utf-8")
        return "Basic " + base64.b64encode(raw).decode("ascii")


class EditorSession(BaseModel):
    """A verified editor plus the credential to attach to writes"""
    identity: EditorIdentity
    credential: Optional[EditorCredential] = None

    @property
    def is_authenticated(self) -> bool:
        return self.credential is not None


class AdminUserRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: str
    password_hash: str = Field(..., alias="passwordHash")
    name: Optional[str] = None
    role: str = "Editor"


def parse_basic_authorization(header: Optional[str]) -> Optional[Tuple[str, str]]:
    """Decode 'Basic base64(email:password)' into (email, password)"""
    if not header or not header.startswith("Basic "):
        return None
    token = header[len("Basic "):].strip()
    try:
        decoded = base64.b64decode(token, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None
    email, sep, password = decoded.partition(":")
    if not sep or not email or not password:
        return None
    return email, password


class AdminUserRegistry:
    """Admin users loaded once from a JSON file"""

    def __init__(self, path: str, users: Optional[List[AdminUserRecord]] = None):
        self.path = Path(path)
        self._users = users

    def _load(self) -> List[AdminUserRecord]:
        if self._users is None:
            if not self.path.exists():
                logger.warning(f"Admin users file not found at {self.path}; all sign-ins will be rejected")
                self._users = []
            else:
                try:
                    raw = json.loads(self.path.read_text(encoding="utf-8"))
                    self._users = [AdminUserRecord.model_validate(item) for item in raw]
                except (json.JSONDecodeError, TypeError, PydanticValidationError) as e:
                    raise ConfigurationError(f"Admin users file {self.path} is invalid: {e}")
        return self._users

    def find(self, email: str) -> Optional[AdminUserRecord]:
        email = email.lower()
        for record in self._load():
            if record.email.lower() == email:
                return record
        return None

    def verify(self, email: str, password: str) -> Optional[EditorIdentity]:
        """Check a password against the stored bcrypt hash"""
        record = self.find(email)
        if record is None:
            return None
        try:
            matches = bcrypt.checkpw(password.encode("utf-8"), record.password_hash.encode("utf-8"))
        except ValueError:
            logger.warning(f"Stored password hash for {record.email} is malformed")
            return None
        if not matches:
            return None
        return EditorIdentity(email=record.email, name=record.name, role=record.role)

    def authenticate(self, authorization: Optional[str]) -> Optional[EditorSession]:
        """Build a session from a Basic authorization header, or None if rejected"""
        parsed = parse_basic_authorization(authorization)
        if parsed is None:
            return None
        email, password = parsed
        identity = self.verify(email, password)
        if identity is None:
            return None
        return EditorSession(
            identity=identity,
            credential=EditorCredential(email=email, password=password)
        )


def hash_password(password: str) -> str:
    """bcrypt hash for an admin users file entry"""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


@lru_cache()
def get_admin_registry() -> AdminUserRegistry:
    """Dependency injection function for the admin user registry"""
    return AdminUserRegistry(get_config().admin_users_path)


async def get_optional_editor_session(
    authorization: Optional[str] = Header(default=None),
    registry: AdminUserRegistry = Depends(get_admin_registry)
) -> Optional[EditorSession]:
    """Session for the request, None when no credential was sent"""
    if not authorization:
        return None
    # bcrypt is slow on purpose; keep it off the event loop
    session = await asyncio.to_thread(registry.authenticate, authorization)
    if session is None:
        raise AuthenticationError("unauthorized")
    set_editor_context(session.identity.email)
    return session
