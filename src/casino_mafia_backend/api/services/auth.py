"""Player accounts: password hashing and bearer tokens."""

from __future__ import annotations

import base64
import hashlib
import hmac
import logging
import secrets
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import jwt
from sqlalchemy.orm import Session  # noqa: TC002

from casino_mafia_backend.database import UserRepository
from casino_mafia_backend.settings import BackendSettings, get_settings
from casino_mafia_backend.shared import AvatarIcon  # noqa: TC001

if TYPE_CHECKING:
    from casino_mafia_backend.database import UserSchema

logger = logging.getLogger(__name__)

_PBKDF2_ROUNDS = 100_000


class UserAlreadyExistsError(Exception):
    """Raised when a nickname is already taken."""


class InvalidCredentialsError(Exception):
    """Raised when a nickname and password do not match."""


@dataclass(slots=True)
class TokenPayload:
    """Claims carried by an access token."""

    sub: str
    exp: datetime


class AuthService:
    """Hash passwords, issue tokens and register players."""

    def __init__(
        self,
        *,
        secret_key: str | None = None,
        algorithm: str = "HS256",
        access_token_ttl_minutes: int = 60,
        settings: BackendSettings | None = None,
    ) -> None:
        if secret_key is None:
            secret_key = (settings or get_settings()).auth_secret_key
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._access_token_ttl = timedelta(minutes=access_token_ttl_minutes)

    def hash_password(self, password: str) -> str:
        """Hash *password* with PBKDF2 and a random salt."""
        salt = secrets.token_bytes(16)
        digest = hashlib.pbkdf2_hmac(
            "sha256", password.encode("utf-8"), salt, _PBKDF2_ROUNDS
        )
        return f"{base64.b64encode(salt).decode()}:{base64.b64encode(digest).decode()}"

    def verify_password(self, password: str, password_hash: str) -> bool:
        try:
            salt_b64, hash_b64 = password_hash.split(":", 1)
        except ValueError:
            return False
        salt = base64.b64decode(salt_b64.encode())
        expected = base64.b64decode(hash_b64.encode())
        actual = hashlib.pbkdf2_hmac(
            "sha256", password.encode("utf-8"), salt, _PBKDF2_ROUNDS
        )
        return hmac.compare_digest(actual, expected)

    def create_access_token(self, subject: str) -> str:
        expires_at = datetime.now(tz=UTC) + self._access_token_ttl
        payload = {"sub": subject, "exp": expires_at}
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def decode_access_token(self, token: str) -> TokenPayload:
        data = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        return TokenPayload(
            sub=data["sub"], exp=datetime.fromtimestamp(data["exp"], tz=UTC)
        )

    def register_user(
        self,
        *,
        session: Session,
        nickname: str,
        password: str,
        icon: AvatarIcon,
    ) -> tuple[UserSchema, str]:
        repository = UserRepository(session)
        if repository.nickname_taken(nickname):
            raise UserAlreadyExistsError(nickname)

        user = repository.create(
            nickname=nickname,
            password_hash=self.hash_password(password),
            icon=icon,
        )
        logger.info("Registered player %s.", nickname)
        return user, self.create_access_token(str(user.id))

    def authenticate_user(
        self, *, session: Session, nickname: str, password: str
    ) -> tuple[UserSchema, str]:
        user = UserRepository(session).get_by_nickname(nickname)
        if user is None or not self.verify_password(password, user.password_hash):
            logger.info("Rejected login for %s.", nickname)
            raise InvalidCredentialsError(nickname)
        return user, self.create_access_token(str(user.id))


__all__ = [
    "AuthService",
    "InvalidCredentialsError",
    "TokenPayload",
    "UserAlreadyExistsError",
]
