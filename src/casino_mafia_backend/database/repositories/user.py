"""Player accounts stored in the ``users`` table."""

from uuid import UUID, uuid4

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from casino_mafia_backend.database.schemas import UserSchema
from casino_mafia_backend.shared import AvatarIcon


class UserRepository:
    """Look up and create player accounts within one session."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, user_id: UUID) -> UserSchema | None:
        return self._session.get(UserSchema, user_id)

    def get_by_nickname(self, nickname: str) -> UserSchema | None:
        stmt = select(UserSchema).where(UserSchema.nickname == nickname)
        return self._session.scalar(stmt)

    def nickname_taken(self, nickname: str) -> bool:
        """Return whether *nickname* is in use, ignoring letter case."""
        stmt = (
            select(UserSchema.id)
            .where(func.lower(UserSchema.nickname) == nickname.lower())
            .limit(1)
        )
        return self._session.scalar(stmt) is not None

    def create(
        self, *, nickname: str, password_hash: str, icon: AvatarIcon
    ) -> UserSchema:
        """Insert a new account; timestamps are filled in by the database."""
        user = UserSchema(
            id=uuid4(), nickname=nickname, password_hash=password_hash, icon=icon
        )
        self._session.add(user)
        self._session.flush()
        self._session.refresh(user)
        return user
