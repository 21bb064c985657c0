"""User database schema."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import DateTime, Enum, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from casino_mafia_backend.database.base import BaseSchema
from casino_mafia_backend.shared import AvatarIcon


class UserSchema(BaseSchema):
    """SQLAlchemy model for registered players."""

    __tablename__ = "users"

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    nickname: Mapped[str] = mapped_column(
        String(64), unique=True, nullable=False, index=True
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    icon: Mapped[AvatarIcon] = mapped_column(
        Enum(
            AvatarIcon,
            name="avatar_icon",
            values_callable=lambda icons: [icon.value for icon in icons],
        ),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
