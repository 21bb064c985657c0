"""Create users table."""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001_create_users_table"
down_revision = None
branch_labels = None
depends_on = None

AVATAR_ICON = sa.Enum(
    "boss",
    "croupier",
    "detective",
    "driver",
    "gambler",
    "hustler",
    "jockey",
    "pilot",
    "shark",
    "tourist",
    name="avatar_icon",
)


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("nickname", sa.String(length=64), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("icon", AVATAR_ICON, nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("ix_users_nickname", "users", ["nickname"], unique=True)


def downgrade() -> None:
    op.drop_index("ix_users_nickname", table_name="users")
    op.drop_table("users")
    AVATAR_ICON.drop(op.get_bind(), checkfirst=True)
