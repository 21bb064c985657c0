"""Create game_states table holding each player's serialized state."""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0002_create_game_states_table"
down_revision = "0001_create_users_table"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "game_states",
        sa.Column(
            "user_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            primary_key=True,
            nullable=False,
        ),
        sa.Column(
            "storage_key",
            sa.String(length=64),
            nullable=False,
            server_default="casino_mafia_game_state",
        ),
        sa.Column("payload", sa.JSON(), nullable=False),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )


def downgrade() -> None:
    op.drop_table("game_states")
