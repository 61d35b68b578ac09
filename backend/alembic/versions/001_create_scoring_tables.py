"""Create users, rooms and players tables

Revision ID: 001
Revises: None
Create Date: 2024-01-15 00:00:00.000000+00:00

What:  Initial schema: users own rooms, rooms hold players.
How:   UUID primary keys generated server-side on PostgreSQL, composite
       unique constraints for per-owner room names and per-room player
       names, ON DELETE CASCADE from users → rooms → players.

Rollback: downgrade() drops all three tables (destructive, all data lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("name", sa.String(255), nullable=False, comment="Login name, globally unique"),
        sa.Column("password", sa.String(255), nullable=False, comment="bcrypt hash, never plaintext"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", name="uq_users_name"),
    )

    op.create_table(
        "rooms",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("name", sa.String(255), nullable=False, comment="Display name, unique per owner"),
        sa.Column("owner_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("owner_id", "name", name="uq_rooms_owner_id_name"),
    )
    # Listing a user's rooms filters on owner_id
    op.create_index("ix_rooms_owner_id", "rooms", ["owner_id"])

    op.create_table(
        "players",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("name", sa.String(255), nullable=False, comment="Display name, unique per room"),
        sa.Column(
            "points",
            sa.BigInteger(),
            nullable=False,
            server_default=sa.text("0"),
            comment="Current score, may be negative",
        ),
        sa.Column("room_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["room_id"], ["rooms.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("room_id", "name", name="uq_players_room_id_name"),
    )
    # Room reads and bulk point updates filter on room_id
    op.create_index("ix_players_room_id", "players", ["room_id"])


def downgrade() -> None:
    op.drop_index("ix_players_room_id", table_name="players")
    op.drop_table("players")
    op.drop_index("ix_rooms_owner_id", table_name="rooms")
    op.drop_table("rooms")
    op.drop_table("users")
