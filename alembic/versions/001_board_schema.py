"""Board schema: users, notes (versions/comments) and events.

Revision ID: 001_board_schema
Revises:
Create Date: 2026-10-19

"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "001_board_schema"
down_revision: str | None = None
branch_labels: str | None = None
depends_on: str | None = None

_TEAMS = "('Geral', 'Support TI', 'Sistemas MV')"


def _uuid_column(name: str, **kwargs) -> sa.Column:
    return sa.Column(name, postgresql.UUID(as_uuid=True), **kwargs)


def _timestamp_column(name: str) -> sa.Column:
    return sa.Column(
        name,
        sa.DateTime(timezone=True),
        nullable=False,
        server_default=sa.func.now(),
    )


def upgrade() -> None:
    # -------------------------------------------------------------------------
    # users
    # -------------------------------------------------------------------------
    op.create_table(
        "users",
        _uuid_column("id", primary_key=True),
        sa.Column("email", sa.Text, nullable=False, unique=True),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("password_hash", sa.Text, nullable=False),
        sa.Column("role", sa.Text, nullable=False),
        sa.Column(
            "is_active",
            sa.Boolean,
            nullable=False,
            server_default=sa.text("true"),
        ),
        _timestamp_column("created_at"),
    )
    op.create_check_constraint(
        "ck_users_role",
        "users",
        "role IN ('Admin', 'Support TI', 'Sistemas MV', 'Viewer')",
    )

    # -------------------------------------------------------------------------
    # notes + note_versions + note_comments
    # -------------------------------------------------------------------------
    op.create_table(
        "notes",
        _uuid_column("id", primary_key=True),
        sa.Column("title", sa.Text, nullable=False),
        sa.Column("content", sa.Text, nullable=False),
        _uuid_column("author_id", nullable=False),
        sa.Column("author_name", sa.Text, nullable=False),
        sa.Column("team", sa.Text, nullable=False),
        sa.Column(
            "tags",
            postgresql.ARRAY(sa.Text),
            nullable=False,
            server_default=sa.text("'{}'::text[]"),
        ),
        _timestamp_column("created_at"),
        _timestamp_column("updated_at"),
    )
    op.create_check_constraint("ck_notes_team", "notes", f"team IN {_TEAMS}")
    op.create_index("ix_notes_team", "notes", ["team"])
    op.create_index("ix_notes_updated_at", "notes", ["updated_at"])
    op.create_index("ix_notes_tags", "notes", ["tags"], postgresql_using="gin")

    op.create_table(
        "note_versions",
        sa.Column("position", sa.BigInteger, sa.Identity(), primary_key=True),
        _uuid_column(
            "note_id",
            sa.ForeignKey("notes.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("content", sa.Text, nullable=False),
        sa.Column("edited_at", sa.DateTime(timezone=True), nullable=False),
        _uuid_column("editor_id", nullable=False),
        sa.Column("editor_name", sa.Text, nullable=False),
    )
    op.create_index("ix_note_versions_note_id", "note_versions", ["note_id"])

    op.create_table(
        "note_comments",
        _uuid_column("id", primary_key=True),
        _uuid_column(
            "note_id",
            sa.ForeignKey("notes.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("content", sa.Text, nullable=False),
        _uuid_column("author_id", nullable=False),
        sa.Column("author_name", sa.Text, nullable=False),
        _timestamp_column("created_at"),
    )
    op.create_index("ix_note_comments_note_id", "note_comments", ["note_id"])

    # -------------------------------------------------------------------------
    # events
    # -------------------------------------------------------------------------
    op.create_table(
        "events",
        _uuid_column("id", primary_key=True),
        sa.Column("title", sa.Text, nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("event_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("event_time", sa.Text, nullable=True),
        sa.Column(
            "notification_type",
            sa.Text,
            nullable=False,
            server_default=sa.text("'none'"),
        ),
        sa.Column(
            "event_type",
            sa.Text,
            nullable=False,
            server_default=sa.text("'general'"),
        ),
        _uuid_column("author_id", nullable=False),
        sa.Column("author_name", sa.Text, nullable=False),
        sa.Column("team", sa.Text, nullable=False),
        _timestamp_column("created_at"),
        _timestamp_column("updated_at"),
    )
    op.create_check_constraint("ck_events_team", "events", f"team IN {_TEAMS}")
    op.create_check_constraint(
        "ck_events_notification_type",
        "events",
        "notification_type IN ('none', 'hourBefore', 'dayBefore')",
    )
    op.create_check_constraint(
        "ck_events_event_type",
        "events",
        "event_type IN ('general', 'birthday', 'reminder')",
    )
    op.create_check_constraint(
        "ck_events_event_time",
        "events",
        "event_time IS NULL OR event_time ~ '^([01][0-9]|2[0-3]):[0-5][0-9]$'",
    )
    op.create_index("ix_events_team_date", "events", ["team", "event_date"])


def downgrade() -> None:
    op.drop_table("events")
    op.drop_table("note_comments")
    op.drop_table("note_versions")
    op.drop_table("notes")
    op.drop_table("users")
