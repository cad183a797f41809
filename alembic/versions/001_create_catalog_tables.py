"""create users, teachers, sessions, favorites, user_progress

Revision ID: 001
Revises: 
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa

revision  = "001"
down_revision = None
branch_labels = None
depends_on    = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id",                sa.Integer(),               primary_key=True, autoincrement=True),
        sa.Column("email",             sa.String(255),             nullable=False),
        sa.Column("password",          sa.Text(),                  nullable=False),
        sa.Column("name",              sa.String(255),             nullable=False),
        sa.Column("is_premium",        sa.Boolean(),               nullable=False, server_default="false"),
        sa.Column("total_minutes",     sa.Integer(),               nullable=False, server_default="0"),
        sa.Column("current_streak",    sa.Integer(),               nullable=False, server_default="0"),
        sa.Column("last_session_date", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_id",    "users", ["id"],    unique=False)

    op.create_table(
        "teachers",
        sa.Column("id",         sa.Integer(),     primary_key=True, autoincrement=True),
        sa.Column("name",       sa.String(255),   nullable=False),
        sa.Column("bio",        sa.Text(),        nullable=False),
        sa.Column("avatar_url", sa.Text(),        nullable=True),
        sa.Column("specialty",  sa.String(255),   nullable=False),
    )
    op.create_index("ix_teachers_id", "teachers", ["id"], unique=False)

    op.create_table(
        "sessions",
        sa.Column("id",          sa.Integer(),   primary_key=True, autoincrement=True),
        sa.Column("title",       sa.String(255), nullable=False),
        sa.Column("description", sa.Text(),      nullable=False),
        sa.Column("category",    sa.String(30),  nullable=False),
        sa.Column("duration",    sa.Integer(),   nullable=False),
        sa.Column("audio_url",   sa.Text(),      nullable=True),
        sa.Column("image_url",   sa.Text(),      nullable=True),
        sa.Column("teacher_id",  sa.Integer(),   sa.ForeignKey("teachers.id", ondelete="SET NULL"), nullable=True),
        sa.Column("is_premium",  sa.Boolean(),   nullable=False, server_default="false"),
        sa.Column("play_count",  sa.Integer(),   nullable=False, server_default="0"),
        sa.Column("is_featured", sa.Boolean(),   nullable=False, server_default="false"),
        sa.CheckConstraint(
            "category in ('meditation','sleep','breathwork','music')",
            name="ck_sessions_category",
        ),
        sa.CheckConstraint("play_count >= 0", name="ck_sessions_play_count"),
    )
    op.create_index("ix_sessions_id",         "sessions", ["id"],         unique=False)
    op.create_index("ix_sessions_category",   "sessions", ["category"],   unique=False)
    op.create_index("ix_sessions_teacher_id", "sessions", ["teacher_id"], unique=False)

    op.create_table(
        "favorites",
        sa.Column("id",         sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id",    sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"),    nullable=False),
        sa.Column("session_id", sa.Integer(), sa.ForeignKey("sessions.id", ondelete="CASCADE"), nullable=False),
        sa.UniqueConstraint("user_id", "session_id", name="uq_favorite_user_session"),
    )
    op.create_index("ix_favorites_user_id", "favorites", ["user_id"], unique=False)

    op.create_table(
        "user_progress",
        sa.Column("id",               sa.Integer(),               primary_key=True, autoincrement=True),
        sa.Column("user_id",          sa.Integer(),               sa.ForeignKey("users.id", ondelete="CASCADE"),    nullable=False),
        sa.Column("session_id",       sa.Integer(),               sa.ForeignKey("sessions.id", ondelete="CASCADE"), nullable=False),
        sa.Column("minutes_listened", sa.Integer(),               nullable=False),
        sa.Column("completed_at",     sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_user_progress_user_id", "user_progress", ["user_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_user_progress_user_id", table_name="user_progress")
    op.drop_table("user_progress")
    op.drop_index("ix_favorites_user_id", table_name="favorites")
    op.drop_table("favorites")
    op.drop_index("ix_sessions_teacher_id", table_name="sessions")
    op.drop_index("ix_sessions_category",   table_name="sessions")
    op.drop_index("ix_sessions_id",         table_name="sessions")
    op.drop_table("sessions")
    op.drop_index("ix_teachers_id", table_name="teachers")
    op.drop_table("teachers")
    op.drop_index("ix_users_id",    table_name="users")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
