"""initial_schema

Revision ID: 3f9a1c2b7d10
Revises:
Create Date: 2026-01-01 00:00:00.000000+00:00

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f9a1c2b7d10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Integer surrogate keys: BIGINT on PostgreSQL, INTEGER (rowid alias) on SQLite
ID = sa.BigInteger().with_variant(sa.Integer(), "sqlite")
DOCUMENT = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def _id() -> sa.Column:
    return sa.Column("id", ID, autoincrement=True, nullable=False)


def _timestamp(name: str) -> sa.Column:
    return sa.Column(
        name,
        sa.DateTime(timezone=True),
        server_default=sa.func.now(),
        nullable=False,
    )


def upgrade() -> None:
    """Create users, credential, session, CSRF, rate limit, audit and workflow tables."""
    op.create_table(
        "users",
        _id(),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.Column("github_id", sa.BigInteger(), nullable=False, comment="GitHub account id"),
        sa.Column("username", sa.String(length=39), nullable=False, comment="GitHub login"),
        sa.Column("name", sa.Text(), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.UniqueConstraint("github_id", name="uq_users_github_id"),
    )

    op.create_table(
        "github_tokens",
        _id(),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.Column("user_id", ID, nullable=False, comment="User who owns this credential"),
        sa.Column("username", sa.String(length=39), nullable=False),
        sa.Column(
            "encrypted_token",
            sa.Text(),
            nullable=False,
            comment="AES-256-GCM encrypted access token",
        ),
        sa.Column(
            "encrypted_refresh_token",
            sa.Text(),
            nullable=True,
            comment="AES-256-GCM encrypted refresh token",
        ),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_github_tokens"),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["users.id"],
            name="fk_github_tokens_user_id_users",
            ondelete="CASCADE",
        ),
        sa.UniqueConstraint("user_id", name="uq_github_tokens_user_id"),
    )
    op.create_index("ix_github_tokens_expires_at", "github_tokens", ["expires_at"])

    op.create_table(
        "sessions",
        _id(),
        _timestamp("created_at"),
        sa.Column("user_id", ID, nullable=False, comment="User who owns this session"),
        sa.Column("session_token", sa.String(length=128), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_used_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("ip_address", sa.String(length=45), nullable=True),
        sa.Column("user_agent", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_sessions"),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["users.id"],
            name="fk_sessions_user_id_users",
            ondelete="CASCADE",
        ),
        sa.UniqueConstraint("session_token", name="uq_sessions_session_token"),
    )
    op.create_index("ix_sessions_user_id", "sessions", ["user_id"])
    op.create_index("ix_sessions_expires_at", "sessions", ["expires_at"])

    op.create_table(
        "csrf_tokens",
        _id(),
        _timestamp("created_at"),
        sa.Column("token", sa.String(length=128), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_csrf_tokens"),
        sa.UniqueConstraint("token", name="uq_csrf_tokens_token"),
    )
    op.create_index("ix_csrf_tokens_expires_at", "csrf_tokens", ["expires_at"])

    op.create_table(
        "rate_limits",
        _id(),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.Column("ip_address", sa.String(length=45), nullable=False),
        sa.Column("endpoint", sa.String(length=100), nullable=False),
        sa.Column("window_start", sa.DateTime(timezone=True), nullable=False),
        sa.Column("request_count", sa.Integer(), server_default="1", nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_rate_limits"),
        sa.UniqueConstraint(
            "ip_address",
            "endpoint",
            "window_start",
            name="uq_rate_limits_ip_address_endpoint_window_start",
        ),
    )
    op.create_index(
        "ix_rate_limits_ip_address_endpoint", "rate_limits", ["ip_address", "endpoint"]
    )

    op.create_table(
        "audit_logs",
        _id(),
        _timestamp("created_at"),
        sa.Column(
            "user_id",
            ID,
            nullable=True,
            comment="User who performed the action (None for anonymous actors)",
        ),
        sa.Column("action", sa.String(length=100), nullable=False),
        sa.Column("resource", sa.Text(), nullable=True),
        sa.Column("ip_address", sa.String(length=45), nullable=True),
        sa.Column("user_agent", sa.Text(), nullable=True),
        sa.Column("success", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("error_message", sa.Text(), nullable=True),
        sa.Column("metadata", DOCUMENT, nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_audit_logs"),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["users.id"],
            name="fk_audit_logs_user_id_users",
            ondelete="SET NULL",
        ),
    )
    op.create_index("ix_audit_logs_user_id", "audit_logs", ["user_id"])
    op.create_index("ix_audit_logs_created_at", "audit_logs", ["created_at"])

    op.create_table(
        "workflow_states",
        _id(),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.Column("user_id", ID, nullable=False),
        sa.Column("repository", sa.String(length=140), nullable=False),
        sa.Column("branch", sa.String(length=255), nullable=False),
        sa.Column("workflow_type", sa.String(length=20), nullable=False),
        sa.Column("state", DOCUMENT, nullable=False),
        sa.Column("version", sa.Integer(), server_default="1", nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_workflow_states"),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["users.id"],
            name="fk_workflow_states_user_id_users",
            ondelete="CASCADE",
        ),
        sa.UniqueConstraint(
            "user_id",
            "repository",
            "branch",
            "workflow_type",
            name="uq_workflow_states_user_id_repository_branch_workflow_type",
        ),
    )
    op.create_index(
        "ix_workflow_states_user_id_repository",
        "workflow_states",
        ["user_id", "repository"],
    )


def downgrade() -> None:
    """Drop all tables (children first)."""
    op.drop_index("ix_workflow_states_user_id_repository", table_name="workflow_states")
    op.drop_table("workflow_states")
    op.drop_index("ix_audit_logs_created_at", table_name="audit_logs")
    op.drop_index("ix_audit_logs_user_id", table_name="audit_logs")
    op.drop_table("audit_logs")
    op.drop_index("ix_rate_limits_ip_address_endpoint", table_name="rate_limits")
    op.drop_table("rate_limits")
    op.drop_index("ix_csrf_tokens_expires_at", table_name="csrf_tokens")
    op.drop_table("csrf_tokens")
    op.drop_index("ix_sessions_expires_at", table_name="sessions")
    op.drop_index("ix_sessions_user_id", table_name="sessions")
    op.drop_table("sessions")
    op.drop_index("ix_github_tokens_expires_at", table_name="github_tokens")
    op.drop_table("github_tokens")
    op.drop_table("users")
