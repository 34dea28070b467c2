"""SQLAlchemy table definitions for Banter.

These tables are used with SQLAlchemy Core; rows are mapped to the
pydantic domain models by hand in ``banter.persistence.mappers``.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    func,
    text,
)
from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE (read model of the account service)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("uuid_generate_v4()")),
    Column("username", String(20), nullable=False),
    Column("display_name", String(100), nullable=True),
    Column("avatar_url", Text, nullable=True),
    Column("is_verified", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# Case-insensitive lookups for mentions
Index(
    "idx_users_username_lower",
    func.lower(users_table.c.username),
    unique=True,
)

# ============================================================================
# POSTS TABLE
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("uuid_generate_v4()")),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("text", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
)

Index("idx_posts_author_id", posts_table.c.author_id)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("uuid_generate_v4()")),
    Column("post_id", UUID, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    # No FK on parent_id: reply removal is done by the comment service
    Column("parent_id", UUID, nullable=True),
    Column("text", Text, nullable=False, server_default=""),
    Column("media", JSONB, nullable=False, server_default="[]"),
    Column(
        "mentions",
        postgresql.ARRAY(String),
        nullable=False,
        server_default="{}",
    ),
    Column(
        "reply_ids",
        postgresql.ARRAY(UUID),
        nullable=False,
        server_default="{}",
    ),
    Column("likes", JSONB, nullable=False, server_default="[]"),
    # {user_id: {emoji, created_at}}
    Column("reactions", JSONB, nullable=False, server_default="{}"),
    Column("is_edited", Boolean, nullable=False, server_default="false"),
    Column("edited_at", TIMESTAMP(timezone=True), nullable=True),
    Column("original_text", Text, nullable=True),
    Column("is_pinned", Boolean, nullable=False, server_default="false"),
    Column("status", String(20), nullable=False, server_default="active"),
    Column("is_deleted", Boolean, nullable=False, server_default="false"),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
    Column("reports", JSONB, nullable=False, server_default="[]"),
    Column("report_count", Integer, nullable=False, server_default="0"),
    Column("version", Integer, nullable=False, server_default="1"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("char_length(text) <= 500", name="text_max_length"),
    CheckConstraint(
        "status IN ('active', 'hidden', 'deleted')", name="status_valid"
    ),
    CheckConstraint("report_count >= 0", name="report_count_non_negative"),
)

Index(
    "idx_comments_post_created",
    comments_table.c.post_id,
    comments_table.c.created_at.desc(),
)
Index(
    "idx_comments_author_created",
    comments_table.c.author_id,
    comments_table.c.created_at.desc(),
)
Index(
    "idx_comments_parent_created",
    comments_table.c.parent_id,
    comments_table.c.created_at,
)
Index("idx_comments_status", comments_table.c.status)
Index(
    "idx_comments_mentions",
    comments_table.c.mentions,
    postgresql_using="gin",
)
