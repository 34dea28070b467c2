"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.

Embedded collections of a comment (media, likes, reactions, reports) are
stored as JSONB and go through pydantic's JSON mode in both directions.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from banter.domain.model import Comment, Post, User
from banter.domain.value import CommentId, CommentStatus, PostId, UserId
from banter.domain.value.types import Username

COMMENT_JSON_FIELDS = {"media", "likes", "reactions", "reports"}


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _optional_uuid(value: Any) -> Optional[UUID]:
    return _uuid(value) if value else None


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        username=Username(row["username"]),
        display_name=row.get("display_name"),
        avatar_url=row.get("avatar_url"),
        is_verified=row.get("is_verified", False),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    return user.model_dump()


def row_to_post(row: Dict[str, Any]) -> Post:
    """Convert database row to Post domain model.

    Args:
        row: Database row as dict

    Returns:
        Post domain model
    """
    return Post(
        id=PostId(_uuid(row["id"])),
        author_id=UserId(_uuid(row["author_id"])),
        text=row.get("text"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        deleted_at=row.get("deleted_at"),
    )


def post_to_dict(post: Post) -> Dict[str, Any]:
    """Convert Post domain model to database dict."""
    return post.model_dump()


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict (extra keys are ignored)

    Returns:
        Comment domain model
    """
    parent_id = _optional_uuid(row.get("parent_id"))
    return Comment(
        id=CommentId(_uuid(row["id"])),
        post_id=PostId(_uuid(row["post_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        text=row["text"],
        media=row.get("media") or [],
        mentions=list(row.get("mentions") or []),
        parent_id=CommentId(parent_id) if parent_id else None,
        reply_ids=[CommentId(_uuid(rid)) for rid in row.get("reply_ids") or []],
        likes=row.get("likes") or [],
        reactions=row.get("reactions") or {},
        is_edited=row["is_edited"],
        edited_at=row.get("edited_at"),
        original_text=row.get("original_text"),
        is_pinned=row["is_pinned"],
        status=CommentStatus(row["status"]),
        is_deleted=row["is_deleted"],
        deleted_at=row.get("deleted_at"),
        reports=row.get("reports") or [],
        report_count=row["report_count"],
        version=row["version"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict.

    Args:
        comment: Comment domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = comment.model_dump(exclude=COMMENT_JSON_FIELDS)
    data["status"] = comment.status.value
    data.update(comment.model_dump(mode="json", include=COMMENT_JSON_FIELDS))
    return data
