"""Test configuration and helpers."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt

from banter.config import AuthSettings
from banter.domain.model import Comment, Post, User
from banter.domain.value import CommentId, CommentStatus, PostId, UserId
from banter.domain.value.types import Username


def make_user(username: str = "rahim", **overrides) -> User:
    """Build a user with sensible defaults."""
    fields = {
        "id": UserId(uuid4()),
        "username": Username(username),
        "display_name": username.title(),
        "avatar_url": f"https://cdn.example.com/{username}.png",
        "is_verified": False,
    }
    fields.update(overrides)
    return User(**fields)


def make_post(author_id: UserId | None = None, **overrides) -> Post:
    """Build a post with sensible defaults."""
    fields = {
        "id": PostId(uuid4()),
        "author_id": author_id or UserId(uuid4()),
        "text": "Post content",
    }
    fields.update(overrides)
    return Post(**fields)


def make_comment(
    post_id: PostId,
    author_id: UserId,
    text: str = "A comment",
    minutes_ago: int = 0,
    **overrides,
) -> Comment:
    """Build a comment directly, bypassing the service.

    Args:
        post_id: Post the comment belongs to
        author_id: Author
        text: Comment text
        minutes_ago: Age of the comment, for ordering tests
        **overrides: Any other Comment field
    """
    created_at = datetime.now() - timedelta(minutes=minutes_ago)
    fields = {
        "id": CommentId(uuid4()),
        "post_id": post_id,
        "author_id": author_id,
        "text": text,
        "status": CommentStatus.ACTIVE,
        "created_at": created_at,
        "updated_at": created_at,
    }
    fields.update(overrides)
    return Comment(**fields)


def make_token(
    user_id: str,
    username: str,
    settings: AuthSettings,
    expires_in: timedelta | None = None,
) -> str:
    """Sign a token the way the account service issues them."""
    if expires_in is None:
        expires_in = timedelta(days=settings.jwt_expiry_days)
    payload = {
        "user_id": user_id,
        "username": username,
        "exp": datetime.now(timezone.utc) + expires_in,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)
