"""Shared comment view models and helpers for the comment use cases."""

from collections import Counter
from datetime import datetime
from typing import Iterable, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from banter.domain.error import ValidationError
from banter.domain.model import Comment, CommentMedia, Post, User
from banter.domain.service import UserService
from banter.domain.value import CommentId, CommentStatus, PostId, UserId


class AuthorSummary(BaseModel):
    """Public profile of a comment author."""

    user_id: str
    username: str
    display_name: str | None
    avatar_url: str | None
    is_verified: bool


class PostSummary(BaseModel):
    """Post a comment belongs to, shown where comments are listed outside it."""

    post_id: str
    author: AuthorSummary | None
    text: str | None


class CommentItem(BaseModel):
    """Comment as returned to clients."""

    comment_id: str
    post_id: str
    author_id: str
    author: AuthorSummary | None  # None if the author no longer exists
    text: str
    media: list[CommentMedia]
    mentions: list[str]
    mentioned_users: list[AuthorSummary] = Field(default_factory=list)
    parent_id: str | None
    replies_count: int
    likes_count: int
    reactions_count: int
    reaction_counts: dict[str, int]  # emoji -> number of users
    is_edited: bool
    edited_at: datetime | None
    is_pinned: bool
    status: CommentStatus
    created_at: datetime
    updated_at: datetime
    liked: bool = False  # Whether the viewer liked it
    my_reaction: str | None = None  # The viewer's emoji
    replies: list["CommentItem"] = Field(default_factory=list)
    post: PostSummary | None = None  # Set on search and user listings


def parse_id(value: str, kind: str) -> UUID:
    """Parse a UUID string from a request.

    Raises:
        ValidationError: If the value is not a valid UUID
    """
    try:
        return UUID(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {kind} ID: {value}")


def parse_viewer(viewer_id: str | None) -> Optional[UserId]:
    """Parse the optional ID of the user looking at comments."""
    return UserId(parse_id(viewer_id, "user")) if viewer_id else None


def author_summary(user: User | None) -> AuthorSummary | None:
    if user is None:
        return None
    return AuthorSummary(
        user_id=str(user.id),
        username=user.username.root,
        display_name=user.display_name,
        avatar_url=user.avatar_url,
        is_verified=user.is_verified,
    )


def to_comment_item(
    comment: Comment,
    authors: dict[UserId, User],
    viewer_id: Optional[UserId] = None,
    replies: Iterable[Comment] = (),
    mentioned: Optional[dict[str, User]] = None,
    posts: Optional[dict[PostId, Post]] = None,
) -> CommentItem:
    """Build the client view of a comment.

    Args:
        comment: Comment to present
        authors: Known users by ID
        viewer_id: User looking at the comment, if signed in
        replies: Reply previews to nest under the comment
        mentioned: Known users by lowercased username
        posts: Posts to summarize alongside the comment

    Returns:
        Comment item with author summary and viewer state
    """
    mentioned = mentioned or {}
    reaction = comment.reaction_of(viewer_id) if viewer_id else None
    post = posts.get(comment.post_id) if posts else None
    return CommentItem(
        comment_id=str(comment.id),
        post_id=str(comment.post_id),
        author_id=str(comment.author_id),
        author=author_summary(authors.get(comment.author_id)),
        text=comment.text,
        media=comment.media,
        mentions=comment.mentions,
        mentioned_users=[
            author_summary(mentioned[name.lower()])
            for name in comment.mentions
            if name.lower() in mentioned
        ],
        parent_id=str(comment.parent_id) if comment.parent_id else None,
        replies_count=comment.replies_count,
        likes_count=comment.likes_count,
        reactions_count=comment.reactions_count,
        reaction_counts=dict(Counter(r.emoji for r in comment.reactions.values())),
        is_edited=comment.is_edited,
        edited_at=comment.edited_at,
        is_pinned=comment.is_pinned,
        status=comment.status,
        created_at=comment.created_at,
        updated_at=comment.updated_at,
        liked=comment.is_liked_by(viewer_id) if viewer_id else False,
        my_reaction=reaction.emoji if reaction else None,
        replies=[
            to_comment_item(r, authors, viewer_id, mentioned=mentioned)
            for r in replies
        ],
        post=(
            PostSummary(
                post_id=str(post.id),
                author=author_summary(authors.get(post.author_id)),
                text=post.text,
            )
            if post
            else None
        ),
    )


async def build_comment_items(
    user_service: UserService,
    comments: list[Comment],
    viewer_id: Optional[UserId] = None,
    replies: Optional[dict[CommentId, list[Comment]]] = None,
    posts: Optional[dict[PostId, Post]] = None,
) -> list[CommentItem]:
    """Present several comments.

    Authors (of comments, replies and posts) are loaded in one lookup and
    mentioned users in another.
    """
    replies = replies or {}
    shown = comments + [r for rs in replies.values() for r in rs]

    author_ids = [c.author_id for c in shown]
    if posts:
        author_ids += [p.author_id for p in posts.values()]
    authors = await user_service.get_users_by_ids(author_ids)
    mentioned = await user_service.get_users_by_usernames(
        name for c in shown for name in c.mentions
    )

    return [
        to_comment_item(c, authors, viewer_id, replies.get(c.id, []), mentioned, posts)
        for c in comments
    ]
