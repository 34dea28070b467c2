"""Comment routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, Query, status
from pydantic import BaseModel, Field

from banter.application.usecase.comment import (
    ClearReactionRequest,
    ClearReactionUseCase,
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    EditCommentRequest,
    EditCommentResponse,
    EditCommentUseCase,
    GetCommentRepliesRequest,
    GetCommentRepliesResponse,
    GetCommentRepliesUseCase,
    GetPostCommentsRequest,
    GetPostCommentsResponse,
    GetPostCommentsUseCase,
    GetUserCommentsRequest,
    GetUserCommentsResponse,
    GetUserCommentsUseCase,
    PinCommentRequest,
    PinCommentResponse,
    PinCommentUseCase,
    ReactionResponse,
    ReportCommentRequest,
    ReportCommentResponse,
    ReportCommentUseCase,
    SearchCommentsRequest,
    SearchCommentsResponse,
    SearchCommentsUseCase,
    SetReactionRequest,
    SetReactionUseCase,
    ToggleLikeRequest,
    ToggleLikeResponse,
    ToggleLikeUseCase,
)
from banter.domain.error import DomainError
from banter.domain.model import CommentMedia
from banter.domain.service import JWTService
from banter.interface.api.errors import http_error

router = APIRouter(tags=["comments"], route_class=DishkaRoute)


def require_user(jwt_service: JWTService, auth_token: str | None, action: str) -> str:
    """Get the signed-in user's ID or fail with 401."""
    user_id = jwt_service.get_user_id_from_token(auth_token)
    if not user_id:
        logfire.warn("Unauthenticated comment request", action=action)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Authentication required to {action}",
        )
    return user_id


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    text: str = ""
    media: list[CommentMedia] = Field(default_factory=list)
    parent_id: str | None = None  # Comment being replied to


class EditCommentAPIRequest(BaseModel):
    """API request for editing a comment."""

    text: str


class ReactionAPIRequest(BaseModel):
    """API request for reacting to a comment."""

    emoji: str


class ReportAPIRequest(BaseModel):
    """API request for reporting a comment."""

    reason: str
    description: str = ""


class PinAPIRequest(BaseModel):
    """API request for pinning a comment."""

    pinned: bool = True


@router.post(
    "/posts/{post_id}/comments",
    response_model=CreateCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    post_id: str,
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreateCommentResponse:
    """Comment on a post or reply to a comment.

    Requires authentication.
    """
    user_id = require_user(jwt_service, auth_token, "comment")
    try:
        return await create_comment_use_case.execute(
            CreateCommentRequest(
                post_id=post_id,
                author_id=user_id,
                text=request.text,
                media=request.media,
                parent_id=request.parent_id,
            )
        )
    except DomainError as e:
        raise http_error(e, "create comment")


@router.get("/posts/{post_id}/comments", response_model=GetPostCommentsResponse)
async def get_post_comments(
    post_id: str,
    get_post_comments_use_case: FromDishka[GetPostCommentsUseCase],
    jwt_service: FromDishka[JWTService],
    page: int = Query(default=1),
    page_size: int | None = Query(default=None),
    auth_token: str | None = Cookie(default=None),
) -> GetPostCommentsResponse:
    """List the top-level comments of a post with reply previews.

    Authentication is optional; signed-in users see their likes and reactions.
    """
    try:
        return await get_post_comments_use_case.execute(
            GetPostCommentsRequest(
                post_id=post_id,
                page=page,
                page_size=page_size,
                viewer_id=jwt_service.get_user_id_from_token(auth_token),
            )
        )
    except DomainError as e:
        raise http_error(e, "list post comments")


@router.get("/comments/search", response_model=SearchCommentsResponse)
async def search_comments(
    search_comments_use_case: FromDishka[SearchCommentsUseCase],
    q: str = Query(default=""),
    limit: int | None = Query(default=None),
    skip: int = Query(default=0),
) -> SearchCommentsResponse:
    """Search comments by text."""
    try:
        return await search_comments_use_case.execute(
            SearchCommentsRequest(query=q, limit=limit, skip=skip)
        )
    except DomainError as e:
        raise http_error(e, "search comments")


@router.get(
    "/comments/{comment_id}/replies", response_model=GetCommentRepliesResponse
)
async def get_comment_replies(
    comment_id: str,
    get_comment_replies_use_case: FromDishka[GetCommentRepliesUseCase],
    jwt_service: FromDishka[JWTService],
    page: int = Query(default=1),
    page_size: int | None = Query(default=None),
    auth_token: str | None = Cookie(default=None),
) -> GetCommentRepliesResponse:
    """Page through the replies of a comment, oldest first."""
    try:
        return await get_comment_replies_use_case.execute(
            GetCommentRepliesRequest(
                comment_id=comment_id,
                page=page,
                page_size=page_size,
                viewer_id=jwt_service.get_user_id_from_token(auth_token),
            )
        )
    except DomainError as e:
        raise http_error(e, "list replies")


@router.patch("/comments/{comment_id}", response_model=EditCommentResponse)
async def edit_comment(
    comment_id: str,
    request: EditCommentAPIRequest,
    edit_comment_use_case: FromDishka[EditCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> EditCommentResponse:
    """Edit a comment's text. Only the author can edit."""
    user_id = require_user(jwt_service, auth_token, "edit comments")
    try:
        return await edit_comment_use_case.execute(
            EditCommentRequest(
                comment_id=comment_id, user_id=user_id, text=request.text
            )
        )
    except DomainError as e:
        raise http_error(e, "edit comment")


@router.delete("/comments/{comment_id}", response_model=DeleteCommentResponse)
async def delete_comment(
    comment_id: str,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeleteCommentResponse:
    """Delete a comment and its replies. Only the author can delete."""
    user_id = require_user(jwt_service, auth_token, "delete comments")
    try:
        return await delete_comment_use_case.execute(
            DeleteCommentRequest(comment_id=comment_id, user_id=user_id)
        )
    except DomainError as e:
        raise http_error(e, "delete comment")


@router.post("/comments/{comment_id}/like", response_model=ToggleLikeResponse)
async def toggle_like(
    comment_id: str,
    toggle_like_use_case: FromDishka[ToggleLikeUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ToggleLikeResponse:
    """Like a comment, or unlike it if already liked."""
    user_id = require_user(jwt_service, auth_token, "like comments")
    try:
        return await toggle_like_use_case.execute(
            ToggleLikeRequest(comment_id=comment_id, user_id=user_id)
        )
    except DomainError as e:
        raise http_error(e, "toggle like")


@router.put("/comments/{comment_id}/reaction", response_model=ReactionResponse)
async def set_reaction(
    comment_id: str,
    request: ReactionAPIRequest,
    set_reaction_use_case: FromDishka[SetReactionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ReactionResponse:
    """React to a comment, replacing any previous reaction."""
    user_id = require_user(jwt_service, auth_token, "react to comments")
    try:
        return await set_reaction_use_case.execute(
            SetReactionRequest(
                comment_id=comment_id, user_id=user_id, emoji=request.emoji
            )
        )
    except DomainError as e:
        raise http_error(e, "set reaction")


@router.delete("/comments/{comment_id}/reaction", response_model=ReactionResponse)
async def clear_reaction(
    comment_id: str,
    clear_reaction_use_case: FromDishka[ClearReactionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ReactionResponse:
    """Remove one's reaction from a comment."""
    user_id = require_user(jwt_service, auth_token, "react to comments")
    try:
        return await clear_reaction_use_case.execute(
            ClearReactionRequest(comment_id=comment_id, user_id=user_id)
        )
    except DomainError as e:
        raise http_error(e, "clear reaction")


@router.post("/comments/{comment_id}/report", response_model=ReportCommentResponse)
async def report_comment(
    comment_id: str,
    request: ReportAPIRequest,
    report_comment_use_case: FromDishka[ReportCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ReportCommentResponse:
    """Report a comment to moderation."""
    user_id = require_user(jwt_service, auth_token, "report comments")
    try:
        return await report_comment_use_case.execute(
            ReportCommentRequest(
                comment_id=comment_id,
                user_id=user_id,
                reason=request.reason,
                description=request.description,
            )
        )
    except DomainError as e:
        raise http_error(e, "report comment")


@router.put("/comments/{comment_id}/pin", response_model=PinCommentResponse)
async def pin_comment(
    comment_id: str,
    request: PinAPIRequest,
    pin_comment_use_case: FromDishka[PinCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> PinCommentResponse:
    """Pin or unpin a comment. Allowed for its author and the post's author."""
    user_id = require_user(jwt_service, auth_token, "pin comments")
    try:
        return await pin_comment_use_case.execute(
            PinCommentRequest(
                comment_id=comment_id, user_id=user_id, pinned=request.pinned
            )
        )
    except DomainError as e:
        raise http_error(e, "pin comment")


@router.get("/users/{user_id}/comments", response_model=GetUserCommentsResponse)
async def get_user_comments(
    user_id: str,
    get_user_comments_use_case: FromDishka[GetUserCommentsUseCase],
    page: int = Query(default=1),
    page_size: int | None = Query(default=None),
) -> GetUserCommentsResponse:
    """List a user's comments, newest first."""
    try:
        return await get_user_comments_use_case.execute(
            GetUserCommentsRequest(user_id=user_id, page=page, page_size=page_size)
        )
    except DomainError as e:
        raise http_error(e, "list user comments")
