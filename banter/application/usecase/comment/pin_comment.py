"""Pin comment use case."""

from pydantic import BaseModel

from banter.application.usecase.base import BaseUseCase
from banter.domain.error import NotAuthorizedError, NotFoundError
from banter.domain.service import CommentService, PostService
from banter.domain.value import CommentId, UserId

from .common import parse_id


class PinCommentRequest(BaseModel):
    """Pin comment request."""

    comment_id: str  # UUID string
    user_id: str  # Comment author or post author
    pinned: bool = True


class PinCommentResponse(BaseModel):
    """Pin comment response."""

    comment_id: str
    is_pinned: bool


class PinCommentUseCase(BaseUseCase):
    """Use case for pinning a comment to the top of its post."""

    def __init__(
        self, comment_service: CommentService, post_service: PostService
    ) -> None:
        self.comment_service = comment_service
        self.post_service = post_service

    async def execute(self, request: PinCommentRequest) -> PinCommentResponse:
        """Pin or unpin a comment.

        Allowed for the comment's author and the author of its post.

        Raises:
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If the user may not pin the comment
            ContentDeletedException: If the comment is deleted
        """
        comment_id = CommentId(parse_id(request.comment_id, "comment"))
        user_id = UserId(parse_id(request.user_id, "user"))

        comment = await self.comment_service.get_comment_by_id(comment_id)
        if comment is None:
            raise NotFoundError("Comment", request.comment_id)

        if comment.author_id != user_id:
            post = await self.post_service.get_post_by_id(comment.post_id)
            if post is None or post.author_id != user_id:
                raise NotAuthorizedError(
                    "comment", request.comment_id, request.user_id
                )

        updated = await self.comment_service.set_pinned(comment_id, request.pinned)
        return PinCommentResponse(
            comment_id=request.comment_id, is_pinned=updated.is_pinned
        )
