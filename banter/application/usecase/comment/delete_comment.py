"""Delete comment use case."""

from pydantic import BaseModel

from banter.application.usecase.base import BaseUseCase
from banter.domain.error import NotAuthorizedError, NotFoundError
from banter.domain.service import CommentService
from banter.domain.value import CommentId, UserId

from .common import parse_id


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: str  # UUID string
    user_id: str  # Current user ID (must be author)


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    comment_id: str
    removed_reply_ids: list[str]


class DeleteCommentUseCase(BaseUseCase):
    """Use case for deleting a comment and its replies."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete comment flow.

        Raises:
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If the user is not the author
            ContentDeletedException: If the comment was already deleted
        """
        comment_id = CommentId(parse_id(request.comment_id, "comment"))
        user_id = UserId(parse_id(request.user_id, "user"))

        comment = await self.comment_service.get_comment_by_id(comment_id)
        if comment is None:
            raise NotFoundError("Comment", request.comment_id)

        if comment.author_id != user_id:
            raise NotAuthorizedError("comment", request.comment_id, request.user_id)

        result = await self.comment_service.delete_comment(comment_id)

        return DeleteCommentResponse(
            comment_id=request.comment_id,
            removed_reply_ids=[str(rid) for rid in result.removed_reply_ids],
        )
