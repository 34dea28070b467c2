"""Edit comment use case."""

from pydantic import BaseModel

from banter.application.usecase.base import BaseUseCase
from banter.domain.error import NotAuthorizedError, NotFoundError
from banter.domain.service import CommentService, UserService
from banter.domain.value import CommentId, UserId

from .common import CommentItem, build_comment_items, parse_id


class EditCommentRequest(BaseModel):
    """Edit comment request."""

    comment_id: str  # UUID string
    user_id: str  # Current user ID (must be author)
    text: str  # New text content


class EditCommentResponse(BaseModel):
    """Edit comment response."""

    comment: CommentItem
    original_text: str | None


class EditCommentUseCase(BaseUseCase):
    """Use case for changing the text of a comment."""

    def __init__(
        self, comment_service: CommentService, user_service: UserService
    ) -> None:
        """Initialize edit comment use case.

        Args:
            comment_service: Comment domain service
            user_service: User domain service
        """
        self.comment_service = comment_service
        self.user_service = user_service

    async def execute(self, request: EditCommentRequest) -> EditCommentResponse:
        """Execute edit comment flow.

        Raises:
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If the user is not the author
            ContentNotActiveError: If the comment is hidden
            ContentDeletedException: If the comment is deleted
        """
        comment_id = CommentId(parse_id(request.comment_id, "comment"))
        user_id = UserId(parse_id(request.user_id, "user"))

        comment = await self.comment_service.get_comment_by_id(comment_id)
        if comment is None:
            raise NotFoundError("Comment", request.comment_id)

        if comment.author_id != user_id:
            raise NotAuthorizedError("comment", request.comment_id, request.user_id)

        updated = await self.comment_service.edit_comment(comment_id, request.text)

        [item] = await build_comment_items(self.user_service, [updated], user_id)
        return EditCommentResponse(comment=item, original_text=updated.original_text)
