"""Get comment replies use case."""

from pydantic import BaseModel

from banter.application.usecase.base import BaseUseCase
from banter.domain.service import CommentService, UserService
from banter.domain.value import CommentId

from .common import CommentItem, build_comment_items, parse_id, parse_viewer


class GetCommentRepliesRequest(BaseModel):
    """Get comment replies request."""

    comment_id: str  # UUID string
    page: int = 1
    page_size: int | None = None
    viewer_id: str | None = None


class GetCommentRepliesResponse(BaseModel):
    """Get comment replies response."""

    comment_id: str
    page: int
    replies: list[CommentItem]


class GetCommentRepliesUseCase(BaseUseCase):
    """Use case for paging through the replies of a comment."""

    def __init__(
        self, comment_service: CommentService, user_service: UserService
    ) -> None:
        self.comment_service = comment_service
        self.user_service = user_service

    async def execute(
        self, request: GetCommentRepliesRequest
    ) -> GetCommentRepliesResponse:
        comment_id = CommentId(parse_id(request.comment_id, "comment"))
        viewer_id = parse_viewer(request.viewer_id)

        replies = await self.comment_service.get_comment_replies(
            comment_id, page=request.page, page_size=request.page_size
        )
        items = await build_comment_items(self.user_service, replies, viewer_id)

        return GetCommentRepliesResponse(
            comment_id=request.comment_id, page=request.page, replies=items
        )
