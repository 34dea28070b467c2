"""Get post comments use case."""

from pydantic import BaseModel

from banter.application.usecase.base import BaseUseCase
from banter.domain.service import CommentService, UserService
from banter.domain.value import PostId

from .common import CommentItem, build_comment_items, parse_id, parse_viewer


class GetPostCommentsRequest(BaseModel):
    """Get post comments request."""

    post_id: str  # UUID string
    page: int = 1
    page_size: int | None = None  # Defaults to the configured page size
    viewer_id: str | None = None  # Signed-in user, if any


class GetPostCommentsResponse(BaseModel):
    """Get post comments response."""

    post_id: str
    page: int
    comments: list[CommentItem]


class GetPostCommentsUseCase(BaseUseCase):
    """Use case for listing the top-level comments of a post."""

    def __init__(
        self, comment_service: CommentService, user_service: UserService
    ) -> None:
        self.comment_service = comment_service
        self.user_service = user_service

    async def execute(self, request: GetPostCommentsRequest) -> GetPostCommentsResponse:
        """List a page of comments, each with its first replies nested."""
        post_id = PostId(parse_id(request.post_id, "post"))
        viewer_id = parse_viewer(request.viewer_id)

        threads = await self.comment_service.get_post_comments(
            post_id, page=request.page, page_size=request.page_size
        )
        items = await build_comment_items(
            self.user_service,
            [t.comment for t in threads],
            viewer_id,
            replies={t.comment.id: t.replies for t in threads},
        )

        return GetPostCommentsResponse(
            post_id=request.post_id, page=request.page, comments=items
        )
