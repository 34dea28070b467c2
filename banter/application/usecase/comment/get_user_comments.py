"""Get user comments use case."""

from pydantic import BaseModel

from banter.application.usecase.base import BaseUseCase
from banter.domain.service import CommentService, PostService, UserService
from banter.domain.value import UserId

from .common import CommentItem, build_comment_items, parse_id, parse_viewer


class GetUserCommentsRequest(BaseModel):
    """Get user comments request."""

    user_id: str  # Author whose comments to list
    page: int = 1
    page_size: int | None = None
    viewer_id: str | None = None


class GetUserCommentsResponse(BaseModel):
    """Get user comments response."""

    user_id: str
    page: int
    comments: list[CommentItem]


class GetUserCommentsUseCase(BaseUseCase):
    """Use case for listing a user's comments across posts."""

    def __init__(
        self,
        comment_service: CommentService,
        post_service: PostService,
        user_service: UserService,
    ) -> None:
        self.comment_service = comment_service
        self.post_service = post_service
        self.user_service = user_service

    async def execute(self, request: GetUserCommentsRequest) -> GetUserCommentsResponse:
        user_id = UserId(parse_id(request.user_id, "user"))
        viewer_id = parse_viewer(request.viewer_id)

        comments = await self.comment_service.get_user_comments(
            user_id, page=request.page, page_size=request.page_size
        )
        posts = await self.post_service.get_posts_by_ids(c.post_id for c in comments)
        items = await build_comment_items(
            self.user_service, comments, viewer_id, posts=posts
        )

        return GetUserCommentsResponse(
            user_id=request.user_id, page=request.page, comments=items
        )
