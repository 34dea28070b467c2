"""Search comments use case."""

from pydantic import BaseModel

from banter.application.usecase.base import BaseUseCase
from banter.domain.service import CommentService, PostService, UserService

from .common import CommentItem, build_comment_items, parse_viewer


class SearchCommentsRequest(BaseModel):
    """Search comments request."""

    query: str
    limit: int | None = None
    skip: int = 0
    viewer_id: str | None = None


class SearchCommentsResponse(BaseModel):
    """Search comments response."""

    query: str
    comments: list[CommentItem]


class SearchCommentsUseCase(BaseUseCase):
    """Use case for finding comments by their text."""

    def __init__(
        self,
        comment_service: CommentService,
        post_service: PostService,
        user_service: UserService,
    ) -> None:
        self.comment_service = comment_service
        self.post_service = post_service
        self.user_service = user_service

    async def execute(self, request: SearchCommentsRequest) -> SearchCommentsResponse:
        viewer_id = parse_viewer(request.viewer_id)

        comments = await self.comment_service.search_comments(
            request.query, limit=request.limit, skip=request.skip
        )
        posts = await self.post_service.get_posts_by_ids(c.post_id for c in comments)
        items = await build_comment_items(
            self.user_service, comments, viewer_id, posts=posts
        )

        return SearchCommentsResponse(query=request.query, comments=items)
