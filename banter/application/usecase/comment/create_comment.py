"""Create comment use case."""

from pydantic import BaseModel, Field

from banter.application.usecase.base import BaseUseCase
from banter.domain.error import NotFoundError
from banter.domain.model import CommentMedia
from banter.domain.service import (
    CommentService,
    NotificationService,
    PostService,
    UserService,
)
from banter.domain.value import CommentId, PostId, UserId

from .common import CommentItem, build_comment_items, parse_id


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    post_id: str  # UUID string
    author_id: str  # User ID from authenticated user
    text: str = ""
    media: list[CommentMedia] = Field(default_factory=list)
    parent_id: str | None = None  # Comment being replied to


class CreateCommentResponse(BaseModel):
    """Create comment response."""

    comment: CommentItem
    notifications_sent: int


class CreateCommentUseCase(BaseUseCase):
    """Use case for commenting on a post or replying to a comment."""

    def __init__(
        self,
        comment_service: CommentService,
        post_service: PostService,
        user_service: UserService,
        notification_service: NotificationService,
    ) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
            post_service: Post domain service
            user_service: User domain service, for the author summary
            notification_service: Notification domain service
        """
        self.comment_service = comment_service
        self.post_service = post_service
        self.user_service = user_service
        self.notification_service = notification_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Steps:
        1. Verify the post exists
        2. Create the comment (the service validates the parent)
        3. Notify the replied-to author and mentioned users

        Raises:
            ValidationError: If an ID is malformed or the content is invalid
            NotFoundError: If the post or parent comment does not exist
        """
        post_id = PostId(parse_id(request.post_id, "post"))
        author_id = UserId(parse_id(request.author_id, "user"))
        parent_id = (
            CommentId(parse_id(request.parent_id, "comment"))
            if request.parent_id
            else None
        )

        post = await self.post_service.get_post_by_id(post_id)
        if not post:
            raise NotFoundError("Post", request.post_id)

        comment = await self.comment_service.create_comment(
            author_id=author_id,
            post_id=post_id,
            text=request.text,
            media=request.media,
            parent_id=parent_id,
        )

        # Notify whoever was actually replied to, which may be a reply
        # even though the comment is attached to its thread's top comment
        replied_to = (
            await self.comment_service.get_comment_by_id(parent_id)
            if parent_id
            else None
        )
        events = await self.notification_service.notify_new_comment(
            comment, replied_to
        )

        [item] = await build_comment_items(self.user_service, [comment], author_id)
        return CreateCommentResponse(comment=item, notifications_sent=len(events))
