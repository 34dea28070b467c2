"""Toggle like use case."""

from pydantic import BaseModel

from banter.application.usecase.base import BaseUseCase
from banter.domain.service import CommentService
from banter.domain.value import CommentId, UserId

from .common import parse_id


class ToggleLikeRequest(BaseModel):
    """Toggle like request."""

    comment_id: str  # UUID string
    user_id: str


class ToggleLikeResponse(BaseModel):
    """Toggle like response."""

    comment_id: str
    liked: bool
    likes_count: int


class ToggleLikeUseCase(BaseUseCase):
    """Use case for liking or unliking a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: ToggleLikeRequest) -> ToggleLikeResponse:
        comment_id = CommentId(parse_id(request.comment_id, "comment"))
        user_id = UserId(parse_id(request.user_id, "user"))

        result = await self.comment_service.toggle_like(comment_id, user_id)

        return ToggleLikeResponse(
            comment_id=request.comment_id,
            liked=result.liked,
            likes_count=result.likes_count,
        )
