"""Report comment use case."""

from pydantic import BaseModel

from banter.application.usecase.base import BaseUseCase
from banter.domain.service import CommentService
from banter.domain.value import CommentId, CommentStatus, UserId

from .common import parse_id


class ReportCommentRequest(BaseModel):
    """Report comment request."""

    comment_id: str  # UUID string
    user_id: str  # Reporting user
    reason: str  # spam, harassment, inappropriate or other
    description: str = ""


class ReportCommentResponse(BaseModel):
    """Report comment response."""

    comment_id: str
    added: bool  # False if the user had already reported it
    report_count: int
    status: CommentStatus


class ReportCommentUseCase(BaseUseCase):
    """Use case for reporting a comment to moderation."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: ReportCommentRequest) -> ReportCommentResponse:
        comment_id = CommentId(parse_id(request.comment_id, "comment"))
        user_id = UserId(parse_id(request.user_id, "user"))

        result = await self.comment_service.add_report(
            comment_id, user_id, request.reason, request.description
        )

        return ReportCommentResponse(
            comment_id=request.comment_id,
            added=result.added,
            report_count=result.report_count,
            status=result.status,
        )
