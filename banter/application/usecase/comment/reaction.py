"""Set and clear reaction use cases."""

from collections import Counter

from pydantic import BaseModel

from banter.application.usecase.base import BaseUseCase
from banter.domain.model import Comment
from banter.domain.service import CommentService
from banter.domain.value import CommentId, UserId

from .common import parse_id


class SetReactionRequest(BaseModel):
    """Set reaction request."""

    comment_id: str  # UUID string
    user_id: str
    emoji: str


class ClearReactionRequest(BaseModel):
    """Clear reaction request."""

    comment_id: str  # UUID string
    user_id: str


class ReactionResponse(BaseModel):
    """Reaction state of a comment after a change."""

    comment_id: str
    my_reaction: str | None
    reactions_count: int
    reaction_counts: dict[str, int]


def _reaction_response(comment: Comment, user_id: UserId) -> ReactionResponse:
    reaction = comment.reaction_of(user_id)
    return ReactionResponse(
        comment_id=str(comment.id),
        my_reaction=reaction.emoji if reaction else None,
        reactions_count=comment.reactions_count,
        reaction_counts=dict(Counter(r.emoji for r in comment.reactions.values())),
    )


class SetReactionUseCase(BaseUseCase):
    """Use case for reacting to a comment with an emoji."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: SetReactionRequest) -> ReactionResponse:
        comment_id = CommentId(parse_id(request.comment_id, "comment"))
        user_id = UserId(parse_id(request.user_id, "user"))

        comment = await self.comment_service.set_reaction(
            comment_id, user_id, request.emoji
        )
        return _reaction_response(comment, user_id)


class ClearReactionUseCase(BaseUseCase):
    """Use case for removing one's reaction from a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: ClearReactionRequest) -> ReactionResponse:
        comment_id = CommentId(parse_id(request.comment_id, "comment"))
        user_id = UserId(parse_id(request.user_id, "user"))

        comment = await self.comment_service.clear_reaction(comment_id, user_id)
        return _reaction_response(comment, user_id)
