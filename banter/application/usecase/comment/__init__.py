"""Comment use cases."""

from .common import AuthorSummary, CommentItem, PostSummary
from .create_comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
)
from .delete_comment import (
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
)
from .edit_comment import EditCommentRequest, EditCommentResponse, EditCommentUseCase
from .get_comment_replies import (
    GetCommentRepliesRequest,
    GetCommentRepliesResponse,
    GetCommentRepliesUseCase,
)
from .get_post_comments import (
    GetPostCommentsRequest,
    GetPostCommentsResponse,
    GetPostCommentsUseCase,
)
from .get_user_comments import (
    GetUserCommentsRequest,
    GetUserCommentsResponse,
    GetUserCommentsUseCase,
)
from .pin_comment import PinCommentRequest, PinCommentResponse, PinCommentUseCase
from .reaction import (
    ClearReactionRequest,
    ClearReactionUseCase,
    ReactionResponse,
    SetReactionRequest,
    SetReactionUseCase,
)
from .report_comment import (
    ReportCommentRequest,
    ReportCommentResponse,
    ReportCommentUseCase,
)
from .search_comments import (
    SearchCommentsRequest,
    SearchCommentsResponse,
    SearchCommentsUseCase,
)
from .toggle_like import ToggleLikeRequest, ToggleLikeResponse, ToggleLikeUseCase

__all__ = [
    "AuthorSummary",
    "ClearReactionRequest",
    "ClearReactionUseCase",
    "CommentItem",
    "CreateCommentRequest",
    "CreateCommentResponse",
    "CreateCommentUseCase",
    "DeleteCommentRequest",
    "DeleteCommentResponse",
    "DeleteCommentUseCase",
    "EditCommentRequest",
    "EditCommentResponse",
    "EditCommentUseCase",
    "GetCommentRepliesRequest",
    "GetCommentRepliesResponse",
    "GetCommentRepliesUseCase",
    "GetPostCommentsRequest",
    "GetPostCommentsResponse",
    "GetPostCommentsUseCase",
    "GetUserCommentsRequest",
    "GetUserCommentsResponse",
    "GetUserCommentsUseCase",
    "PinCommentRequest",
    "PinCommentResponse",
    "PinCommentUseCase",
    "PostSummary",
    "ReactionResponse",
    "ReportCommentRequest",
    "ReportCommentResponse",
    "ReportCommentUseCase",
    "SearchCommentsRequest",
    "SearchCommentsResponse",
    "SearchCommentsUseCase",
    "SetReactionRequest",
    "SetReactionUseCase",
    "ToggleLikeRequest",
    "ToggleLikeResponse",
    "ToggleLikeUseCase",
]
