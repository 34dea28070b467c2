"""Application layer DI providers."""

from dishka import Scope, provide

from banter.application.usecase.comment import (
    ClearReactionUseCase,
    CreateCommentUseCase,
    DeleteCommentUseCase,
    EditCommentUseCase,
    GetCommentRepliesUseCase,
    GetPostCommentsUseCase,
    GetUserCommentsUseCase,
    PinCommentUseCase,
    ReportCommentUseCase,
    SearchCommentsUseCase,
    SetReactionUseCase,
    ToggleLikeUseCase,
)
from banter.domain.service import (
    CommentService,
    NotificationService,
    PostService,
    UserService,
)
from banter.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # Write use cases
    @provide
    def get_create_comment_use_case(
        self,
        comment_service: CommentService,
        post_service: PostService,
        user_service: UserService,
        notification_service: NotificationService,
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(
            comment_service=comment_service,
            post_service=post_service,
            user_service=user_service,
            notification_service=notification_service,
        )

    @provide
    def get_edit_comment_use_case(
        self, comment_service: CommentService, user_service: UserService
    ) -> EditCommentUseCase:
        """Provide edit comment use case."""
        return EditCommentUseCase(
            comment_service=comment_service, user_service=user_service
        )

    @provide
    def get_delete_comment_use_case(
        self, comment_service: CommentService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(comment_service=comment_service)

    @provide
    def get_toggle_like_use_case(
        self, comment_service: CommentService
    ) -> ToggleLikeUseCase:
        """Provide toggle like use case."""
        return ToggleLikeUseCase(comment_service=comment_service)

    @provide
    def get_set_reaction_use_case(
        self, comment_service: CommentService
    ) -> SetReactionUseCase:
        """Provide set reaction use case."""
        return SetReactionUseCase(comment_service=comment_service)

    @provide
    def get_clear_reaction_use_case(
        self, comment_service: CommentService
    ) -> ClearReactionUseCase:
        """Provide clear reaction use case."""
        return ClearReactionUseCase(comment_service=comment_service)

    @provide
    def get_report_comment_use_case(
        self, comment_service: CommentService
    ) -> ReportCommentUseCase:
        """Provide report comment use case."""
        return ReportCommentUseCase(comment_service=comment_service)

    @provide
    def get_pin_comment_use_case(
        self, comment_service: CommentService, post_service: PostService
    ) -> PinCommentUseCase:
        """Provide pin comment use case."""
        return PinCommentUseCase(
            comment_service=comment_service, post_service=post_service
        )

    # Read use cases
    @provide
    def get_post_comments_use_case(
        self, comment_service: CommentService, user_service: UserService
    ) -> GetPostCommentsUseCase:
        """Provide get post comments use case."""
        return GetPostCommentsUseCase(
            comment_service=comment_service, user_service=user_service
        )

    @provide
    def get_comment_replies_use_case(
        self, comment_service: CommentService, user_service: UserService
    ) -> GetCommentRepliesUseCase:
        """Provide get comment replies use case."""
        return GetCommentRepliesUseCase(
            comment_service=comment_service, user_service=user_service
        )

    @provide
    def get_search_comments_use_case(
        self,
        comment_service: CommentService,
        post_service: PostService,
        user_service: UserService,
    ) -> SearchCommentsUseCase:
        """Provide search comments use case."""
        return SearchCommentsUseCase(
            comment_service=comment_service,
            post_service=post_service,
            user_service=user_service,
        )

    @provide
    def get_user_comments_use_case(
        self,
        comment_service: CommentService,
        post_service: PostService,
        user_service: UserService,
    ) -> GetUserCommentsUseCase:
        """Provide get user comments use case."""
        return GetUserCommentsUseCase(
            comment_service=comment_service,
            post_service=post_service,
            user_service=user_service,
        )
