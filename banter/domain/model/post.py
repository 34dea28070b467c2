"""Post entity.

Comments hang off posts. Only the fields the comment store needs are
modelled here.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from banter.domain.model.common import DomainModel
from banter.domain.value import PostId, UserId


class Post(DomainModel):
    """Post that comments belong to."""

    id: PostId
    author_id: UserId
    text: Optional[str] = Field(default=None, max_length=5000)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
    deleted_at: Optional[datetime] = None

    @property
    def is_deleted(self) -> bool:
        """Whether the post has been removed."""
        return self.deleted_at is not None
