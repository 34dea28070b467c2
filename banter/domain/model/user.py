"""User entity.

Users are owned by the account service; this service only reads them to
resolve comment authors and mentions.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from banter.domain.model.common import DomainModel
from banter.domain.value import UserId
from banter.domain.value.types import Username


class User(DomainModel):
    """User as seen by the comment store."""

    id: UserId
    username: Username
    display_name: Optional[str] = Field(default=None, max_length=100)
    avatar_url: Optional[str] = None
    is_verified: bool = False
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
