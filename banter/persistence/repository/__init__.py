"""PostgreSQL repository implementations."""

from banter.persistence.repository.comment import PostgresCommentRepository
from banter.persistence.repository.post import PostgresPostRepository
from banter.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresPostRepository",
    "PostgresCommentRepository",
]
