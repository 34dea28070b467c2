"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class NotAuthorizedError(DomainError):
    """Raised when a user attempts to change content they don't own."""

    def __init__(self, resource: str, resource_id: str, user_id: str):
        self.resource = resource
        self.resource_id = resource_id
        self.user_id = user_id
        super().__init__(
            f"User {user_id} is not authorized to modify {resource} {resource_id}"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ConflictError(DomainError):
    """Raised when a write loses an optimistic concurrency race.

    The stored version no longer matches the version the write was based on.
    Callers may re-read and retry.
    """

    def __init__(self, resource: str, identifier: str, expected_version: int):
        self.resource = resource
        self.identifier = identifier
        self.expected_version = expected_version
        super().__init__(
            f"{resource} {identifier} was modified concurrently "
            f"(expected version {expected_version})"
        )


class ContentDeletedException(DomainError):
    """Raised when attempting to change deleted content."""

    def __init__(self, resource: str, resource_id: str):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} {resource_id} has been deleted")


class ContentNotActiveError(DomainError):
    """Raised when an operation requires active content."""

    def __init__(self, resource: str, resource_id: str, status: str):
        self.resource = resource
        self.resource_id = resource_id
        self.status = status
        super().__init__(f"Cannot edit {resource} {resource_id} with status {status}")


class CascadeDeleteError(DomainError):
    """Raised when removing the replies of a deleted comment partially failed.

    The comment itself is already marked deleted; ``failures`` maps each reply
    that could not be removed to the error raised for it.
    """

    def __init__(self, comment_id: str, failures: dict[str, Exception]):
        self.comment_id = comment_id
        self.failures = failures
        super().__init__(
            f"Failed to remove {len(failures)} replies of comment {comment_id}: "
            + ", ".join(sorted(failures))
        )
