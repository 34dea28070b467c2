"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold comment store rules that span more than one
    entity, or that need a repository to enforce.
    """

    pass
