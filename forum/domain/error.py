"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class NotAuthorizedError(DomainError):
    """Raised when a user attempts to change content they don't own."""

    def __init__(self, resource: str, resource_id: str, user_id: str):
        super().__init__(
            f"User {user_id} is not authorized to modify {resource} {resource_id}"
        )


class ConflictError(DomainError):
    """Raised when a uniqueness rule (username, email) is violated."""

    pass


class InvalidCredentialsError(DomainError):
    """Raised when a username/password pair does not match."""

    def __init__(self) -> None:
        super().__init__("Invalid credentials")


class VoteConflictError(DomainError):
    """Raised when the vote ledger keeps rejecting a write for one user/item.

    Concurrent writers from the same user can collide on the unique
    (user, item) key; the write is retried once before this is raised.
    """

    def __init__(self, votable_type: str, votable_id: str, user_id: str):
        super().__init__(
            f"Conflicting vote writes by user {user_id} on {votable_type} {votable_id}"
        )
