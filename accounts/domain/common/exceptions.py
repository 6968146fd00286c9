"""
Domain layer exceptions.

These exceptions represent domain-level failures. They are never turned
into response text here; the fault classifier at the HTTP boundary is the
single place that does that.
"""


class DomainError(Exception):
    """
    Base exception for all domain errors.

    All domain exceptions should inherit from this class
    so they can be caught and handled uniformly.
    """

    def __init__(self, message: str, details: dict[str, object] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class ValidationError(DomainError):
    """
    Raised when domain validation fails.

    Example: blank username on a credential.
    """

    def __init__(self, message: str, field: str | None = None, value: object = None) -> None:
        details: dict[str, object] = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = value
        super().__init__(message, details)
        self.field = field
        self.value = value


class EntityNotFoundError(DomainError):
    """
    Raised when an entity cannot be found.

    ``key_name`` names the attribute the lookup used, so a lookup by
    username reads "User with username: ann not found".
    """

    def __init__(self, entity_type: str, key: object, key_name: str = "id") -> None:
        message = f"{entity_type} with {key_name}: {key} not found"
        super().__init__(message, {"entity_type": entity_type, key_name: key})
        self.entity_type = entity_type
        self.key = key
        self.key_name = key_name
