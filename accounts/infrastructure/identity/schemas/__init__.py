"""Identity context schemas."""

from accounts.infrastructure.identity.schemas.user_schemas import (
    CredentialRequest,
    CredentialResponse,
    UserRequest,
    UserResponse,
)

__all__ = [
    "CredentialRequest",
    "CredentialResponse",
    "UserRequest",
    "UserResponse",
]
