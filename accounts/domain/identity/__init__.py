"""Identity domain layer."""

from accounts.domain.identity.entities.credential import Credential, RoleBasedAuthority
from accounts.domain.identity.entities.user import User
from accounts.domain.identity.exceptions import (
    AddressNotFoundError,
    CredentialNotFoundError,
    UserNotFoundError,
    VerificationTokenNotFoundError,
)

__all__ = [
    "AddressNotFoundError",
    "Credential",
    "CredentialNotFoundError",
    "RoleBasedAuthority",
    "User",
    "UserNotFoundError",
    "VerificationTokenNotFoundError",
]
