from accounts.infrastructure.identity.repositories.credential_repository import (
    CredentialRepository,
)
from accounts.infrastructure.identity.repositories.user_repository import UserRepository

__all__ = ["CredentialRepository", "UserRepository"]
