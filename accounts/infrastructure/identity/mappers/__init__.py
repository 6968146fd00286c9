from accounts.infrastructure.identity.mappers.credential_mapper import CredentialMapper
from accounts.infrastructure.identity.mappers.user_mapper import UserMapper

__all__ = ["CredentialMapper", "UserMapper"]
