from .ids import CredentialId, UserId

__all__ = ["CredentialId", "UserId"]
