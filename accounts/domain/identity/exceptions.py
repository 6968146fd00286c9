"""Identity domain exceptions."""

from accounts.domain.common.exceptions import EntityNotFoundError


class UserNotFoundError(EntityNotFoundError):
    """Raised when a user cannot be found."""

    def __init__(self, user_id: int | None = None, *, username: str | None = None) -> None:
        """Initialize with the id or, for lookups by login name, the username."""
        self.user_id = user_id
        self.username = username
        if username is not None:
            super().__init__("User", username, key_name="username")
        else:
            super().__init__("User", user_id)


class CredentialNotFoundError(EntityNotFoundError):
    """Raised when a credential cannot be found."""

    def __init__(self, credential_id: int) -> None:
        super().__init__("Credential", credential_id)


class VerificationTokenNotFoundError(EntityNotFoundError):
    """Raised when a verification token cannot be found."""

    def __init__(self, token_id: int) -> None:
        super().__init__("VerificationToken", token_id)


class AddressNotFoundError(EntityNotFoundError):
    """Raised when an address cannot be found."""

    def __init__(self, address_id: int) -> None:
        super().__init__("Address", address_id)
