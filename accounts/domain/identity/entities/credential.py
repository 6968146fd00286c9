"""Credential entity owned by a user."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from accounts.domain.common.entity import Entity
from accounts.domain.common.exceptions import ValidationError
from accounts.domain.common.value_objects.ids import CredentialId, UserId

MAX_USERNAME_LENGTH = 255


class RoleBasedAuthority(str, Enum):
    """Authority granted to the owner of a credential."""

    ROLE_USER = "ROLE_USER"
    ROLE_ADMIN = "ROLE_ADMIN"


@dataclass
class Credential(Entity[CredentialId]):
    """
    Login credential of a user.

    Business Rules:
    - Username is unique across all credentials (enforced at repository level)
    - At most one credential references a given user
    - Password is opaque secret material; hashing is out of scope
    """

    id: CredentialId
    user_id: UserId
    username: str
    password: str | None = None
    role: RoleBasedAuthority = RoleBasedAuthority.ROLE_USER
    is_enabled: bool = True
    is_account_non_expired: bool = True
    is_account_non_locked: bool = True
    is_credentials_non_expired: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.username or not self.username.strip():
            raise ValidationError("must not be blank", field="username", value=self.username)
        if len(self.username) > MAX_USERNAME_LENGTH:
            raise ValidationError(
                f"size must be at most {MAX_USERNAME_LENGTH}", field="username", value=self.username
            )

    def assign_owner(self, user_id: UserId) -> None:
        """Point this credential at its owning user."""
        self.user_id = user_id

    def reuse_identity(self, credential_id: CredentialId) -> None:
        """Take over the id of an already persisted credential so a save updates it in place."""
        self.id = credential_id

    def clear_identity(self) -> None:
        """Drop any id carried by the payload so the store assigns a fresh one."""
        self.id = CredentialId.generate()

    @classmethod
    def create(
        cls,
        username: str,
        password: str | None = None,
        role: RoleBasedAuthority = RoleBasedAuthority.ROLE_USER,
        is_enabled: bool = True,
        is_account_non_expired: bool = True,
        is_account_non_locked: bool = True,
        is_credentials_non_expired: bool = True,
        credential_id: CredentialId | None = None,
        user_id: UserId | None = None,
    ) -> "Credential":
        """
        Build a credential payload.

        The owner is usually unknown at this point; it is stamped by the
        aggregate use case once the user row has an id.
        """
        return cls(
            id=credential_id or CredentialId.generate(),
            user_id=user_id or UserId.generate(),
            username=username,
            password=password,
            role=role,
            is_enabled=is_enabled,
            is_account_non_expired=is_account_non_expired,
            is_account_non_locked=is_account_non_locked,
            is_credentials_non_expired=is_credentials_non_expired,
        )

    @classmethod
    def create_with_id(
        cls,
        id: CredentialId,
        user_id: UserId,
        username: str,
        password: str | None,
        role: RoleBasedAuthority,
        is_enabled: bool,
        is_account_non_expired: bool,
        is_account_non_locked: bool,
        is_credentials_non_expired: bool,
        created_at: datetime | None,
        updated_at: datetime | None,
    ) -> "Credential":
        """Reconstitute a credential from persistence."""
        return cls(
            id=id,
            user_id=user_id,
            username=username,
            password=password,
            role=role,
            is_enabled=is_enabled,
            is_account_non_expired=is_account_non_expired,
            is_account_non_locked=is_account_non_locked,
            is_credentials_non_expired=is_credentials_non_expired,
            created_at=created_at,
            updated_at=updated_at,
        )
