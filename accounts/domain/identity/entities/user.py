"""User entity for identity management."""

from dataclasses import dataclass
from datetime import datetime

from accounts.domain.common.entity import Entity
from accounts.domain.common.value_objects.ids import UserId
from accounts.domain.identity.entities.credential import Credential


@dataclass
class User(Entity[UserId]):
    """
    User aggregate root.

    A user owns at most one credential. The two are stored as separate
    rows, so the credential travels with the user in memory but is written
    by the aggregate use case in its own step.

    Business Rules:
    - Email must be unique (enforced at repository level)
    - A user can exist without a credential
    - The id is assigned by the store on first save and never changes
    """

    id: UserId
    first_name: str | None = None
    last_name: str | None = None
    image_url: str | None = None
    email: str | None = None
    phone: str | None = None
    credential: Credential | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def detach_credential(self) -> Credential | None:
        """
        Remove the credential payload from the user and return it.

        The user body can then be saved on its own, before the credential
        knows which user id it belongs to.
        """
        credential = self.credential
        self.credential = None
        return credential

    def attach_credential(self, credential: Credential) -> None:
        """Attach a persisted credential to this user."""
        self.credential = credential

    def target(self, user_id: UserId) -> None:
        """Direct this payload at an existing user, overriding any embedded id."""
        self.id = user_id

    def clear_identity(self) -> None:
        """Drop any id carried by the payload so the store assigns a fresh one."""
        self.id = UserId.generate()

    @classmethod
    def create(
        cls,
        first_name: str | None = None,
        last_name: str | None = None,
        image_url: str | None = None,
        email: str | None = None,
        phone: str | None = None,
        credential: Credential | None = None,
        user_id: UserId | None = None,
    ) -> "User":
        """
        Build a user payload.

        Args:
            user_id: Id embedded in the payload, if any (used by self-targeted updates)

        Returns:
            New User instance, unpersisted unless ``user_id`` names an existing row
        """
        return cls(
            id=user_id or UserId.generate(),
            first_name=first_name,
            last_name=last_name,
            image_url=image_url,
            email=email,
            phone=phone,
            credential=credential,
        )

    @classmethod
    def create_with_id(
        cls,
        id: UserId,
        first_name: str | None,
        last_name: str | None,
        image_url: str | None,
        email: str | None,
        phone: str | None,
        credential: Credential | None,
        created_at: datetime | None,
        updated_at: datetime | None,
    ) -> "User":
        """Reconstitute a user from persistence."""
        return cls(
            id=id,
            first_name=first_name,
            last_name=last_name,
            image_url=image_url,
            email=email,
            phone=phone,
            credential=credential,
            created_at=created_at,
            updated_at=updated_at,
        )
