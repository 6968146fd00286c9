"""Mapper for User ORM ↔ Domain conversion."""

from accounts.domain.common.value_objects.ids import UserId
from accounts.domain.identity.entities.user import User
from accounts.infrastructure.identity.mappers.credential_mapper import CredentialMapper
from accounts.models import User as UserORM


class UserMapper:
    """Mapper for User ORM ↔ Domain conversion."""

    def __init__(self) -> None:
        self.credential_mapper = CredentialMapper()

    def to_domain(self, orm_model: UserORM, with_credential: bool = True) -> User:
        """
        Convert ORM model to domain entity.

        Callers asking for the credential must have loaded it eagerly.
        """
        credential = None
        if with_credential and orm_model.credential is not None:
            credential = self.credential_mapper.to_domain(orm_model.credential)
        return User.create_with_id(
            id=UserId(orm_model.user_id),
            first_name=orm_model.first_name,
            last_name=orm_model.last_name,
            image_url=orm_model.image_url,
            email=orm_model.email,
            phone=orm_model.phone,
            credential=credential,
            created_at=orm_model.created_at,
            updated_at=orm_model.updated_at,
        )

    def to_orm(self, domain_entity: User, orm_model: UserORM | None = None) -> UserORM:
        """Convert domain entity to ORM model. The credential is never touched here."""
        if orm_model:
            # Update existing
            orm_model.first_name = domain_entity.first_name
            orm_model.last_name = domain_entity.last_name
            orm_model.image_url = domain_entity.image_url
            orm_model.email = domain_entity.email
            orm_model.phone = domain_entity.phone
            return orm_model

        # Create new
        return UserORM(
            first_name=domain_entity.first_name,
            last_name=domain_entity.last_name,
            image_url=domain_entity.image_url,
            email=domain_entity.email,
            phone=domain_entity.phone,
        )
