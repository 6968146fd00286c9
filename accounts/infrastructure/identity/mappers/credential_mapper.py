"""Mapper for Credential ORM ↔ Domain conversion."""

from accounts.domain.common.value_objects.ids import CredentialId, UserId
from accounts.domain.identity.entities.credential import Credential, RoleBasedAuthority
from accounts.models import Credential as CredentialORM


class CredentialMapper:
    """Mapper for Credential ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: CredentialORM) -> Credential:
        """Convert ORM model to domain entity."""
        return Credential.create_with_id(
            id=CredentialId(orm_model.credential_id),
            user_id=UserId(orm_model.user_id),
            username=orm_model.username,
            password=orm_model.password,
            role=RoleBasedAuthority(orm_model.role),
            is_enabled=orm_model.is_enabled,
            is_account_non_expired=orm_model.is_account_non_expired,
            is_account_non_locked=orm_model.is_account_non_locked,
            is_credentials_non_expired=orm_model.is_credentials_non_expired,
            created_at=orm_model.created_at,
            updated_at=orm_model.updated_at,
        )

    def to_orm(
        self, domain_entity: Credential, orm_model: CredentialORM | None = None
    ) -> CredentialORM:
        """Convert domain entity to ORM model."""
        if orm_model:
            # Update existing
            orm_model.user_id = domain_entity.user_id.value
            orm_model.username = domain_entity.username
            orm_model.password = domain_entity.password
            orm_model.role = domain_entity.role.value
            orm_model.is_enabled = domain_entity.is_enabled
            orm_model.is_account_non_expired = domain_entity.is_account_non_expired
            orm_model.is_account_non_locked = domain_entity.is_account_non_locked
            orm_model.is_credentials_non_expired = domain_entity.is_credentials_non_expired
            return orm_model

        # Create new
        return CredentialORM(
            user_id=domain_entity.user_id.value,
            username=domain_entity.username,
            password=domain_entity.password,
            role=domain_entity.role.value,
            is_enabled=domain_entity.is_enabled,
            is_account_non_expired=domain_entity.is_account_non_expired,
            is_account_non_locked=domain_entity.is_account_non_locked,
            is_credentials_non_expired=domain_entity.is_credentials_non_expired,
        )
