"""Repository for Credential domain entities."""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from accounts.domain.common.value_objects.ids import CredentialId, UserId
from accounts.domain.identity.entities.credential import Credential
from accounts.domain.identity.exceptions import CredentialNotFoundError
from accounts.infrastructure.identity.mappers.credential_mapper import CredentialMapper
from accounts.models import Credential as CredentialORM

logger = logging.getLogger(__name__)


class CredentialRepository:
    """Repository for Credential domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = CredentialMapper()

    def find_by_user_id(self, user_id: UserId) -> Credential | None:
        """
        Find the credential owned by a user.

        Args:
            user_id: ID of the owning user

        Returns:
            Credential entity if found, None otherwise
        """
        stmt = select(CredentialORM).where(CredentialORM.user_id == user_id.value)
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_id_by_user_id(self, user_id: UserId) -> CredentialId | None:
        """Find only the ID of the credential owned by a user."""
        stmt = select(CredentialORM.credential_id).where(CredentialORM.user_id == user_id.value)
        credential_id = self.db.execute(stmt).scalar_one_or_none()
        return CredentialId(credential_id) if credential_id is not None else None

    def save(self, credential: Credential) -> Credential:
        """
        Save a credential entity (create or update in place).

        Args:
            credential: The credential entity to save

        Returns:
            Saved credential entity with database-generated values

        Raises:
            CredentialNotFoundError: If the credential carries an ID that does not exist
        """
        if not credential.id.is_assigned:
            orm_model = self.mapper.to_orm(credential)
            self.db.add(orm_model)
            self.db.flush()
            self.db.refresh(orm_model)
            logger.info(
                f"Created credential {orm_model.credential_id} for user {orm_model.user_id}"
            )
            return self.mapper.to_domain(orm_model)

        orm_model = self.db.get(CredentialORM, credential.id.value)
        if not orm_model:
            raise CredentialNotFoundError(credential.id.value)
        self.mapper.to_orm(credential, orm_model)
        self.db.flush()
        self.db.refresh(orm_model)
        logger.info(f"Updated credential {orm_model.credential_id}")
        return self.mapper.to_domain(orm_model)
