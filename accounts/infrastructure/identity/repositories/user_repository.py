"""Repository for User domain entities."""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from accounts.domain.common.value_objects.ids import UserId
from accounts.domain.identity.entities.user import User
from accounts.domain.identity.exceptions import UserNotFoundError
from accounts.infrastructure.identity.mappers.user_mapper import UserMapper
from accounts.models import Credential as CredentialORM
from accounts.models import User as UserORM

logger = logging.getLogger(__name__)


class UserRepository:
    """
    Repository for User domain entities.

    Writes only flush; the surrounding unit of work commits. Reads load the
    credential eagerly so mapped users never trigger a lazy load.
    """

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = UserMapper()

    def find_by_id(self, user_id: UserId) -> User | None:
        """
        Find a user by ID, with its credential.

        Args:
            user_id: The user ID

        Returns:
            User entity if found, None otherwise
        """
        stmt = (
            select(UserORM)
            .options(selectinload(UserORM.credential))
            .where(UserORM.user_id == user_id.value)
        )
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def exists_by_id(self, user_id: UserId) -> bool:
        """Check whether a user with this ID exists."""
        stmt = select(UserORM.user_id).where(UserORM.user_id == user_id.value)
        return self.db.execute(stmt).scalar_one_or_none() is not None

    def find_all(self) -> list[User]:
        """
        Get all users with their credentials.

        Returns:
            List of user entities ordered by ID
        """
        stmt = select(UserORM).options(selectinload(UserORM.credential)).order_by(UserORM.user_id)
        orm_models = self.db.execute(stmt).scalars().all()
        return [self.mapper.to_domain(orm) for orm in orm_models]

    def find_by_credential_username(self, username: str) -> User | None:
        """
        Find the user owning the credential with this username.

        Args:
            username: Credential username

        Returns:
            User entity if found, None otherwise
        """
        stmt = (
            select(UserORM)
            .join(UserORM.credential)
            .options(selectinload(UserORM.credential))
            .where(CredentialORM.username == username)
        )
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def save(self, user: User) -> User:
        """
        Save a user entity without its credential.

        Args:
            user: The user entity to save

        Returns:
            Saved user entity with database-generated values and no credential

        Raises:
            UserNotFoundError: If the user carries an ID that does not exist
        """
        if not user.id.is_assigned:
            # Create new user
            orm_model = self.mapper.to_orm(user)
            self.db.add(orm_model)
            self.db.flush()
            self.db.refresh(orm_model)
            logger.info(f"Created user (id={orm_model.user_id})")
            return self.mapper.to_domain(orm_model, with_credential=False)

        # Update existing user
        orm_model = self.db.get(UserORM, user.id.value)
        if not orm_model:
            raise UserNotFoundError(user.id.value)

        orm_model = self.mapper.to_orm(user, orm_model)
        self.db.flush()
        self.db.refresh(orm_model)
        logger.info(f"Updated user {user.id.value}")
        return self.mapper.to_domain(orm_model, with_credential=False)

    def delete_by_id(self, user_id: UserId) -> None:
        """
        Delete a user; the credential row goes with it via the foreign key cascade.

        Raises:
            UserNotFoundError: If no user has this ID
        """
        orm_model = self.db.get(UserORM, user_id.value)
        if not orm_model:
            raise UserNotFoundError(user_id.value)

        self.db.delete(orm_model)
        self.db.flush()
        logger.info(f"Deleted user {user_id.value}")
