"""Use case for writing and reading the user/credential aggregate."""

from dataclasses import astuple

import structlog

from accounts.application.common.unit_of_work import UnitOfWork
from accounts.application.identity.protocols.credential_repository import (
    CredentialRepositoryProtocol,
)
from accounts.application.identity.protocols.metrics_sink import MetricsSinkProtocol
from accounts.application.identity.protocols.user_repository import UserRepositoryProtocol
from accounts.domain.common.exceptions import ValidationError
from accounts.domain.common.value_objects.ids import UserId
from accounts.domain.identity.entities.user import User
from accounts.domain.identity.exceptions import UserNotFoundError

logger = structlog.get_logger(__name__)

USER_REGISTRATIONS_COUNTER = "user_registrations_total"


class UserAggregateUseCase:
    """
    Create, update, delete and look up users together with their credential.

    The user and its credential live in two rows. Writes always go parent
    first, then the credential stamped with the parent's id, both inside one
    unit of work. On update the id of the credential already owned by the
    user is reused so the credential row is updated in place.
    """

    def __init__(
        self,
        user_repository: UserRepositoryProtocol,
        credential_repository: CredentialRepositoryProtocol,
        uow: UnitOfWork,
        metrics_sink: MetricsSinkProtocol,
        registrations_counter: str = USER_REGISTRATIONS_COUNTER,
    ) -> None:
        """Initialize use case with dependencies."""
        self.user_repository = user_repository
        self.credential_repository = credential_repository
        self.uow = uow
        self.metrics_sink = metrics_sink
        self.registrations_counter = registrations_counter

    def find_all(self) -> list[User]:
        """
        Get all users.

        Returns:
            Users in store order, with fully field-equal duplicates collapsed
        """
        users = self.user_repository.find_all()
        distinct: dict[tuple[object, ...], User] = {}
        for user in users:
            distinct.setdefault(astuple(user), user)
        return list(distinct.values())

    def find_by_id(self, user_id: int) -> User:
        """
        Get a user by id.

        Raises:
            UserNotFoundError: If no user has this id
        """
        user = self.user_repository.find_by_id(UserId(user_id))
        if not user:
            raise UserNotFoundError(user_id)
        return user

    def find_by_username(self, username: str) -> User:
        """
        Get the user owning the credential with this username.

        Raises:
            UserNotFoundError: If no credential has this username
        """
        user = self.user_repository.find_by_credential_username(username)
        if not user:
            raise UserNotFoundError(username=username)
        return user

    def create(self, user: User) -> User:
        """
        Register a new user and, if supplied, its credential.

        Ids embedded in the payload are discarded; the store assigns both.

        Returns:
            The saved user with its saved credential attached (if any)
        """
        user.clear_identity()
        credential = user.detach_credential()

        with self.uow:
            saved_user = self.user_repository.save(user)
            if credential is not None:
                credential.clear_identity()
                credential.assign_owner(saved_user.id)
                saved_user.attach_credential(self.credential_repository.save(credential))
            self.uow.commit()

        self.metrics_sink.increment_counter(self.registrations_counter)
        logger.info(
            "user_created",
            user_id=saved_user.id.value,
            with_credential=saved_user.credential is not None,
        )
        return saved_user

    def update_with_id(self, user_id: int, user: User) -> User:
        """
        Update the user with the given id from a payload.

        The path id wins over any id embedded in the payload. When the
        payload carries no credential, the stored credential is left as is
        and is not attached to the returned user.

        Raises:
            UserNotFoundError: If no user has this id (nothing is written)
        """
        return self._update(UserId(user_id), user)

    def update_self_id(self, user: User) -> User:
        """
        Update the user whose id is embedded in the payload.

        Raises:
            ValidationError: If the payload carries no id
            UserNotFoundError: If the embedded id does not resolve to a user
        """
        if not user.id.is_assigned:
            raise ValidationError("user id must not be null", field="user_id")
        return self._update(user.id, user)

    def delete_by_id(self, user_id: int) -> None:
        """
        Delete a user.

        Existence is not pre-checked here; the repository reports missing ids.
        """
        with self.uow:
            self.user_repository.delete_by_id(UserId(user_id))
            self.uow.commit()
        logger.info("user_deleted", user_id=user_id)

    def _update(self, user_id: UserId, user: User) -> User:
        if not self.user_repository.exists_by_id(user_id):
            raise UserNotFoundError(user_id.value)

        existing_credential_id = self.credential_repository.find_id_by_user_id(user_id)

        user.target(user_id)
        credential = user.detach_credential()

        with self.uow:
            saved_user = self.user_repository.save(user)
            if credential is not None:
                if existing_credential_id is not None:
                    credential.reuse_identity(existing_credential_id)
                else:
                    # Never let a payload address a credential row it does not own
                    credential.clear_identity()
                credential.assign_owner(saved_user.id)
                saved_user.attach_credential(self.credential_repository.save(credential))
            self.uow.commit()

        logger.info(
            "user_updated",
            user_id=saved_user.id.value,
            credential_id=saved_user.credential.id.value if saved_user.credential else None,
        )
        return saved_user
