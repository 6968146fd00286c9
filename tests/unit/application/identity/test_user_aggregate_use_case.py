"""Tests for UserAggregateUseCase with in-memory stores."""

from dataclasses import replace

import pytest
from sqlalchemy.exc import IntegrityError

from accounts.application.common.unit_of_work import UnitOfWork
from accounts.application.identity.use_cases.user_aggregate_use_case import (
    USER_REGISTRATIONS_COUNTER,
    UserAggregateUseCase,
)
from accounts.domain.common.exceptions import ValidationError
from accounts.domain.common.value_objects.ids import CredentialId, UserId
from accounts.domain.identity.entities.credential import Credential
from accounts.domain.identity.entities.user import User
from accounts.domain.identity.exceptions import UserNotFoundError
from accounts.infrastructure.common.fault_classifier import classify_exception


class InMemoryUserRepository:
    def __init__(self, credentials: "InMemoryCredentialRepository") -> None:
        self.rows: dict[int, User] = {}
        self.credentials = credentials
        self.save_calls = 0
        self.extra_rows: list[User] = []
        self._next_id = 1

    def save(self, user: User) -> User:
        self.save_calls += 1
        if not user.id.is_assigned:
            user = replace(user, id=UserId(self._next_id))
            self._next_id += 1
        elif user.id.value not in self.rows:
            raise UserNotFoundError(user.id.value)
        stored = replace(user, credential=None)
        self.rows[stored.id.value] = stored
        return replace(stored)

    def find_by_id(self, user_id: UserId) -> User | None:
        row = self.rows.get(user_id.value)
        return self._with_credential(row) if row else None

    def exists_by_id(self, user_id: UserId) -> bool:
        return user_id.value in self.rows

    def find_all(self) -> list[User]:
        users = [self._with_credential(row) for row in self.rows.values()]
        return users + [replace(user) for user in self.extra_rows]

    def find_by_credential_username(self, username: str) -> User | None:
        for credential in self.credentials.rows.values():
            if credential.username == username:
                return self.find_by_id(credential.user_id)
        return None

    def delete_by_id(self, user_id: UserId) -> None:
        if user_id.value not in self.rows:
            raise UserNotFoundError(user_id.value)
        del self.rows[user_id.value]

    def _with_credential(self, row: User) -> User:
        return replace(row, credential=self.credentials.find_by_user_id(row.id))


class InMemoryCredentialRepository:
    def __init__(self) -> None:
        self.rows: dict[int, Credential] = {}
        self.save_calls = 0
        self._next_id = 1

    def save(self, credential: Credential) -> Credential:
        self.save_calls += 1
        for row in self.rows.values():
            if row.username == credential.username and row.id != credential.id:
                raise IntegrityError(
                    "INSERT INTO credentials",
                    {},
                    Exception("UNIQUE constraint failed: credentials.username"),
                )
        if not credential.id.is_assigned:
            credential = replace(credential, id=CredentialId(self._next_id))
            self._next_id += 1
        self.rows[credential.id.value] = replace(credential)
        return replace(credential)

    def find_by_user_id(self, user_id: UserId) -> Credential | None:
        for row in self.rows.values():
            if row.user_id == user_id:
                return replace(row)
        return None

    def find_id_by_user_id(self, user_id: UserId) -> CredentialId | None:
        credential = self.find_by_user_id(user_id)
        return credential.id if credential else None


class RecordingUnitOfWork(UnitOfWork):
    def __init__(self) -> None:
        self.commits = 0
        self.rollbacks = 0

    def commit(self) -> None:
        self.commits += 1

    def rollback(self) -> None:
        self.rollbacks += 1


class RecordingMetricsSink:
    def __init__(self) -> None:
        self.increments: list[str] = []

    def increment_counter(self, name: str) -> None:
        self.increments.append(name)


@pytest.fixture
def credential_repository() -> InMemoryCredentialRepository:
    return InMemoryCredentialRepository()


@pytest.fixture
def user_repository(credential_repository: InMemoryCredentialRepository) -> InMemoryUserRepository:
    return InMemoryUserRepository(credential_repository)


@pytest.fixture
def uow() -> RecordingUnitOfWork:
    return RecordingUnitOfWork()


@pytest.fixture
def metrics_sink() -> RecordingMetricsSink:
    return RecordingMetricsSink()


@pytest.fixture
def use_case(
    user_repository: InMemoryUserRepository,
    credential_repository: InMemoryCredentialRepository,
    uow: RecordingUnitOfWork,
    metrics_sink: RecordingMetricsSink,
) -> UserAggregateUseCase:
    return UserAggregateUseCase(
        user_repository=user_repository,
        credential_repository=credential_repository,
        uow=uow,
        metrics_sink=metrics_sink,
    )


def _payload(first_name: str = "Ann", username: str | None = "ann1", **kwargs: object) -> User:
    credential = Credential.create(username=username) if username else None
    return User.create(first_name=first_name, credential=credential, **kwargs)  # type: ignore[arg-type]


class TestCreate:
    def test_credential_is_stamped_with_assigned_user_id(
        self, use_case: UserAggregateUseCase
    ) -> None:
        user = use_case.create(_payload())

        assert user.id.value > 0
        assert user.credential is not None
        assert user.credential.id.value > 0
        assert user.credential.user_id == user.id

    def test_user_without_credential_is_valid(
        self, use_case: UserAggregateUseCase, credential_repository: InMemoryCredentialRepository
    ) -> None:
        user = use_case.create(_payload(username=None))

        assert user.id.value == 1
        assert user.credential is None
        assert credential_repository.save_calls == 0

    def test_both_writes_commit_once(
        self, use_case: UserAggregateUseCase, uow: RecordingUnitOfWork
    ) -> None:
        use_case.create(_payload())

        assert uow.commits == 1
        assert uow.rollbacks == 0

    def test_increments_registrations_once(
        self, use_case: UserAggregateUseCase, metrics_sink: RecordingMetricsSink
    ) -> None:
        use_case.create(_payload())

        assert metrics_sink.increments == [USER_REGISTRATIONS_COUNTER]

    def test_embedded_ids_are_ignored(self, use_case: UserAggregateUseCase) -> None:
        use_case.create(_payload(username="first"))
        payload = _payload(first_name="Bob", username="bob", user_id=UserId(1))
        assert payload.credential is not None
        payload.credential.reuse_identity(CredentialId(1))

        user = use_case.create(payload)

        assert user.id.value == 2
        assert user.credential is not None
        assert user.credential.id.value == 2

    def test_duplicate_username_rolls_back_and_is_not_counted(
        self,
        use_case: UserAggregateUseCase,
        uow: RecordingUnitOfWork,
        metrics_sink: RecordingMetricsSink,
    ) -> None:
        use_case.create(_payload(username="ann1"))

        with pytest.raises(IntegrityError):
            use_case.create(_payload(first_name="Other", username="ann1"))

        assert uow.rollbacks == 1
        assert metrics_sink.increments == [USER_REGISTRATIONS_COUNTER]


class TestUpdate:
    def test_credential_id_is_reused(self, use_case: UserAggregateUseCase) -> None:
        created = use_case.create(_payload(username="ann1"))

        updated = use_case.update_with_id(
            created.id.value, _payload(first_name="Anne", username="ann1-new")
        )

        assert created.credential is not None
        assert updated.credential is not None
        assert updated.credential.id == created.credential.id
        assert updated.credential.username == "ann1-new"
        assert updated.first_name == "Anne"

    def test_repeated_update_keeps_single_credential(
        self,
        use_case: UserAggregateUseCase,
        credential_repository: InMemoryCredentialRepository,
    ) -> None:
        created = use_case.create(_payload(username="ann1"))

        first = use_case.update_with_id(created.id.value, _payload(username="ann2"))
        second = use_case.update_with_id(created.id.value, _payload(username="ann2"))

        assert first.credential is not None
        assert second.credential is not None
        assert first.credential.id == second.credential.id
        assert len(credential_repository.rows) == 1

    def test_missing_user_writes_nothing(
        self,
        use_case: UserAggregateUseCase,
        user_repository: InMemoryUserRepository,
        credential_repository: InMemoryCredentialRepository,
    ) -> None:
        with pytest.raises(UserNotFoundError) as exc_info:
            use_case.update_with_id(42, _payload())

        assert "42" in exc_info.value.message
        assert user_repository.save_calls == 0
        assert credential_repository.save_calls == 0

    def test_path_id_wins_over_payload_id(
        self, use_case: UserAggregateUseCase, user_repository: InMemoryUserRepository
    ) -> None:
        use_case.create(_payload(first_name="Ann", username="ann"))
        use_case.create(_payload(first_name="Bob", username="bob"))

        updated = use_case.update_with_id(
            1, _payload(first_name="Anne", username=None, user_id=UserId(2))
        )

        assert updated.id.value == 1
        assert user_repository.rows[1].first_name == "Anne"
        assert user_repository.rows[2].first_name == "Bob"

    def test_without_credential_payload_leaves_credential_untouched(
        self,
        use_case: UserAggregateUseCase,
        credential_repository: InMemoryCredentialRepository,
    ) -> None:
        created = use_case.create(_payload(username="ann1"))

        updated = use_case.update_with_id(created.id.value, _payload(username=None))

        assert updated.credential is None
        stored = credential_repository.find_by_user_id(created.id)
        assert stored is not None
        assert stored.username == "ann1"

    def test_new_credential_on_user_without_one(self, use_case: UserAggregateUseCase) -> None:
        created = use_case.create(_payload(username=None))

        updated = use_case.update_with_id(created.id.value, _payload(username="late"))

        assert updated.credential is not None
        assert updated.credential.user_id == created.id

    def test_foreign_credential_id_in_payload_is_not_reused(
        self,
        use_case: UserAggregateUseCase,
        credential_repository: InMemoryCredentialRepository,
    ) -> None:
        use_case.create(_payload(first_name="Ann", username="ann"))
        bob = use_case.create(_payload(first_name="Bob", username=None))
        payload = _payload(first_name="Bob", username="bob")
        assert payload.credential is not None
        payload.credential.reuse_identity(CredentialId(1))

        updated = use_case.update_with_id(bob.id.value, payload)

        assert updated.credential is not None
        assert updated.credential.id.value == 2
        assert credential_repository.rows[1].username == "ann"

    def test_update_is_not_counted_as_registration(
        self, use_case: UserAggregateUseCase, metrics_sink: RecordingMetricsSink
    ) -> None:
        created = use_case.create(_payload())

        use_case.update_with_id(created.id.value, _payload(first_name="Anne"))

        assert metrics_sink.increments == [USER_REGISTRATIONS_COUNTER]

    def test_update_self_id_uses_embedded_id(self, use_case: UserAggregateUseCase) -> None:
        created = use_case.create(_payload(username="ann1"))

        updated = use_case.update_self_id(
            _payload(first_name="Anne", username="ann1", user_id=created.id)
        )

        assert created.credential is not None
        assert updated.credential is not None
        assert updated.id == created.id
        assert updated.credential.id == created.credential.id

    def test_update_self_id_without_id(self, use_case: UserAggregateUseCase) -> None:
        with pytest.raises(ValidationError):
            use_case.update_self_id(_payload())

    def test_update_self_id_unknown_id(self, use_case: UserAggregateUseCase) -> None:
        with pytest.raises(UserNotFoundError):
            use_case.update_self_id(_payload(user_id=UserId(7)))


class TestQueries:
    def test_find_by_id_missing(self, use_case: UserAggregateUseCase) -> None:
        with pytest.raises(UserNotFoundError) as exc_info:
            use_case.find_by_id(5)

        assert exc_info.value.entity_type == "User"
        assert exc_info.value.key == 5
        assert "5" in classify_exception(exc_info.value).message

    def test_find_by_id_returns_credential(self, use_case: UserAggregateUseCase) -> None:
        created = use_case.create(_payload(username="ann1"))

        found = use_case.find_by_id(created.id.value)

        assert found.credential is not None
        assert found.credential.username == "ann1"

    def test_find_by_username(self, use_case: UserAggregateUseCase) -> None:
        created = use_case.create(_payload(username="ann1"))

        assert use_case.find_by_username("ann1").id == created.id

    def test_find_by_username_missing(self, use_case: UserAggregateUseCase) -> None:
        with pytest.raises(UserNotFoundError) as exc_info:
            use_case.find_by_username("ghost")

        assert "ghost" in classify_exception(exc_info.value).message

    def test_find_all_collapses_duplicates(
        self, use_case: UserAggregateUseCase, user_repository: InMemoryUserRepository
    ) -> None:
        created = use_case.create(_payload(username="ann1"))
        use_case.create(_payload(first_name="Bob", username="bob"))
        user_repository.extra_rows.append(use_case.find_by_id(created.id.value))

        users = use_case.find_all()

        assert [user.first_name for user in users] == ["Ann", "Bob"]

    def test_delete_by_id(
        self, use_case: UserAggregateUseCase, uow: RecordingUnitOfWork
    ) -> None:
        created = use_case.create(_payload())

        use_case.delete_by_id(created.id.value)

        with pytest.raises(UserNotFoundError):
            use_case.find_by_id(created.id.value)
        assert uow.commits == 2

    def test_delete_missing_propagates_store_error(self, use_case: UserAggregateUseCase) -> None:
        with pytest.raises(UserNotFoundError):
            use_case.delete_by_id(99)
