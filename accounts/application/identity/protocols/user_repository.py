from typing import Protocol

from accounts.domain.common.value_objects.ids import UserId
from accounts.domain.identity.entities.user import User


class UserRepositoryProtocol(Protocol):
    def save(self, user: User) -> User: ...

    def find_by_id(self, user_id: UserId) -> User | None: ...

    def exists_by_id(self, user_id: UserId) -> bool: ...

    def find_all(self) -> list[User]: ...

    def find_by_credential_username(self, username: str) -> User | None: ...

    def delete_by_id(self, user_id: UserId) -> None: ...
