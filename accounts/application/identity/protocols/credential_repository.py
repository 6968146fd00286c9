from typing import Protocol

from accounts.domain.common.value_objects.ids import CredentialId, UserId
from accounts.domain.identity.entities.credential import Credential


class CredentialRepositoryProtocol(Protocol):
    def save(self, credential: Credential) -> Credential: ...

    def find_by_user_id(self, user_id: UserId) -> Credential | None: ...

    def find_id_by_user_id(self, user_id: UserId) -> CredentialId | None: ...
