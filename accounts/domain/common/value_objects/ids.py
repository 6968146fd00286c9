from dataclasses import dataclass

from ..entity import EntityId


@dataclass(frozen=True)
class UserId(EntityId):
    """Strongly-typed user identifier."""

    value: int


@dataclass(frozen=True)
class CredentialId(EntityId):
    """Strongly-typed credential identifier."""

    value: int
