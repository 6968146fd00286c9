"""
Base class for Entities.

Entities carry an identity that survives changes to their other
attributes. Identity values are wrapped in strongly-typed ids so a
credential id can never be passed where a user id is expected.

Example:
    @dataclass
    class User(Entity[UserId]):
        id: UserId
        email: str | None
"""

from abc import ABC
from dataclasses import dataclass
from typing import Generic, Self, TypeVar

from .value_object import ValueObject

# Identity value of an entity that the store has not persisted yet
UNASSIGNED_ID = 0


@dataclass(frozen=True)
class EntityId(ValueObject):
    """
    Base class for strongly-typed integer identifiers.

    The value ``UNASSIGNED_ID`` marks an entity that has not been persisted;
    the store replaces it with a generated key on insert.
    """

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError(f"{self.__class__.__name__} must be non-negative")

    @property
    def is_assigned(self) -> bool:
        """Whether the store has assigned this identifier."""
        return self.value != UNASSIGNED_ID

    @classmethod
    def generate(cls) -> Self:
        """Set placeholder id. The database assigns the real one."""
        return cls(UNASSIGNED_ID)


IdType = TypeVar("IdType", bound=EntityId)


class Entity(ABC, Generic[IdType]):
    """
    Base class for Entities in the domain model.

    Subclasses must have an 'id' attribute of type IdType.
    """

    id: IdType
