"""Common response wrapper schemas for API responses."""

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class CollectionResponse(BaseModel, Generic[T]):
    """Wrapper for list endpoints."""

    collection: list[T]
