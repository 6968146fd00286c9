from collections.abc import Callable
from typing import TypeVar

from sqlalchemy.orm import Session

from accounts.database import DatabaseSession

T = TypeVar("T")


def inject_use_case(builder: Callable[[Session], T]) -> Callable[[DatabaseSession], T]:
    """
    Create a FastAPI dependency from a use case builder.

    The request-scoped session is handed to the builder directly; no shared
    provider state is touched, so concurrent requests never see each other's
    session.
    """

    def dependency(db: DatabaseSession) -> T:
        return builder(db)

    return dependency
