"""SQLAlchemy implementation of the Unit of Work port."""

from sqlalchemy.orm import Session

from accounts.application.common.unit_of_work import UnitOfWork


class SQLAlchemyUnitOfWork(UnitOfWork):
    """Unit of work bound to a request-scoped SQLAlchemy session."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
