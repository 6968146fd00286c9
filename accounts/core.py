from dependency_injector import containers, providers
from sqlalchemy.orm import Session

from accounts.application.identity.use_cases.user_aggregate_use_case import (
    UserAggregateUseCase,
)
from accounts.config import get_settings
from accounts.infrastructure.common.metrics import PrometheusMetricsSink
from accounts.infrastructure.common.unit_of_work import SQLAlchemyUnitOfWork
from accounts.infrastructure.identity.repositories.credential_repository import (
    CredentialRepository,
)
from accounts.infrastructure.identity.repositories.user_repository import UserRepository


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    settings = providers.ThreadSafeSingleton(get_settings)

    # Session-bound providers take the request session as a call-time argument
    user_repository = providers.Factory(UserRepository)
    credential_repository = providers.Factory(CredentialRepository)
    unit_of_work = providers.Factory(SQLAlchemyUnitOfWork)

    # One sink per process, counters register once
    metrics_sink = providers.ThreadSafeSingleton(PrometheusMetricsSink)

    # Identity use cases
    user_aggregate_use_case = providers.Factory(
        UserAggregateUseCase,
        metrics_sink=metrics_sink,
        registrations_counter=settings.provided.REGISTRATIONS_COUNTER,
    )


# Initialize container
container = Container()


def build_user_aggregate_use_case(db: Session) -> UserAggregateUseCase:
    """Build the aggregate use case with repositories and unit of work on ``db``."""
    return container.user_aggregate_use_case(
        user_repository=container.user_repository(db=db),
        credential_repository=container.credential_repository(db=db),
        uow=container.unit_of_work(db=db),
    )
