from accounts.application.identity.protocols.credential_repository import (
    CredentialRepositoryProtocol,
)
from accounts.application.identity.protocols.metrics_sink import MetricsSinkProtocol
from accounts.application.identity.protocols.user_repository import UserRepositoryProtocol

__all__ = [
    "CredentialRepositoryProtocol",
    "MetricsSinkProtocol",
    "UserRepositoryProtocol",
]
