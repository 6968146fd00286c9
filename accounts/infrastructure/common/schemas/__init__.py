"""Common infrastructure schemas."""

from accounts.infrastructure.common.schemas.error_schemas import ErrorResponse, StatusCategory
from accounts.infrastructure.common.schemas.response_wrappers import CollectionResponse

__all__ = [
    "CollectionResponse",
    "ErrorResponse",
    "StatusCategory",
]
