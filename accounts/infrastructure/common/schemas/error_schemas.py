"""Error response schema shared by all endpoints."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from starlette import status


class StatusCategory(str, Enum):
    """Client-visible failure category."""

    BAD_REQUEST = "BAD_REQUEST"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    INTERNAL_ERROR = "INTERNAL_SERVER_ERROR"

    @property
    def http_status(self) -> int:
        return _HTTP_STATUS[self]


_HTTP_STATUS = {
    StatusCategory.BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
    StatusCategory.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    StatusCategory.CONFLICT: status.HTTP_409_CONFLICT,
    StatusCategory.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class ErrorResponse(BaseModel):
    """
    Error body returned to API clients.

    Serialized as ``{"msg", "httpStatus", "timestamp"}``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    message: str = Field(alias="msg")
    status_category: StatusCategory = Field(alias="httpStatus")
    timestamp: datetime

    def to_body(self) -> dict[str, object]:
        """JSON-ready body using the wire field names."""
        return self.model_dump(mode="json", by_alias=True)
