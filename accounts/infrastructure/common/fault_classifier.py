"""
Fault classification.

Every failure that reaches the HTTP boundary is first normalized into one
variant of the closed ``Fault`` union by ``to_fault`` and then turned into
an ``ErrorResponse`` by ``classify``. This module is the only place that
produces client-visible error text. The message punctuation is part of the
contract with API consumers.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any, assert_never

import structlog
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm.exc import DetachedInstanceError

from accounts.domain.common.exceptions import EntityNotFoundError, ValidationError
from accounts.infrastructure.common.schemas.error_schemas import ErrorResponse, StatusCategory

logger = structlog.get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "*Internal server error*"
LAZY_LOADING_ERROR_MESSAGE = "*Internal server error - lazy loading issue*"


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


@dataclass(frozen=True)
class ValidationFailure:
    """Request payload failed field validation."""

    field_errors: tuple[FieldError, ...]

    @property
    def first_message(self) -> str:
        if not self.field_errors:
            return "invalid request"
        return self.field_errors[0].message


@dataclass(frozen=True)
class NotFoundFailure:
    """A user, credential, verification token or address does not exist."""

    entity_kind: str
    key: object
    message: str


@dataclass(frozen=True)
class IntegrityViolation:
    """A store constraint rejected the write; ``raw_message`` is the driver's text."""

    raw_message: str


@dataclass(frozen=True)
class DeferredAccessFault:
    """Lazily loaded data was touched after its session closed."""

    error: BaseException


@dataclass(frozen=True)
class UnclassifiedFault:
    error: BaseException


Fault = (
    ValidationFailure | NotFoundFailure | IntegrityViolation | DeferredAccessFault | UnclassifiedFault
)


def to_fault(exc: BaseException) -> Fault:
    """Normalize an exception into a fault variant."""
    if isinstance(exc, RequestValidationError | PydanticValidationError):
        return ValidationFailure(_field_errors(exc.errors()))
    if isinstance(exc, ValidationError):
        return ValidationFailure((FieldError(exc.field or "", exc.message),))
    if isinstance(exc, EntityNotFoundError):
        return NotFoundFailure(exc.entity_type, exc.key, exc.message)
    if isinstance(exc, IntegrityError):
        raw = str(exc.orig) if exc.orig is not None else str(exc)
        return IntegrityViolation(raw)
    if isinstance(exc, DetachedInstanceError):
        return DeferredAccessFault(exc)
    return UnclassifiedFault(exc)


def classify(fault: Fault) -> ErrorResponse:
    """Build the client-facing response for a fault."""
    if isinstance(fault, ValidationFailure):
        logger.info("validation_failure", errors=[e.field for e in fault.field_errors])
        return _response(f"*{fault.first_message}!**", StatusCategory.BAD_REQUEST)

    if isinstance(fault, NotFoundFailure):
        logger.info("entity_not_found", entity=fault.entity_kind, key=fault.key)
        return _response(f"#### {fault.message}! ####", StatusCategory.NOT_FOUND)

    if isinstance(fault, IntegrityViolation):
        logger.info("data_integrity_violation")
        return _response(f"*{_conflict_message(fault.raw_message)}!*", StatusCategory.CONFLICT)

    if isinstance(fault, DeferredAccessFault):
        logger.error("lazy_loading_failure", exc_info=fault.error)
        return _response(LAZY_LOADING_ERROR_MESSAGE, StatusCategory.INTERNAL_ERROR)

    if isinstance(fault, UnclassifiedFault):
        logger.error("unhandled_exception", exc_info=fault.error)
        return _response(INTERNAL_ERROR_MESSAGE, StatusCategory.INTERNAL_ERROR)

    assert_never(fault)


def classify_exception(exc: BaseException) -> ErrorResponse:
    """Shortcut for ``classify(to_fault(exc))``."""
    return classify(to_fault(exc))


def _conflict_message(raw_message: str) -> str:
    if "username" in raw_message:
        return "Username already exists"
    if "email" in raw_message:
        return "Email already exists"
    return "Data integrity violation"


def _field_errors(errors: Sequence[Any]) -> tuple[FieldError, ...]:
    return tuple(
        FieldError(".".join(str(loc) for loc in error.get("loc", ())), error.get("msg", ""))
        for error in errors
    )


def _response(message: str, category: StatusCategory) -> ErrorResponse:
    # Local system time zone
    return ErrorResponse(
        message=message,
        status_category=category,
        timestamp=datetime.now().astimezone(),
    )
