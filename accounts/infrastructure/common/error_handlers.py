"""Global exception handlers funnelling every failure through the fault classifier."""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm.exc import DetachedInstanceError
from starlette.middleware.base import BaseHTTPMiddleware

from accounts.domain.common.exceptions import DomainError
from accounts.infrastructure.common.fault_classifier import classify_exception

# Starlette's own HTTPException handling (404 for unknown routes, 405, ...) is left in place
HANDLED_EXCEPTIONS: tuple[type[Exception], ...] = (
    RequestValidationError,
    PydanticValidationError,
    DomainError,
    IntegrityError,
    DetachedInstanceError,
)


class UnclassifiedFaultMiddleware(BaseHTTPMiddleware):
    """
    Turn any exception no handler claimed into the generic 500 body.

    Starlette hands a handler registered for ``Exception`` to its outermost
    server-error layer, which re-raises after responding and sits outside
    CORS. Catching here keeps the response inside the middleware stack and
    logs the fault once, through the classifier.
    """

    async def dispatch(self, request: Request, call_next: Any) -> Any:
        try:
            return await call_next(request)
        except Exception as exc:
            return await fault_response_handler(request, exc)


def register_error_handlers(app: FastAPI) -> None:
    """
    Register the classifier-backed handler for every handled exception type.

    Call before adding CORS so the catch-all middleware sits inside it.
    """
    for exc_type in HANDLED_EXCEPTIONS:
        app.add_exception_handler(exc_type, fault_response_handler)
    app.add_middleware(UnclassifiedFaultMiddleware)


async def fault_response_handler(request: Request, exc: Exception) -> JSONResponse:
    """Classify the failure and render it as the JSON error body."""
    response = classify_exception(exc)
    return JSONResponse(
        status_code=response.status_category.http_status,
        content=response.to_body(),
    )
