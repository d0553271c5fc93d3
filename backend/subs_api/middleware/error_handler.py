"""
Error Handler Middleware

Maps domain exceptions to HTTP responses and catches everything else:
- ValidationError -> 400 with the validation message
- SubscriptionNotFound -> 404
- PersistenceError -> 500 with a generic message and an error_id
- any other unhandled exception -> 500, logged as critical

Store failures never leak driver details to the client; the full error
goes to the log (and the error_logs table) under the returned error_id.
"""

from typing import Callable
from fastapi import FastAPI, Request, Response, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from starlette.middleware.base import BaseHTTPMiddleware

from subs_api.core.exceptions import PersistenceError, SubscriptionNotFound, ValidationError
from subs_api.services.error_logging import error_logger


INTERNAL_ERROR_DETAIL = "internal server error"


def _internal_error(error_id) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": INTERNAL_ERROR_DETAIL,
            "error_id": str(error_id) if error_id else None
        }
    )


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": str(exc)}
    )


async def not_found_handler(request: Request, exc: SubscriptionNotFound) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": str(exc)}
    )


async def persistence_error_handler(request: Request, exc: PersistenceError) -> JSONResponse:
    """
    Log the store failure with its cause and answer with a generic 500.

    The error_logs write runs in the threadpool. It is skipped when the pool
    itself timed out, since the write would wait on that same pool.
    """
    error_id = await run_in_threadpool(
        error_logger.log_error,
        exc,
        request=request,
        severity="error",
        context={"operation": exc.operation, "cause": repr(exc.__cause__)},
        save_to_db=not isinstance(exc.__cause__, PoolTimeoutError),
    )
    return _internal_error(error_id)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the domain exception handlers to the application."""
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(SubscriptionNotFound, not_found_handler)
    app.add_exception_handler(PersistenceError, persistence_error_handler)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Middleware that catches all unhandled exceptions and logs them.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            # Unhandled exceptions - log as critical
            error_id = await run_in_threadpool(
                error_logger.log_error,
                exc,
                request=request,
                severity="critical",
                context={"unhandled": True},
            )
            return _internal_error(error_id)
