from typing import Any
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from datasources.config import settings
from datasources.exceptions.errors import (
    BackendOperationError,
    DataAccessError,
    DecodeError,
    QueryBuildError,
    TransactionError,
)
from datasources.logging.logger import get_logger
from datasources.response import ResponseModel

logger = get_logger("exception_handler")

class BusinessException(Exception):
    """Base class for business exceptions raised by services built on the repositories."""
    def __init__(self, message: str, status_code: int = 200, code: int = 400, detail: Any = None):
        self.message = message
        self.status_code = status_code
        self.code = code
        self.detail = detail


def global_exception_handler(request: Request, exc: Exception):
    """Map errors raised inside FastAPI routes to response envelopes."""
    trace_id = getattr(request.state, "trace_id", "unknown")

    if isinstance(exc, BusinessException):
        logger.warning(f"Trace[{trace_id}] - BusinessError: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content=ResponseModel.fail(code=exc.code, message=exc.message, data=exc.detail)
        )

    if isinstance(exc, QueryBuildError):
        logger.warning(f"Trace[{trace_id}] - QueryBuildError: {exc}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ResponseModel.fail(code=exc.code, message=exc.message)
        )

    if isinstance(exc, TransactionError):
        logger.warning(f"Trace[{trace_id}] - TransactionError: {exc}")
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content=ResponseModel.fail(code=exc.code, message=exc.message)
        )

    if isinstance(exc, BackendOperationError):
        logger.critical(f"Trace[{trace_id}] - BackendOperationError: {exc} ({exc.original!r})")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=ResponseModel.fail(code=exc.code, message="Service temporarily unavailable")
        )

    if isinstance(exc, DecodeError):
        logger.error(f"Trace[{trace_id}] - DecodeError: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ResponseModel.fail(
                code=exc.code,
                message="Stored data could not be read",
                data=exc.detail if settings.DEBUG else None
            )
        )

    logger.opt(exception=True).error(f"Trace[{trace_id}] - UncaughtException: {str(exc)}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ResponseModel.fail(
            code=500,
            message="System busy, please try again later",
            data={"trace_id": trace_id} if settings.DEBUG else None
        )
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install global_exception_handler for business, data-access and uncaught errors."""
    app.add_exception_handler(BusinessException, global_exception_handler)
    app.add_exception_handler(DataAccessError, global_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
