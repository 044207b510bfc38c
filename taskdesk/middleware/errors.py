"""Map exceptions to the ``{success: false, error}`` envelope."""
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskdesk.errors import TaskDeskError
from taskdesk.schemas.common import fail
from taskdesk.utils.logger import get_logger

error_logger = get_logger("taskdesk.errors")


def _validation_message(exc: RequestValidationError) -> str:
    # Surface messages raised by our own validators, keep the rest generic
    for err in exc.errors():
        if err.get("type") == "value_error":
            cause = (err.get("ctx") or {}).get("error")
            if cause is not None:
                return str(cause)
    return "Invalid input"


async def handle_domain_error(request: Request, exc: TaskDeskError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(status_code=exc.status_code, content=fail(exc.message), headers=headers)


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=fail(_validation_message(exc)))


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=fail(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    error_logger.exception(
        "Unhandled error",
        method=request.method,
        path=request.url.path,
        error_type=type(exc).__name__,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=fail("Internal server error"),
    )


def add_exception_handlers(app: FastAPI) -> None:
    """Register the error envelope handlers on the application."""
    app.add_exception_handler(TaskDeskError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected)
