"""
API Error Handling

Maps application exceptions to HTTP responses. Repositories raise
``BaseApplicationException`` subclasses without HTTP concepts; the status
code is chosen here from the exception category.
"""

from typing import Dict

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from jobly.core.config import get_settings
from jobly.core.exceptions import BaseApplicationException, ErrorCategory
from jobly.utils.logger import get_logger, log_error

logger = get_logger(__name__)

CATEGORY_STATUS: Dict[ErrorCategory, int] = {
    ErrorCategory.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorCategory.CONFLICT: status.HTTP_400_BAD_REQUEST,
    ErrorCategory.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCategory.DATABASE: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCategory.SYSTEM: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


async def application_exception_handler(request: Request, exc: BaseApplicationException) -> JSONResponse:
    """Handle application exceptions."""
    status_code = CATEGORY_STATUS.get(exc.category, status.HTTP_500_INTERNAL_SERVER_ERROR)
    logger.info(
        "Application error",
        path=request.url.path,
        error_code=exc.error_code,
        status_code=status_code,
    )
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, **exc.to_dict()},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail}
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request validation errors."""
    logger.warning("Validation error", path=request.url.path, errors=len(exc.errors()))
    return JSONResponse(
        status_code=422,
        content={
            "detail": "Request validation failed",
            "errors": jsonable_errors(exc),
        }
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    # ctx may hold exception instances, which are not JSON serializable
    return [
        {key: value for key, value in error.items() if key != "ctx"}
        for error in exc.errors()
    ]


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler."""
    log_error(exc, path=request.url.path)

    # Don't expose internal errors in production
    if get_settings().ENVIRONMENT == "production":
        content = {"detail": "Internal server error"}
    else:
        content = {"detail": "Internal server error", "error": str(exc)}
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BaseApplicationException, application_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
