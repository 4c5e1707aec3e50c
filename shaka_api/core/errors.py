# Error taxonomy and JSON error rendering

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import structlog

logger = structlog.get_logger()


class ApiError(Exception):
    """Base class for errors that are rendered as {"error": message}"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ApiError):
    """Client sent missing or out-of-range input"""

    status_code = status.HTTP_400_BAD_REQUEST


class StorageError(ApiError):
    """
    Backend read/write failure.

    The message is the generic text returned to the client; backend
    detail is logged where the failure happens and never attached here.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class UnsupportedMethodError(ApiError):
    status_code = status.HTTP_405_METHOD_NOT_ALLOWED

    def __init__(self, message: str = "Method not allowed"):
        super().__init__(message)


class ConfigurationError(Exception):
    """Invalid settings detected at startup"""


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("request_failed", path=request.url.path, error=exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("request_body_rejected", path=request.url.path, errors=len(exc.errors()))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request body"}
    )


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # Runs outside the CORS middleware, so the header is set here
    logger.error(
        "unexpected_error",
        path=request.url.path,
        error_type=type(exc).__name__,
        error=str(exc)
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
        headers={"Access-Control-Allow-Origin": "*"}
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
