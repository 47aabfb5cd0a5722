import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from chirpy_backend.api.responses import respond_with_error

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base for errors rendered as {"error": message}."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ApiError):
    status_code = 400


class ForbiddenError(ApiError):
    status_code = 403


class ConflictError(ApiError):
    status_code = 409


class InternalError(ApiError):
    status_code = 500


def api_error_handler(request: Request, exc: ApiError):
    return respond_with_error(exc.status_code, exc.message)


def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.info("Rejected malformed body on %s %s", request.method, request.url.path)
    return respond_with_error(400, "Invalid JSON")


def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return respond_with_error(exc.status_code, str(exc.detail))


# PUBLIC_INTERFACE
def register_exception_handlers(app: FastAPI) -> None:
    """Route every error through the JSON envelope."""
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
