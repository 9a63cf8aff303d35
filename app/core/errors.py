import logging
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from .config import settings

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "internal_error"
    message: str = "An internal server error occurred."

    def __init__(self, message: str | None = None):
        self.message = message or self.message
        super().__init__(self.message)


class ValidationFailed(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "validation_error"
    message = "Validation failed"

    def __init__(self, errors: list[dict], message: str | None = None):
        super().__init__(message)
        self.errors = errors


class Unauthenticated(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "unauthenticated"
    message = "Authentication required"


class InvalidToken(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "invalid_token"
    message = "Invalid or expired token"


class InvalidCredentials(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "invalid_credentials"
    message = "Invalid credentials"


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"
    message = "Access denied"

    def __init__(self, reason: str, message: str | None = None):
        super().__init__(message)
        self.reason = reason


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    message = "Resource not found"


class DuplicateEmail(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "duplicate_email"
    message = "Email already registered"


class AlreadyExists(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "already_exists"
    message = "Resource already exists"


def _body(exc: AppError) -> dict:
    body = {"success": False, "code": exc.code, "message": exc.message}
    if isinstance(exc, Forbidden):
        body["reason"] = exc.reason
    if isinstance(exc, ValidationFailed):
        body["errors"] = exc.errors
    return body


def _field_errors(exc: RequestValidationError) -> list[dict]:
    out = []
    for err in exc.errors():
        # drop the leading "body"/"query" segment
        loc = [str(p) for p in err.get("loc", ())][1:]
        out.append({"field": ".".join(loc) or "-", "message": err.get("msg", "invalid")})
    return out


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error(f"{exc.code} for {request.method} {request.url.path}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=_body(exc))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        err = ValidationFailed(_field_errors(exc))
        return JSONResponse(status_code=err.status_code, content=_body(err))

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.critical(f"Unhandled exception for request {request.method} {request.url.path}", exc_info=True)
        content = {"success": False, "code": "internal_error", "message": "An internal server error occurred."}
        if settings.ENV != "prod":
            content["detail"] = repr(exc)
        return JSONResponse(status_code=500, content=content)
