import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from notification_service.core.config import Settings
from notification_service.core.db import DatabaseError

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Internal server error"


class ServiceAuthError(Exception):
    """Raised when an inter-service call carries a missing or wrong shared secret."""

    message = "❌ Unauthorized service request"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def database_error_text(exc: DatabaseError, settings: Settings) -> str:
    """
    The only place that decides whether raw database error text reaches the client.
    """
    logger.error(f"[Database] {exc.message}")
    if settings.EXPOSE_ERROR_DETAILS:
        return exc.message
    return GENERIC_ERROR_MESSAGE


def database_error_response(exc: DatabaseError, settings: Settings) -> JSONResponse:
    return error_response(500, database_error_text(exc, settings))


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ServiceAuthError)
    async def service_auth_handler(request: Request, exc: ServiceAuthError):
        logger.warning(f"[Auth] Rejected {request.method} {request.url.path}")
        return error_response(403, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"[Validation] {request.method} {request.url.path}: {exc.errors()}")
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request", "details": jsonable_encoder(exc.errors())},
        )
