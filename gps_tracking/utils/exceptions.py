import logging

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from gps_tracking.utils.response import describe_validation_errors, error_response

logger = logging.getLogger(__name__)


class AppException(Exception):
    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class NotFoundError(AppException):
    def __init__(self, message: str):
        super().__init__(message, status_code=404)


class AuthError(Exception):
    """Missing or invalid token, or a role that may not use the route. Answered with a bare 403."""


def _internal_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc)
    if request.app.state.settings.expose_error_details:
        message = str(exc) or exc.__class__.__name__
    else:
        message = "Internal server error"
    return JSONResponse(status_code=500, content=error_response(message))


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=error_response(exc.message),
        )

    @app.exception_handler(AuthError)
    async def auth_error_handler(request: Request, exc: AuthError) -> Response:
        return Response(status_code=403)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content=error_response(describe_validation_errors(exc.errors())),
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        return _internal_error(request, exc)

    @app.exception_handler(OSError)
    async def storage_exception_handler(request: Request, exc: OSError) -> JSONResponse:
        return _internal_error(request, exc)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        return _internal_error(request, exc)
