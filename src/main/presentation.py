from fastapi import APIRouter, FastAPI
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from src.core.errors.exceptions import (
    AccessForbiddenException,
    CoreException,
    InfrastructureException,
    UnauthorizedException,
)
from src.core.errors.handlers import (
    AccessForbiddenExceptionHandler,
    CoreExceptionHandler,
    InfrastructureExceptionHandler,
    RequestValidationExceptionHandler,
    UnauthorizedExceptionHandler,
    ValidationErrorExceptionHandler,
    as_exception_handler,
)
from src.healthcheck import routers as healthcheck_routers
from src.token_auth import routers as token_routers
from src.token_auth.exceptions import TokenException
from src.token_auth.handlers import TokenExceptionHandler


def include_routers(app: FastAPI) -> None:
    """
    Includes API routers into the FastAPI application.

    Parameters:
        app (FastAPI): The FastAPI application instance to which routers will
        be added.

    Returns:
        None
    """
    v1_router = APIRouter()
    v1_router.include_router(token_routers.router, prefix="/tokens", tags=["Tokens"])

    app.include_router(v1_router, prefix="/v1")
    app.include_router(healthcheck_routers.router, tags=["System"])


def include_exceptions_handlers(app: FastAPI) -> None:
    """
    Registers exception handlers for various custom exceptions with the provided FastAPI
    application instance.

    Parameters:
        app (FastAPI): The FastAPI application instance to which the exception handlers
        will be added.

    Returns:
        None
    """
    app.add_exception_handler(
        InfrastructureException, as_exception_handler(InfrastructureExceptionHandler())
    )
    app.add_exception_handler(
        RequestValidationError,
        as_exception_handler(RequestValidationExceptionHandler()),
    )
    app.add_exception_handler(
        ValidationError, as_exception_handler(ValidationErrorExceptionHandler())
    )
    app.add_exception_handler(
        CoreException, as_exception_handler(CoreExceptionHandler())
    )
    app.add_exception_handler(
        UnauthorizedException, as_exception_handler(UnauthorizedExceptionHandler())
    )
    app.add_exception_handler(
        AccessForbiddenException,
        as_exception_handler(AccessForbiddenExceptionHandler()),
    )
    app.add_exception_handler(
        TokenException, as_exception_handler(TokenExceptionHandler())
    )
