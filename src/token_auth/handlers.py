from fastapi import Request
from fastapi.responses import JSONResponse
import sentry_sdk

from loggers import get_logger
from src.core.errors.handlers import format_error_response, format_log_message
from src.token_auth.exceptions import TokenException

response_logger = get_logger("app.request.error_response", plain_format=True)


class TokenExceptionHandler:
    """Answers with the status pinned on the exception class and exposes its kind."""

    error_types = {
        400: "Bad request",
        401: "Unauthorized",
        500: "Token engine error",
        503: "Service unavailable",
    }

    async def __call__(self, request: Request, exc: TokenException) -> JSONResponse:
        error_type = self.error_types.get(exc.status_code, "Token error")
        log_msg = format_log_message(
            request,
            error_type,
            exc.message,
            exc.additional_info,
            include_request_path=True,
        )
        if exc.status_code >= 500:
            response_logger.error(log_msg)
            sentry_sdk.capture_exception(exc)
        else:
            response_logger.warning(log_msg)
        return JSONResponse(
            status_code=exc.status_code,
            content=format_error_response(error_type, exc.message, kind=str(exc.kind)),
        )
