"""Evidence Manager - Error Handlers
Every error leaves the API as a response envelope.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.responses import envelope_content
from core.logging import get_logger
from core.responses import ResponseMessage


STATUS_MESSAGES: dict[int, ResponseMessage] = {
    status.HTTP_401_UNAUTHORIZED: ResponseMessage.USER_IS_NOT_AUTHENTICATED,
    status.HTTP_403_FORBIDDEN: ResponseMessage.FORBIDDEN,
}


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors (guards, unknown routes) as envelopes."""
    if isinstance(exc.detail, ResponseMessage):
        message, errors = exc.detail, []
    else:
        message = STATUS_MESSAGES.get(exc.status_code, ResponseMessage.GENERIC_ERROR)
        errors = [str(exc.detail)] if exc.detail else []

    return JSONResponse(
        status_code=exc.status_code,
        content=envelope_content(message, errors),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed path, query or body values are client errors (400)."""
    errors = [
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=envelope_content(ResponseMessage.GENERIC_ERROR, errors),
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    """Global exception handler. Internal details stay in the logs."""
    logger = get_logger()
    logger.error(
        f"Unhandled exception: {exc!s}",
        exc_info=True,
        path=request.url.path,
        method=request.method,
        type=type(exc).__name__,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=envelope_content(ResponseMessage.GENERIC_ERROR),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
