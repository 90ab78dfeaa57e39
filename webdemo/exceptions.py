from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


class BodyParseError(Exception):
    """Request body could not be decoded into the target model."""


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)


async def server_error_handler(request: Request, exc: Exception):
    # Every handler error ends up here: 500 with the message verbatim.
    return PlainTextResponse(str(exc), status_code=500)


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, server_error_handler)
    app.add_exception_handler(BodyParseError, server_error_handler)
    app.add_exception_handler(Exception, server_error_handler)
