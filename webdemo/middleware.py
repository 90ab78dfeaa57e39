import asyncio
import contextlib

from fastapi import Request
from fastapi.responses import PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp, Message, Receive, Scope, Send


class PrefixLoggingMiddleware(BaseHTTPMiddleware):
    """Print a line before and after every request under ``prefix``."""

    def __init__(self, app: ASGIApp, prefix: str = "/api") -> None:
        super().__init__(app)
        self.prefix = prefix.rstrip("/")

    def matches(self, path: str) -> bool:
        return path == self.prefix or path.startswith(self.prefix + "/")

    async def dispatch(self, request: Request, call_next):
        if not self.matches(request.url.path):
            return await call_next(request)

        print("Middleware before processing request")
        try:
            return await call_next(request)
        finally:
            print("Middleware after processing request")


class RequestTimeoutMiddleware:
    """
    Answer 408 when a handler has not started its response within ``timeout``
    seconds. Once ``http.response.start`` is sent the deadline no longer
    applies and the body streams to completion. Errors raised by the app,
    including its own TimeoutErrors, propagate unchanged.
    """

    def __init__(self, app: ASGIApp, timeout: float) -> None:
        self.app = app
        self.timeout = timeout

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or self.timeout <= 0:
            await self.app(scope, receive, send)
            return

        started = asyncio.Event()

        async def send_wrapper(message: Message) -> None:
            if message["type"] == "http.response.start":
                started.set()
            await send(message)

        task = asyncio.ensure_future(self.app(scope, receive, send_wrapper))
        waiter = asyncio.ensure_future(started.wait())
        try:
            done, _ = await asyncio.wait(
                {task, waiter}, timeout=self.timeout, return_when=asyncio.FIRST_COMPLETED
            )
        except asyncio.CancelledError:
            task.cancel()
            waiter.cancel()
            raise
        waiter.cancel()

        if not done:
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
            response = PlainTextResponse("Request Timeout", status_code=408)
            await response(scope, receive, send)
            return

        await task
