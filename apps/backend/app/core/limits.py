"""ASGI middleware that caps request body size."""
import logging

from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from app.config import MAX_BODY_BYTES

logger = logging.getLogger(__name__)

MB = 1024 * 1024


class PayloadTooLarge(Exception):
    """Raised from the wrapped `receive` once the streamed body passes the limit."""


class BodySizeLimitMiddleware:
    """
    Reject bodies above `max_bytes` with a 413 JSON response.

    Declared sizes (Content-Length) are rejected before the app runs.
    Chunked bodies are counted while they stream in.
    """

    def __init__(self, app: ASGIApp, max_bytes: int = MAX_BODY_BYTES) -> None:
        self.app = app
        self.max_bytes = max_bytes

    def _too_large(self) -> JSONResponse:
        if self.max_bytes >= MB:
            limit = f"{self.max_bytes // MB} MB"
        else:
            limit = f"{self.max_bytes} bytes"
        return JSONResponse(
            status_code=413,
            content={"status": "error", "message": f"Request body exceeds {limit} limit"},
        )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        for name, value in scope.get("headers", []):
            if name == b"content-length":
                try:
                    declared = int(value)
                except ValueError:
                    declared = 0
                if declared > self.max_bytes:
                    logger.warning("Rejected %s %s: declared body of %d bytes", scope["method"], scope["path"], declared)
                    await self._too_large()(scope, receive, send)
                    return
                break

        received = 0
        response_started = False

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_bytes:
                    raise PayloadTooLarge()
            return message

        async def tracking_send(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, limited_receive, tracking_send)
        except PayloadTooLarge:
            logger.warning("Rejected %s %s: streamed body over %d bytes", scope["method"], scope["path"], self.max_bytes)
            if not response_started:
                await self._too_large()(scope, receive, send)
