# Request body size ceiling
# myflix/api/middleware.py

import logging

from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from myflix.api.errors import error_response
from myflix.core.exceptions import PayloadTooLargeError

logger = logging.getLogger(__name__)


class BodySizeLimitMiddleware:
    """
    Rejects request bodies larger than ``max_body_bytes``.

    A declared ``Content-Length`` over the limit is answered with 413 before the
    application runs. Bodies without one are counted as they stream in and
    reading stops once the limit is passed; the response is then the same 413,
    whatever the application made of the truncated body.
    """

    def __init__(self, app: ASGIApp, max_body_bytes: int):
        self.app = app
        self.max_body_bytes = max_body_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        content_length = Headers(scope=scope).get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > self.max_body_bytes:
            logger.warning(
                f"Rejected {scope['method']} {scope['path']}: "
                f"Content-Length {content_length} exceeds {self.max_body_bytes}"
            )
            await self._reject(scope, receive, send)
            return

        received = 0
        exceeded = False
        response_started = False

        async def limited_receive() -> Message:
            nonlocal received, exceeded
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_body_bytes:
                    exceeded = True
                    raise PayloadTooLargeError(detail={"max_body_bytes": self.max_body_bytes})
            return message

        async def guarded_send(message: Message) -> None:
            nonlocal response_started
            # Whatever the app answers to a cut-off body is replaced by the 413
            if exceeded and not response_started:
                return
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, limited_receive, guarded_send)
        except PayloadTooLargeError:
            if response_started:
                raise

        if exceeded and not response_started:
            logger.warning(
                f"Rejected {scope['method']} {scope['path']}: "
                f"streamed body exceeds {self.max_body_bytes}"
            )
            await self._reject(scope, receive, send)

    async def _reject(self, scope: Scope, receive: Receive, send: Send) -> None:
        exc = PayloadTooLargeError(detail={"max_body_bytes": self.max_body_bytes})
        response = error_response(exc.status_code, exc.kind, exc.message, exc.detail)
        await response(scope, receive, send)
