from fastapi import status
from starlette.datastructures import Headers
from app.middleware.errors import error_response
from app.utility.errors import PayloadTooLargeError

LIMITED_CONTENT_TYPES = ("application/json", "application/x-www-form-urlencoded")


class BodyLimitMiddleware:
    """
    Reject JSON / url-encoded bodies larger than `limit` bytes. Multipart uploads are not limited.

    Content-Length is checked up front; the bytes actually received are counted as
    well, so chunked requests without a Content-Length are held to the same limit.
    """

    def __init__(self, app, limit: int):
        self.app = app
        self.limit = limit

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = Headers(scope=scope)
        if not headers.get("content-type", "").startswith(LIMITED_CONTENT_TYPES):
            await self.app(scope, receive, send)
            return

        content_length = headers.get("content-length")
        if content_length:
            try:
                too_large = int(content_length) > self.limit
            except ValueError:
                response = error_response(status.HTTP_400_BAD_REQUEST, "Invalid Content-Length header")
                await response(scope, receive, send)
                return

            if too_large:
                await self._reject(scope, receive, send)
                return

        received = 0
        response_started = False

        async def limited_receive():
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.limit:
                    # HTTPException subclass, so FastAPI's body parsing re-raises it untouched
                    raise PayloadTooLargeError(f"Request body exceeds {self.limit} bytes")
            return message

        async def tracked_send(message):
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, limited_receive, tracked_send)
        except PayloadTooLargeError:
            if response_started:
                raise
            await self._reject(scope, receive, send)

    async def _reject(self, scope, receive, send):
        response = error_response(
            status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            f"Request body exceeds {self.limit} bytes"
        )
        await response(scope, receive, send)


def add_body_limit(application, limit: int):
    application.add_middleware(BodyLimitMiddleware, limit=limit)
