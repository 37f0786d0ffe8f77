"""
Middleware that tags every request with an ID.

An incoming X-Request-ID header is reused so dashboard polls can be traced
end to end; otherwise a short random ID is generated. The ID is bound into
the structlog context and echoed on the response.
"""

import uuid

from starlette.datastructures import Headers

from core.logging import bind_context

REQUEST_ID_HEADER = "x-request-id"


class RequestIDMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = Headers(scope=scope).get(REQUEST_ID_HEADER) or str(uuid.uuid4())[:8]
        scope.setdefault("state", {})["request_id"] = request_id

        # Bind request ID to logging context
        bind_context(request_id=request_id)

        async def send_wrapper(message):
            if message["type"] == "http.response.start":
                headers = message.setdefault("headers", [])
                headers.append((REQUEST_ID_HEADER.encode(), request_id.encode()))
            await send(message)

        await self.app(scope, receive, send_wrapper)
