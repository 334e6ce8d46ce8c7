"""httpx transport layer that honours per-request cancellation tokens."""

import asyncio

import httpx

from ..cancellation import CancellationToken
from ..exceptions import RequestCancelledError

CANCELLATION_EXTENSION = "cancellation"


class CancellableTransport(httpx.AsyncBaseTransport):
    """Wraps another transport and aborts in-flight requests on cancellation.

    The token travels in ``request.extensions["cancellation"]``. The wrapped
    request is always started, even with a token that is already cancelled.
    """

    def __init__(self, inner: httpx.AsyncBaseTransport | None = None):
        self._inner = inner or httpx.AsyncHTTPTransport()

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        token: CancellationToken | None = request.extensions.get(CANCELLATION_EXTENSION)
        if token is None:
            return await self._inner.handle_async_request(request)

        loop = asyncio.get_running_loop()
        send = loop.create_task(self._inner.handle_async_request(request))
        unregister = token.register(lambda: loop.call_soon_threadsafe(send.cancel))
        try:
            return await send
        except asyncio.CancelledError:
            current = asyncio.current_task()
            if token.is_cancellation_requested and not (current and current.cancelling()):
                raise RequestCancelledError(
                    f"Request to {request.url} was cancelled"
                ) from None
            raise
        finally:
            unregister()

    async def aclose(self) -> None:
        await self._inner.aclose()
