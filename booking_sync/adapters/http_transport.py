import asyncio

import requests

from .ports import BookingResponse, BookingTransport, TransportError


class HttpBookingTransport(BookingTransport):
    """Adapter: real HTTP endpoint serving the booking JSON."""

    def __init__(self, url: str, timeout: float = 10.0, api_key: str | None = None):
        self._url = url
        self._timeout = timeout
        self.session = requests.Session()
        self.session.headers.update(
            {
                "Accept": "application/json",
                "Cache-Control": "no-cache",
            }
        )
        if api_key:
            self.session.headers["Api-Key"] = api_key

    async def fetch(self) -> BookingResponse:
        # requests is blocking; keep the event loop free while it runs
        return await asyncio.to_thread(self._get)

    def _get(self) -> BookingResponse:
        try:
            resp = self.session.get(self._url, timeout=self._timeout)
        except requests.RequestException as exc:
            raise TransportError(-1, str(exc)) from exc

        return BookingResponse(
            message=resp.reason or "",
            code=resp.status_code,
            payload=resp.content or None,
        )
