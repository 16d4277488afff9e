"""HTTP transport for prepared requests.

The client is injectable so a suite can swap in its own `httpx.Client`
(custom TLS, proxies, or an in-process `TestClient`).
"""

from __future__ import annotations

import logging
import time
from typing import Optional, Tuple

import httpx

from apisteps.errors import RequestError
from apisteps.logic.debugger import Debugger
from apisteps.models.request import PreparedRequest, RequestTiming

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


class HttpContext:
    def __init__(self, client: Optional[httpx.Client] = None, *, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> None:
        self._owns_client = client is None
        self.client = client if client is not None else httpx.Client(timeout=httpx.Timeout(timeout))

    def send(self, prepared: PreparedRequest, debugger: Debugger) -> Tuple[httpx.Response, RequestTiming]:
        """Send prepared synchronously; no retries, transport errors become RequestError."""
        try:
            request = prepared.build()
        except httpx.InvalidURL as exc:
            logger.info("invalid request url method=%s url=%s error=%s", prepared.method, prepared.url, exc)
            raise RequestError(f"{prepared.method} {prepared.url} failed: invalid URL: {exc}") from exc
        debugger.request(request)
        start = time.perf_counter()
        try:
            response = self.client.send(request)
            # timing includes the body read
            response.read()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.info("request failed method=%s url=%s error=%s", prepared.method, prepared.url, exc)
            raise RequestError(f"{prepared.method} {prepared.url} failed: {exc}") from exc
        end = time.perf_counter()
        timing = RequestTiming(start=start, end=end)
        debugger.response(response, (end - start) * 1000.0)
        return response, timing

    def close(self) -> None:
        if self._owns_client:
            self.client.close()


__all__ = ["HttpContext", "DEFAULT_TIMEOUT_SECONDS"]
