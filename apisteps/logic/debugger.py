"""Debug output for scenarios.

While debug mode is on, every request sent and response received is logged.
`print` writes unconditionally; it backs explicit steps such as
`I print last response body`.
"""

from __future__ import annotations

import logging

import httpx

logger = logging.getLogger(__name__)

_PREVIEW_LIMIT = 2000


class Debugger:
    def __init__(self, enabled: bool = False) -> None:
        self.enabled = enabled

    def start(self) -> None:
        self.enabled = True

    def stop(self) -> None:
        self.enabled = False

    def print(self, message: str) -> None:
        logger.info("%s", message)

    def request(self, request: httpx.Request) -> None:
        if not self.enabled:
            return
        try:
            body = request.content.decode("utf-8", errors="replace")
        except httpx.RequestNotRead:
            body = "<streamed body>"
        logger.info("[HTTP] -> %s %s headers=%s body=%s", request.method, request.url, dict(request.headers), _preview(body))

    def response(self, response: httpx.Response, elapsed_ms: float) -> None:
        if not self.enabled:
            return
        ctype = response.headers.get("content-type", "-")
        logger.info(
            "[HTTP] <- %s %s ct=%s elapsed=%.1fms body=%s",
            response.status_code,
            response.request.url,
            ctype,
            elapsed_ms,
            _preview(response.text),
        )


def _preview(text: str) -> str:
    return text[:_PREVIEW_LIMIT] + ("…" if len(text) > _PREVIEW_LIMIT else "")


__all__ = ["Debugger"]
