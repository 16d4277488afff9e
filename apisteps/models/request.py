"""Prepared (unsent) requests and request timing."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Dict, Optional

import httpx


@dataclass
class PreparedRequest:
    """Request saved in the scenario cache until a `send` step dispatches it.

    Header, body, cookie and form steps mutate the instance in place.
    """

    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[str] = None
    cookies: Dict[str, str] = field(default_factory=dict)
    form: Optional[Dict[str, str]] = None

    def build(self) -> httpx.Request:
        # httpx encodes str header values as ASCII
        headers = {name: value.encode("utf-8") for name, value in self.headers.items()}
        kwargs: dict = {"headers": headers, "cookies": self.cookies or None}
        if self.form is not None:
            # (None, value) tuples force multipart/form-data without file parts
            kwargs["files"] = {name: (None, value) for name, value in self.form.items()}
        elif self.body is not None:
            kwargs["content"] = self.body.encode("utf-8")
        return httpx.Request(self.method, self.url, **kwargs)


@dataclass(frozen=True)
class RequestTiming:
    """Start/end instants (`time.perf_counter` seconds) of the last request."""

    start: float
    end: float

    @property
    def elapsed(self) -> timedelta:
        return timedelta(seconds=self.end - self.start)


__all__ = ["PreparedRequest", "RequestTiming"]
