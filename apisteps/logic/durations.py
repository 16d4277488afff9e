"""Duration strings in the `1h30m`, `3s`, `250ms` grammar.

A duration is an optional sign followed by one or more decimal numbers, each
with a unit suffix: ns, us (or µs / μs), ms, s, m, h. The bare string "0" is
also accepted.
"""

from __future__ import annotations

import re
from datetime import timedelta

from apisteps.errors import DurationParseError

_UNIT_SECONDS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,  # U+00B5 micro sign
    "μs": 1e-6,  # U+03BC greek mu
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}

_COMPONENT = re.compile(r"([0-9]+\.?[0-9]*|\.[0-9]+)(ns|us|µs|μs|ms|s|m|h)")


def parse_duration(raw: str) -> timedelta:
    text = raw
    if text in ("0", "+0", "-0"):
        return timedelta(0)
    sign = 1
    if text[:1] in ("+", "-"):
        sign = -1 if text[0] == "-" else 1
        text = text[1:]
    if not text:
        raise DurationParseError(raw)

    total = 0.0
    pos = 0
    while pos < len(text):
        match = _COMPONENT.match(text, pos)
        if match is None:
            raise DurationParseError(raw)
        total += float(match.group(1)) * _UNIT_SECONDS[match.group(2)]
        pos = match.end()
    try:
        return timedelta(seconds=sign * total)
    except OverflowError:
        raise DurationParseError(raw) from None


__all__ = ["parse_duration"]
