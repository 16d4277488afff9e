"""Error taxonomy for step registration and step execution.

`ConfigurationError` is raised while the step registry is being built and is
fatal to runner startup. Everything deriving from `StepError` is raised by a
single step and fails only the current scenario.
"""

from __future__ import annotations

from typing import Any, Iterable


class ConfigurationError(Exception):
    """Invalid step registration (duplicate pattern, bad handler signature)."""


class StepError(Exception):
    """Base class for errors that fail the current scenario."""


class NoMatchError(StepError):
    def __init__(self, phrase: str) -> None:
        super().__init__(f"no step definition matches phrase: {phrase!r}")
        self.phrase = phrase


class ArgumentError(StepError, ValueError):
    """A step argument is outside the set of supported values."""

    def __init__(self, message: str, *, available: Iterable[str] = ()) -> None:
        self.available = list(available)
        if self.available:
            message = f"{message}, available: {', '.join(self.available)}"
        super().__init__(message)


class UnsupportedCharsetError(ArgumentError):
    def __init__(self, charset: str, available: Iterable[str]) -> None:
        super().__init__(f"unknown charset '{charset}'", available=available)
        self.charset = charset


class UnsupportedNumericTypeError(ArgumentError):
    def __init__(self, number_type: str, available: Iterable[str]) -> None:
        super().__init__(f"unknown type '{number_type}'", available=available)
        self.number_type = number_type


class UnsupportedMethodError(ArgumentError):
    def __init__(self, method: str, available: Iterable[str]) -> None:
        super().__init__(f"unsupported HTTP method '{method}'", available=available)
        self.method = method


class UnsupportedDataFormatError(ArgumentError):
    def __init__(self, data_format: str, available: Iterable[str]) -> None:
        super().__init__(f"unsupported data format '{data_format}'", available=available)
        self.data_format = data_format


class UnsupportedNodeTypeError(ArgumentError):
    def __init__(self, node_type: str, available: Iterable[str]) -> None:
        super().__init__(f"unsupported node type '{node_type}'", available=available)
        self.node_type = node_type


class PreconditionError(StepError):
    """A step ran before the state it depends on exists."""


class NoResponseError(PreconditionError):
    def __init__(self) -> None:
        super().__init__("no HTTP response recorded in this scenario yet")


class UnknownRequestError(PreconditionError):
    def __init__(self, cache_key: str) -> None:
        super().__init__(f"no prepared request saved under cache key '{cache_key}'")
        self.cache_key = cache_key


class CacheMissError(PreconditionError):
    def __init__(self, cache_key: str) -> None:
        super().__init__(f"cache has no value under key '{cache_key}'")
        self.cache_key = cache_key


class RequestError(StepError):
    """Transport-level failure while sending a request."""


class DurationParseError(StepError, ValueError):
    def __init__(self, raw: str) -> None:
        super().__init__(f"invalid duration {raw!r}, expected values like 30ms, 3s, 1h30m")
        self.raw = raw


class TemplateError(StepError):
    """A `{{.KEY}}` placeholder could not be rendered."""


class StepAssertionError(StepError, AssertionError):
    """Expected-vs-actual mismatch."""

    def __init__(self, message: str, *, expected: Any = None, actual: Any = None) -> None:
        if expected is not None or actual is not None:
            message = f"{message}: expected {expected!r}, got {actual!r}"
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class NodeNotFoundError(StepAssertionError):
    def __init__(self, expr: str) -> None:
        super().__init__(f"node '{expr}' not found in response body")
        self.expr = expr


class ScenarioStoppedError(StepError):
    def __init__(self) -> None:
        super().__init__("scenario stopped")


__all__ = [
    "ConfigurationError",
    "StepError",
    "NoMatchError",
    "ArgumentError",
    "UnsupportedCharsetError",
    "UnsupportedNumericTypeError",
    "UnsupportedMethodError",
    "UnsupportedDataFormatError",
    "UnsupportedNodeTypeError",
    "PreconditionError",
    "NoResponseError",
    "UnknownRequestError",
    "CacheMissError",
    "RequestError",
    "DurationParseError",
    "TemplateError",
    "StepAssertionError",
    "NodeNotFoundError",
    "ScenarioStoppedError",
]
