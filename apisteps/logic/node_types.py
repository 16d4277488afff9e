"""Type checks and typed value comparison for decoded nodes.

`int` means an integral, non-bool number (so `42.0` counts); `float` means any
non-bool number, since JSON itself does not distinguish the two.
"""

from __future__ import annotations

import re
from typing import Any, Callable, Dict

from apisteps.errors import ArgumentError, StepAssertionError, UnsupportedNodeTypeError
from apisteps.models.step_args import NODE_TYPES


def _is_number(node: Any) -> bool:
    return isinstance(node, (int, float)) and not isinstance(node, bool)


def _is_int(node: Any) -> bool:
    if isinstance(node, bool):
        return False
    if isinstance(node, int):
        return True
    return isinstance(node, float) and node.is_integer()


_CHECKS: Dict[str, Callable[[Any], bool]] = {
    "nil": lambda node: node is None,
    "string": lambda node: isinstance(node, str),
    "int": _is_int,
    "float": _is_number,
    "bool": lambda node: isinstance(node, bool),
    "map": lambda node: isinstance(node, dict),
    "slice": lambda node: isinstance(node, list),
}

_TRUE = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE = {"0", "f", "F", "FALSE", "false", "False"}


def type_name(node: Any) -> str:
    for name in ("nil", "bool", "int", "float", "string", "map", "slice"):
        if _CHECKS[name](node):
            return name
    return type(node).__name__


def is_type(node: Any, node_type: str) -> bool:
    try:
        check = _CHECKS[node_type]
    except KeyError:
        raise UnsupportedNodeTypeError(node_type, NODE_TYPES) from None
    return check(node)


def parse_expected(value_type: str, raw: str) -> Any:
    """Convert the textual expected value of a step into value_type."""
    if value_type == "string":
        return raw
    if value_type == "int":
        try:
            return int(raw)
        except ValueError:
            raise ArgumentError(f"expected value {raw!r} is not an int") from None
    if value_type == "float":
        try:
            return float(raw)
        except ValueError:
            raise ArgumentError(f"expected value {raw!r} is not a float") from None
    if value_type == "bool":
        if raw in _TRUE:
            return True
        if raw in _FALSE:
            return False
        raise ArgumentError(f"expected value {raw!r} is not a bool")
    raise UnsupportedNodeTypeError(value_type, ("string", "int", "float", "bool"))


def assert_value(expr: str, node: Any, value_type: str, raw_expected: str) -> None:
    expected = parse_expected(value_type, raw_expected)
    if not is_type(node, value_type):
        raise StepAssertionError(
            f"node '{expr}' has type {type_name(node)}, not {value_type}",
        )
    if node != expected:
        raise StepAssertionError(f"node '{expr}' has unexpected value", expected=expected, actual=node)


def assert_matches(expr: str, node: Any, pattern: str) -> None:
    try:
        regexp = re.compile(pattern)
    except re.error as exc:
        raise ArgumentError(f"invalid regular expression {pattern!r}: {exc}") from None
    text = node if isinstance(node, str) else str(node)
    if regexp.search(text) is None:
        raise StepAssertionError(f"node '{expr}' does not match regExp {pattern!r}", actual=text)


__all__ = ["type_name", "is_type", "parse_expected", "assert_value", "assert_matches"]
