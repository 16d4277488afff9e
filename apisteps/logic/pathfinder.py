"""Node path expressions over decoded JSON/YAML documents.

Supported syntax:
  - optional `$` root:           `$.data.id` is the same as `data.id`
  - dotted keys:                 `data.user.name`
  - bracket indices:             `data[0].user`, `matrix[1][2]`
  - quoted bracket keys:         `headers['Content-Type']`, `a["b.c"]`
"""

from __future__ import annotations

import logging
import re
from typing import Any, List, Union

from apisteps.errors import NodeNotFoundError

logger = logging.getLogger(__name__)

Token = Union[str, int]

_TOKEN = re.compile(
    r"""
    \[\s*(?P<index>-?\d+)\s*\]          # [0]
    | \[\s*'(?P<sq>[^']*)'\s*\]         # ['key']
    | \[\s*"(?P<dq>[^"]*)"\s*\]         # ["key"]
    | \.?(?P<key>[^.\[\]]+)             # key or .key
    """,
    re.VERBOSE,
)


def tokenize(expr: str) -> List[Token]:
    text = expr.strip()
    if text.startswith("$"):
        text = text[1:]
    tokens: List[Token] = []
    pos = 0
    while pos < len(text):
        if text[pos] == "." and pos + 1 == len(text):
            break
        match = _TOKEN.match(text, pos)
        if match is None or match.end() == pos:
            raise NodeNotFoundError(expr)
        if match.group("index") is not None:
            tokens.append(int(match.group("index")))
        elif match.group("sq") is not None:
            tokens.append(match.group("sq"))
        elif match.group("dq") is not None:
            tokens.append(match.group("dq"))
        else:
            tokens.append(match.group("key").strip())
        pos = match.end()
    return tokens


def find(data: Any, expr: str) -> Any:
    """Return the node at expr; raise NodeNotFoundError naming expr otherwise."""
    current = data
    for token in tokenize(expr):
        if isinstance(token, int):
            if not isinstance(current, list) or not -len(current) <= token < len(current):
                logger.debug("path miss expr=%s token=%s", expr, token)
                raise NodeNotFoundError(expr)
            current = current[token]
        else:
            if not isinstance(current, dict) or token not in current:
                logger.debug("path miss expr=%s token=%s", expr, token)
                raise NodeNotFoundError(expr)
            current = current[token]
    return current


def split_expressions(exprs: str) -> List[str]:
    """Split a comma separated list of expressions, dropping blanks."""
    return [part.strip() for part in exprs.split(",") if part.strip()]


__all__ = ["tokenize", "find", "split_expressions"]
