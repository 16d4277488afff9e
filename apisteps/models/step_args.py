"""Typed step arguments.

`Literal` aliases double as the enumerations the registry coerces captured
text against, so a handler annotated with `HttpMethod` only ever receives one
of the listed methods.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, get_args

HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD"]
DataFormat = Literal["JSON", "YAML", "plain text"]
NodeType = Literal["nil", "string", "int", "float", "bool", "map", "slice"]
ValueType = Literal["string", "int", "float", "bool"]
TimeDirection = Literal["backward", "forward"]

HTTP_METHODS = get_args(HttpMethod)
DATA_FORMATS = get_args(DataFormat)
NODE_TYPES = get_args(NodeType)


@dataclass(frozen=True)
class DocString:
    """Multi-line text attached to a step (the part between triple quotes)."""

    content: str


__all__ = [
    "HttpMethod",
    "DataFormat",
    "NodeType",
    "ValueType",
    "TimeDirection",
    "HTTP_METHODS",
    "DATA_FORMATS",
    "NODE_TYPES",
    "DocString",
]
