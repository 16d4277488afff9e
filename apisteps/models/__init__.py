"""Value types shared by the step registry, the scenario layer and state."""

from __future__ import annotations

from apisteps.models.request import PreparedRequest, RequestTiming
from apisteps.models.step_args import (
    DATA_FORMATS,
    HTTP_METHODS,
    NODE_TYPES,
    DataFormat,
    DocString,
    HttpMethod,
    NodeType,
    TimeDirection,
    ValueType,
)

__all__ = [
    "PreparedRequest",
    "RequestTiming",
    "DATA_FORMATS",
    "HTTP_METHODS",
    "NODE_TYPES",
    "DataFormat",
    "DocString",
    "HttpMethod",
    "NodeType",
    "TimeDirection",
    "ValueType",
]
