"""Data formats of response bodies and step docstrings."""

from __future__ import annotations

import json
from typing import Any

import yaml

from apisteps.errors import ArgumentError, StepAssertionError, UnsupportedDataFormatError
from apisteps.models.step_args import DATA_FORMATS

JSON = "JSON"
YAML = "YAML"
PLAIN_TEXT = "plain text"

# Formats a node path can be evaluated against
STRUCTURED_FORMATS = (JSON, YAML)


def check_format(data_format: str) -> str:
    if data_format not in DATA_FORMATS:
        raise UnsupportedDataFormatError(data_format, DATA_FORMATS)
    return data_format


def decode(body: str, data_format: str) -> Any:
    """Decode body as data_format; decode errors are assertion failures."""
    check_format(data_format)
    if data_format == JSON:
        try:
            return json.loads(body)
        except json.JSONDecodeError as exc:
            raise StepAssertionError(f"response body is not valid JSON: {exc}") from exc
    if data_format == YAML:
        try:
            return yaml.safe_load(body)
        except yaml.YAMLError as exc:
            raise StepAssertionError(f"response body is not valid YAML: {exc}") from exc
    raise UnsupportedDataFormatError(data_format, STRUCTURED_FORMATS)


def detect(body: str) -> str:
    """Best guess of body's format: JSON, then YAML mapping/sequence, else plain text."""
    try:
        json.loads(body)
        return JSON
    except ValueError:
        pass
    try:
        parsed = yaml.safe_load(body)
    except yaml.YAMLError:
        return PLAIN_TEXT
    if isinstance(parsed, (dict, list)):
        return YAML
    return PLAIN_TEXT


def load_document(text: str) -> Any:
    """Parse a step docstring written as JSON or YAML."""
    try:
        return json.loads(text)
    except ValueError:
        pass
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ArgumentError(f"docstring is neither valid JSON nor YAML: {exc}") from exc


__all__ = [
    "JSON",
    "YAML",
    "PLAIN_TEXT",
    "STRUCTURED_FORMATS",
    "check_format",
    "decode",
    "detect",
    "load_document",
]
