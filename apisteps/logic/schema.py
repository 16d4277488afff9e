"""JSON Schema validation of response bodies and nodes.

Two entry points: `validate_reference` loads the schema from a URL, an
absolute path or a path relative to the configured schema directory;
`validate_text` takes the schema verbatim from a step docstring.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import httpx
from jsonschema import FormatChecker, validators
from jsonschema.exceptions import SchemaError, best_match

from apisteps.errors import ArgumentError, PreconditionError, RequestError, StepAssertionError

logger = logging.getLogger(__name__)


class SchemaValidator:
    def __init__(self, schema_dir: Optional[Path] = None, http_client: Optional[httpx.Client] = None) -> None:
        self.schema_dir = Path(schema_dir) if schema_dir is not None else None
        self.http_client = http_client

    def validate_reference(self, instance: Any, reference: str) -> None:
        self._validate(instance, self.load_reference(reference), reference)

    def validate_text(self, instance: Any, schema_text: str) -> None:
        try:
            schema = json.loads(schema_text)
        except json.JSONDecodeError as exc:
            raise ArgumentError(f"inline schema is not valid JSON: {exc}") from exc
        self._validate(instance, schema, "<inline schema>")

    def load_reference(self, reference: str) -> Dict[str, Any]:
        if reference.startswith(("http://", "https://")):
            return self._fetch(reference)
        path = Path(reference)
        if not path.is_absolute():
            if self.schema_dir is None:
                raise PreconditionError(f"relative schema reference '{reference}' but no schema directory configured")
            path = self.schema_dir / path
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            raise PreconditionError(f"schema file not found: {path}") from None
        except json.JSONDecodeError as exc:
            raise ArgumentError(f"schema file {path} is not valid JSON: {exc}") from exc

    def _fetch(self, url: str) -> Dict[str, Any]:
        try:
            if self.http_client is not None:
                resp = self.http_client.get(url)
            else:
                resp = httpx.get(url, timeout=10.0)
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            raise RequestError(f"could not fetch schema {url}: {exc}") from exc
        try:
            return resp.json()
        except ValueError as exc:
            raise ArgumentError(f"schema at {url} is not valid JSON: {exc}") from exc

    def _validate(self, instance: Any, schema: Dict[str, Any], source: str) -> None:
        cls = validators.validator_for(schema)
        try:
            cls.check_schema(schema)
        except SchemaError as exc:
            raise ArgumentError(f"invalid JSON schema {source}: {exc.message}") from exc
        validator = cls(schema, format_checker=FormatChecker())
        error = best_match(validator.iter_errors(instance))
        if error is not None:
            location = "$" + "".join(f"[{p}]" if isinstance(p, int) else f".{p}" for p in error.absolute_path)
            logger.debug("schema mismatch source=%s at=%s", source, location)
            raise StepAssertionError(f"document does not match schema {source} at {location}: {error.message}")


__all__ = ["SchemaValidator"]
