"""`{{.KEY}}` placeholder substitution from the scenario cache."""

from __future__ import annotations

import json
import re
from datetime import datetime
from typing import Any

from apisteps.errors import CacheMissError, TemplateError
from apisteps.logic.cache import Cache

# {{.KEY}} with optional inner whitespace; keys are identifier-like
_PLACEHOLDER = re.compile(r"\{\{\s*\.([A-Za-z_][A-Za-z0-9_\-]*)\s*\}\}")


def render_value(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return str(value)


def render(template: str, cache: Cache) -> str:
    """Replace every placeholder in template with the cached value it names."""

    def _sub(match: "re.Match[str]") -> str:
        key = match.group(1)
        try:
            return render_value(cache.peek(key))
        except CacheMissError:
            raise TemplateError(f"template {template!r} references unknown cache key '{key}'") from None

    return _PLACEHOLDER.sub(_sub, template)


__all__ = ["render", "render_value"]
