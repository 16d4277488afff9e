"""Scenario state and the capabilities step handlers delegate to.

`State` owns everything a scenario mutates (cache, last response, request
timing, debug flag) next to configuration that survives resets (schema
directory, HTTP client). Collaborators are injectable through the `set_*`
methods so a suite can replace e.g. the HTTP client without touching step
bindings.
"""

from __future__ import annotations

import json
import logging
import time
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, Optional

import httpx

from apisteps.errors import (
    ArgumentError,
    NoResponseError,
    StepAssertionError,
    UnknownRequestError,
    UnsupportedMethodError,
)
from apisteps.logic import charsets, formats, node_types, pathfinder, templating
from apisteps.logic.cache import Cache
from apisteps.logic.debugger import Debugger
from apisteps.logic.http_context import DEFAULT_TIMEOUT_SECONDS, HttpContext
from apisteps.logic.schema import SchemaValidator
from apisteps.models.request import PreparedRequest, RequestTiming
from apisteps.models.step_args import HTTP_METHODS

logger = logging.getLogger(__name__)


class State:
    def __init__(
        self,
        debug: bool = False,
        json_schema_dir: Optional[Path] = None,
        *,
        http_client: Optional[httpx.Client] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self.cache = Cache()
        self.debugger = Debugger(debug)
        self.http = HttpContext(http_client, timeout=timeout)
        self.schema_validator = SchemaValidator(json_schema_dir, http_client=self.http.client)
        self.last_response: Optional[httpx.Response] = None
        self.last_timing: Optional[RequestTiming] = None

    # ------------------
    # Lifecycle and injection
    # ------------------

    def reset(self, debug: bool) -> None:
        """Clear all scenario-scoped values; configuration is kept."""
        self.cache.reset()
        self.last_response = None
        self.last_timing = None
        self.debugger.enabled = debug

    def set_http_context(self, http: HttpContext) -> None:
        """Swap the transport; URL schema references are fetched through it too."""
        self.http = http
        self.schema_validator.http_client = http.client

    def set_debugger(self, debugger: Debugger) -> None:
        self.debugger = debugger

    def set_schema_validator(self, validator: SchemaValidator) -> None:
        self.schema_validator = validator

    def render(self, template: str) -> str:
        return templating.render(template, self.cache)

    # ------------------
    # Random data generation
    # ------------------

    def generate_random_runes(self, charset: str, from_: int, to: int, cache_key: str) -> None:
        self.cache.save(cache_key, charsets.random_runes(charset, from_, to))

    def generate_random_sentence(
        self, charset: str, from_: int, to: int, min_word_length: int, max_word_length: int, cache_key: str
    ) -> None:
        sentence = charsets.random_sentence(charset, from_, to, min_word_length, max_word_length)
        self.cache.save(cache_key, sentence)

    def generate_random_int(self, from_: int, to: int, cache_key: str) -> None:
        self.cache.save(cache_key, charsets.random_int(from_, to))

    def generate_random_float(self, from_: int, to: int, cache_key: str) -> None:
        self.cache.save(cache_key, charsets.random_float(from_, to))

    def generate_random_bool(self, cache_key: str) -> None:
        self.cache.save(cache_key, charsets.random_bool())

    def generate_current_time_and_travel(self, direction: str, duration: timedelta, cache_key: str) -> None:
        if direction not in ("backward", "forward"):
            raise ArgumentError(f"unknown time direction '{direction}'", available=("backward", "forward"))
        now = datetime.now(timezone.utc)
        self.cache.save(cache_key, now + duration if direction == "forward" else now - duration)

    # ------------------
    # Preparing and sending requests
    # ------------------

    def prepare_request(self, method: str, url_template: str, cache_key: str) -> None:
        self.cache.save(cache_key, PreparedRequest(method=_check_method(method), url=self.render(url_template)))

    def set_headers(self, cache_key: str, headers_template: str) -> None:
        request = self._prepared(cache_key)
        request.headers.update(self._string_mapping(headers_template, "headers"))

    def set_cookies(self, cache_key: str, cookies_template: str) -> None:
        request = self._prepared(cache_key)
        doc = formats.load_document(self.render(cookies_template))
        if isinstance(doc, list):
            # [{"name": ..., "value": ...}, ...]
            try:
                cookies = {str(item["name"]): str(item["value"]) for item in doc}
            except (KeyError, TypeError):
                raise ArgumentError("cookies list items need 'name' and 'value' keys") from None
        elif isinstance(doc, dict):
            cookies = {str(k): str(v) for k, v in doc.items()}
        else:
            raise ArgumentError("cookies must be a list of {name, value} objects or a mapping")
        request.cookies.update(cookies)

    def set_form(self, cache_key: str, form_template: str) -> None:
        request = self._prepared(cache_key)
        request.form = self._string_mapping(form_template, "form")
        request.body = None

    def set_body(self, cache_key: str, body_template: str) -> None:
        request = self._prepared(cache_key)
        request.body = self.render(body_template)
        request.form = None

    def send_request(self, cache_key: str) -> None:
        self._send(self._prepared(cache_key))

    def send_request_with_body_and_headers(self, method: str, url_template: str, doc_template: str) -> None:
        doc = formats.load_document(self.render(doc_template))
        if not isinstance(doc, dict):
            raise ArgumentError("request document must be a mapping with 'body' and 'headers' keys")
        request = PreparedRequest(method=_check_method(method), url=self.render(url_template))
        headers = doc.get("headers") or {}
        if not isinstance(headers, dict):
            raise ArgumentError("'headers' must be a mapping")
        request.headers.update({str(k): str(v) for k, v in headers.items()})
        body = doc.get("body")
        if body is not None:
            request.body = body if isinstance(body, str) else json.dumps(body, ensure_ascii=False)
        self._send(request)

    def _send(self, request: PreparedRequest) -> None:
        response, timing = self.http.send(request, self.debugger)
        self.last_response = response
        self.last_timing = timing

    def _prepared(self, cache_key: str) -> PreparedRequest:
        if not self.cache.has(cache_key):
            raise UnknownRequestError(cache_key)
        request = self.cache.peek(cache_key)
        if not isinstance(request, PreparedRequest):
            raise UnknownRequestError(cache_key)
        return request

    def _string_mapping(self, template: str, what: str) -> Dict[str, str]:
        doc = formats.load_document(self.render(template))
        if not isinstance(doc, dict):
            raise ArgumentError(f"{what} must be a mapping of names to values")
        return {str(k): str(v) for k, v in doc.items()}

    # ------------------
    # Response assertions
    # ------------------

    def response(self) -> httpx.Response:
        if self.last_response is None:
            raise NoResponseError()
        return self.last_response

    def response_node(self, data_format: str, expr_template: str) -> Any:
        data = formats.decode(self.response().text, data_format)
        return pathfinder.find(data, self.render(expr_template))

    def response_should_have_header(self, name: str) -> None:
        if name not in self.response().headers:
            raise StepAssertionError(f"response has no header '{name}'")

    def response_should_have_header_of_value(self, name: str, value_template: str) -> None:
        headers = self.response().headers
        if name not in headers:
            raise StepAssertionError(f"response has no header '{name}'")
        expected = self.render(value_template)
        if headers[name] != expected:
            raise StepAssertionError(f"header '{name}' has unexpected value", expected=expected, actual=headers[name])

    def response_should_have_cookie(self, name: str) -> None:
        if name not in self.response().cookies:
            raise StepAssertionError(f"response has no cookie '{name}'")

    def response_should_have_cookie_of_value(self, name: str, value_template: str) -> None:
        cookies = self.response().cookies
        if name not in cookies:
            raise StepAssertionError(f"response has no cookie '{name}'")
        expected = self.render(value_template)
        if cookies[name] != expected:
            raise StepAssertionError(f"cookie '{name}' has unexpected value", expected=expected, actual=cookies[name])

    def response_status_code_should_be(self, code: int) -> None:
        actual = self.response().status_code
        if actual != code:
            raise StepAssertionError("unexpected response status code", expected=code, actual=actual)

    def response_should_have_nodes(self, data_format: str, exprs_template: str) -> None:
        """Check every comma separated expression; the first missing node fails."""
        data = formats.decode(self.response().text, data_format)
        for expr in pathfinder.split_expressions(self.render(exprs_template)):
            pathfinder.find(data, expr)

    def node_should_be_of_value(self, data_format: str, expr_template: str, value_type: str, value_template: str) -> None:
        node = self.response_node(data_format, expr_template)
        node_types.assert_value(expr_template, node, value_type, self.render(value_template))

    def node_should_be_slice_of_length(self, data_format: str, expr_template: str, length: int) -> None:
        node = self.response_node(data_format, expr_template)
        if not isinstance(node, list):
            raise StepAssertionError(f"node '{expr_template}' is {node_types.type_name(node)}, not slice")
        if len(node) != length:
            raise StepAssertionError(f"node '{expr_template}' has unexpected length", expected=length, actual=len(node))

    def node_should_be(self, data_format: str, expr_template: str, node_type: str) -> None:
        node = self.response_node(data_format, expr_template)
        if not node_types.is_type(node, node_type):
            raise StepAssertionError(
                f"node '{expr_template}' has unexpected type", expected=node_type, actual=node_types.type_name(node)
            )

    def node_should_not_be(self, data_format: str, expr_template: str, node_type: str) -> None:
        node = self.response_node(data_format, expr_template)
        if node_types.is_type(node, node_type):
            raise StepAssertionError(f"node '{expr_template}' should not be {node_type}, but it is")

    def node_should_match_regexp(self, data_format: str, expr_template: str, regexp_template: str) -> None:
        node = self.response_node(data_format, expr_template)
        node_types.assert_matches(expr_template, node, self.render(regexp_template))

    def response_body_should_have_format(self, data_format: str) -> None:
        formats.check_format(data_format)
        actual = formats.detect(self.response().text)
        if actual != data_format:
            raise StepAssertionError("unexpected response body format", expected=data_format, actual=actual)

    def validate_last_response_body_with_schema_reference(self, reference_template: str) -> None:
        body = formats.decode(self.response().text, formats.JSON)
        self.schema_validator.validate_reference(body, self.render(reference_template))

    def validate_last_response_body_with_schema_string(self, schema_template: str) -> None:
        body = formats.decode(self.response().text, formats.JSON)
        self.schema_validator.validate_text(body, self.render(schema_template))

    def validate_node_with_schema_reference(self, data_format: str, expr_template: str, reference_template: str) -> None:
        node = self.response_node(data_format, expr_template)
        self.schema_validator.validate_reference(node, self.render(reference_template))

    def validate_node_with_schema_string(self, data_format: str, expr_template: str, schema_template: str) -> None:
        node = self.response_node(data_format, expr_template)
        self.schema_validator.validate_text(node, self.render(schema_template))

    def time_between_last_request_response_should_be_less_than_or_equal_to(self, bound: timedelta) -> None:
        if self.last_timing is None:
            raise NoResponseError()
        elapsed = self.last_timing.elapsed
        if elapsed > bound:
            raise StepAssertionError(
                "request-response time exceeded bound", expected=f"<= {bound}", actual=str(elapsed)
            )

    # ------------------
    # Preserving data
    # ------------------

    def save_as(self, value_template: str, cache_key: str) -> None:
        self.cache.save(cache_key, self.render(value_template))

    def save_from_last_response_node_as(self, data_format: str, expr_template: str, cache_key: str) -> None:
        self.cache.save(cache_key, self.response_node(data_format, expr_template))

    # ------------------
    # Debugging and flow control
    # ------------------

    def print_last_response_body(self) -> None:
        response = self.response()
        text = response.text
        if formats.detect(text) == formats.JSON:
            text = json.dumps(json.loads(text), indent=2, ensure_ascii=False)
        self.debugger.print(text)

    def start_debug_mode(self) -> None:
        self.debugger.start()

    def stop_debug_mode(self) -> None:
        self.debugger.stop()

    def wait(self, duration: timedelta) -> None:
        seconds = duration.total_seconds()
        logger.debug("waiting %.3fs", seconds)
        if seconds > 0:
            time.sleep(seconds)


def _check_method(method: str) -> str:
    normalized = method.upper()
    if normalized not in HTTP_METHODS:
        raise UnsupportedMethodError(method, HTTP_METHODS)
    return normalized


__all__ = ["State"]
