"""Scenario: the object every step handler receives.

Handlers here are thin: they validate or convert the arguments a step phrase
carries and forward them to `State`. Step bindings reach the state only
through this class, so replacing a state collaborator never touches a phrase.
"""

from __future__ import annotations

import enum
import logging
from typing import Dict, Mapping, Optional

from apisteps.errors import ScenarioStoppedError, UnsupportedNumericTypeError
from apisteps.logic import charsets
from apisteps.logic.durations import parse_duration
from apisteps.models.step_args import DocString, HttpMethod, NodeType, TimeDirection, ValueType
from apisteps.state import State

logger = logging.getLogger(__name__)

NUMBER_TYPES = ("int", "float")


class ScenarioPhase(enum.Enum):
    READY = "ready"
    RUNNING = "running"


class Scenario:
    """Holds scenario state plus the values seeded into every scenario's cache."""

    def __init__(self, state: State, bootstrap: Optional[Mapping[str, object]] = None, *, debug: bool = False) -> None:
        self.state = state
        self.bootstrap: Dict[str, object] = dict(bootstrap or {})
        self.debug = debug
        self.phase = ScenarioPhase.READY

    def before_scenario(self) -> None:
        """Reset all scenario-scoped state and seed bootstrap values."""
        self.state.reset(self.debug)
        for key, value in self.bootstrap.items():
            self.state.cache.save(key, value)
        self.phase = ScenarioPhase.RUNNING

    def finish(self) -> None:
        self.phase = ScenarioPhase.READY

    # ------------------
    # Random data generation
    # ------------------

    def i_generate_a_random_runes_of_length_with_characters_and_save_it_as(
        self, from_: int, to: int, charset: str, cache_key: str
    ) -> None:
        """Random word of [from_, to] characters taken from charset."""
        self.state.generate_random_runes(charsets.charset_for(charset), from_, to, cache_key)

    def i_generate_a_random_sentence_in_the_range_from_to_words_and_save_it_as(
        self, min_word_length: int, max_word_length: int, from_: int, to: int, charset: str, cache_key: str
    ) -> None:
        """Random sentence of [from_, to] words; word length range is fixed at registration."""
        self.state.generate_random_sentence(
            charsets.charset_for(charset), from_, to, min_word_length, max_word_length, cache_key
        )

    def i_generate_a_random_number_in_the_range_from_to_and_save_it_as(
        self, number_type: str, from_: int, to: int, cache_key: str
    ) -> None:
        kind = number_type.lower()
        if kind == "int":
            self.state.generate_random_int(from_, to, cache_key)
        elif kind == "float":
            self.state.generate_random_float(from_, to, cache_key)
        else:
            raise UnsupportedNumericTypeError(number_type, NUMBER_TYPES)

    def i_generate_random_bool_value_and_save_it_as(self, cache_key: str) -> None:
        self.state.generate_random_bool(cache_key)

    def i_generate_current_time_and_travel_by_and_save_it_as(
        self, time_direction: TimeDirection, time_duration: str, cache_key: str
    ) -> None:
        """Current UTC time moved by time_duration (e.g. 1h30m) forward or backward."""
        self.state.generate_current_time_and_travel(time_direction, parse_duration(time_duration), cache_key)

    # ------------------
    # Sending HTTP(s) requests
    # ------------------

    def i_send_request_to_with_body_and_headers(self, method: HttpMethod, url_template: str, req_body: DocString) -> None:
        """Send a request in one step.

        req_body is JSON or YAML with two keys, "body" and "headers"; both the
        URL and the document may contain `{{.KEY}}` placeholders.
        """
        self.state.send_request_with_body_and_headers(method, url_template, req_body.content)

    def i_prepare_new_request_to_and_save_it_as(self, method: HttpMethod, url_template: str, cache_key: str) -> None:
        self.state.prepare_request(method, url_template, cache_key)

    def i_set_following_headers_for_prepared_request(self, cache_key: str, headers_template: DocString) -> None:
        self.state.set_headers(cache_key, headers_template.content)

    def i_set_following_cookies_for_prepared_request(self, cache_key: str, cookies: DocString) -> None:
        """Cookies are a JSON/YAML list of {name, value} objects."""
        self.state.set_cookies(cache_key, cookies.content)

    def i_set_following_form_for_prepared_request(self, cache_key: str, form_template: DocString) -> None:
        """Form is a JSON/YAML mapping sent as multipart/form-data."""
        self.state.set_form(cache_key, form_template.content)

    def i_set_following_body_for_prepared_request(self, cache_key: str, body_template: DocString) -> None:
        self.state.set_body(cache_key, body_template.content)

    def i_send_request(self, cache_key: str) -> None:
        self.state.send_request(cache_key)

    # ------------------
    # Assertions
    # ------------------

    def the_response_should_have_header(self, name: str) -> None:
        self.state.response_should_have_header(name)

    def the_response_should_have_header_of_value(self, name: str, value_template: str) -> None:
        self.state.response_should_have_header_of_value(name, value_template)

    def the_response_should_have_cookie(self, name: str) -> None:
        self.state.response_should_have_cookie(name)

    def the_response_should_have_cookie_of_value(self, name: str, value_template: str) -> None:
        self.state.response_should_have_cookie_of_value(name, value_template)

    def the_response_status_code_should_be(self, code: int) -> None:
        self.state.response_status_code_should_be(code)

    def the_response_should_have_nodes(self, data_format: str, nodes_expr: str) -> None:
        """nodes_expr is one or more path expressions separated by commas."""
        self.state.response_should_have_nodes(data_format, nodes_expr)

    def the_node_should_be_of_value(
        self, data_format: str, expr_template: str, data_type: ValueType, data_value: str
    ) -> None:
        self.state.node_should_be_of_value(data_format, expr_template, data_type, data_value)

    def the_node_should_be_slice_of_length(self, data_format: str, expr_template: str, length: int) -> None:
        self.state.node_should_be_slice_of_length(data_format, expr_template, length)

    def the_node_should_be(self, data_format: str, expr_template: str, node_type: NodeType) -> None:
        self.state.node_should_be(data_format, expr_template, node_type)

    def the_node_should_not_be(self, data_format: str, expr_template: str, node_type: NodeType) -> None:
        self.state.node_should_not_be(data_format, expr_template, node_type)

    def the_node_should_match_reg_exp(self, data_format: str, expr_template: str, reg_exp_template: str) -> None:
        self.state.node_should_match_regexp(data_format, expr_template, reg_exp_template)

    def the_response_body_should_have_format(self, data_format: str) -> None:
        self.state.response_body_should_have_format(data_format)

    def i_validate_last_response_body_with_schema(self, reference_template: str) -> None:
        """reference is a full path, a path relative to the schema dir, or a URL."""
        self.state.validate_last_response_body_with_schema_reference(reference_template)

    def i_validate_last_response_body_with_following_schema(self, schema: DocString) -> None:
        self.state.validate_last_response_body_with_schema_string(schema.content)

    def i_validate_node_with_schema_reference(self, data_format: str, expr_template: str, reference_template: str) -> None:
        self.state.validate_node_with_schema_reference(data_format, expr_template, reference_template)

    def i_validate_node_with_schema_string(self, data_format: str, expr_template: str, schema: DocString) -> None:
        self.state.validate_node_with_schema_string(data_format, expr_template, schema.content)

    def time_between_last_http_request_response_should_be_less_than_or_equal_to(self, time_interval: str) -> None:
        """time_interval uses the duration grammar: 3s, 1h, 30ms."""
        self.state.time_between_last_request_response_should_be_less_than_or_equal_to(parse_duration(time_interval))

    # ------------------
    # Preserving data
    # ------------------

    def i_save_as(self, value_template: str, cache_key: str) -> None:
        self.state.save_as(value_template, cache_key)

    def i_save_from_the_last_response_node_as(self, data_format: str, expr_template: str, cache_key: str) -> None:
        self.state.save_from_last_response_node_as(data_format, expr_template, cache_key)

    # ------------------
    # Debugging
    # ------------------

    def i_print_last_response_body(self) -> None:
        self.state.print_last_response_body()

    def i_start_debug_mode(self) -> None:
        self.state.start_debug_mode()

    def i_stop_debug_mode(self) -> None:
        self.state.stop_debug_mode()

    # ------------------
    # Flow control
    # ------------------

    def i_wait(self, time_interval: str) -> None:
        """Block this scenario for time_interval (e.g. 3s, 1h, 30ms)."""
        self.state.wait(parse_duration(time_interval))

    def i_stop_scenario_execution(self) -> None:
        logger.info("scenario execution stopped on request")
        raise ScenarioStoppedError()


__all__ = ["Scenario", "ScenarioPhase", "NUMBER_TYPES"]
