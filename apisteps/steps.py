"""Step phrases understood by feature files.

Phrase wording and capture positions are part of the public surface: feature
files are plain text written against them, so they never change once
published. New phrases are appended; registration order is match precedence.
"""

from __future__ import annotations

from apisteps.registry import StepRegistry
from apisteps.scenario import Scenario

# Fixed word length range used by the random sentence step
SENTENCE_WORD_LENGTH = (3, 10)

_NODE_TYPES = "nil|string|int|float|bool|map|slice"
_VALUE_TYPES = "string|int|float|bool"


def build_registry() -> StepRegistry:
    """Create the frozen registry with every supported step phrase."""
    r = StepRegistry()

    # ------------------------------------------------------------------
    # Random data generation
    #
    # Random words and sentences of ASCII/UNICODE characters and numbers
    # from a range. Every step saves its output in the scenario cache under
    # the provided key.
    # ------------------------------------------------------------------
    r.register(
        r'^I generate a random word having from "(\d+)" to "(\d+)" of "(ASCII|UNICODE)" characters and save it as "([^"]*)"$',
        Scenario.i_generate_a_random_runes_of_length_with_characters_and_save_it_as,
    )
    r.register(
        r'^I generate a random sentence having from "(\d+)" to "(\d+)" of "(ASCII|UNICODE)" words and save it as "([^"]*)"$',
        Scenario.i_generate_a_random_sentence_in_the_range_from_to_words_and_save_it_as,
        *SENTENCE_WORD_LENGTH,
    )
    r.register(
        r'^I generate a random "(int|float)" in the range from "(\d+)" to "(\d+)" and save it as "([^"]*)"$',
        Scenario.i_generate_a_random_number_in_the_range_from_to_and_save_it_as,
    )

    # ------------------------------------------------------------------
    # Sending HTTP(s) requests
    #
    # Steps starting with "I set following ..." take a JSON or YAML docstring.
    # ------------------------------------------------------------------
    r.register(
        r'^I prepare new "(GET|POST|PUT|PATCH|DELETE|HEAD)" request to "([^"]*)" and save it as "([^"]*)"$',
        Scenario.i_prepare_new_request_to_and_save_it_as,
    )
    r.register(
        r'^I set following headers for prepared request "([^"]*)":$',
        Scenario.i_set_following_headers_for_prepared_request,
    )
    r.register(
        r'^I set following body for prepared request "([^"]*)":$',
        Scenario.i_set_following_body_for_prepared_request,
    )
    r.register(r'^I send request "([^"]*)"$', Scenario.i_send_request)

    # docstring holds two keys: "body" and "headers"
    r.register(
        r'^I send "(GET|POST|PUT|PATCH|DELETE|HEAD)" request to "([^"]*)" with body and headers:$',
        Scenario.i_send_request_to_with_body_and_headers,
    )

    # ------------------------------------------------------------------
    # Assertions against the last HTTP(s) response
    #
    # Arguments right after "node" or "nodes" are path expressions such as
    # "data[0].user" or "$.data[1].user"; "nodes" takes a comma separated
    # list. Steps ending with 'of value "..."' accept {{.KEY}} placeholders.
    # Durations are written like 3s, 1h, 30ms.
    # ------------------------------------------------------------------
    r.register(r'^the response should have header "([^"]*)"$', Scenario.the_response_should_have_header)
    r.register(
        r'^the response should have header "([^"]*)" of value "([^"]*)"$',
        Scenario.the_response_should_have_header_of_value,
    )

    r.register(r"^the response status code should be (\d+)$", Scenario.the_response_status_code_should_be)

    r.register(r'^the JSON response should have nodes "([^"]*)"$', Scenario.the_response_should_have_nodes, "JSON")
    r.register(r'^the JSON response should have node "([^"]*)"$', Scenario.the_response_should_have_nodes, "JSON")

    r.register(
        rf'^the JSON node "([^"]*)" should be "({_VALUE_TYPES})" of value "([^"]*)"$',
        Scenario.the_node_should_be_of_value,
        "JSON",
    )
    r.register(
        r'^the JSON node "([^"]*)" should be slice of length "(\d+)"$',
        Scenario.the_node_should_be_slice_of_length,
        "JSON",
    )
    r.register(rf'^the JSON node "([^"]*)" should be "({_NODE_TYPES})"$', Scenario.the_node_should_be, "JSON")
    r.register(rf'^the JSON node "([^"]*)" should not be "({_NODE_TYPES})"$', Scenario.the_node_should_not_be, "JSON")

    r.register(r'^the response body should have type "(JSON)"$', Scenario.the_response_body_should_have_format)

    r.register(
        r'^the response body should be valid according to JSON schema "([^"]*)"$',
        Scenario.i_validate_last_response_body_with_schema,
    )
    r.register(
        r"^the response body should be valid according to JSON schema:$",
        Scenario.i_validate_last_response_body_with_following_schema,
    )

    r.register(
        r'^time between last request and response should be less than or equal to "([^"]*)"$',
        Scenario.time_between_last_http_request_response_should_be_less_than_or_equal_to,
    )

    # ------------------------------------------------------------------
    # Preserving data
    # ------------------------------------------------------------------
    r.register(r'^I save "([^"]*)" as "([^"]*)"$', Scenario.i_save_as)
    r.register(
        r'^I save from the last response JSON node "([^"]*)" as "([^"]*)"$',
        Scenario.i_save_from_the_last_response_node_as,
        "JSON",
    )

    # ------------------------------------------------------------------
    # Debugging
    # ------------------------------------------------------------------
    r.register(r"^I print last response body$", Scenario.i_print_last_response_body)

    r.register(r"^I start debug mode$", Scenario.i_start_debug_mode)
    r.register(r"^I stop debug mode$", Scenario.i_stop_debug_mode)

    # ------------------------------------------------------------------
    # Flow control
    # ------------------------------------------------------------------
    r.register(r'^I wait "([^"]*)"', Scenario.i_wait)

    _register_extended_steps(r)
    return r.freeze()


def _register_extended_steps(r: StepRegistry) -> None:
    """Phrases added on top of the base set: cookies, forms, YAML bodies, node schemas."""
    r.register(
        r'^I generate a random boolean value and save it as "([^"]*)"$',
        Scenario.i_generate_random_bool_value_and_save_it_as,
    )
    r.register(
        r'^I generate current time and travel "(backward|forward)" "([^"]*)" in time and save it as "([^"]*)"$',
        Scenario.i_generate_current_time_and_travel_by_and_save_it_as,
    )

    r.register(
        r'^I set following cookies for prepared request "([^"]*)":$',
        Scenario.i_set_following_cookies_for_prepared_request,
    )
    r.register(
        r'^I set following form for prepared request "([^"]*)":$',
        Scenario.i_set_following_form_for_prepared_request,
    )

    r.register(r'^the response should have cookie "([^"]*)"$', Scenario.the_response_should_have_cookie)
    r.register(
        r'^the response should have cookie "([^"]*)" of value "([^"]*)"$',
        Scenario.the_response_should_have_cookie_of_value,
    )
    r.register(
        r'^the response body should have format "(JSON|YAML|plain text)"$',
        Scenario.the_response_body_should_have_format,
    )

    r.register(
        r'^the JSON node "([^"]*)" should match regExp "([^"]*)"$',
        Scenario.the_node_should_match_reg_exp,
        "JSON",
    )
    r.register(
        r'^the JSON node "([^"]*)" should be valid according to schema "([^"]*)"$',
        Scenario.i_validate_node_with_schema_reference,
        "JSON",
    )
    r.register(
        r'^the JSON node "([^"]*)" should be valid according to schema:$',
        Scenario.i_validate_node_with_schema_string,
        "JSON",
    )

    r.register(r'^the YAML response should have nodes "([^"]*)"$', Scenario.the_response_should_have_nodes, "YAML")
    r.register(r'^the YAML response should have node "([^"]*)"$', Scenario.the_response_should_have_nodes, "YAML")
    r.register(
        rf'^the YAML node "([^"]*)" should be "({_VALUE_TYPES})" of value "([^"]*)"$',
        Scenario.the_node_should_be_of_value,
        "YAML",
    )
    r.register(
        r'^the YAML node "([^"]*)" should be slice of length "(\d+)"$',
        Scenario.the_node_should_be_slice_of_length,
        "YAML",
    )
    r.register(rf'^the YAML node "([^"]*)" should be "({_NODE_TYPES})"$', Scenario.the_node_should_be, "YAML")
    r.register(rf'^the YAML node "([^"]*)" should not be "({_NODE_TYPES})"$', Scenario.the_node_should_not_be, "YAML")
    r.register(
        r'^the YAML node "([^"]*)" should match regExp "([^"]*)"$',
        Scenario.the_node_should_match_reg_exp,
        "YAML",
    )
    r.register(
        r'^I save from the last response YAML node "([^"]*)" as "([^"]*)"$',
        Scenario.i_save_from_the_last_response_node_as,
        "YAML",
    )

    r.register(r"^I stop scenario execution$", Scenario.i_stop_scenario_execution)


__all__ = ["build_registry", "SENTENCE_WORD_LENGTH"]
