"""Functional tests for assertions on the last response.

Uses the demo application's user (JSON), config (YAML) and text endpoints.
"""

from __future__ import annotations

import logging

import pytest

from apisteps.errors import (
    ArgumentError,
    NodeNotFoundError,
    PreconditionError,
    StepAssertionError,
    UnsupportedDataFormatError,
)
from apisteps.scenario import Scenario


@pytest.fixture
def user_response(run) -> None:
    run('I prepare new "GET" request to "{{.MY_APP_URL}}/users/1" and save it as "USER"')
    run('I send request "USER"')


@pytest.fixture
def yaml_response(run) -> None:
    run('I prepare new "GET" request to "{{.MY_APP_URL}}/config.yaml" and save it as "CFG"')
    run('I send request "CFG"')


# -----------------------------
# Status, headers, cookies
# -----------------------------

def test_status_code_mismatch_reports_both_codes(user_response, run) -> None:
    run("the response status code should be 200")
    with pytest.raises(StepAssertionError) as exc:
        run("the response status code should be 404")
    assert "expected 404, got 200" in str(exc.value)


def test_headers(user_response, run) -> None:
    run('I save "1" as "ID"')
    run('the response should have header "X-Request-Id"')
    run('the response should have header "x-request-id" of value "req-{{.ID}}"')
    with pytest.raises(StepAssertionError, match="no header 'X-Missing'"):
        run('the response should have header "X-Missing"')
    with pytest.raises(StepAssertionError, match="unexpected value"):
        run('the response should have header "X-Request-Id" of value "req-2"')


def test_cookies(user_response, run) -> None:
    run('the response should have cookie "session"')
    run('the response should have cookie "session" of value "abc123"')
    with pytest.raises(StepAssertionError, match="no cookie 'theme'"):
        run('the response should have cookie "theme"')


# -----------------------------
# Nodes
# -----------------------------

def test_nodes_exist(user_response, run) -> None:
    run('the JSON response should have nodes "id, name, address.geo.lat, $.tags[0], address[\'street\']"')
    run('the JSON response should have node "email"')


def test_first_missing_node_is_named(user_response, run) -> None:
    with pytest.raises(NodeNotFoundError) as exc:
        run('the JSON response should have nodes "id, missing.one, other"')
    assert exc.value.expr == "missing.one"


@pytest.mark.parametrize(
    "expr, node_type",
    [
        ("id", "int"),
        ("id", "float"),
        ("score", "float"),
        ("active", "bool"),
        ("nickname", "nil"),
        ("address", "map"),
        ("tags", "slice"),
        ("name", "string"),
    ],
)
def test_node_types(user_response, run, expr: str, node_type: str) -> None:
    run(f'the JSON node "{expr}" should be "{node_type}"')


def test_node_type_mismatch(user_response, run) -> None:
    run('the JSON node "name" should not be "int"')
    run('the JSON node "score" should not be "int"')
    with pytest.raises(StepAssertionError, match="unexpected type"):
        run('the JSON node "tags" should be "map"')
    with pytest.raises(StepAssertionError, match="should not be nil"):
        run('the JSON node "nickname" should not be "nil"')


def test_node_values(user_response, run) -> None:
    run('the JSON node "$.tags[2]" should be "string" of value "viewer"')
    run('the JSON node "tags[-1]" should be "string" of value "viewer"')
    run('the JSON node "score" should be "float" of value "9.5"')
    run('the JSON node "active" should be "bool" of value "true"')
    run('the JSON node "address.geo.lng" should be "string" of value "81.1496"')


def test_node_value_type_mismatch(user_response, run) -> None:
    with pytest.raises(StepAssertionError, match="has type int, not string"):
        run('the JSON node "id" should be "string" of value "1"')
    with pytest.raises(StepAssertionError, match="unexpected value"):
        run('the JSON node "id" should be "int" of value "2"')
    with pytest.raises(ArgumentError, match="not an int"):
        run('the JSON node "id" should be "int" of value "one"')


def test_slice_length(user_response, run) -> None:
    run('the JSON node "tags" should be slice of length "3"')
    with pytest.raises(StepAssertionError, match="unexpected length"):
        run('the JSON node "tags" should be slice of length "2"')
    with pytest.raises(StepAssertionError, match="not slice"):
        run('the JSON node "address" should be slice of length "1"')


def test_regexp(user_response, run) -> None:
    run(r'the JSON node "email" should match regExp "^\S+@\S+\.\w+$"')
    run('the JSON node "id" should match regExp "^1$"')
    with pytest.raises(StepAssertionError, match="does not match"):
        run('the JSON node "username" should match regExp "^[0-9]+$"')


def test_node_value_from_cache(user_response, run, scenario: Scenario) -> None:
    run('I save from the last response JSON node "id" as "USER_ID"')
    run('I save from the last response JSON node "address" as "ADDRESS"')
    assert scenario.state.cache.get("USER_ID") == 1
    assert scenario.state.cache.get("ADDRESS")["street"] == "Kulas Light"
    run('the JSON node "id" should be "int" of value "{{.USER_ID}}"')


def test_save_and_render(run, scenario: Scenario) -> None:
    run('I save "hello world" as "GREETING"')
    run('I save "{{.GREETING}}!" as "LOUD"')
    assert scenario.state.cache.get("GREETING") == "hello world"
    assert scenario.state.cache.get("LOUD") == "hello world!"


# -----------------------------
# YAML and plain text bodies
# -----------------------------

def test_yaml_nodes(yaml_response, run, scenario: Scenario) -> None:
    run('the response body should have format "YAML"')
    run('the YAML response should have nodes "service, owners[1]"')
    run('the YAML response should have node "ratio"')
    run('the YAML node "replicas" should be "int" of value "3"')
    run('the YAML node "ratio" should be "float" of value "0.75"')
    run('the YAML node "enabled" should be "bool" of value "true"')
    run('the YAML node "owners" should be slice of length "2"')
    run('the YAML node "owners" should not be "map"')
    run('the YAML node "service" should match regExp "^us"')
    run('I save from the last response YAML node "owners[0]" as "OWNER"')
    assert scenario.state.cache.get("OWNER") == "alice"


def test_body_format_detection(run) -> None:
    run('I prepare new "GET" request to "{{.MY_APP_URL}}/users/1" and save it as "JSON_REQ"')
    run('I prepare new "GET" request to "{{.MY_APP_URL}}/text" and save it as "TEXT_REQ"')

    run('I send request "JSON_REQ"')
    run('the response body should have type "JSON"')
    with pytest.raises(StepAssertionError, match="unexpected response body format"):
        run('the response body should have format "YAML"')

    run('I send request "TEXT_REQ"')
    run('the response body should have format "plain text"')
    with pytest.raises(StepAssertionError, match="not valid JSON"):
        run('the JSON node "anything" should be "string"')


def test_unknown_data_format(user_response, scenario: Scenario) -> None:
    with pytest.raises(UnsupportedDataFormatError, match="available: JSON, YAML, plain text"):
        scenario.state.response_body_should_have_format("XML")


# -----------------------------
# JSON schema
# -----------------------------

ADDRESS_SCHEMA = """
{
  "type": "object",
  "required": ["street", "geo"],
  "properties": {"street": {"type": "string"}}
}
"""


def test_schema_reference_relative_to_schema_dir(user_response, run) -> None:
    run('the response body should be valid according to JSON schema "user.schema.json"')


def test_missing_schema_file(user_response, run) -> None:
    with pytest.raises(PreconditionError, match="schema file not found"):
        run('the response body should be valid according to JSON schema "nope.schema.json"')


def test_inline_schema(user_response, run) -> None:
    run("the response body should be valid according to JSON schema:", '{"type": "object", "required": ["id"]}')
    with pytest.raises(StepAssertionError, match="does not match schema"):
        run("the response body should be valid according to JSON schema:", '{"required": ["missing"]}')


def test_inline_schema_must_be_json(user_response, run) -> None:
    with pytest.raises(ArgumentError, match="not valid JSON"):
        run("the response body should be valid according to JSON schema:", "type: object")


def test_node_schema(user_response, run) -> None:
    run('the JSON node "address" should be valid according to schema:', ADDRESS_SCHEMA)
    with pytest.raises(StepAssertionError, match="is a required property"):
        run('the JSON node "address.geo" should be valid according to schema:', ADDRESS_SCHEMA)


def test_schema_error_location(user_response, run) -> None:
    schema = '{"properties": {"address": {"properties": {"street": {"type": "integer"}}}}}'
    with pytest.raises(StepAssertionError, match=r"at \$\.address\.street"):
        run("the response body should be valid according to JSON schema:", schema)


# -----------------------------
# Debugging
# -----------------------------

def test_print_last_response_body(user_response, run, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="apisteps")
    run("I print last response body")
    assert '"name": "Leanne Graham"' in caplog.text


def test_debug_mode_logs_http_traffic(run, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="apisteps")
    run('I prepare new "GET" request to "{{.MY_APP_URL}}/data" and save it as "R"')

    run("I start debug mode")
    run('I send request "R"')
    assert "[HTTP] -> GET http://testserver/data" in caplog.text
    assert "[HTTP] <- 200" in caplog.text

    caplog.clear()
    run("I stop debug mode")
    run('I send request "R"')
    assert "[HTTP]" not in caplog.text
