"""Functional tests for preparing, editing and sending requests.

Requests go to the in-process demo application; the transport failure case
uses an `httpx.MockTransport` that refuses every connection.
"""

from __future__ import annotations

import httpx
import pytest

from apisteps.errors import RequestError, UnknownRequestError, UnsupportedMethodError
from apisteps.models.request import PreparedRequest
from apisteps.scenario import Scenario
from apisteps.state import State


def test_get_request_end_to_end(scenario: Scenario, run) -> None:
    run('I prepare new "GET" request to "{{.MY_APP_URL}}/data" and save it as "R"')
    prepared = scenario.state.cache.get("R")
    assert isinstance(prepared, PreparedRequest)
    assert prepared.url == "http://testserver/data"

    run('I send request "R"')
    run("the response status code should be 200")
    run('the JSON node "data.id" should be "int" of value "42"')
    run('time between last request and response should be less than or equal to "10s"')
    assert scenario.state.last_timing is not None
    assert scenario.state.last_timing.end >= scenario.state.last_timing.start


def test_prepared_request_can_be_sent_twice(scenario: Scenario, run) -> None:
    run('I prepare new "GET" request to "{{.MY_APP_URL}}/users/7" and save it as "R"')
    run('I send request "R"')
    first = scenario.state.last_response
    run('I send request "R"')
    assert scenario.state.last_response is not first
    run('the JSON node "id" should be "int" of value "7"')


def test_yaml_headers_are_sent(scenario: Scenario, run) -> None:
    run('I prepare new "GET" request to "{{.MY_APP_URL}}/echo" and save it as "R"')
    run('I save "abc" as "TOKEN"')
    run('I set following headers for prepared request "R":', "X-Token: {{.TOKEN}}\nAccept: application/json")
    run('I send request "R"')
    run('the JSON node "headers.x-token" should be "string" of value "abc"')
    run('the JSON node "headers.accept" should be "string" of value "application/json"')


def test_cookies_are_sent(scenario: Scenario, run) -> None:
    run('I prepare new "GET" request to "{{.MY_APP_URL}}/echo" and save it as "R"')
    run(
        'I set following cookies for prepared request "R":',
        '[{"name": "session", "value": "s3cr3t"}, {"name": "theme", "value": "dark"}]',
    )
    run('I send request "R"')
    run('the JSON node "cookies.session" should be "string" of value "s3cr3t"')
    run('the JSON node "cookies.theme" should be "string" of value "dark"')


def test_form_is_sent_as_multipart(scenario: Scenario, run) -> None:
    run('I prepare new "POST" request to "{{.MY_APP_URL}}/form" and save it as "R"')
    run('I set following form for prepared request "R":', "name: Ann\nage: 30")
    run('I send request "R"')
    run('the JSON node "content_type" should match regExp "^multipart/form-data"')
    run('the JSON node "raw" should match regExp "name=.age."')
    body = scenario.state.last_response.json()["raw"]
    assert "Ann" in body and "30" in body


def test_templated_body_is_sent(scenario: Scenario, run) -> None:
    run('I save "Ann" as "NAME"')
    run('I prepare new "POST" request to "{{.MY_APP_URL}}/users" and save it as "CREATE"')
    run('I set following headers for prepared request "CREATE":', '{"Content-Type": "application/json"}')
    run('I set following body for prepared request "CREATE":', '{"name": "{{.NAME}}", "age": 30}')
    run('I send request "CREATE"')
    run("the response status code should be 201")
    run('the JSON node "name" should be "string" of value "Ann"')
    run('the JSON node "age" should be "int" of value "30"')
    run('the JSON node "id" should be "int" of value "42"')


def test_one_shot_request_with_yaml_document(scenario: Scenario, run) -> None:
    run(
        'I send "POST" request to "{{.MY_APP_URL}}/users" with body and headers:',
        "body:\n  name: Bob\n  tags: [a, b]\nheaders:\n  Content-Type: application/json\n",
    )
    run("the response status code should be 201")
    run('the JSON node "name" should be "string" of value "Bob"')
    run('the JSON node "tags" should be slice of length "2"')


def test_sending_unknown_request_fails(run) -> None:
    with pytest.raises(UnknownRequestError, match="MISSING"):
        run('I send request "MISSING"')


def test_editing_a_non_request_value_fails(run) -> None:
    run('I save "plain value" as "R"')
    with pytest.raises(UnknownRequestError):
        run('I set following headers for prepared request "R":', "Accept: text/plain")


def test_method_is_normalised_and_validated(scenario: Scenario) -> None:
    state = scenario.state
    state.prepare_request("get", "{{.MY_APP_URL}}/data", "R")
    assert state.cache.get("R").method == "GET"

    with pytest.raises(UnsupportedMethodError) as exc:
        state.prepare_request("TRACE", "{{.MY_APP_URL}}/data", "R2")
    assert "available: GET, POST, PUT, PATCH, DELETE, HEAD" in str(exc.value)


def _refuse(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused", request=request)


def test_transport_failure_is_request_error() -> None:
    state = State(http_client=httpx.Client(transport=httpx.MockTransport(_refuse)))
    sc = Scenario(state, {"MY_APP_URL": "http://unreachable.invalid"})
    sc.before_scenario()
    sc.i_prepare_new_request_to_and_save_it_as("GET", "{{.MY_APP_URL}}/x", "R")

    with pytest.raises(RequestError, match="connection refused"):
        sc.i_send_request("R")
    assert state.last_response is None
    assert state.last_timing is None


def test_invalid_url_is_request_error(scenario: Scenario, run) -> None:
    run('I prepare new "GET" request to "http://[::1/x" and save it as "R"')
    with pytest.raises(RequestError, match=r"http://\[::1/x"):
        run('I send request "R"')
    assert scenario.state.last_response is None


def test_non_ascii_header_values_are_sent_as_utf8(scenario: Scenario, run) -> None:
    run('I save "zażółć" as "W"')
    run('I generate a random word having from "5" to "5" of "UNICODE" characters and save it as "U"')
    run('I prepare new "GET" request to "{{.MY_APP_URL}}/echo" and save it as "R"')
    run('I set following headers for prepared request "R":', '{"X-Name": "{{.W}}", "X-Random": "{{.U}}"}')
    run('I send request "R"')
    run("the response status code should be 200")

    # the server side decodes raw header bytes as latin-1
    echoed = scenario.state.last_response.json()["headers"]
    assert echoed["x-name"].encode("latin-1").decode("utf-8") == "zażółć"
    assert echoed["x-random"].encode("latin-1").decode("utf-8") == scenario.state.cache.get("U")


def test_one_shot_request_with_non_ascii_header(scenario: Scenario, run) -> None:
    run(
        'I send "GET" request to "{{.MY_APP_URL}}/echo" with body and headers:',
        '{"headers": {"X-Name": "Łódź"}}',
    )
    run("the response status code should be 200")
    echoed = scenario.state.last_response.json()["headers"]
    assert echoed["x-name"].encode("latin-1").decode("utf-8") == "Łódź"
