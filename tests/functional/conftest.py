"""Functional test bootstrap.

Scenarios run against a small in-process FastAPI application through
`fastapi.testclient.TestClient`, which is an `httpx.Client` and can therefore
be injected as the state's HTTP client. No network access is needed.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

import pytest
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.testclient import TestClient

from apisteps.config import RunnerConfig
from apisteps.registry import StepRegistry
from apisteps.runner import create_scenario
from apisteps.scenario import Scenario
from apisteps.steps import build_registry

PROJECT_ROOT = Path(__file__).resolve().parents[2]
SCHEMAS_DIR = PROJECT_ROOT / "schemas"
BASE_URL = "http://testserver"

USER: Dict[str, Any] = {
    "id": 1,
    "name": "Leanne Graham",
    "username": "Bret",
    "email": "sincere@april.biz",
    "address": {"street": "Kulas Light", "geo": {"lat": "-37.3159", "lng": "81.1496"}},
    "tags": ["admin", "editor", "viewer"],
    "score": 9.5,
    "active": True,
    "nickname": None,
}

YAML_BODY = """\
service: users
replicas: 3
ratio: 0.75
enabled: true
owners:
  - alice
  - bob
"""


def create_demo_app() -> FastAPI:
    app = FastAPI()

    @app.get("/users/{user_id}")
    def get_user(user_id: int) -> JSONResponse:
        body = dict(USER, id=user_id)
        resp = JSONResponse(body, headers={"X-Request-Id": f"req-{user_id}"})
        resp.set_cookie("session", "abc123")
        return resp

    @app.post("/users", status_code=201)
    async def create_user(request: Request) -> Dict[str, Any]:
        payload = json.loads(await request.body() or b"{}")
        return dict(payload, id=42)

    @app.get("/data")
    def data() -> Dict[str, Any]:
        return {"data": {"id": 42, "items": [1, 2, 3]}}

    @app.get("/config.yaml")
    def yaml_config() -> Response:
        return Response(YAML_BODY, media_type="application/x-yaml")

    @app.get("/text")
    def text() -> PlainTextResponse:
        return PlainTextResponse("just some text")

    @app.post("/form")
    async def form(request: Request) -> Dict[str, Any]:
        raw = await request.body()
        return {"content_type": request.headers.get("content-type", ""), "raw": raw.decode("utf-8")}

    @app.get("/echo")
    def echo(request: Request) -> Dict[str, Any]:
        return {"headers": dict(request.headers), "cookies": dict(request.cookies)}

    return app


@pytest.fixture
def client() -> TestClient:
    with TestClient(create_demo_app()) as c:
        yield c


@pytest.fixture
def config() -> RunnerConfig:
    return RunnerConfig(debug=False, my_app_url=BASE_URL, json_schema_dir=SCHEMAS_DIR)


@pytest.fixture
def scenario(config: RunnerConfig, client: TestClient) -> Scenario:
    sc = create_scenario(config, http_client=client)
    sc.before_scenario()
    return sc


@pytest.fixture(scope="session")
def registry() -> StepRegistry:
    return build_registry()


@pytest.fixture
def run(registry: StepRegistry, scenario: Scenario):
    """Execute a step phrase against the test scenario."""

    def _run(phrase: str, text: Optional[str] = None) -> Any:
        return registry.execute(scenario, phrase, text)

    return _run
