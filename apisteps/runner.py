"""Behave integration.

A suite's `features/environment.py` re-exports the hooks (`before_all`,
`before_scenario`, `after_scenario`, `after_all`); its steps module registers
one catch-all step that calls `run_step`. Phrase matching then happens in the
step registry instead of behave's own matchers.

Each behave run executes scenarios one at a time, so one `Scenario` instance
is created per process and reset before every scenario.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from apisteps.config import RunnerConfig, load_config
from apisteps.logging_setup import configure_logging
from apisteps.registry import StepRegistry
from apisteps.scenario import Scenario
from apisteps.state import State
from apisteps.steps import build_registry

logger = logging.getLogger(__name__)

_REGISTRY: Optional[StepRegistry] = None


def registry() -> StepRegistry:
    """Process-wide registry, built on first use."""
    global _REGISTRY
    if _REGISTRY is None:
        _REGISTRY = build_registry()
    return _REGISTRY


def create_scenario(config: RunnerConfig, **state_kwargs: Any) -> Scenario:
    """Build the scenario object for a run.

    state_kwargs go to `State`, e.g. `http_client=` to inject a custom client.
    """
    state = State(
        config.debug,
        config.json_schema_dir,
        timeout=config.http_timeout,
        **state_kwargs,
    )
    return Scenario(state, config.bootstrap_values(), debug=config.debug)


def before_all(context: Any) -> None:  # pragma: no cover - thin wrapper exercised by behave
    config = load_config()
    configure_logging(config.debug)
    setup_context(context, config)


def setup_context(context: Any, config: RunnerConfig, **state_kwargs: Any) -> None:
    context.apisteps_config = config
    context.apisteps_registry = registry()
    context.apisteps_scenario = create_scenario(config, **state_kwargs)
    logger.info(
        "apisteps ready: %d step phrases, schema dir %s, debug=%s",
        len(context.apisteps_registry),
        config.json_schema_dir,
        config.debug,
    )


def before_scenario(context: Any, scenario: Any) -> None:
    context.apisteps_scenario.before_scenario()


def after_scenario(context: Any, scenario: Any) -> None:
    context.apisteps_scenario.finish()


def after_all(context: Any) -> None:
    scenario = getattr(context, "apisteps_scenario", None)
    if scenario is not None:
        scenario.state.http.close()


def run_step(context: Any, phrase: str) -> None:
    """Execute phrase against the current scenario; `context.text` is the docstring."""
    text = getattr(context, "text", None)
    context.apisteps_registry.execute(context.apisteps_scenario, phrase, text)


__all__ = [
    "registry",
    "create_scenario",
    "before_all",
    "setup_context",
    "before_scenario",
    "after_scenario",
    "after_all",
    "run_step",
]
