"""apisteps: step library for behaviour-driven HTTP API tests.

Feature-file phrases are registered in `apisteps.steps`, resolved by
`apisteps.registry.StepRegistry` and executed against a per-run
`apisteps.scenario.Scenario`, which delegates to `apisteps.state.State`.
`apisteps.runner` wires all of it into behave.
"""

from __future__ import annotations

from apisteps.registry import StepRegistry
from apisteps.scenario import Scenario
from apisteps.state import State
from apisteps.steps import build_registry

__all__ = ["StepRegistry", "Scenario", "State", "build_registry"]
