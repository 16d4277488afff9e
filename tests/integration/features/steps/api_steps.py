"""Forward every step line to the apisteps registry.

Behave sees a single catch-all step; the registry picks the handler. An
unknown phrase raises NoMatchError, which fails the scenario like any other
step error.
"""

from behave import step, use_step_matcher

from apisteps.runner import run_step

use_step_matcher("re")


@step(r"(?P<phrase>.+)")
def dispatch(context, phrase: str) -> None:
    run_step(context, phrase)
