"""Step registry: binds step phrase patterns to handlers.

Bindings are resolved in registration order and the first pattern that
matches wins; pattern authors keep patterns disjoint. Handlers take the
scenario object as their first parameter, so one frozen registry serves any
number of scenario instances.

Captured text is coerced once, at resolution time, to the annotation of the
handler parameter it lands in:

    str       -> passed through
    int       -> int(...)
    float     -> float(...)
    Literal   -> must be one of the literal values
    DocString -> not captured; receives the step's multi-line text
"""

from __future__ import annotations

import inspect
import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, List, Literal, NamedTuple, Optional, Tuple, get_args, get_origin, get_type_hints

from apisteps.errors import ArgumentError, ConfigurationError, NoMatchError
from apisteps.models.step_args import DocString

logger = logging.getLogger(__name__)

Coercer = Callable[[str], Any]


def _literal_coercer(name: str, allowed: Tuple[Any, ...]) -> Coercer:
    options = [str(a) for a in allowed]

    def coerce(raw: str) -> Any:
        if raw not in options:
            raise ArgumentError(f"unsupported value '{raw}' for {name}", available=options)
        return allowed[options.index(raw)]

    return coerce


def _number_coercer(name: str, kind: type) -> Coercer:
    def coerce(raw: str) -> Any:
        try:
            return kind(raw)
        except ValueError:
            raise ArgumentError(f"value '{raw}' for {name} is not a valid {kind.__name__}") from None

    return coerce


def _coercer_for(name: str, annotation: Any) -> Coercer:
    if annotation is str or annotation is inspect.Parameter.empty:
        return str
    if annotation in (int, float):
        return _number_coercer(name, annotation)
    if get_origin(annotation) is Literal:
        return _literal_coercer(name, get_args(annotation))
    raise ConfigurationError(f"parameter '{name}' has unsupported capture type {annotation!r}")


@dataclass(frozen=True)
class StepPattern:
    source: str
    regex: "re.Pattern[str]"

    @classmethod
    def compile(cls, source: str) -> "StepPattern":
        try:
            return cls(source=source, regex=re.compile(source))
        except re.error as exc:
            raise ConfigurationError(f"invalid step pattern {source!r}: {exc}") from exc

    @property
    def groups(self) -> int:
        return self.regex.groups

    def match(self, phrase: str) -> Optional["re.Match[str]"]:
        return self.regex.search(phrase)


@dataclass(frozen=True)
class StepBinding:
    pattern: StepPattern
    handler: Callable[..., Any]
    preset: Tuple[Any, ...]
    coercers: Tuple[Coercer, ...]
    takes_docstring: bool


class ResolvedStep(NamedTuple):
    handler: Callable[..., Any]
    args: Tuple[Any, ...]


class StepRegistry:
    def __init__(self) -> None:
        self._bindings: List[StepBinding] = []
        self._sources: set[str] = set()
        self._frozen = False

    def register(self, pattern: str, handler: Callable[..., Any], *preset: Any) -> StepBinding:
        """Bind pattern to handler.

        preset values are passed to the handler right after the scenario,
        ahead of captured arguments.
        """
        if self._frozen:
            raise ConfigurationError(f"registry is frozen, cannot register {pattern!r}")
        if pattern in self._sources:
            raise ConfigurationError(f"duplicate step pattern {pattern!r}")
        step_pattern = StepPattern.compile(pattern)
        coercers, takes_docstring = _inspect_handler(handler, len(preset), step_pattern)
        binding = StepBinding(step_pattern, handler, tuple(preset), coercers, takes_docstring)
        self._bindings.append(binding)
        self._sources.add(pattern)
        return binding

    def freeze(self) -> "StepRegistry":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def bindings(self) -> Tuple[StepBinding, ...]:
        return tuple(self._bindings)

    def resolve(self, phrase: str, text: Optional[str] = None) -> ResolvedStep:
        for binding in self._bindings:
            match = binding.pattern.match(phrase)
            if match is None:
                continue
            args: List[Any] = list(binding.preset)
            args.extend(coerce(raw) for coerce, raw in zip(binding.coercers, match.groups()))
            if binding.takes_docstring:
                if text is None:
                    raise ArgumentError(f"step {phrase!r} requires a docstring")
                args.append(DocString(text))
            return ResolvedStep(binding.handler, tuple(args))
        raise NoMatchError(phrase)

    def execute(self, scenario: Any, phrase: str, text: Optional[str] = None) -> Any:
        handler, args = self.resolve(phrase, text)
        logger.debug("step %r -> %s", phrase, getattr(handler, "__qualname__", handler))
        return handler(scenario, *args)

    def __len__(self) -> int:
        return len(self._bindings)


def _inspect_handler(handler: Callable[..., Any], preset_count: int, pattern: StepPattern) -> Tuple[Tuple[Coercer, ...], bool]:
    try:
        params = list(inspect.signature(handler).parameters.values())
        hints = get_type_hints(handler)
    except (TypeError, ValueError, NameError) as exc:
        raise ConfigurationError(f"cannot inspect handler {handler!r}: {exc}") from exc

    # first parameter receives the scenario
    params = params[1 + preset_count:]
    takes_docstring = bool(params) and hints.get(params[-1].name) is DocString
    if takes_docstring:
        params = params[:-1]
    if len(params) != pattern.groups:
        raise ConfigurationError(
            f"pattern {pattern.source!r} has {pattern.groups} capture groups "
            f"but handler {handler.__qualname__} takes {len(params)} step arguments"
        )
    coercers = tuple(_coercer_for(p.name, hints.get(p.name, p.annotation)) for p in params)
    return coercers, takes_docstring


__all__ = ["StepPattern", "StepBinding", "ResolvedStep", "StepRegistry"]
