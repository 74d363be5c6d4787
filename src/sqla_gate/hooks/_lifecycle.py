"""Lifecycle hooks for stateful UI sessions."""

from __future__ import annotations

import warnings
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, Literal, NamedTuple

from sqla_gate.config._config import GateConfig
from sqla_gate.config._options import ResourceOptions, coerce_options
from sqla_gate.context._event import EventContext, Stage
from sqla_gate.exceptions import ConfigurationError
from sqla_gate.pipeline._orchestrator import (
    authorize_resource,
    load_and_authorize_resource,
    load_resource,
)

__all__ = ["STAGES", "Hook", "HookResult", "mount", "run_hooks"]

STAGES: tuple[Stage, ...] = ("handle_params", "handle_event")

_OPERATIONS: dict[str, Callable[..., Any]] = {
    "load_resource": load_resource,
    "authorize_resource": authorize_resource,
    "load_and_authorize_resource": load_and_authorize_resource,
}


class HookResult(NamedTuple):
    """Outcome of a hook: ``"cont"`` to keep going, ``"halt"`` to stop."""

    action: Literal["cont", "halt"]
    context: EventContext


@dataclass(frozen=True, slots=True)
class Hook:
    """One pipeline operation attached to one lifecycle stage.

    Calling the hook with a context of another stage is a no-op.

    Attributes:
        kind: ``"load_resource"``, ``"authorize_resource"`` or
            ``"load_and_authorize_resource"``.
        stage: The lifecycle stage the hook runs on.
        options: Per-call options for the operation.
        config: Explicit config; the global one is used when ``None``.
    """

    kind: str
    stage: Stage
    options: ResourceOptions
    config: GateConfig | None = field(default=None, compare=False)

    def __call__(self, context: EventContext) -> HookResult:
        if context.stage != self.stage:
            return HookResult("cont", context)
        operation = _OPERATIONS[self.kind]
        context = operation(context, self.options, config=self.config)
        return HookResult("halt" if context.halted else "cont", context)


def _stages(on: str | Iterable[str]) -> list[Stage]:
    requested = [on] if isinstance(on, str) else list(on)
    return [stage for stage in STAGES if stage in requested]


def mount(
    kind: str,
    *,
    on: str | Iterable[str] = "handle_params",
    config: GateConfig | None = None,
    **options: Any,
) -> list[Hook]:
    """Build hooks running *kind* on the requested lifecycle stages.

    Stages other than ``handle_params`` and ``handle_event`` are ignored.
    Remaining keyword arguments are resource options; the short keys
    ``as`` and ``except`` can be passed through ``**{"as": ...}``.

    Raises:
        ConfigurationError: If *kind* is unknown or the options are invalid.

    Example::

        hooks = mount(
            "load_and_authorize_resource",
            on=["handle_params", "handle_event"],
            model=Post,
            only=["show", "archive"],
        )
        result = run_hooks(hooks, EventContext.for_event("archive", {"id": "3"}, assigns=assigns))
    """
    if kind not in _OPERATIONS:
        raise ConfigurationError(
            f"Unknown hook kind {kind!r}; expected one of {sorted(_OPERATIONS)}"
        )
    opts = coerce_options(options)
    stages = _stages(on)
    if not stages:
        warnings.warn(
            f"mount({kind!r}) has no valid stage in {on!r}; nothing will run. "
            f"Valid stages: {list(STAGES)}",
            stacklevel=2,
        )
    return [Hook(kind=kind, stage=stage, options=opts, config=config) for stage in stages]


def run_hooks(hooks: Iterable[Hook], context: EventContext) -> HookResult:
    """Run *hooks* in order, stopping at the first that halts."""
    result = HookResult("cont", context)
    for hook in hooks:
        result = hook(result.context)
        if result.action == "halt":
            break
    return result
