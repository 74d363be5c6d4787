"""Action resolution, action filtering and action classification."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqla_gate._types import ACTION_KEY, ContextLike
from sqla_gate.config._options import ActionFilter, ResourceOptions, coerce_options
from sqla_gate.exceptions import ConfigurationError

__all__ = [
    "NON_ID_ACTIONS",
    "is_action_enabled",
    "is_non_id_action",
    "requires_resource",
    "resolve_action",
]

# Actions for which no single resource instance is expected to exist yet.
NON_ID_ACTIONS: frozenset[str] = frozenset({"index", "new", "create"})


def resolve_action(context: ContextLike) -> str:
    """Return the canonical action name for *context*.

    An explicit ``assigns["gate_action"]`` wins over the
    framework-derived action (route action, live action, or event name).

    Raises:
        ConfigurationError: If neither source provides an action.

    Example::

        ctx = HttpContext(action="show")
        resolve_action(ctx)  # "show"

        ctx.assigns["gate_action"] = "publish"
        resolve_action(ctx)  # "publish"
    """
    action = context.assigns.get(ACTION_KEY)
    if action is None:
        action = context.framework_action
    if action is None:
        raise ConfigurationError(
            f"Cannot resolve an action: set assigns[{ACTION_KEY!r}] or a framework action"
        )
    return str(action)


def _matches(action: str, value: ActionFilter) -> bool:
    if isinstance(value, str):
        return action == value
    return action in value


def is_action_enabled(action: str, options: ResourceOptions | Mapping[str, Any]) -> bool:
    """Decide whether the pipeline runs for *action*.

    Raises:
        ConfigurationError: If both ``only`` and ``except`` are present.

    Example::

        is_action_enabled("index", {"model": Post, "only": ["index", "show"]})  # True
        is_action_enabled("index", {"model": Post, "except": "index"})  # False
    """
    opts = coerce_options(options, need_model=False)
    if opts.except_ is not None:
        return not _matches(action, opts.except_)
    if opts.only is not None:
        return _matches(action, opts.only)
    return True


def is_non_id_action(action: str, options: ResourceOptions) -> bool:
    """Whether *action* works on the model rather than on an instance."""
    return action in NON_ID_ACTIONS or action in options.non_id_actions


def requires_resource(action: str, options: ResourceOptions) -> bool:
    """Whether a missing resource triggers the not-found handler."""
    if options.required is None:
        return not is_non_id_action(action, options)
    return bool(options.required)
