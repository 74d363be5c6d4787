"""The public pipeline operations: load, authorize, load-and-authorize."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar, Union

from sqla_gate._audit import log_decision, log_skipped
from sqla_gate._types import AUTHORIZED_KEY, CONTROLLER_KEY, ContextLike
from sqla_gate.config._config import GateConfig, resolve_config
from sqla_gate.config._options import ResourceOptions, coerce_options
from sqla_gate.pipeline._actions import is_action_enabled, requires_resource, resolve_action
from sqla_gate.pipeline._decider import _require_permission, decide, resolve_subject
from sqla_gate.pipeline._handlers import dispatch
from sqla_gate.pipeline._loader import load_all, load_one
from sqla_gate.pipeline._naming import derive_key

__all__ = [
    "authorize_controller",
    "authorize_resource",
    "load_and_authorize_resource",
    "load_resource",
]

C = TypeVar("C", bound=ContextLike)

Options = Union[ResourceOptions, Mapping[str, Any]]


# ---------------------------------------------------------------------------
# Steps shared by the public operations
# ---------------------------------------------------------------------------


def _load(context: C, action: str, options: ResourceOptions, config: GateConfig) -> C:
    if options.single_instance:
        resource: Any = load_one(context, options, action=action, config=config)
    elif action == "index":
        resource = load_all(context, options, action=action, config=config)
    elif action in ("new", "create"):
        resource = None
    else:
        resource = load_one(context, options, action=action, config=config)

    context.assigns[derive_key(options, action)] = resource
    return context


def _authorize(
    context: C, action: str, options: ResourceOptions, config: GateConfig
) -> tuple[C, bool]:
    authorized = decide(context, action, options, config=config)
    context.assigns[AUTHORIZED_KEY] = authorized
    if not authorized:
        context = dispatch(context, "unauthorized_handler", options, config)
    return context, authorized


def _handle_not_found(
    context: C, action: str, options: ResourceOptions, config: GateConfig
) -> C:
    key = derive_key(options, action)
    if context.assigns.get(key) is None and requires_resource(action, options):
        return dispatch(context, "not_found_handler", options, config)
    return context


# ---------------------------------------------------------------------------
# Public operations
# ---------------------------------------------------------------------------


def load_resource(context: C, options: Options, *, config: GateConfig | None = None) -> C:
    """Load the resource the request concerns into ``context.assigns``.

    The key is the ``as`` option or the snake-cased model name
    (pluralized for ``index``). ``index`` loads every record, ``new`` and
    ``create`` store ``None`` without touching storage, other actions load
    one record by ``params[id_name]``. With ``required=True`` (or the
    deprecated ``persisted=True``) every action loads one record.

    When the stored value is ``None`` and a resource is required, the
    not-found handler is dispatched.

    Args:
        context: The request context.
        options: ``ResourceOptions`` or a mapping of option keys.
        config: Explicit defaults. Falls back to the global config.

    Returns:
        The context to continue with.

    Example::

        ctx = load_resource(ctx, {"model": Post, "preload": "author"})
        ctx.assigns["post"]
    """
    opts = coerce_options(options)
    cfg = resolve_config(config)
    action = resolve_action(context)
    if not is_action_enabled(action, opts):
        log_skipped(operation="load_resource", action=action)
        return context

    context = _load(context, action, opts, cfg)
    return _handle_not_found(context, action, opts, cfg)


def authorize_resource(context: C, options: Options, *, config: GateConfig | None = None) -> C:
    """Authorize the subject for the resolved action.

    Stores the outcome under ``assigns["authorized"]`` and dispatches the
    unauthorized handler when it is ``False``. The resource is looked up
    (or reused from assigns) but not stored.

    Example::

        ctx = authorize_resource(ctx, {"model": Post, "current_user": "admin"})
        ctx.assigns["authorized"]
    """
    opts = coerce_options(options)
    cfg = resolve_config(config)
    action = resolve_action(context)
    if not is_action_enabled(action, opts):
        log_skipped(operation="authorize_resource", action=action)
        return context

    context, _ = _authorize(context, action, opts, cfg)
    return context


def load_and_authorize_resource(
    context: C, options: Options, *, config: GateConfig | None = None
) -> C:
    """Load the resource, authorize it, then apply the not-found check.

    Ordering:

    1. Load (not-found handler held back).
    2. Authorize; the unauthorized handler runs immediately on denial.
    3. Unless a handler halted the context, run the not-found check.
    4. On denial, store ``None`` at the resource key.

    So when a resource is both missing and forbidden, the unauthorized
    handler runs first, and the not-found handler only runs if the
    unauthorized handler did not halt.

    Example::

        ctx = load_and_authorize_resource(ctx, {"model": Post})
        if ctx.assigns["authorized"]:
            render(ctx.assigns["post"])
    """
    opts = coerce_options(options)
    cfg = resolve_config(config)
    action = resolve_action(context)
    if not is_action_enabled(action, opts):
        log_skipped(operation="load_and_authorize_resource", action=action)
        return context

    context = _load(context, action, opts, cfg)
    context, authorized = _authorize(context, action, opts, cfg)
    if not context.halted:
        context = _handle_not_found(context, action, opts, cfg)
    if not authorized:
        context.assigns[derive_key(opts, action)] = None
    return context


def authorize_controller(
    context: C, options: Options | None = None, *, config: GateConfig | None = None
) -> C:
    """Authorize the subject for the action on the current controller.

    The target passed to the permission predicate is
    ``assigns["gate_controller"]`` when set, else ``context.controller``.
    No resource is loaded, so ``model`` is optional.

    Example::

        ctx = HttpContext(assigns={"current_user": u}, action="new", controller=PostController)
        ctx = authorize_controller(ctx)
    """
    opts = coerce_options(options, need_model=False)
    cfg = resolve_config(config)
    action = resolve_action(context)
    if not is_action_enabled(action, opts):
        log_skipped(operation="authorize_controller", action=action)
        return context

    subject = resolve_subject(context, opts, cfg)
    permission = _require_permission(cfg)
    controller = context.assigns.get(CONTROLLER_KEY)
    if controller is None:
        controller = getattr(context, "controller", None)

    authorized = permission(subject, action, controller)
    if cfg.log_decisions:
        log_decision(subject=subject, action=action, target=controller, authorized=authorized)

    context.assigns[AUTHORIZED_KEY] = authorized
    if not authorized:
        context = dispatch(context, "unauthorized_handler", opts, cfg)
    return context
