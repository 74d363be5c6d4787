"""Error handler resolution and dispatch."""

from __future__ import annotations

import inspect
from collections.abc import Callable, Mapping
from typing import Any

from sqla_gate._audit import log_handler_dispatch
from sqla_gate._types import ACTION_KEY, ContextLike, HandlerKind
from sqla_gate.config._config import GateConfig, resolve_config
from sqla_gate.config._options import ResourceOptions, coerce_options
from sqla_gate.exceptions import InvalidHandlerError

__all__ = ["HANDLER_KINDS", "dispatch", "resolve_handler"]

HANDLER_KINDS: frozenset[str] = frozenset({"not_found_handler", "unauthorized_handler"})


def _class_attribute(cls: type, name: str, ref: Any, kind: str) -> Callable[[Any], Any]:
    # Only static and class methods can be called without an instance.
    raw = inspect.getattr_static(cls, name)
    if not isinstance(raw, (staticmethod, classmethod)):
        raise InvalidHandlerError(
            handler=ref,
            kind=kind,
            message=(
                f"Handler class {cls.__name__} defines {name!r} as an instance method; "
                f"pass an instance or make it a staticmethod or classmethod"
            ),
        )
    return getattr(cls, name)


def _to_callable(ref: Any, kind: str) -> Callable[[Any], Any]:
    if isinstance(ref, tuple):
        if len(ref) != 2 or not isinstance(ref[1], str):
            raise InvalidHandlerError(handler=ref, kind=kind)
        target, name = ref
        fn = getattr(target, name, None)
        if not callable(fn):
            raise InvalidHandlerError(
                handler=ref,
                kind=kind,
                message=f"Handler {target!r} has no callable attribute {name!r}",
            )
        if isinstance(target, type):
            return _class_attribute(target, name, ref, kind)
        return fn

    method = getattr(ref, kind, None)
    if callable(method):
        if isinstance(ref, type):
            return _class_attribute(ref, kind, ref, kind)
        return method
    if callable(ref) and not isinstance(ref, type):
        return ref
    raise InvalidHandlerError(handler=ref, kind=kind)


def _unwrap_result(result: Any, context: Any, handler: Any, kind: str) -> Any:
    """Turn a handler's return value into the context to continue with.

    ``None`` keeps *context*. A ``("halt" | "cont", context)`` pair (a
    ``HookResult`` included) is unwrapped, and ``"halt"`` marks the
    context terminal. Anything that is not a context is rejected.
    """
    signal = "cont"
    if isinstance(result, tuple):
        if len(result) != 2 or result[0] not in ("halt", "cont"):
            raise InvalidHandlerError(
                handler=handler,
                kind=kind,
                message=(
                    f"{kind} returned {result!r}; "
                    f"expected a context or a ('halt'|'cont', context) pair"
                ),
            )
        signal, result = result
    if result is None:
        result = context
    if not isinstance(result, ContextLike):
        raise InvalidHandlerError(
            handler=handler,
            kind=kind,
            message=f"{kind} returned {result!r}; expected a context",
        )
    if signal == "halt":
        result.halted = True
    return result


def resolve_handler(
    kind: HandlerKind,
    options: ResourceOptions,
    config: GateConfig,
) -> Callable[[Any], Any]:
    """Resolve the handler function for *kind*.

    Resolution order:

    1. ``options.<kind>`` (per call)
    2. ``config.<kind>`` (global binding)
    3. ``config.error_handler.<kind>`` (fallback handler object)

    A reference may be a ``(target, "function_name")`` pair, an object
    or module exposing a method named *kind*, a class exposing it as a
    static or class method, or a plain callable.

    Raises:
        InvalidHandlerError: If the reference cannot be called.

    Example::

        fn = resolve_handler("not_found_handler", opts, get_global_config())
        ctx = fn(ctx)
    """
    if kind not in HANDLER_KINDS:
        raise InvalidHandlerError(
            handler=kind,
            kind=str(kind),
            message=f"Unknown handler kind {kind!r}; expected one of {sorted(HANDLER_KINDS)}",
        )

    ref = getattr(options, kind)
    if ref is None:
        ref = getattr(config, kind)
    if ref is None:
        ref = config.error_handler
    return _to_callable(ref, kind)


def dispatch(
    context: ContextLike,
    kind: HandlerKind,
    options: ResourceOptions | Mapping[str, Any],
    config: GateConfig | None = None,
) -> Any:
    """Invoke exactly one handler of *kind* and return its context.

    A handler returning ``None`` is taken to have mutated the context in
    place; the original context is returned in that case. A terminal
    handler may also return ``("halt", context)``, which halts the
    returned context.

    Raises:
        InvalidHandlerError: If the handler returns something that is
            neither a context nor a ``("halt"|"cont", context)`` pair.

    Example::

        ctx = dispatch(ctx, "unauthorized_handler", opts)
    """
    opts = coerce_options(options, need_model=False)
    cfg = resolve_config(config)
    handler = resolve_handler(kind, opts, cfg)
    log_handler_dispatch(
        kind=kind,
        handler=handler,
        action=context.assigns.get(ACTION_KEY) or context.framework_action,
    )
    return _unwrap_result(handler(context), context, handler, kind)
