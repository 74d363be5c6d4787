"""Helpers shared by the framework integrations."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from sqla_gate.config._config import GateConfig, resolve_config
from sqla_gate.exceptions import ConfigurationError
from sqla_gate.handlers import DefaultHandler, StatusCodeHandler
from sqla_gate.pipeline._orchestrator import (
    authorize_controller,
    authorize_resource,
    load_and_authorize_resource,
    load_resource,
)

__all__ = ["OPERATIONS", "get_operation", "web_config"]

OPERATIONS: dict[str, Callable[..., Any]] = {
    "load_resource": load_resource,
    "authorize_resource": authorize_resource,
    "load_and_authorize_resource": load_and_authorize_resource,
    "authorize_controller": authorize_controller,
}


def get_operation(name: str) -> Callable[..., Any]:
    """Return the pipeline operation called *name*.

    Raises:
        ConfigurationError: If *name* is not a pipeline operation.
    """
    try:
        return OPERATIONS[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown operation {name!r}; expected one of {sorted(OPERATIONS)}"
        ) from None


def web_config(config: GateConfig | None) -> GateConfig:
    """Resolve *config*, answering HTTP contexts with 404/403 by default.

    A config still using the plain :class:`DefaultHandler` gets a
    :class:`StatusCodeHandler` with the same redirect target, so a
    denied request never reaches the view.
    """
    cfg = resolve_config(config)
    handler = cfg.error_handler
    if type(handler) is DefaultHandler:
        cfg = cfg.merge(error_handler=StatusCodeHandler(redirect_to=handler.redirect_to))
    return cfg
