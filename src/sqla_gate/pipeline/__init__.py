"""The resolve -> load/authorize -> merge pipeline."""

from __future__ import annotations

from sqla_gate.pipeline._actions import (
    NON_ID_ACTIONS,
    is_action_enabled,
    is_non_id_action,
    requires_resource,
    resolve_action,
)
from sqla_gate.pipeline._decider import decide, resolve_subject
from sqla_gate.pipeline._handlers import dispatch, resolve_handler
from sqla_gate.pipeline._loader import get_resource_id, load_all, load_one
from sqla_gate.pipeline._naming import derive_key, underscore
from sqla_gate.pipeline._orchestrator import (
    authorize_controller,
    authorize_resource,
    load_and_authorize_resource,
    load_resource,
)

__all__ = [
    "NON_ID_ACTIONS",
    "authorize_controller",
    "authorize_resource",
    "decide",
    "derive_key",
    "dispatch",
    "get_resource_id",
    "is_action_enabled",
    "is_non_id_action",
    "load_all",
    "load_and_authorize_resource",
    "load_one",
    "load_resource",
    "requires_resource",
    "resolve_action",
    "resolve_handler",
    "resolve_subject",
    "underscore",
]
