"""Import fixtures from sqla_gate.testing for test discovery."""

from sqla_gate.testing._fixtures import (
    gate_config,
    gate_handler,
    gate_permission,
    gate_repository,
    isolated_gate_state,
)

__all__ = [
    "gate_config",
    "gate_handler",
    "gate_permission",
    "gate_repository",
    "isolated_gate_state",
]
