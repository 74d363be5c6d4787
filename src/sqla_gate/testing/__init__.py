"""sqla-gate testing utilities: fakes, assertions, and fixtures.

Provides test helpers for code that runs the gate pipeline:

- **Fakes**: ``InMemoryRepository``, ``FailingRepository``,
  ``RecordingPermission``, ``RecordingHandler``.
- **Actors**: ``MockUser``, ``make_admin``, ``make_user``.
- **Assertion helpers**: ``assert_authorized``, ``assert_denied``,
  ``assert_loaded``.
- **Fixtures**: ``gate_repository``, ``gate_permission``,
  ``gate_handler``, ``gate_config``, ``isolated_gate_state``.

Example::

    from sqla_gate.testing import InMemoryRepository, assert_loaded

    def test_show(gate_config, gate_repository):
        gate_repository.add(Post(id=1, user_id=1))
        ctx = load_resource(HttpContext(params={"id": "1"}, action="show"),
                            {"model": Post}, config=gate_config)
        assert_loaded(ctx, "post")
"""

from sqla_gate.testing._actors import MockUser, make_admin, make_user
from sqla_gate.testing._assertions import assert_authorized, assert_denied, assert_loaded
from sqla_gate.testing._fakes import (
    FailingRepository,
    InMemoryRepository,
    RecordingHandler,
    RecordingPermission,
)
from sqla_gate.testing._fixtures import (
    gate_config,
    gate_handler,
    gate_permission,
    gate_repository,
    isolated_gate_state,
)
from sqla_gate.testing._isolation import isolated_gate

__all__ = [
    "FailingRepository",
    "InMemoryRepository",
    "MockUser",
    "RecordingHandler",
    "RecordingPermission",
    "assert_authorized",
    "assert_denied",
    "assert_loaded",
    "gate_config",
    "gate_handler",
    "gate_permission",
    "gate_repository",
    "isolated_gate",
    "isolated_gate_state",
    "make_admin",
    "make_user",
]
