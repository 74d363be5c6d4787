"""Tests for public API surface: verifies the ``__init__.py`` re-exports.

Every documented symbol must be importable from its package, and every
``__all__`` list must match the attributes the module actually has.
"""

from __future__ import annotations

import importlib

import pytest

PACKAGES = {
    "sqla_gate": {
        "__version__",
        "AUTHORIZED_KEY",
        "Anonymous",
        "Authenticated",
        "ConfigurationError",
        "ContextLike",
        "DefaultHandler",
        "ErrorHandler",
        "EventContext",
        "GateConfig",
        "GateError",
        "HttpContext",
        "InvalidHandlerError",
        "MissingSubjectError",
        "Permission",
        "Repository",
        "ResourceOptions",
        "StatusCodeHandler",
        "Subject",
        "as_subject",
        "authorize_controller",
        "authorize_resource",
        "configure",
        "get_global_config",
        "load_and_authorize_resource",
        "load_resource",
    },
    "sqla_gate.config": {
        "GateConfig",
        "ResourceOptions",
        "coerce_options",
        "configure",
        "get_global_config",
        "validate_options",
    },
    "sqla_gate.context": {"EventContext", "HttpContext", "Stage"},
    "sqla_gate.hooks": {"STAGES", "Hook", "HookResult", "mount", "run_hooks"},
    "sqla_gate.repository": {"SQLAlchemyRepository"},
    "sqla_gate.pipeline": {
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
    },
    "sqla_gate.testing": {
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
    },
    "sqla_gate.integrations.flask": {"GateExtension"},
    "sqla_gate.integrations.fastapi": {"GateDep", "get_actor", "get_repository"},
}


@pytest.mark.parametrize("package", sorted(PACKAGES))
class TestExports:
    def test_all_matches_expected(self, package: str) -> None:
        module = importlib.import_module(package)
        assert set(module.__all__) == PACKAGES[package]

    def test_every_name_resolves(self, package: str) -> None:
        module = importlib.import_module(package)
        missing = [name for name in module.__all__ if not hasattr(module, name)]
        assert missing == []


class TestTopLevel:
    def test_version_is_a_string(self) -> None:
        import sqla_gate

        assert isinstance(sqla_gate.__version__, str)

    def test_operations_are_shared_with_pipeline(self) -> None:
        import sqla_gate
        from sqla_gate import pipeline

        assert sqla_gate.load_and_authorize_resource is pipeline.load_and_authorize_resource
        assert sqla_gate.authorize_controller is pipeline.authorize_controller

    def test_integrations_export_nothing_eagerly(self) -> None:
        from sqla_gate import integrations

        assert integrations.__all__ == []
