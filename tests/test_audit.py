"""Tests for audit logging."""

from __future__ import annotations

import logging

import pytest

from sqla_gate._audit import log_decision, log_skipped
from sqla_gate._types import Anonymous, Authenticated
from sqla_gate.config._config import GateConfig, configure
from sqla_gate.pipeline._orchestrator import authorize_resource, load_resource
from sqla_gate.testing import InMemoryRepository
from tests.conftest import Post, User, can, http


class TestAuditLogging:
    """Tests for audit log output from authorization decisions."""

    def test_logging_disabled_by_default(
        self, caplog: pytest.LogCaptureFixture, config: GateConfig, user: User
    ) -> None:
        """No decision records when log_decisions is False (default)."""
        with caplog.at_level(logging.DEBUG, logger="sqla_gate"):
            authorize_resource(http("index", current_user=user), {"model": Post}, config=config)

        assert [r for r in caplog.records if r.levelno >= logging.INFO] == []

    def test_info_level_summary(self, caplog: pytest.LogCaptureFixture, user: User) -> None:
        """INFO level logs subject, action, target and outcome."""
        configure(repository=InMemoryRepository(), permission=can, log_decisions=True)

        with caplog.at_level(logging.INFO, logger="sqla_gate"):
            authorize_resource(http("index", current_user=user), {"model": Post})

        info_records = [r for r in caplog.records if r.levelno == logging.INFO]
        assert len(info_records) == 1
        msg = info_records[0].message
        assert "granted" in msg
        assert "index" in msg
        assert "Post" in msg

    def test_denied_summary(self, caplog: pytest.LogCaptureFixture) -> None:
        configure(repository=InMemoryRepository(), permission=can, log_decisions=True)

        with caplog.at_level(logging.INFO, logger="sqla_gate"):
            authorize_resource(http("index", current_user=None), {"model": Post})

        msg = caplog.records[0].message
        assert "denied" in msg
        assert "may not" in msg
        assert "Anonymous" in msg

    def test_debug_level_details(self, caplog: pytest.LogCaptureFixture, user: User) -> None:
        """DEBUG level logs the assigns key."""
        configure(repository=InMemoryRepository(), permission=can, log_decisions=True)

        with caplog.at_level(logging.DEBUG, logger="sqla_gate"):
            authorize_resource(http("index", current_user=user), {"model": Post})

        debug_records = [r for r in caplog.records if r.levelno == logging.DEBUG]
        assert any("key='posts'" in r.message for r in debug_records)

    def test_skipped_operation_logged(self, caplog: pytest.LogCaptureFixture, config: GateConfig) -> None:
        with caplog.at_level(logging.DEBUG, logger="sqla_gate"):
            load_resource(http("show"), {"model": Post, "except": "show"}, config=config)

        assert len(caplog.records) == 1
        assert "Skipping load_resource" in caplog.records[0].message


class TestLogFunctions:
    def test_log_decision_instance_target(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="sqla_gate"):
            log_decision(
                subject=Authenticated(User(id=1)),
                action="show",
                target=Post(id=1, user_id=1),
                authorized=True,
            )
        assert "Post instance" in caplog.records[0].message

    def test_log_decision_none_target(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="sqla_gate"):
            log_decision(subject=Anonymous(), action="show", target=None, authorized=False)
        assert caplog.records[0].message.endswith("show None")

    def test_log_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="sqla_gate"):
            log_skipped(operation="authorize_resource", action="index")
        assert "'index'" in caplog.records[0].message
