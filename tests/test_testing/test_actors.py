"""Tests for sqla_gate.testing._actors."""

from __future__ import annotations

import pytest

from sqla_gate.testing import MockUser, make_admin, make_user


class TestMockUser:
    def test_defaults(self) -> None:
        assert MockUser(id=1).role == "viewer"

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            MockUser(id=1).role = "admin"  # type: ignore[misc]

    def test_make_admin(self) -> None:
        assert make_admin() == MockUser(id=1, role="admin")

    def test_make_user(self) -> None:
        assert make_user(id=5, role="editor") == MockUser(id=5, role="editor")
