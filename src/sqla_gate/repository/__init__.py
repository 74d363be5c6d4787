"""Storage collaborators for the resource loader."""

from __future__ import annotations

from sqla_gate.repository._sqlalchemy import SQLAlchemyRepository

__all__ = ["SQLAlchemyRepository"]
