"""Shared test fixtures for sqla-gate tests."""

from __future__ import annotations

from collections.abc import Generator
from dataclasses import dataclass
from typing import Any

import pytest

from sqla_gate._types import Anonymous, Subject
from sqla_gate.config._config import GateConfig
from sqla_gate.context import EventContext, HttpContext
from sqla_gate.testing._fakes import InMemoryRepository, RecordingHandler
from sqla_gate.testing._isolation import isolated_gate

# ---------------------------------------------------------------------------
# Test models
# ---------------------------------------------------------------------------


@dataclass
class User:
    id: int
    name: str = "user"


@dataclass
class Post:
    id: int
    user_id: int
    title: str = "post"


@dataclass
class Comment:
    id: int
    post_id: int


class HTTPRequestLog:
    """Model with an acronym in its name, for key derivation."""


# ---------------------------------------------------------------------------
# Permission predicate
# ---------------------------------------------------------------------------


def can(subject: Subject, action: str, target: Any) -> bool:
    """Owners may act on their own posts; any user may list and create."""
    if isinstance(subject, Anonymous):
        return False
    if target is Post:
        return action in ("index", "new", "create")
    if isinstance(target, Post):
        return target.user_id == subject.actor.id
    return False


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _isolated_global_config() -> Generator[GateConfig, None, None]:
    """Every test starts from the default global config."""
    with isolated_gate() as cfg:
        yield cfg


@pytest.fixture()
def user() -> User:
    return User(id=1, name="Alice")


@pytest.fixture()
def posts() -> list[Post]:
    return [Post(id=1, user_id=1, title="Mine"), Post(id=2, user_id=2, title="Theirs")]


@pytest.fixture()
def repository(posts: list[Post]) -> InMemoryRepository:
    return InMemoryRepository(posts)


@pytest.fixture()
def handler() -> RecordingHandler:
    return RecordingHandler()


@pytest.fixture()
def config(repository: InMemoryRepository, handler: RecordingHandler) -> GateConfig:
    return GateConfig(repository=repository, permission=can, error_handler=handler)


def http(
    action: str | None,
    params: dict[str, Any] | None = None,
    **assigns: Any,
) -> HttpContext:
    """Build an ``HttpContext`` for *action*."""
    return HttpContext(assigns=dict(assigns), params=params or {}, action=action)


def event(name: str, params: dict[str, Any] | None = None, **assigns: Any) -> EventContext:
    """Build an ``EventContext`` for the ``handle_event`` stage."""
    return EventContext.for_event(name, params or {}, assigns=dict(assigns))
