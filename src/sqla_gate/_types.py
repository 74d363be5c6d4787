"""Shared protocols, subject types and type aliases for sqla-gate."""

from __future__ import annotations

from collections.abc import Callable, Mapping, MutableMapping, Sequence
from dataclasses import dataclass
from typing import Any, Literal, Protocol, Union, runtime_checkable

__all__ = [
    "ACTION_KEY",
    "AUTHORIZED_KEY",
    "CONTROLLER_KEY",
    "Anonymous",
    "Authenticated",
    "ContextLike",
    "ErrorHandler",
    "HandlerKind",
    "HandlerRef",
    "Permission",
    "Repository",
    "Subject",
    "as_subject",
]

# Assigns key holding the authorization outcome.
AUTHORIZED_KEY = "authorized"

# Assigns key that overrides the framework-derived action.
ACTION_KEY = "gate_action"

# Assigns key that overrides the framework-derived controller.
CONTROLLER_KEY = "gate_controller"

# Valid handler kinds for dispatch.
HandlerKind = Literal["not_found_handler", "unauthorized_handler"]


@runtime_checkable
class ContextLike(Protocol):
    """Structural type for request contexts.

    Both :class:`~sqla_gate.context.HttpContext` and
    :class:`~sqla_gate.context.EventContext` satisfy it. Any object with
    an ``assigns`` store, ``params``, a ``framework_action`` and a
    ``halted`` flag can be passed through the pipeline.
    """

    assigns: MutableMapping[str, Any]
    params: Mapping[str, Any]
    halted: bool

    @property
    def framework_action(self) -> str | None: ...


@runtime_checkable
class Repository(Protocol):
    """Storage collaborator used to fetch resources.

    Example::

        class PostRepo:
            def get_by(self, model, fields):
                return POSTS.get(fields["id"])

            def get_all(self, model):
                return list(POSTS.values())

            def preload(self, resource, spec):
                return resource
    """

    def get_by(self, model: type, fields: Mapping[str, Any]) -> Any | None: ...

    def get_all(self, model: type) -> Sequence[Any]: ...

    def preload(self, resource: Any, spec: Any) -> Any: ...


@dataclass(frozen=True, slots=True)
class Authenticated:
    """A subject backed by a real actor (usually the current user)."""

    actor: Any


@dataclass(frozen=True, slots=True)
class Anonymous:
    """A subject with no actor. All instances compare equal."""


Subject = Union[Authenticated, Anonymous]


def as_subject(value: Any) -> Subject:
    """Wrap a raw assigns value into a :data:`Subject`.

    ``None`` becomes ``Anonymous()``; anything else is ``Authenticated``.
    Values that already are subjects are returned unchanged.

    Example::

        as_subject(None)        # Anonymous()
        as_subject(user)        # Authenticated(actor=user)
    """
    if isinstance(value, (Authenticated, Anonymous)):
        return value
    if value is None:
        return Anonymous()
    return Authenticated(value)


class Permission(Protocol):
    """The permission predicate supplied by the embedding application.

    Receives the subject, the action name, and either a resource instance
    (possibly ``None``) or a bare model class for non-id actions.

    Example::

        def can(subject: Subject, action: str, target: object) -> bool:
            if isinstance(subject, Anonymous):
                return False
            if target is Post:
                return action in ("index", "new", "create")
            return isinstance(target, Post) and target.user_id == subject.actor.id
    """

    def __call__(self, subject: Subject, action: str, target: Any) -> bool: ...


@runtime_checkable
class ErrorHandler(Protocol):
    """Handler capability for domain failures.

    Each method receives the context and returns the context the pipeline
    should continue with. Handlers mark the context terminal (``send`` on
    HTTP contexts, ``redirect`` on event contexts) to stop further
    handlers in the same call.
    """

    def not_found_handler(self, context: Any) -> Any: ...

    def unauthorized_handler(self, context: Any) -> Any: ...


# A handler reference: a callable, an ErrorHandler, or a (target, "name") pair.
HandlerRef = Union[Callable[[Any], Any], ErrorHandler, tuple[Any, str]]
