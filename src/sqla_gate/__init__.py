"""sqla-gate: load and authorize resources for request handlers.

Given a request context, resolves which persisted resource the request
concerns, asks a permission predicate whether the current user may act
on it, and routes "not found" and "unauthorized" outcomes to handlers.

Example::

    from sqla_gate import HttpContext, configure, load_and_authorize_resource
    from sqla_gate.repository import SQLAlchemyRepository

    def can(subject, action, target):
        if target is Post:
            return action in ("index", "new", "create")
        return target is not None and target.user_id == subject.actor.id

    configure(repository=SQLAlchemyRepository(session), permission=can)

    ctx = HttpContext(assigns={"current_user": user}, params={"id": "7"}, action="show")
    ctx = load_and_authorize_resource(ctx, {"model": Post})
    ctx.assigns["post"], ctx.assigns["authorized"]
"""

from importlib.metadata import PackageNotFoundError, version

from sqla_gate._types import (
    AUTHORIZED_KEY,
    Anonymous,
    Authenticated,
    ContextLike,
    ErrorHandler,
    Permission,
    Repository,
    Subject,
    as_subject,
)
from sqla_gate.config._config import GateConfig, configure, get_global_config
from sqla_gate.config._options import ResourceOptions
from sqla_gate.context import EventContext, HttpContext
from sqla_gate.exceptions import (
    ConfigurationError,
    GateError,
    InvalidHandlerError,
    MissingSubjectError,
)
from sqla_gate.handlers import DefaultHandler, StatusCodeHandler
from sqla_gate.pipeline import (
    authorize_controller,
    authorize_resource,
    load_and_authorize_resource,
    load_resource,
)

try:
    __version__ = version("sqla-gate")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = [
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
]
