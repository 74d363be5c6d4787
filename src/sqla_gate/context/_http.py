"""HttpContext: the blocking request/response context."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

__all__ = ["HttpContext"]


@dataclass(slots=True)
class HttpContext:
    """Request context for HTTP-style middleware chains.

    Execution continues after a handler runs unless the handler calls
    :meth:`send`, which marks the response as sent and stops any further
    handler in the same pipeline call.

    Attributes:
        assigns: Attribute store shared with the application (subject,
            loaded resources, ``authorized``).
        params: Merged path and query parameters.
        action: Route-derived action name (e.g. ``"show"``).
        controller: Route-derived controller, used by
            ``authorize_controller``.
        status: Response status once sent.
        body: Response body once sent.
        halted: ``True`` once a response has been sent.

    Example::

        ctx = HttpContext(
            assigns={"current_user": user},
            params={"id": "1"},
            action="show",
        )
        ctx = load_and_authorize_resource(ctx, {"model": Post})
        ctx.assigns["post"]
    """

    assigns: dict[str, Any] = field(default_factory=dict)
    params: Mapping[str, Any] = field(default_factory=dict)
    action: str | None = None
    controller: Any = None
    status: int | None = None
    body: Any = None
    halted: bool = False

    @property
    def framework_action(self) -> str | None:
        return self.action

    def assign(self, key: str, value: Any) -> HttpContext:
        """Store *value* under *key* and return the context for chaining."""
        self.assigns[key] = value
        return self

    def send(self, status: int, body: Any = None) -> HttpContext:
        """Record the response and mark the context as terminal."""
        self.status = status
        self.body = body
        self.halted = True
        return self
