"""EventContext: the context of a stateful UI session event."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Literal

__all__ = ["EventContext", "Stage"]

Stage = Literal["handle_params", "handle_event"]


@dataclass(slots=True)
class EventContext:
    """Context for a lifecycle stage of a stateful UI session.

    The action is derived from the stage: the session's ``live_action``
    for parameter-driven entry, or the triggering event name for
    event-driven entry. A halted context tells the event loop to stop
    processing (see :class:`~sqla_gate.hooks.HookResult`).

    Example::

        ctx = EventContext.for_event("archive", {"id": "3"}, assigns={"current_user": u})
        ctx.framework_action  # "archive"
    """

    assigns: dict[str, Any] = field(default_factory=dict)
    params: Mapping[str, Any] = field(default_factory=dict)
    stage: Stage = "handle_params"
    live_action: str | None = None
    event: str | None = None
    redirected_to: str | None = None
    halted: bool = False

    @classmethod
    def for_params(
        cls,
        params: Mapping[str, Any],
        *,
        live_action: str | None,
        assigns: dict[str, Any] | None = None,
    ) -> EventContext:
        """Build a context for the ``handle_params`` stage."""
        return cls(
            assigns=assigns if assigns is not None else {},
            params=params,
            stage="handle_params",
            live_action=live_action,
        )

    @classmethod
    def for_event(
        cls,
        event: str,
        params: Mapping[str, Any],
        *,
        assigns: dict[str, Any] | None = None,
        live_action: str | None = None,
    ) -> EventContext:
        """Build a context for the ``handle_event`` stage."""
        return cls(
            assigns=assigns if assigns is not None else {},
            params=params,
            stage="handle_event",
            live_action=live_action,
            event=event,
        )

    @property
    def framework_action(self) -> str | None:
        if self.stage == "handle_event":
            return self.event
        return self.live_action

    def redirect(self, to: str) -> EventContext:
        """Redirect the session and halt the event loop."""
        self.redirected_to = to
        self.halted = True
        return self
