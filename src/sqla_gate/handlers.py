"""Built-in error handlers for not-found and unauthorized outcomes."""

from __future__ import annotations

from typing import Any

from sqla_gate.context._event import EventContext
from sqla_gate.context._http import HttpContext

__all__ = ["DefaultHandler", "StatusCodeHandler"]


class DefaultHandler:
    """The fallback handler used when nothing else is configured.

    HTTP contexts pass through unchanged, so the request continues with
    ``None`` at the resource key or ``authorized == False``. Event
    contexts are redirected to *redirect_to* and halted.

    Example::

        configure(error_handler=DefaultHandler(redirect_to="/login"))
    """

    def __init__(self, *, redirect_to: str = "/") -> None:
        self.redirect_to = redirect_to

    def not_found_handler(self, context: Any) -> Any:
        return self._fallback(context)

    def unauthorized_handler(self, context: Any) -> Any:
        return self._fallback(context)

    def _fallback(self, context: Any) -> Any:
        if isinstance(context, EventContext):
            return context.redirect(self.redirect_to)
        return context

    def __repr__(self) -> str:
        return f"{type(self).__name__}(redirect_to={self.redirect_to!r})"


class StatusCodeHandler(DefaultHandler):
    """Terminal handler that answers HTTP contexts with a status code.

    Not-found sends ``404``, unauthorized sends ``403``, each with a
    ``{"detail": ...}`` body. Event contexts behave as in
    :class:`DefaultHandler`. The Flask and FastAPI integrations use this
    handler unless another one is configured.
    """

    def not_found_handler(self, context: Any) -> Any:
        if isinstance(context, HttpContext):
            return context.send(404, {"detail": "Not found"})
        return self._fallback(context)

    def unauthorized_handler(self, context: Any) -> Any:
        if isinstance(context, HttpContext):
            return context.send(403, {"detail": "Forbidden"})
        return self._fallback(context)
