"""Audit logging for authorization decisions and handler dispatch."""

from __future__ import annotations

import logging
from typing import Any

from sqla_gate._types import Subject

__all__ = ["log_decision", "log_handler_dispatch", "log_skipped"]

logger = logging.getLogger("sqla_gate")


def _describe_target(target: Any) -> str:
    if isinstance(target, type):
        return target.__name__
    if target is None:
        return "None"
    return f"{type(target).__name__} instance"


def log_decision(
    *,
    subject: Subject,
    action: str,
    target: Any,
    authorized: bool,
    key: str | None = None,
) -> None:
    """Log an authorization decision.

    Logging levels:
    - INFO: Summary (subject, action, target, outcome)
    - DEBUG: The assigns key and the exact target value

    Only called when ``GateConfig.log_decisions`` is enabled.

    Example::

        log_decision(
            subject=Authenticated(user),
            action="show",
            target=post,
            authorized=True,
            key="post",
        )
    """
    logger.info(
        "Authorization %s: %r may%s %s %s",
        "granted" if authorized else "denied",
        subject,
        "" if authorized else " not",
        action,
        _describe_target(target),
    )

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Decision detail for %s: key=%r target=%r",
            action,
            key,
            target,
        )


def log_handler_dispatch(*, kind: str, handler: Any, action: str | None) -> None:
    """Log that a not-found or unauthorized handler is about to run.

    Each dispatch goes to the ``sqla_gate.handlers`` sub-logger so
    operators can enable it on its own.
    """
    handler_logger = logging.getLogger("sqla_gate.handlers")
    handler_logger.debug(
        "Dispatching %s for action %r to %s",
        kind,
        action,
        getattr(handler, "__qualname__", None) or repr(handler),
    )


def log_skipped(*, operation: str, action: str) -> None:
    """Log that the action filter disabled *operation* for *action*."""
    logger.debug("Skipping %s for action %r (filtered by only/except)", operation, action)
