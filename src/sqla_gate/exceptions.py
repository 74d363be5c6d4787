"""Exception hierarchy for sqla-gate.

Only programmer errors are exceptions. A missing resource or a denied
subject is a domain outcome routed to the configured handlers instead.
"""

from __future__ import annotations

__all__ = [
    "ConfigurationError",
    "GateError",
    "InvalidHandlerError",
    "MissingSubjectError",
]


class GateError(Exception):
    """Base exception for all sqla-gate errors."""


class ConfigurationError(GateError, ValueError):
    """The embedding application misconfigured a pipeline call.

    Raised for mutually exclusive ``only``/``except`` options, a missing
    ``model``, an unknown option key, or a missing repository or
    permission predicate.

    Example::

        load_resource(ctx, {"model": Post, "only": "show", "except": "index"})
        # ConfigurationError: You can't use both only and except options
    """


class MissingSubjectError(ConfigurationError):
    """The assigns store has no entry under the subject key.

    This is distinct from an anonymous subject: a key holding ``None`` is
    a valid anonymous subject, a missing key is a configuration error.

    Attributes:
        key: The assigns key that was looked up.
    """

    def __init__(self, *, key: str, available: list[str] | None = None) -> None:
        self.key = key
        self.available = available or []
        super().__init__(
            f"Subject key {key!r} not found in assigns (available: {self.available!r})"
        )


class InvalidHandlerError(ConfigurationError):
    """A handler reference could not be resolved to a callable.

    Attributes:
        handler: The offending reference.
        kind: The handler kind being resolved.
    """

    def __init__(self, *, handler: object, kind: str, message: str | None = None) -> None:
        self.handler = handler
        self.kind = kind
        if message is None:
            message = (
                f"Invalid {kind}: expected a callable, an object with a {kind!r} "
                f"method, or a (target, 'function_name') pair, got: {handler!r}"
            )
        super().__init__(message)
