"""Process-wide defaults for sqla-gate (the lowest configuration tier)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from sqla_gate._types import HandlerRef, Permission, Repository
from sqla_gate.handlers import DefaultHandler

__all__ = [
    "GateConfig",
    "configure",
    "get_global_config",
    "resolve_config",
    "_reset_global_config",
    "_set_global_config",
]


@dataclass(frozen=True, slots=True)
class GateConfig:
    """Global defaults injected into every pipeline call.

    Per-call :class:`~sqla_gate.config.ResourceOptions` take precedence
    over these values for the subject key and the handler bindings.

    Attributes:
        repository: Storage collaborator used to fetch resources.
        permission: Predicate ``(subject, action, target) -> bool``.
        current_user: Assigns key holding the acting subject.
        error_handler: Fallback :class:`~sqla_gate._types.ErrorHandler`.
        not_found_handler: Global not-found handler reference.
        unauthorized_handler: Global unauthorized handler reference.
        log_decisions: Emit INFO records for authorization decisions.

    Example::

        config = GateConfig(repository=repo, permission=can)
        per_request = config.merge(repository=SQLAlchemyRepository(session))
    """

    repository: Repository | None = None
    permission: Permission | None = None
    current_user: str = "current_user"
    error_handler: Any = field(default_factory=DefaultHandler)
    not_found_handler: HandlerRef | None = None
    unauthorized_handler: HandlerRef | None = None
    log_decisions: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.current_user, str) or not self.current_user:
            raise ValueError(
                f"current_user must be a non-empty string, got {self.current_user!r}"
            )

    def merge(
        self,
        *,
        repository: Repository | None = None,
        permission: Permission | None = None,
        current_user: str | None = None,
        error_handler: Any = None,
        not_found_handler: HandlerRef | None = None,
        unauthorized_handler: HandlerRef | None = None,
        log_decisions: bool | None = None,
    ) -> GateConfig:
        """Return a new config with non-None overrides applied.

        Example::

            base = GateConfig()
            request_cfg = base.merge(repository=SQLAlchemyRepository(session))
        """
        return GateConfig(
            repository=repository if repository is not None else self.repository,
            permission=permission if permission is not None else self.permission,
            current_user=current_user if current_user is not None else self.current_user,
            error_handler=error_handler if error_handler is not None else self.error_handler,
            not_found_handler=(
                not_found_handler if not_found_handler is not None else self.not_found_handler
            ),
            unauthorized_handler=(
                unauthorized_handler
                if unauthorized_handler is not None
                else self.unauthorized_handler
            ),
            log_decisions=log_decisions if log_decisions is not None else self.log_decisions,
        )


# ---------------------------------------------------------------------------
# Global configuration singleton
# ---------------------------------------------------------------------------

_global_config = GateConfig()


def get_global_config() -> GateConfig:
    """Return the current global configuration.

    Example::

        config = get_global_config()
        print(config.current_user)  # "current_user"
    """
    return _global_config


def resolve_config(config: GateConfig | None) -> GateConfig:
    """Return *config*, or the global configuration when it is ``None``."""
    return config if config is not None else _global_config


def configure(
    *,
    repository: Repository | None = None,
    permission: Permission | None = None,
    current_user: str | None = None,
    error_handler: Any = None,
    not_found_handler: HandlerRef | None = None,
    unauthorized_handler: HandlerRef | None = None,
    log_decisions: bool | None = None,
) -> GateConfig:
    """Update the global configuration by merging overrides.

    Only non-None values are applied. Meant to be called once during
    application setup, not while requests are being served.

    Args:
        repository: Storage collaborator.
        permission: Permission predicate.
        current_user: Assigns key holding the subject.
        error_handler: Fallback error handler object.
        not_found_handler: Global not-found handler reference.
        unauthorized_handler: Global unauthorized handler reference.
        log_decisions: Enable/disable INFO logging of decisions.

    Returns:
        The updated global ``GateConfig``.

    Example::

        configure(repository=repo, permission=can, current_user="user")
    """
    global _global_config
    _global_config = _global_config.merge(
        repository=repository,
        permission=permission,
        current_user=current_user,
        error_handler=error_handler,
        not_found_handler=not_found_handler,
        unauthorized_handler=unauthorized_handler,
        log_decisions=log_decisions,
    )
    return _global_config


def _set_global_config(cfg: GateConfig) -> None:
    """Replace global config with an exact snapshot. For testing only."""
    global _global_config
    _global_config = cfg


def _reset_global_config() -> None:
    """Reset global config to defaults. For testing only."""
    global _global_config
    _global_config = GateConfig()
