"""Authorization decision, delegated to the permission predicate."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqla_gate._audit import log_decision
from sqla_gate._types import ContextLike, Permission, Subject, as_subject
from sqla_gate.config._config import GateConfig, resolve_config
from sqla_gate.config._options import ResourceOptions, coerce_options
from sqla_gate.exceptions import ConfigurationError, MissingSubjectError
from sqla_gate.pipeline._actions import is_non_id_action
from sqla_gate.pipeline._loader import load_one
from sqla_gate.pipeline._naming import derive_key

__all__ = ["decide", "resolve_subject"]


def resolve_subject(
    context: ContextLike,
    options: ResourceOptions,
    config: GateConfig,
) -> Subject:
    """Read the acting subject from the context's assigns.

    The key comes from ``options.current_user``, then
    ``config.current_user``. A key holding ``None`` is an anonymous
    subject; a missing key is a configuration error.

    Raises:
        MissingSubjectError: If the key is absent from ``assigns``.
    """
    key = options.current_user or config.current_user
    if key not in context.assigns:
        raise MissingSubjectError(key=key, available=sorted(context.assigns))
    return as_subject(context.assigns[key])


def _require_permission(config: GateConfig) -> Permission:
    if config.permission is None:
        raise ConfigurationError(
            "No permission predicate configured. Call configure(permission=...) "
            "or pass config=GateConfig(permission=...)"
        )
    return config.permission


def decide(
    context: ContextLike,
    action: str,
    options: ResourceOptions | Mapping[str, Any],
    *,
    config: GateConfig | None = None,
) -> bool:
    """Compute whether the subject may perform *action*.

    The target passed to the permission predicate is:

    - the loaded instance (``None`` included) when a single instance is
      required (``required=True`` or ``persisted=True``);
    - the bare model class for non-id actions (``index``, ``new``,
      ``create`` and any ``non_id_actions``);
    - the loaded instance otherwise.

    The predicate result is returned verbatim. Predicate and storage
    exceptions propagate.

    Raises:
        MissingSubjectError: If the subject key is absent.
        ConfigurationError: If no permission predicate is configured.

    Example::

        allowed = decide(ctx, "show", {"model": Post}, config=cfg)
    """
    opts = coerce_options(options)
    cfg = resolve_config(config)
    subject = resolve_subject(context, opts, cfg)
    permission = _require_permission(cfg)

    target: Any
    if opts.single_instance:
        target = load_one(context, opts, action=action, config=cfg)
    elif is_non_id_action(action, opts):
        target = opts.model
    else:
        target = load_one(context, opts, action=action, config=cfg)

    authorized = permission(subject, action, target)

    if cfg.log_decisions:
        log_decision(
            subject=subject,
            action=action,
            target=target,
            authorized=authorized,
            key=derive_key(opts, action),
        )
    return authorized
