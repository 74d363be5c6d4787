"""Resource loading for single records and full collections."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, cast

from sqla_gate._types import ContextLike, Repository
from sqla_gate.config._config import GateConfig, resolve_config
from sqla_gate.config._options import ResourceOptions, coerce_options
from sqla_gate.exceptions import ConfigurationError
from sqla_gate.pipeline._actions import resolve_action
from sqla_gate.pipeline._naming import derive_key

__all__ = ["get_resource_id", "load_all", "load_one"]


def get_resource_id(params: Mapping[str, Any], options: ResourceOptions) -> Any:
    """Return the identity value from *params*, or ``None``.

    Example::

        get_resource_id({"id": "9"}, ResourceOptions(model=Post))  # "9"
        get_resource_id({"slug": "a"}, ResourceOptions(model=Post, id_name="slug"))  # "a"
    """
    return params.get(options.id_name)


def _require_repository(config: GateConfig) -> Repository:
    if config.repository is None:
        raise ConfigurationError(
            "No repository configured. Call configure(repository=...) "
            "or pass config=GateConfig(repository=...)"
        )
    return config.repository


def _preload(repository: Repository, loaded: Any, options: ResourceOptions) -> Any:
    if loaded is None or options.preload is None:
        return loaded
    return repository.preload(loaded, options.preload)


def _is_loaded_collection(value: Any, model: type) -> bool:
    # An empty collection is treated as "not loaded yet".
    if not isinstance(value, Sequence) or isinstance(value, (str, bytes)):
        return False
    return len(value) > 0 and isinstance(value[0], model)


def load_one(
    context: ContextLike,
    options: ResourceOptions | Mapping[str, Any],
    *,
    action: str | None = None,
    config: GateConfig | None = None,
) -> Any | None:
    """Return the single resource the request concerns.

    A value already stored at the derived key that is an instance of
    ``model`` is returned as is: it is neither reloaded nor re-preloaded.
    Anything else (missing, ``None``, another type) is replaced by a
    ``get_by`` lookup on ``{id_field: params[id_name]}``.

    Args:
        context: The request context.
        options: Per-call options (``model`` is required).
        action: Action used to derive the key. Resolved from the
            context when omitted.
        config: Explicit defaults. Falls back to the global config.

    Returns:
        The resource, or ``None`` when storage has no match.

    Raises:
        ConfigurationError: If no repository is configured.

    Example::

        post = load_one(HttpContext(params={"id": "1"}, action="show"), {"model": Post})
    """
    opts = coerce_options(options)
    cfg = resolve_config(config)
    key = derive_key(opts, action if action is not None else resolve_action(context))
    model = cast(type, opts.model)

    existing = context.assigns.get(key)
    if isinstance(existing, model):
        return existing

    repository = _require_repository(cfg)
    fields = {opts.id_field: get_resource_id(context.params, opts)}
    return _preload(repository, repository.get_by(model, fields), opts)


def load_all(
    context: ContextLike,
    options: ResourceOptions | Mapping[str, Any],
    *,
    action: str | None = None,
    config: GateConfig | None = None,
) -> list[Any]:
    """Return every resource of the configured model.

    A non-empty collection of ``model`` instances already stored at the
    derived key is kept. An empty collection, or one whose first element
    has another type, is replaced by ``get_all``.

    Example::

        posts = load_all(HttpContext(action="index"), {"model": Post})
    """
    opts = coerce_options(options)
    cfg = resolve_config(config)
    key = derive_key(opts, action if action is not None else resolve_action(context))
    model = cast(type, opts.model)

    existing = context.assigns.get(key)
    if _is_loaded_collection(existing, model):
        return existing

    repository = _require_repository(cfg)
    return _preload(repository, list(repository.get_all(model)), opts)
