"""FastAPI dependencies running the sqla-gate pipeline."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from fastapi import Depends, HTTPException, Request

from sqla_gate._types import Repository
from sqla_gate.config._config import GateConfig
from sqla_gate.config._options import coerce_options
from sqla_gate.context._http import HttpContext
from sqla_gate.integrations._common import get_operation, web_config

__all__ = ["GateDep", "get_actor", "get_repository"]


# ---------------------------------------------------------------------------
# Sentinel dependency functions for DI-based configuration
# ---------------------------------------------------------------------------


def get_actor(request: Request) -> Any:
    """Sentinel dependency, override via ``app.dependency_overrides[get_actor]``.

    Raises ``NotImplementedError`` if not overridden. Returning ``None``
    from the override makes the request anonymous.

    Example::

        from sqla_gate.integrations.fastapi import get_actor

        app.dependency_overrides[get_actor] = my_get_current_user
    """
    raise NotImplementedError(
        "Override get_actor via app.dependency_overrides[get_actor]. "
        "See sqla-gate docs for configuration guide."
    )


def get_repository(request: Request) -> Repository:
    """Sentinel dependency, override via ``app.dependency_overrides[get_repository]``.

    Raises ``NotImplementedError`` if not overridden.

    Example::

        from sqla_gate.integrations.fastapi import get_repository

        app.dependency_overrides[get_repository] = lambda: SQLAlchemyRepository(session)
    """
    raise NotImplementedError(
        "Override get_repository via app.dependency_overrides[get_repository]. "
        "See sqla-gate docs for configuration guide."
    )


# ---------------------------------------------------------------------------
# Dependency builder
# ---------------------------------------------------------------------------


def _detail(body: Any) -> Any:
    if isinstance(body, dict) and "detail" in body:
        return body["detail"]
    return body


def _make_dependency(
    operation: str,
    options: dict[str, Any],
    *,
    action: str | None,
    config: GateConfig | None,
) -> Callable[..., HttpContext]:
    run = get_operation(operation)
    opts = coerce_options(options, need_model=operation != "authorize_controller")

    def _resolve(
        request: Request,
        actor: Any = Depends(get_actor),
        repository: Any = Depends(get_repository),
    ) -> HttpContext:
        cfg = web_config(config).merge(repository=repository)
        route = request.scope.get("route")

        ctx = HttpContext(
            assigns={opts.current_user or cfg.current_user: actor},
            params={**request.query_params, **request.path_params},
            action=action if action is not None else getattr(route, "name", None),
            controller=getattr(route, "endpoint", None),
        )
        ctx = run(ctx, opts, config=cfg)
        if ctx.halted:
            raise HTTPException(status_code=ctx.status or 403, detail=_detail(ctx.body))
        return ctx

    return _resolve


def GateDep(
    model: type | None = None,
    *,
    operation: str = "load_and_authorize_resource",
    action: str | None = None,
    config: GateConfig | None = None,
    **options: Any,
) -> Any:
    """FastAPI dependency running one pipeline operation for the route.

    Resolves to the :class:`HttpContext` after the pipeline ran; read
    the loaded resource and ``authorized`` from its ``assigns``. The
    action defaults to the route name (the endpoint function name unless
    ``name=`` is set on the route). A handler that halts the context
    (404/403 with the default handler) is raised as ``HTTPException``.

    Args:
        model: The model class. Not needed for ``authorize_controller``.
        operation: ``"load_resource"``, ``"authorize_resource"``,
            ``"load_and_authorize_resource"`` or ``"authorize_controller"``.
        action: Explicit action name.
        config: Optional gate config. Defaults to the global config; the
            repository always comes from :func:`get_repository`.
        **options: Further resource options (``preload``, ``only``...).

    Returns:
        A FastAPI ``Depends`` instance.

    Example::

        @app.get("/posts/{id}", name="show")
        def show_post(ctx: HttpContext = GateDep(Post)) -> dict:
            return {"title": ctx.assigns["post"].title}
    """
    if model is not None:
        options["model"] = model
    return Depends(_make_dependency(operation, options, action=action, config=config))
