"""Flask extension running the sqla-gate pipeline around view functions."""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any

from flask import Flask, current_app, g, jsonify, request

from sqla_gate.config._config import GateConfig
from sqla_gate.config._options import coerce_options
from sqla_gate.context._http import HttpContext
from sqla_gate.integrations._common import get_operation, web_config

__all__ = ["GateExtension"]


class GateExtension:
    """Flask extension that loads and authorizes resources for views.

    The request context is built from Flask's request globals:

    - ``assigns``: the attributes of ``flask.g`` (plus the actor from
      ``actor_provider`` when ``g`` does not hold one yet);
    - ``params``: query arguments overlaid with the URL rule's view args;
    - ``action``: the last segment of the endpoint name;
    - ``controller``: the blueprint name.

    After the pipeline runs, every assigns entry is written back to
    ``g``. A halted context short-circuits the view with a JSON response.

    Supports the Flask app-factory pattern via ``init_app()``.

    Args:
        app: Optional Flask application. If provided, calls ``init_app()``
            immediately.
        actor_provider: Optional callable ``() -> actor`` returning the
            current user. Called within request context.
        config: Optional gate config. Defaults to the global config.

    Example::

        from flask import Flask, g
        from sqla_gate.integrations.flask import GateExtension

        app = Flask(__name__)
        gate = GateExtension(app, actor_provider=lambda: get_current_user())

        @app.get("/posts/<int:id>", endpoint="show")
        @gate.load_and_authorize_resource(model=Post)
        def show_post(id):
            return {"title": g.post.title}
    """

    def __init__(
        self,
        app: Flask | None = None,
        *,
        actor_provider: Callable[[], Any] | None = None,
        config: GateConfig | None = None,
    ) -> None:
        self._actor_provider = actor_provider
        self._config = config

        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        """Initialize the extension with a Flask application.

        Stores the settings on ``app.extensions["sqla_gate"]``.

        Example::

            gate = GateExtension(actor_provider=lambda: get_current_user())
            app = Flask(__name__)
            gate.init_app(app)
        """
        app.extensions["sqla_gate"] = {
            "actor_provider": self._actor_provider,
            "config": self._config,
        }

    # -- context ------------------------------------------------------------

    def build_context(self, *, action: str | None = None) -> HttpContext:
        """Build an :class:`HttpContext` for the current request."""
        ext_state: dict[str, Any] = current_app.extensions["sqla_gate"]
        cfg = web_config(ext_state["config"])

        assigns = {key: g.get(key) for key in g}
        actor_provider = ext_state["actor_provider"]
        if actor_provider is not None and cfg.current_user not in assigns:
            assigns[cfg.current_user] = actor_provider()

        params: dict[str, Any] = {**request.args.to_dict(), **(request.view_args or {})}
        if action is None and request.endpoint is not None:
            action = request.endpoint.rsplit(".", 1)[-1]

        return HttpContext(
            assigns=assigns,
            params=params,
            action=action,
            controller=request.blueprint,
        )

    # -- decorators ---------------------------------------------------------

    def _decorator(
        self,
        operation: str,
        action: str | None,
        options: dict[str, Any],
        need_model: bool = True,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        run = get_operation(operation)
        opts = coerce_options(options, need_model=need_model)

        def decorator(view: Callable[..., Any]) -> Callable[..., Any]:
            @functools.wraps(view)
            def wrapper(*args: Any, **kwargs: Any) -> Any:
                cfg = web_config(current_app.extensions["sqla_gate"]["config"])
                ctx = run(self.build_context(action=action), opts, config=cfg)
                for key, value in ctx.assigns.items():
                    setattr(g, key, value)
                if ctx.halted:
                    body = ctx.body if ctx.body is not None else {}
                    return jsonify(body), ctx.status or 200
                return view(*args, **kwargs)

            return wrapper

        return decorator

    def load_resource(
        self, *, action: str | None = None, **options: Any
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Decorate a view so the resource is loaded into ``g`` first.

        Keyword arguments are resource options (``model``, ``preload``,
        ``only``...); ``action`` overrides the endpoint-derived action.
        """
        return self._decorator("load_resource", action, options)

    def authorize_resource(
        self, *, action: str | None = None, **options: Any
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Decorate a view so the subject is authorized first."""
        return self._decorator("authorize_resource", action, options)

    def load_and_authorize_resource(
        self, *, action: str | None = None, **options: Any
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Decorate a view so the resource is loaded and authorized first."""
        return self._decorator("load_and_authorize_resource", action, options)

    def authorize_controller(
        self, *, action: str | None = None, **options: Any
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Decorate a view so the subject is authorized for its blueprint."""
        return self._decorator("authorize_controller", action, options, need_model=False)
