"""Flask integration for sqla-gate."""

from __future__ import annotations

try:
    import flask as _flask_check  # noqa: F401  # pyright: ignore[reportUnusedImport]

    del _flask_check
except ImportError as exc:
    raise ImportError(
        "Flask integration requires flask. Install it with: pip install sqla-gate[flask]"
    ) from exc

from sqla_gate.integrations.flask._extension import GateExtension

__all__ = ["GateExtension"]
