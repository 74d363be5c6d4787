"""FastAPI integration for sqla-gate."""

from __future__ import annotations

try:
    import fastapi as _fastapi_check  # noqa: F401  # pyright: ignore[reportUnusedImport]

    del _fastapi_check
except ImportError as exc:
    raise ImportError(
        "FastAPI integration requires fastapi. Install it with: pip install sqla-gate[fastapi]"
    ) from exc

from sqla_gate.integrations.fastapi._dependencies import GateDep, get_actor, get_repository

__all__ = ["GateDep", "get_actor", "get_repository"]
