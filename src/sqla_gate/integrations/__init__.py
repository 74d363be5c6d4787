"""Framework integrations for sqla-gate.

Each integration lives in its own subpackage and is imported
explicitly, so the core package never requires a web framework::

    from sqla_gate.integrations.flask import GateExtension
    from sqla_gate.integrations.fastapi import GateDep
"""

from __future__ import annotations

__all__: list[str] = []
