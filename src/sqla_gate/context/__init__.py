"""Request context variants consumed by the pipeline."""

from __future__ import annotations

from sqla_gate.context._event import EventContext, Stage
from sqla_gate.context._http import HttpContext

__all__ = ["EventContext", "HttpContext", "Stage"]
