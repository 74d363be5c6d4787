"""Pipeline hooks for the lifecycle stages of stateful UI sessions."""

from __future__ import annotations

from sqla_gate.hooks._lifecycle import STAGES, Hook, HookResult, mount, run_hooks

__all__ = ["STAGES", "Hook", "HookResult", "mount", "run_hooks"]
