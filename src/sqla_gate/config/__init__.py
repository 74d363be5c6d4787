"""Configuration module for sqla-gate."""

from __future__ import annotations

from sqla_gate.config._config import GateConfig, configure, get_global_config
from sqla_gate.config._options import ResourceOptions, coerce_options, validate_options

__all__ = [
    "GateConfig",
    "ResourceOptions",
    "coerce_options",
    "configure",
    "get_global_config",
    "validate_options",
]
