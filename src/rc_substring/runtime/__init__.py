"""Configuration and telemetry shared across the package."""

from .config import (
    Settings,
    ValidationPolicy,
    configure,
    get_settings,
    override_settings,
    reset_settings,
)

__all__ = [
    "Settings",
    "ValidationPolicy",
    "configure",
    "get_settings",
    "override_settings",
    "reset_settings",
]
