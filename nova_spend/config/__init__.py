"""Configuration package."""

from nova_spend.config.settings import (
    RuntimeSettings,
    StorageSettings,
    TrackerConfig,
    get_config,
)

__all__ = [
    "RuntimeSettings",
    "StorageSettings",
    "TrackerConfig",
    "get_config",
]
