"""Config loading and hashing."""

from risk_engine.config.loader import compute_config_hash, load_config, serialize_config
from risk_engine.config.models import (
    EngineConfig,
    EquityLevel,
    MetricsConfig,
    MilestoneConfig,
    SettingsConfig,
)

__all__ = [
    "EngineConfig",
    "EquityLevel",
    "MetricsConfig",
    "MilestoneConfig",
    "SettingsConfig",
    "compute_config_hash",
    "load_config",
    "serialize_config",
]
