"""Configuration management for shai."""

from .manager import (
    AgentConfig,
    ConfigError,
    ConfigManager,
    create_config_manager,
    resolve_config_dir,
)

__all__ = [
    "AgentConfig",
    "ConfigError",
    "ConfigManager",
    "create_config_manager",
    "resolve_config_dir",
]
