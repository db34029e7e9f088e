"""Configuration manager for shai."""

import json
import os
import platform
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from ..constants import (
    PACKAGE_NAME, CONFIG_FILE_NAME, DEFAULT_OLLAMA_URL, DEFAULT_OLLAMA_MODEL,
    DEFAULT_REQUEST_TIMEOUT, DEFAULT_ENABLE_DEBUG
)
from ..utils.logging import logger
from ..utils.helpers import ensure_directory_exists


class ConfigError(Exception):
    """Raised when the configuration cannot be located, read or parsed."""


@dataclass(frozen=True)
class AgentConfig:
    """Settings for one run. Loaded once at startup and never mutated."""

    ollama_url: str = DEFAULT_OLLAMA_URL
    ollama_model: str = DEFAULT_OLLAMA_MODEL
    additional_context: Optional[str] = None
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    enable_debug: bool = DEFAULT_ENABLE_DEBUG


def resolve_config_dir(system: Optional[str] = None,
                       env: Optional[Mapping[str, str]] = None,
                       home: Optional[Path] = None) -> Path:
    """Return the platform-specific directory that holds config.json.

    Args:
        system: Platform name as reported by platform.system()
        env: Environment variables to consult
        home: User home directory

    Raises:
        ConfigError: If no usable base directory can be determined
    """
    system = (system if system is not None else platform.system()).lower()
    env = env if env is not None else os.environ

    def _home() -> Path:
        if home is not None:
            return home
        try:
            return Path.home()
        except RuntimeError as e:
            raise ConfigError(f"Could not determine home directory: {e}") from e

    if system == "windows":
        appdata = env.get("APPDATA")
        if not appdata:
            raise ConfigError("APPDATA is not set; cannot locate the configuration directory.")
        base = Path(appdata)
    elif system == "darwin":
        base = _home() / "Library" / "Application Support"
    elif system == "linux":
        xdg = env.get("XDG_CONFIG_HOME")
        base = Path(xdg) if xdg else _home() / ".config"
    else:
        base = _home() / f".{PACKAGE_NAME}"

    return base / PACKAGE_NAME


class ConfigManager:
    """Locates, creates and loads the JSON configuration file."""

    def __init__(self, config_dir: Optional[Path] = None):
        """Initialize the configuration manager.

        Args:
            config_dir: Custom configuration directory path
        """
        self.config_dir = config_dir or resolve_config_dir()
        self.config_file = self.config_dir / CONFIG_FILE_NAME
        self._config: Optional[AgentConfig] = None

    def load(self) -> AgentConfig:
        """Load the configuration, writing a default file on first run.

        Returns:
            The immutable configuration for this run

        Raises:
            ConfigError: If the directory cannot be created or the file is malformed
        """
        try:
            ensure_directory_exists(self.config_dir)
        except OSError as e:
            raise ConfigError(f"failed to create config directory {self.config_dir}: {e}") from e

        if not self.config_file.exists():
            self._config = AgentConfig()
            self._write_defaults()
            return self._config

        self._config = self._parse(self._read())
        logger.debug(f"Configuration loaded successfully from {self.config_file}")
        return self._config

    def _write_defaults(self) -> None:
        logger.warning(f"Configuration file not found. Creating default config at: {self.config_file}")
        defaults = {
            "ollama_url": DEFAULT_OLLAMA_URL,
            "ollama_model": DEFAULT_OLLAMA_MODEL,
        }
        try:
            self.config_file.write_text(json.dumps(defaults, indent=2) + "\n", encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"failed to write default config {self.config_file}: {e}") from e

    def _read(self) -> Dict[str, Any]:
        try:
            with open(self.config_file, 'r', encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"failed to parse config file {self.config_file}: {e}") from e
        except OSError as e:
            raise ConfigError(f"failed to read config file {self.config_file}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"{self.config_file} must contain a JSON object.")
        return data

    def _parse(self, data: Dict[str, Any]) -> AgentConfig:
        ollama_url = self._string(data, "ollama_url", DEFAULT_OLLAMA_URL)
        ollama_model = self._string(data, "ollama_model", DEFAULT_OLLAMA_MODEL)

        additional_context = data.get("additional_context")
        if additional_context is not None and not isinstance(additional_context, str):
            raise ConfigError(f"'additional_context' in {self.config_file} must be a string.")

        request_timeout = data.get("request_timeout", DEFAULT_REQUEST_TIMEOUT)
        if isinstance(request_timeout, bool) or not isinstance(request_timeout, (int, float)) \
                or request_timeout <= 0:
            raise ConfigError(
                f"'request_timeout' ('{request_timeout}') in {self.config_file} "
                "must be a positive number of seconds."
            )

        enable_debug = data.get("enable_debug", DEFAULT_ENABLE_DEBUG)
        if not isinstance(enable_debug, bool):
            logger.warning(f"enable_debug in {self.config_file} must be true/false. Defaulting to false.")
            enable_debug = DEFAULT_ENABLE_DEBUG

        return AgentConfig(
            ollama_url=ollama_url,
            ollama_model=ollama_model,
            additional_context=additional_context,
            request_timeout=request_timeout,
            enable_debug=enable_debug,
        )

    def _string(self, data: Dict[str, Any], key: str, default: str) -> str:
        value = data.get(key)
        if value is None:
            return default
        if not isinstance(value, str) or not value.strip():
            raise ConfigError(f"'{key}' in {self.config_file} must be a non-empty string.")
        return value

    @property
    def config(self) -> AgentConfig:
        """Get the loaded configuration."""
        if self._config is None:
            raise RuntimeError("Configuration not loaded. Call load() first.")
        return self._config


def create_config_manager(config_dir: Optional[Path] = None) -> ConfigManager:
    """Create a configuration manager for the given (or default) directory."""
    return ConfigManager(config_dir)
