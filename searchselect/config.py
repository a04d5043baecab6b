"""Configuration management for searchselect."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Dict, Any

import yaml

from .errors import ConfigurationError
from .options import AutocompleteConfig

_log = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "~/.config/searchselect/config.yaml"


@dataclass
class ApiConfig:
    """Connection settings for the partner REST API."""
    base_url: str
    timeout: float = 10.0
    token: Optional[str] = None


class ConfigManager:
    """Manage searchselect configuration from YAML."""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = Path(config_path or DEFAULT_CONFIG_PATH).expanduser()
        self.data = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file."""
        if not self.config_path.exists():
            self._create_default_config()
        return self._read_yaml()

    def _read_yaml(self) -> Dict[str, Any]:
        """Read and parse YAML file."""
        try:
            with open(self.config_path, "r") as f:
                content = yaml.safe_load(f)
                return content or {}
        except (OSError, yaml.YAMLError) as e:
            _log.warning("Error reading config %s: %s", self.config_path, e)
            return {}

    def _create_default_config(self) -> None:
        """Create default configuration file."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        default_config = {
            "api": {
                "base_url": "http://localhost:8084",
                "timeout": 10.0,
                "token": "${PARTNER_API_TOKEN}",
            },
            "autocomplete": {
                "min_search_length": 3,
                "debounce_ms": 300,
                "blur_grace_ms": 200,
                "placeholder": "Search...",
                "no_results_text": "No results found",
                "loading_text": "Searching...",
                "required": False,
            },
        }

        with open(self.config_path, "w") as f:
            yaml.dump(default_config, f, default_flow_style=False)

    def _resolve_env_var(self, value: str) -> str:
        """Resolve environment variable references like ${VAR_NAME}."""
        if not value.startswith("${") or not value.endswith("}"):
            return value

        var_name = value[2:-1]
        return os.getenv(var_name, "")

    def get_api_config(self) -> ApiConfig:
        """Get partner API connection settings."""
        api = self.data.get("api", {})
        base_url = api.get("base_url", "")
        if not base_url:
            raise ConfigurationError(f"api.base_url is not set in {self.config_path}")

        token = self._resolve_env_var(str(api.get("token") or ""))
        return ApiConfig(
            base_url=base_url.rstrip("/"),
            timeout=float(api.get("timeout", 10.0)),
            token=token or None,
        )

    def get_autocomplete_config(self, **overrides: Any) -> AutocompleteConfig:
        """Build the control configuration; keyword overrides win over the file."""
        config = dict(self.data.get("autocomplete", {}))
        config.update({k: v for k, v in overrides.items() if v is not None})

        known = AutocompleteConfig.__dataclass_fields__
        unknown = sorted(set(config) - set(known))
        if unknown:
            raise ConfigurationError(f"Unknown autocomplete settings: {', '.join(unknown)}")
        return AutocompleteConfig(**config)

    def save(self) -> None:
        """Save configuration to file."""
        with open(self.config_path, "w") as f:
            yaml.dump(self.data, f, default_flow_style=False)
