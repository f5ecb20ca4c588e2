"""
Configuration loader for the fraud view dashboard.
"""

import os
import logging
from typing import Dict, Any, Optional
from pathlib import Path

import yaml

DEFAULT_CONFIG_PATH = Path(__file__).parent / "dashboard_config.yaml"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

SUPPORTED_MODEL_TYPES = ("xgboost", "random_forest")


class ConfigLoader:
    """Load and manage configuration for the fraud view dashboard."""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize the configuration loader."""
        self.config_path = str(config_path or DEFAULT_CONFIG_PATH)
        self.config = {}
        self.load_config()

    def load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file."""
        try:
            config_file = Path(self.config_path)
            if not config_file.exists():
                raise FileNotFoundError(
                    f"Configuration file not found: {self.config_path}"
                )

            with open(config_file, "r") as f:
                self.config = yaml.safe_load(f) or {}

            # Override with environment variables
            self._override_with_env()

            return self.config

        except Exception as e:
            raise RuntimeError(f"Error loading configuration: {e}") from e

    def _override_with_env(self):
        """Override configuration with environment variables."""
        env_mappings = {
            "DASHBOARD_HOST": ("dashboard", "host"),
            "DASHBOARD_PORT": ("dashboard", "port"),
            "SIMULATOR_COUNT": ("simulator", "count"),
            "SIMULATOR_SEED": ("simulator", "seed"),
            "FRAUD_RATE": ("simulator", "fraud_rate"),
            "MODEL_TYPE": ("model", "model_type"),
            "LOG_LEVEL": ("logging", "level"),
        }

        for env_var, config_path in env_mappings.items():
            env_value = os.getenv(env_var)
            if env_value is not None:
                self._set_nested_value(self.config, config_path, env_value)

    def _set_nested_value(self, config: Dict[str, Any], path: tuple, value: Any):
        """Set a nested value in the configuration dictionary."""
        current = config
        for key in path[:-1]:
            if not isinstance(current.get(key), dict):
                current[key] = {}
            current = current[key]

        # Convert value type if needed
        if isinstance(value, str):
            if value.lower() in ("true", "false"):
                value = value.lower() == "true"
            elif value.isdigit():
                value = int(value)
            elif value.replace(".", "", 1).isdigit():
                value = float(value)

        current[path[-1]] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value using dot notation."""
        keys = key.split(".")
        value = self.config

        try:
            for k in keys:
                value = value[k]
            return value
        except (KeyError, TypeError):
            return default

    def get_simulator_config(self) -> Dict[str, Any]:
        """Get data simulator configuration."""
        return self.config.get("simulator", {})

    def get_model_config(self) -> Dict[str, Any]:
        """Get ML model configuration."""
        return self.config.get("model", {})

    def get_dashboard_config(self) -> Dict[str, Any]:
        """Get dashboard configuration."""
        return self.config.get("dashboard", {})

    def get_logging_config(self) -> Dict[str, Any]:
        """Get logging configuration."""
        return self.config.get("logging", {})

    def validate_config(self) -> bool:
        """Validate the configuration."""
        required_sections = ["simulator", "model", "dashboard"]

        for section in required_sections:
            if section not in self.config:
                raise ValueError(f"Missing required configuration section: {section}")

        count = self.get("simulator.count")
        if not isinstance(count, int) or isinstance(count, bool) or count <= 0:
            raise ValueError(f"simulator.count must be a positive integer: {count!r}")

        seed = self.get("simulator.seed")
        if not isinstance(seed, int) or isinstance(seed, bool) or seed < 0:
            raise ValueError(f"simulator.seed must be a non-negative integer: {seed!r}")

        fraud_rate = self.get("simulator.fraud_rate")
        if (
            not isinstance(fraud_rate, (int, float))
            or isinstance(fraud_rate, bool)
            or not 0 <= fraud_rate <= 1
        ):
            raise ValueError(f"simulator.fraud_rate must be within [0, 1]: {fraud_rate!r}")

        regions = self.get("simulator.regions")
        if not regions or len(set(regions)) != len(regions):
            raise ValueError(f"simulator.regions must be non-empty and unique: {regions!r}")

        # YAML reads bare NO/ON/1 as bool or int
        non_strings = [region for region in regions if not isinstance(region, str)]
        if non_strings:
            raise ValueError(
                f"simulator.regions must be strings (quote them in YAML): {non_strings!r}"
            )

        model_type = self.get("model.model_type", "xgboost")
        if model_type not in SUPPORTED_MODEL_TYPES:
            raise ValueError(f"Unsupported model type: {model_type}")

        port = self.get("dashboard.port")
        if not isinstance(port, int) or not 0 < port < 65536:
            raise ValueError(f"dashboard.port must be a valid TCP port: {port!r}")

        return True

    def to_dict(self) -> Dict[str, Any]:
        """Get the complete configuration as a dictionary."""
        return self.config.copy()


def load_config(config_path: Optional[str] = None) -> ConfigLoader:
    """Convenience function to load configuration."""
    return ConfigLoader(config_path)


def setup_logging(logging_config: Optional[Dict[str, Any]] = None, force: bool = False):
    """Setup logging configuration."""
    logging_config = logging_config or {}
    handlers = [logging.StreamHandler()]

    log_file = logging_config.get("file")
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=str(logging_config.get("level", "INFO")).upper(),
        format=logging_config.get("format", LOG_FORMAT),
        handlers=handlers,
        force=force,
    )
