"""
Configuration Loader
Loads and validates YAML configuration files
"""

from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List
import yaml

from .app_config import AppConfig
from .known_channels import KNOWN_CHANNELS


# Upstream stats provider rejects more ids per request.
MAX_BATCH_SIZE = 5


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""
    pass


class ConfigLoader:
    """
    Loads and validates configuration from YAML files.

    Responsibilities:
    - Read YAML configuration file
    - Validate every section (discovery, stats, youtube, storage)
    - Validate types and value ranges
    - Return validated AppConfig instance
    """

    def __init__(self, config_path: Path):
        """
        Initialize ConfigLoader with path to config file.

        Args:
            config_path: Path to YAML configuration file
        """
        self._config_path = config_path

    def load(self) -> AppConfig:
        """
        Load and validate configuration from YAML file.

        Returns:
            AppConfig: Validated configuration object

        Raises:
            ConfigValidationError: If configuration is invalid
            FileNotFoundError: If config file doesn't exist
        """
        config_data = self._load_yaml()

        discovery = self._validate_discovery_config(config_data)
        stats = self._validate_stats_config(config_data)
        youtube = self._section(config_data, "youtube")
        storage = self._section(config_data, "storage")
        known_channels = self._validate_known_channels(config_data)

        return AppConfig(
            known_channels=known_channels,
            stats_from=stats["from"],
            stats_to=stats["to"],
            discovery_session=discovery["session"],
            discovery_target=discovery["target"],
            retry_delay=discovery["retry_delay"],
            max_retries=discovery["max_retries"],
            stats_authorization=stats["authorization"],
            stats_device_id=stats["device_id"],
            stats_client=stats["client"],
            batch_size=stats["batch_size"],
            workers=stats["workers"],
            credentials_file=self._validate_string(youtube, "youtube.credentials_file", "./keys.json"),
            storage_root=self._validate_string(storage, "storage.root", "./storage")
        )

    def _load_yaml(self) -> Dict[str, Any]:
        """Load YAML file and return parsed data."""
        if not self._config_path.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {self._config_path}"
            )

        try:
            with open(self._config_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)

            if data is None:
                raise ConfigValidationError("Configuration file is empty")

            if not isinstance(data, dict):
                raise ConfigValidationError(
                    "Configuration must be a YAML mapping/dictionary"
                )

            return data

        except yaml.YAMLError as e:
            raise ConfigValidationError(f"Invalid YAML syntax: {e}")

    def _section(self, config: Dict[str, Any], name: str) -> Dict[str, Any]:
        """Return a config section, treating a missing one as empty."""
        section = config.get(name)
        if section is None:
            return {}
        if not isinstance(section, dict):
            raise ConfigValidationError(
                f"Section '{name}' must be a mapping, got {type(section).__name__}"
            )
        return section

    def _validate_discovery_config(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Validate discovery section."""
        discovery = self._section(config, "discovery")

        target = discovery.get("target", 110)
        if not isinstance(target, int) or isinstance(target, bool) or target <= 0:
            raise ConfigValidationError(
                f"discovery.target must be a positive integer, got {target!r}"
            )

        retry_delay = discovery.get("retry_delay", 5)
        if not isinstance(retry_delay, (int, float)) or isinstance(retry_delay, bool) or retry_delay < 0:
            raise ConfigValidationError("discovery.retry_delay must be a non-negative number")

        # None/null means retry forever
        max_retries = discovery.get("max_retries")
        if max_retries is not None:
            if not isinstance(max_retries, int) or isinstance(max_retries, bool) or max_retries <= 0:
                raise ConfigValidationError(
                    f"discovery.max_retries must be greater than 0 or null, got {max_retries!r}"
                )

        return {
            "session": self._validate_string(discovery, "discovery.session", ""),
            "target": target,
            "retry_delay": float(retry_delay),
            "max_retries": max_retries
        }

    def _validate_stats_config(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Validate stats provider section."""
        stats = self._section(config, "stats")

        start = self._validate_date(stats.get("from", "2020-04-11"), "stats.from")
        end = self._validate_date(stats.get("to", "2021-03-11"), "stats.to")
        if start > end:
            raise ConfigValidationError(
                f"stats.from ({start.isoformat()}) must not be after stats.to ({end.isoformat()})"
            )

        batch_size = stats.get("batch_size", MAX_BATCH_SIZE)
        if not isinstance(batch_size, int) or isinstance(batch_size, bool) or not (1 <= batch_size <= MAX_BATCH_SIZE):
            raise ConfigValidationError(
                f"stats.batch_size must be between 1 and {MAX_BATCH_SIZE}, got {batch_size!r}"
            )

        workers = stats.get("workers", 1)
        if not isinstance(workers, int) or isinstance(workers, bool) or workers <= 0:
            raise ConfigValidationError(f"stats.workers must be a positive integer, got {workers!r}")

        return {
            "authorization": self._validate_string(stats, "stats.authorization", ""),
            "device_id": self._validate_string(stats, "stats.device_id", ""),
            "client": self._validate_string(stats, "stats.client", "ext vff/3.43.2"),
            "from": start,
            "to": end,
            "batch_size": batch_size,
            "workers": workers
        }

    def _validate_known_channels(self, config: Dict[str, Any]) -> List[str]:
        """Validate known_channels list (optional)."""
        if config.get("known_channels") is None:
            return list(KNOWN_CHANNELS)

        channels = config["known_channels"]
        if not isinstance(channels, list):
            raise ConfigValidationError(
                f"Field 'known_channels' must be a list, got {type(channels).__name__}"
            )

        result = []
        for channel_id in channels:
            if not isinstance(channel_id, str) or not channel_id.strip():
                raise ConfigValidationError(
                    f"Field 'known_channels' must only contain non-empty strings, got {channel_id!r}"
                )
            result.append(channel_id.strip())
        return result

    def _validate_string(self, section: Dict[str, Any], name: str, default: str) -> str:
        key = name.rsplit(".", 1)[-1]
        value = section.get(key, default)
        if value is None:
            return default
        if not isinstance(value, str):
            raise ConfigValidationError(
                f"{name} must be a string, got {type(value).__name__}"
            )
        return value.strip()

    def _validate_date(self, value: Any, name: str) -> date:
        # PyYAML already turns unquoted ISO dates into date objects
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if isinstance(value, str):
            try:
                return date.fromisoformat(value.strip())
            except ValueError:
                pass
        raise ConfigValidationError(f"{name} must be an ISO date (YYYY-MM-DD), got {value!r}")
