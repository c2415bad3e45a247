"""Configuration service for managing application settings."""

import json
from pathlib import Path
from urllib.parse import urlparse

import structlog

from ..models import AppConfig
from .errors import ConfigurationError

log = structlog.stdlib.get_logger()


class ValidationResult:
    """Result of configuration validation."""

    def __init__(self, is_valid: bool, errors: list[str] | None = None) -> None:
        self.is_valid: bool = is_valid
        self.errors: list[str] = errors or []


class ConfigurationService:
    """Service for managing application configuration."""

    def __init__(self, config_path: Path | None = None) -> None:
        self.config_path: Path = config_path or Path.home() / ".config" / "yts-browser" / "config.json"
        log.info("Configuration service initialized", config_path=str(self.config_path))

    def load_config(self) -> AppConfig:
        """Load configuration from file or return default configuration."""
        if not self.config_path.exists():
            log.info("Configuration file not found, using defaults")
            return self._get_default_config()

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                data: dict[str, str | int | float | None] = json.load(f)

            config = self._dict_to_config(data)
            validation_result = self.validate_config(config)

            if not validation_result.is_valid:
                log.warning("Invalid configuration loaded, using defaults", errors=validation_result.errors)
                return self._get_default_config()

            log.info("Configuration loaded successfully")
            return config

        except (json.JSONDecodeError, AttributeError, KeyError, TypeError, ValueError) as e:
            log.error("Failed to load configuration, using defaults", error=str(e))
            return self._get_default_config()

    def save_config(self, config: AppConfig) -> None:
        """Save configuration to file.

        Raises:
            ConfigurationError: If the configuration does not validate
            OSError: If the file cannot be written
        """
        validation_result = self.validate_config(config)
        if not validation_result.is_valid:
            raise ConfigurationError(
                f"Invalid configuration: {', '.join(validation_result.errors)}",
                expected="values accepted by validate_config",
            )

        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            data = self._config_to_dict(config)
            with open(self.config_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)

            log.info("Configuration saved successfully")

        except OSError as e:
            log.error("Failed to save configuration", error=str(e))
            raise

    def validate_config(self, config: AppConfig) -> ValidationResult:
        """Validate configuration settings."""
        errors = []

        parsed = urlparse(config.api_url) if isinstance(config.api_url, str) else None
        if parsed is None or parsed.scheme not in ("http", "https") or not parsed.netloc:
            errors.append("api_url must be an absolute http(s) URL")

        if not isinstance(config.request_timeout, (int, float)) or config.request_timeout <= 0:
            errors.append("request_timeout must be a positive number")
        elif config.request_timeout > 300:
            errors.append("request_timeout should not exceed 300 seconds")

        if not isinstance(config.max_retries, int) or config.max_retries < 0:
            errors.append("max_retries must be a non-negative integer")
        elif config.max_retries > 5:
            errors.append("max_retries should not exceed 5")

        valid_log_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if config.log_level not in valid_log_levels:
            errors.append(f"log_level must be one of: {', '.join(sorted(valid_log_levels))}")

        # The catalog caps page size at 50
        if not isinstance(config.default_limit, int) or not 1 <= config.default_limit <= 50:
            errors.append("default_limit must be an integer between 1 and 50")

        return ValidationResult(len(errors) == 0, errors)

    def _get_default_config(self) -> AppConfig:
        """Get default configuration."""
        return AppConfig()

    def _config_to_dict(self, config: AppConfig) -> dict[str, str | int | float | None]:
        """Convert AppConfig to dictionary for JSON serialization."""
        return {
            "api_url": config.api_url,
            "request_timeout": config.request_timeout,
            "max_retries": config.max_retries,
            "log_level": config.log_level,
            "default_limit": config.default_limit,
        }

    def _dict_to_config(self, data: dict[str, str | int | float | None]) -> AppConfig:
        """Convert dictionary to AppConfig, falling back to defaults per field."""
        defaults = AppConfig()

        timeout_raw = data.get("request_timeout", defaults.request_timeout)
        retries_raw = data.get("max_retries", defaults.max_retries)
        limit_raw = data.get("default_limit", defaults.default_limit)

        return AppConfig(
            api_url=str(data.get("api_url") or defaults.api_url),
            request_timeout=float(timeout_raw) if isinstance(timeout_raw, (int, float)) else defaults.request_timeout,
            max_retries=int(retries_raw) if isinstance(retries_raw, int) else defaults.max_retries,
            log_level=str(data.get("log_level") or defaults.log_level).upper(),
            default_limit=int(limit_raw) if isinstance(limit_raw, int) else defaults.default_limit,
        )
