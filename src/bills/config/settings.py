"""Application settings loader from YAML configuration."""
import logging
import yaml
from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import dataclass

from bills.utils.exceptions import ConfigError

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[3] / "config.yaml"


@dataclass
class AppSettings:
    """Application-wide settings loaded from config.yaml."""

    # App info
    app_name: str = "bills-report"
    app_version: str = "0.1.0"

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None
    log_max_file_size_mb: int = 10
    log_backup_count: int = 5

    # Report defaults
    location: str = "America/Vancouver"
    days_back: int = 30

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "AppSettings":
        """
        Load settings from YAML file.

        Without an explicit path the project's config.yaml is used when it
        exists, otherwise the built-in defaults apply.

        Args:
            config_path: Optional path to a settings file

        Returns:
            AppSettings object
        """
        if config_path is None:
            if not DEFAULT_CONFIG_PATH.exists():
                return cls()
            config_path = DEFAULT_CONFIG_PATH

        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Unable to read configuration {config_path}: {e}")

        if config is None:
            config = {}
        if not isinstance(config, dict):
            raise ConfigError(f"Configuration must be a mapping: {config_path}")

        return cls.from_dict(config)

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "AppSettings":
        """Build settings from a parsed config mapping, filling in defaults."""
        defaults = cls()
        app = cls._section(config, "app")
        logging_cfg = cls._section(config, "logging")
        report = cls._section(config, "report")

        settings = cls(
            app_name=app.get("name", defaults.app_name),
            app_version=str(app.get("version", defaults.app_version)),
            log_level=logging_cfg.get("level", defaults.log_level),
            log_file=logging_cfg.get("file", defaults.log_file),
            log_max_file_size_mb=logging_cfg.get("max_file_size_mb", defaults.log_max_file_size_mb),
            log_backup_count=logging_cfg.get("backup_count", defaults.log_backup_count),
            location=report.get("location", defaults.location),
            days_back=report.get("days_back", defaults.days_back)
        )
        settings._validate_logging()
        return settings

    @staticmethod
    def _section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
        section = config.get(name) or {}
        if not isinstance(section, dict):
            raise ConfigError(f"Configuration section '{name}' must be a mapping")
        return section

    def _validate_logging(self) -> None:
        """Check logging values and normalise the level name."""
        if not isinstance(self.log_level, str) or not isinstance(
            logging.getLevelName(self.log_level.upper()), int
        ):
            raise ConfigError(f"Invalid log level: {self.log_level}")
        self.log_level = self.log_level.upper()

        if self.log_file is not None and not isinstance(self.log_file, str):
            raise ConfigError(f"Invalid log file: {self.log_file}")

        for name in ("log_max_file_size_mb", "log_backup_count"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ConfigError(f"Invalid {name}: {value}")


# Global settings instance
_settings: Optional[AppSettings] = None


def get_settings(config_path: Optional[Path] = None) -> AppSettings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None or config_path is not None:
        _settings = AppSettings.load(config_path)
    return _settings
