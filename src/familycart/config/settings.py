"""Application settings and configuration management."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml


def _default_config_dir() -> Path:
    """Return the default configuration directory."""
    return Path.home() / ".familycart"


@dataclass
class CatalogConfig:
    """Catalog configuration."""

    path: Optional[Path] = None  # None uses the bundled sample catalog


@dataclass
class DefaultsConfig:
    """Default values for plan requests and output."""

    period: str = "week"
    diet: Optional[str] = None
    output_format: str = "table"  # "table", "json", "markdown"


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "WARNING"


@dataclass
class Settings:
    """Main application settings."""

    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        """Load settings from YAML file or return defaults.

        Args:
            config_path: Path to config.yaml. If None, uses ~/.familycart/config.yaml

        Returns:
            Settings instance

        Raises:
            yaml.YAMLError: If the file is not valid YAML.
            ValueError: If the file is not a mapping.
        """
        if config_path is None:
            config_path = _default_config_dir() / "config.yaml"

        if not config_path.exists():
            return cls()

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"{config_path} must contain a mapping of settings")

        settings = cls()

        if "catalog" in data:
            catalog_data = data["catalog"] or {}
            if catalog_data.get("path"):
                settings.catalog.path = Path(catalog_data["path"]).expanduser()

        if "defaults" in data:
            def_data = data["defaults"] or {}
            if "period" in def_data:
                settings.defaults.period = str(def_data["period"])
            if "diet" in def_data:
                settings.defaults.diet = def_data["diet"]
            if "output_format" in def_data:
                settings.defaults.output_format = def_data["output_format"]

        if "logging" in data:
            log_data = data["logging"] or {}
            if "level" in log_data:
                settings.logging.level = str(log_data["level"]).upper()

        return settings

    def save(self, config_path: Optional[Path] = None) -> None:
        """Save current settings to YAML file.

        Args:
            config_path: Path to save config.yaml. If None, uses ~/.familycart/config.yaml
        """
        if config_path is None:
            config_path = _default_config_dir() / "config.yaml"

        config_path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "catalog": {
                "path": str(self.catalog.path) if self.catalog.path else None,
            },
            "defaults": {
                "period": self.defaults.period,
                "diet": self.defaults.diet,
                "output_format": self.defaults.output_format,
            },
            "logging": {
                "level": self.logging.level,
            },
        }

        with open(config_path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)


# Global settings instance (lazy loaded)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance, loading from disk if needed."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def reload_settings() -> Settings:
    """Force reload settings from disk."""
    global _settings
    _settings = Settings.load()
    return _settings
