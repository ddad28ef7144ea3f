"""Settings management for songdeck.

Handles loading and merging configuration from multiple sources.
"""
# Created: 2026-10-15

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


logger = logging.getLogger(__name__)

SECTIONS = ['ui', 'validation', 'catalog']

TRUE_VALUES = {'1', 'true', 'yes', 'on'}


@dataclass
class UISettings:
    """UI-related settings."""
    title: str = "Song Catalog"
    confirm_quit: bool = False
    notify_timeout: int = 2  # seconds


@dataclass
class ValidationSettings:
    """Song form validation settings."""
    # Report every failing field instead of the last one
    accumulate_all_errors: bool = False


@dataclass
class CatalogSettings:
    """Catalog source settings."""
    path: Optional[str] = None  # YAML catalog, built-in sample when unset


@dataclass
class Settings:
    """Main settings container."""
    ui: UISettings = field(default_factory=UISettings)
    validation: ValidationSettings = field(default_factory=ValidationSettings)
    catalog: CatalogSettings = field(default_factory=CatalogSettings)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Settings':
        """Create Settings from dictionary."""
        settings = cls()

        for section in SECTIONS:
            values = data.get(section) or {}
            target = getattr(settings, section)
            for key, value in values.items():
                if hasattr(target, key):
                    setattr(target, key, value)
                else:
                    logger.debug(f"Ignoring unknown setting {section}.{key}")

        return settings

    def merge(self, other: 'Settings') -> None:
        """Merge another Settings object into this one."""
        for section in SECTIONS:
            self_section = getattr(self, section)
            other_section = getattr(other, section)

            for key in vars(other_section):
                value = getattr(other_section, key)
                if value is not None:  # Only override non-None values
                    setattr(self_section, key, value)

    def to_dict(self) -> Dict[str, Any]:
        return {section: dict(vars(getattr(self, section))) for section in SECTIONS}


def default_config_dir() -> Path:
    return Path.home() / ".config" / "songdeck"


def load_settings(config_dir: Optional[Path] = None) -> Settings:
    """Load settings from configuration files.

    Loads from multiple sources in order of precedence:
    1. Default settings (built-in)
    2. User config file
    3. Environment variables

    Args:
        config_dir: Optional config directory override

    Returns:
        Merged Settings object
    """
    settings = Settings()

    if config_dir is None:
        config_dir = default_config_dir()

    user_config_path = Path(config_dir) / "config.yaml"
    if user_config_path.exists():
        try:
            with open(user_config_path) as f:
                data = yaml.safe_load(f)
                if data:
                    settings.merge(Settings.from_dict(data))
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to load user config: {e}")

    # Override with environment variables
    if catalog_path := os.environ.get('SONGDECK_CATALOG'):
        settings.catalog.path = catalog_path

    if strict := os.environ.get('SONGDECK_STRICT_VALIDATION'):
        settings.validation.accumulate_all_errors = strict.strip().lower() in TRUE_VALUES

    return settings


def save_settings(settings: Settings, config_dir: Optional[Path] = None) -> Path:
    """Save settings to user config file.

    Args:
        settings: Settings object to save
        config_dir: Optional config directory override

    Returns:
        Path of the written file
    """
    if config_dir is None:
        config_dir = default_config_dir()

    config_dir = Path(config_dir)
    config_dir.mkdir(parents=True, exist_ok=True)

    config_path = config_dir / "config.yaml"
    with open(config_path, 'w') as f:
        yaml.dump(settings.to_dict(), f, default_flow_style=False, sort_keys=False)
    return config_path
