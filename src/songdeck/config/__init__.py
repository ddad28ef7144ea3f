"""Configuration management for songdeck."""
# Created: 2026-10-15

from .settings import Settings, load_settings, save_settings

__all__ = ['Settings', 'load_settings', 'save_settings']
