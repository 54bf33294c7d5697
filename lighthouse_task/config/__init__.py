"""Configuration module."""

from lighthouse_task.config.settings import get_config, load_config, reset_config

__all__ = ["get_config", "load_config", "reset_config"]
