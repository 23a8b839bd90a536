"""Configuration loading utility (reuses the package config module)."""

# Re-export from the package config module
from roster.config import RosterConfig, load_config

__all__ = ["load_config", "RosterConfig"]
