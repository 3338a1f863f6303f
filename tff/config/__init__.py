"""Configuration module -- exports Settings and the settings loader."""

from tff.config.loader import CONFIG_HELP, CONFIGURE_TEXT, config_locations, load_settings
from tff.config.settings import Settings

__all__ = ["CONFIG_HELP", "CONFIGURE_TEXT", "Settings", "config_locations", "load_settings"]
