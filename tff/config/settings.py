"""Application settings loaded from environment variables via pydantic-settings.

Sources, highest priority first:

  1. **Environment variables** -- e.g. ``FF_ACCESS_TOKEN=abc123``
  2. **.env file** -- chosen by :func:`tff.config.loader.load_settings`
     (``--config`` path, ``./.env`` or ``~/.config/tff-cli/.env``)
  3. **Defaults** below

The mapping is automatic: field ``ff_access_token`` reads ``FF_ACCESS_TOKEN``.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://app.thefeedfactory.nl/api"


class Settings(BaseSettings):
    """tff settings. Environment variables override .env values."""

    model_config = SettingsConfigDict(
        env_file=None,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === API ===
    # Empty string = "not configured"; load_settings() turns that into a
    # ConfigurationError with setup instructions.
    ff_access_token: str = ""
    ff_base_url: str = DEFAULT_BASE_URL
    request_timeout: float = 30.0

    # === App Config ===
    app_env: str = "development"
    log_level: str = "WARNING"

    @property
    def has_token(self) -> bool:
        return bool(self.ff_access_token.strip())
