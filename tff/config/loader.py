"""Locate the .env file and build :class:`Settings` for one CLI invocation.

Precedence for the access token:

  1. ``--token`` flag
  2. ``FF_ACCESS_TOKEN`` environment variable
  3. ``FF_ACCESS_TOKEN`` in the .env file -- the ``--config`` path when
     given, otherwise the first existing of :func:`config_locations`
"""

from __future__ import annotations

from pathlib import Path

from tff.config.settings import Settings
from tff.utils.errors import ConfigurationError

CONFIG_HELP = """\
To configure the FeedFactory CLI, set your access token using one of these methods:

1. Environment variable:
   export FF_ACCESS_TOKEN=your-token-here

2. .env file in the current directory:
   FF_ACCESS_TOKEN=your-token-here

3. Config file at ~/.config/tff-cli/.env:
   FF_ACCESS_TOKEN=your-token-here

4. Command line flag:
   tff --token your-token-here <command>

Run 'tff configure' for more information."""

CONFIGURE_TEXT = """\
FeedFactory CLI Configuration
=============================

The CLI needs an access token to authenticate with the FeedFactory API.

Getting your access token:
  1. Log in to https://app.thefeedfactory.nl
  2. Go to your account settings
  3. Generate or copy your API access token

Configuration methods (in order of precedence):
  1. --token flag:      tff --token <token> events list
  2. Environment var:   export FF_ACCESS_TOKEN=<token>
  3. .env file:         Create a .env file with FF_ACCESS_TOKEN=<token>

Config file locations (first found wins):
  - .env (current directory)
  - ~/.config/tff-cli/.env

Example .env file:
  FF_ACCESS_TOKEN=your-access-token-here"""


def config_locations() -> list[Path]:
    """Candidate .env files, in lookup order."""
    return [
        Path(".env"),
        Path.home() / ".config" / "tff-cli" / ".env",
    ]


def find_env_file(config_file: str | Path | None = None) -> Path | None:
    """Return the .env file to read, or ``None`` when there is none.

    Raises
    ------
    ConfigurationError
        When an explicit *config_file* does not exist.
    """
    if config_file:
        path = Path(config_file).expanduser()
        if not path.is_file():
            raise ConfigurationError(f"failed to load config file {path}: file not found")
        return path
    for candidate in config_locations():
        if candidate.is_file():
            return candidate
    return None


def load_settings(
    config_file: str | Path | None = None,
    token: str | None = None,
    require_token: bool = True,
) -> Settings:
    """Build settings for this invocation.

    Parameters
    ----------
    config_file:
        Explicit .env path from ``--config``.
    token:
        Access token from ``--token``; overrides every other source.
    require_token:
        Raise when no token is configured.
    """
    env_file = find_env_file(config_file)
    settings = Settings(_env_file=env_file)

    if token:
        settings = settings.model_copy(update={"ff_access_token": token})

    if require_token and not settings.has_token:
        raise ConfigurationError(f"FF_ACCESS_TOKEN not set.\n\n{CONFIG_HELP}")

    return settings
