"""Configuration constants and .env loading.

WHY: The base URL, credentials and timeout are the only knobs a
Freesound client has. Keeping them in one module makes them easy to find
and override without touching the client code.

HOW: python-dotenv loads the .env file on import. Defaults are read from
the environment once at import time. Credential loaders return None when a
value is absent rather than raising, because unauthenticated reads are
allowed.

RULES:
- Credentials are never hardcoded
- FREESOUND_ACCESS_TOKEN is an OAuth2 bearer token
- FREESOUND_API_TOKEN is a plain API token ("Token" scheme)
- Constructors in the api package never read the environment; only
  FreesoundClient.from_env() and the CLI do
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the directory the process is started from
load_dotenv()

FREESOUND_BASE_URL = os.getenv("FREESOUND_BASE_URL", "https://freesound.org/apiv2")
FREESOUND_TIMEOUT_S = float(os.getenv("FREESOUND_TIMEOUT", "30"))


def _read(name: str) -> str | None:
    value = os.getenv(name, "").strip()
    return value or None


def load_api_token() -> str | None:
    """Return FREESOUND_API_TOKEN, or None when unset or blank."""
    return _read("FREESOUND_API_TOKEN")


def load_access_token() -> str | None:
    """Return FREESOUND_ACCESS_TOKEN (OAuth2 bearer), or None."""
    return _read("FREESOUND_ACCESS_TOKEN")


def load_client_secrets() -> tuple[str | None, str | None]:
    """Return the (client_id, client_secret) pair from the environment.

    Either element may be None; the OAuth2 operations that need them
    raise ConfigError at call time.
    """
    return _read("FREESOUND_CLIENT_ID"), _read("FREESOUND_CLIENT_SECRET")
