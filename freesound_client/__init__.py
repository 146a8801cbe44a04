"""Freesound client: async access to the Freesound APIv2.

WHY: Freesound exposes sounds, packs, users, text and content-based
search, and OAuth2-gated upload/download over a REST API. Each response
is JSON that points to further resources (similar sounds, next page,
a user's packs). This package turns those responses into handles that can
be navigated directly.

HOW: Three layers, each independently testable: request execution over
httpx (api/executor.py), resource wrapping (api/resources.py), and the
public client (api/client.py). A small CLI sits on top.

RULES:
- One FreesoundClient per credential set; handles share its AuthContext
- The library never retries, caches or rate-limits
"""

from freesound_client.api.client import FreesoundClient
from freesound_client.errors import (
    ApiError,
    AuthRequired,
    ConfigError,
    FreesoundError,
    InvalidSearchRequest,
    NoSuchPage,
    TransportError,
)

__version__ = "0.1.0"

__all__ = [
    "ApiError",
    "AuthRequired",
    "ConfigError",
    "FreesoundClient",
    "FreesoundError",
    "InvalidSearchRequest",
    "NoSuchPage",
    "TransportError",
]
