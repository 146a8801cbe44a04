"""Freesound API client package.

WHY: Every Freesound call is an HTTP request against a fixed URL
template, and every response is JSON that is more useful with navigation
attached. This package hides both behind an async client and live
resource handles.

HOW: uris.py builds URLs, auth.py holds the credential, executor.py
sends requests over httpx, resources.py wraps responses, client.py is the
public surface. Typed records without operations live in models.py.

RULES:
- All HTTP calls go through RequestExecutor (no direct httpx usage elsewhere)
- All handles created by one client share its AuthContext
"""

from freesound_client.api.auth import AuthContext, TokenKind
from freesound_client.api.client import FreesoundClient
from freesound_client.api.models import AccessTokenResponse, Comment
from freesound_client.api.resources import Collection, Pack, Sound, User

__all__ = [
    "AccessTokenResponse",
    "AuthContext",
    "Collection",
    "Comment",
    "FreesoundClient",
    "Pack",
    "Sound",
    "TokenKind",
    "User",
]
