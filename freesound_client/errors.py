"""Exception hierarchy for the Freesound client.

WHY: Callers need to tell apart a missing credential, an explicit API
error message, a bad search request, missing configuration, the end of a
paginated listing, and a network failure. One typed exception per case
makes that a matter of ``except`` clauses instead of string matching.

HOW: Every exception derives from FreesoundError. Caller-side validation
errors also derive from ValueError, and NoSuchPage from LookupError, so
generic handlers keep working.

RULES:
- InvalidSearchRequest and ConfigError are raised before any network call
- ApiError keeps the server's message on ``.message``
- TransportError is always chained (``raise ... from exc``) to the httpx
  or JSON decoding error that caused it
"""

from __future__ import annotations


class FreesoundError(Exception):
    """Base class for all errors raised by freesound_client."""


class AuthRequired(FreesoundError):
    """Raised when an operation needs an OAuth2 bearer credential.

    Also raised when the server reports that no credentials were provided.
    """


class ApiError(FreesoundError):
    """Raised when the JSON response body carries an ``error`` field."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Freesound API error: {message}")


class InvalidSearchRequest(FreesoundError, ValueError):
    """Raised when a search is missing all of its required parameters."""


class ConfigError(FreesoundError, ValueError):
    """Raised when client configuration (client id/secret) is missing."""


class NoSuchPage(FreesoundError, LookupError):
    """Raised when paginating past the first or last page."""


class TransportError(FreesoundError):
    """Raised when the HTTP exchange fails or the body is not JSON."""
