"""Credential state shared by a client and every resource it returns.

WHY: Freesound accepts two mutually exclusive Authorization schemes. A
plain API token ("Token ...") unlocks reads; only an OAuth2 access token
("Bearer ...") unlocks downloads, uploads, rating, bookmarking and the
other account operations. Every resource handle must see the same, current
credential, so the state lives in one object passed by reference.

HOW: AuthContext is a small mutable dataclass owned by FreesoundClient.
The RequestExecutor reads ``header_value`` at the moment it builds each
request; privileged operations call ``require_oauth()`` first.

RULES:
- States: unauthenticated (empty header), token, oauth
- Transitions only through set_token(); nothing resets to unauthenticated
- No automatic refresh: an expired bearer token shows up as an API error
  and the caller exchanges its refresh token via post_access_code()
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from freesound_client.errors import AuthRequired, ConfigError

_BEARER_PREFIX = "Bearer "


class TokenKind(str, enum.Enum):
    """Authorization scheme selected by set_token()."""

    TOKEN = "token"
    OAUTH = "oauth"


@dataclass
class AuthContext:
    """Current Authorization header plus the OAuth2 client secrets.

    Attributes:
        header_value: Full Authorization header value, e.g. ``"Token abc"``.
                      Empty string when no credential has been set.
        client_id: OAuth2 application id, used for login/logout URLs and
                   the code exchange.
        client_secret: OAuth2 application secret, used for the code exchange.
    """

    header_value: str = ""
    client_id: str | None = None
    client_secret: str | None = None

    def set_token(self, value: str, kind: TokenKind | str = TokenKind.TOKEN) -> str:
        """Install a credential and return the new header value.

        Raises:
            ValueError: ``kind`` is neither "token" nor "oauth".
        """
        kind = TokenKind(kind)
        scheme = "Bearer" if kind is TokenKind.OAUTH else "Token"
        self.header_value = f"{scheme} {value}"
        return self.header_value

    def set_client_secrets(self, client_id: str, client_secret: str) -> None:
        self.client_id = client_id
        self.client_secret = client_secret

    @property
    def is_oauth(self) -> bool:
        return self.header_value.startswith(_BEARER_PREFIX)

    def require_oauth(self) -> None:
        """Raise AuthRequired unless a bearer credential is installed."""
        if not self.is_oauth:
            raise AuthRequired("OAuth2 authentication required for this operation")

    def require_client_id(self) -> str:
        if not self.client_id:
            raise ConfigError("client_id was not set; call set_client_secrets() first")
        return self.client_id

    def require_client_secrets(self) -> tuple[str, str]:
        client_id = self.require_client_id()
        if not self.client_secret:
            raise ConfigError("client_secret was not set; call set_client_secrets() first")
        return client_id, self.client_secret
