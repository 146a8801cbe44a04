"""Async client for the Freesound APIv2.

WHY: Callers want to look up sounds, packs and users, run text and
content-based searches, and (with OAuth2) upload, describe and manage
their own sounds, without knowing the URL layout or the two
Authorization schemes. This module is that single entry point.

HOW: FreesoundClient owns one AuthContext and one RequestExecutor (over
httpx.AsyncClient). Every lookup returns a live handle from resources.py
that shares both, so ``await (await client.get_user("MTG")).packs()``
uses the same credential as the client that produced it. Use the client
as an async context manager to open and close the connection pool.

RULES:
- Always use the async context manager (async with FreesoundClient() as client:)
- Constructors never read the environment; use from_env() for that
- Search validation (InvalidSearchRequest) and URL building (ConfigError)
  happen before any network call
- Searches carrying ``analysis_file`` are POSTed as multipart; all other
  searches are GETs with query parameters
- text_search() sends a single space when the query is empty
- Upload, describe, pending uploads and me() require an OAuth2 token
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

import httpx

from freesound_client.api import uris
from freesound_client.api.auth import AuthContext, TokenKind
from freesound_client.api.executor import RequestExecutor
from freesound_client.api.models import AccessTokenResponse
from freesound_client.api.resources import (
    Collection,
    Pack,
    Sound,
    User,
    sound_collection,
)
from freesound_client.config import (
    FREESOUND_BASE_URL,
    FREESOUND_TIMEOUT_S,
    load_access_token,
    load_api_token,
    load_client_secrets,
)
from freesound_client.errors import InvalidSearchRequest

logger = logging.getLogger(__name__)

_CONTENT_SEARCH_REQUIRED = ("target", "analysis_file", "descriptors_filter")
_COMBINED_SEARCH_REQUIRED = ("target", "analysis_file", "query", "descriptors_filter", "filter")

# Form field name and filename for a content-search analysis file
_ANALYSIS_FILE_PART = ("analysis_file", "analysis_file.json")


class FreesoundClient:
    """Async client for the Freesound APIv2.

    Usage:
        async with FreesoundClient(token="...") as client:
            page = await client.text_search("cello", filter="duration:[1 TO 5]")
            first = page.get_item(0)
            similar = await first.get_similar()

    Args:
        token: Optional API token ("Token" scheme).
        oauth_token: Optional OAuth2 access token ("Bearer" scheme); wins
                     over ``token`` when both are given.
        client_id / client_secret: OAuth2 application credentials.
        base_url: API root, defaults to FREESOUND_BASE_URL.
        timeout: Per-request timeout in seconds.
        transport: Custom httpx transport (tests pass httpx.MockTransport).
    """

    def __init__(
        self,
        token: str | None = None,
        oauth_token: str | None = None,
        client_id: str | None = None,
        client_secret: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.auth = AuthContext(client_id=client_id, client_secret=client_secret)
        if oauth_token:
            self.auth.set_token(oauth_token, TokenKind.OAUTH)
        elif token:
            self.auth.set_token(token, TokenKind.TOKEN)

        self._executor = RequestExecutor(
            self.auth,
            base_url or FREESOUND_BASE_URL,
            timeout=timeout if timeout is not None else FREESOUND_TIMEOUT_S,
            transport=transport,
        )

    @classmethod
    def from_env(cls, **kwargs: Any) -> FreesoundClient:
        """Build a client from FREESOUND_* environment variables (and .env)."""
        client_id, client_secret = load_client_secrets()
        kwargs.setdefault("token", load_api_token())
        kwargs.setdefault("oauth_token", load_access_token())
        kwargs.setdefault("client_id", client_id)
        kwargs.setdefault("client_secret", client_secret)
        return cls(**kwargs)

    async def __aenter__(self) -> FreesoundClient:
        await self._executor.open()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        await self._executor.aclose()

    @property
    def base_url(self) -> str:
        return self._executor.base_url

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    def set_token(self, value: str, kind: TokenKind | str = TokenKind.TOKEN) -> str:
        """Install an API token (``"token"``) or OAuth2 access token (``"oauth"``).

        Returns:
            The new Authorization header value, e.g. ``"Bearer abc"``.
        """
        return self.auth.set_token(value, kind)

    def set_client_secrets(self, client_id: str, client_secret: str) -> None:
        """Store the OAuth2 application id and secret from freesound.org/apiv2/apply."""
        self.auth.set_client_secrets(client_id, client_secret)

    async def post_access_code(self, code: str, kind: str = "auth") -> AccessTokenResponse:
        """Exchange an authorization code or a refresh token for an access token.

        WHY: After the user logs in at get_login_url(), Freesound redirects
        back with a short-lived authorization code (valid ~10 minutes).
        That code, or later a refresh token, buys an access token valid
        for 24 hours.

        HOW: POSTs client id/secret, the code and the matching grant type
        to /oauth2/access_token/. The result is returned, not installed;
        call set_token(resp.access_token, "oauth") to use it.

        RULES:
        - kind="auth" sends code + grant_type=authorization_code
        - kind="refresh" sends refresh_token + grant_type=refresh_token
        - Raises ConfigError if client secrets were not set
        - Raises ValueError for any other kind
        """
        client_id, client_secret = self.auth.require_client_secrets()
        if kind == "auth":
            grant = {"code": code, "grant_type": "authorization_code"}
        elif kind == "refresh":
            grant = {"refresh_token": code, "grant_type": "refresh_token"}
        else:
            raise ValueError(f"kind must be 'auth' or 'refresh', not {kind!r}")

        body = {"client_id": client_id, "client_secret": client_secret, **grant}
        data = await self._executor.execute(
            self._executor.uri(uris.ACCESS_TOKEN), "POST", body
        )
        logger.info("Obtained OAuth2 access token (grant_type=%s)", grant["grant_type"])
        return AccessTokenResponse.from_dict(data)

    def get_login_url(self) -> str:
        """URL where the user logs in and authorizes this application."""
        return self._authorize_url(uris.AUTHORIZE)

    def get_logout_url(self) -> str:
        """URL that logs the current user out, then shows the authorize page."""
        return self._authorize_url(uris.LOGOUT_AND_AUTHORIZE)

    def _authorize_url(self, template: str) -> str:
        client_id = self.auth.require_client_id()
        query = urlencode({"client_id": client_id, "response_type": "code"})
        return f"{self._executor.uri(template)}?{query}"

    # ------------------------------------------------------------------
    # Resource lookups
    # ------------------------------------------------------------------

    async def get_sound(self, sound_id: int | str) -> Sound:
        data = await self._executor.execute(self._executor.uri(uris.SOUND, sound_id))
        return Sound(data, self._executor)

    async def get_pack(
        self,
        pack_id: int | str,
        params: Mapping[str, Any] | None = None,
    ) -> Pack:
        data = await self._executor.execute(
            self._executor.uri(uris.PACK, pack_id), "GET", params
        )
        return Pack(data, self._executor)

    async def get_user(self, username: str) -> User:
        data = await self._executor.execute(self._executor.uri(uris.USER, username))
        return User(data, self._executor)

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    async def text_search(self, query: str | None = None, **params: Any) -> Collection[Sound]:
        """Search sounds by tags and metadata.

        Common params: filter, sort, fields, page, page_size, group_by_pack.

        Example:
            await client.text_search("violoncello", filter="tag:tenuto",
                                     sort="rating_desc", fields="id,name,url")
        """
        options = dict(params)
        options["query"] = query or " "
        raw = await self._search(uris.TEXT_SEARCH, options)
        return sound_collection(raw, self._executor)

    async def content_search(self, **params: Any) -> Collection[Sound]:
        """Search sounds by content descriptors.

        Requires one of: target, analysis_file, descriptors_filter.
        ``analysis_file`` is the raw bytes of an analysis JSON file.

        Example:
            await client.content_search(target="lowlevel.pitch.mean:220")
        """
        _require_any(params, _CONTENT_SEARCH_REQUIRED, "content search")
        raw = await self._search(uris.CONTENT_SEARCH, params)
        return sound_collection(raw, self._executor)

    async def combined_search(self, **params: Any) -> Collection[dict]:
        """Combine text and content search.

        Requires one of: target, analysis_file, query, descriptors_filter,
        filter. Results are returned as raw records.
        """
        _require_any(params, _COMBINED_SEARCH_REQUIRED, "combined search")
        raw = await self._search(uris.COMBINED_SEARCH, params)
        return Collection(raw, self._executor)

    async def _search(self, template: str, options: Mapping[str, Any]) -> Any:
        uri = self._executor.uri(template)
        analysis_file = options.get("analysis_file")
        fields = {k: v for k, v in options.items() if k != "analysis_file"}
        if analysis_file:
            name, filename = _ANALYSIS_FILE_PART
            return await self._executor.execute(
                uri, "POST", fields, files={name: (filename, _as_bytes(analysis_file))}
            )
        return await self._executor.execute(uri, "GET", fields)

    # ------------------------------------------------------------------
    # Uploads and account (OAuth2)
    # ------------------------------------------------------------------

    async def upload(
        self,
        file_bytes: bytes,
        filename: str,
        description: Mapping[str, Any] | None = None,
    ) -> Any:
        """Upload an audio file, optionally describing it in the same request.

        Without a description the sound waits in get_pending_sounds() until
        describe() is called. ``description`` holds the describe fields
        (name, tags, description, license, pack, geotag).
        """
        self.auth.require_oauth()
        return await self._executor.execute(
            self._executor.uri(uris.UPLOAD),
            "POST",
            description,
            files={"audiofile": (filename, file_bytes)},
        )

    async def describe(self, description: Mapping[str, Any]) -> Any:
        """Describe a previously uploaded file (``upload_filename`` plus fields)."""
        self.auth.require_oauth()
        return await self._executor.execute(
            self._executor.uri(uris.DESCRIBE), "POST", description
        )

    async def get_pending_sounds(self) -> Any:
        """Uploads still awaiting description, processing or moderation."""
        self.auth.require_oauth()
        return await self._executor.execute(self._executor.uri(uris.PENDING_UPLOADS))

    async def me(self) -> User:
        """Profile of the user who authorized the current OAuth2 token."""
        self.auth.require_oauth()
        data = await self._executor.execute(self._executor.uri(uris.ME))
        return User(data, self._executor)


def _require_any(params: Mapping[str, Any], names: tuple[str, ...], what: str) -> None:
    if not any(params.get(name) for name in names):
        raise InvalidSearchRequest(f"{what} requires one of: {', '.join(names)}")


def _as_bytes(payload: bytes | str) -> bytes:
    if isinstance(payload, str):
        return payload.encode("utf-8")
    return payload
