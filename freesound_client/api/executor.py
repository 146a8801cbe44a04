"""Request executor: one HTTP exchange per call, JSON in, typed errors out.

WHY: Every operation in the client reduces to "send this method to this
URL with these fields and the current credential, then unwrap the JSON".
Centralising that keeps query/multipart encoding, the Authorization
header and API error translation in one place.

HOW: Wraps an httpx.AsyncClient that is opened and closed by the owning
FreesoundClient. GET bodies become query parameters; POST bodies are
always encoded as multipart/form-data. The parsed body is checked for the
two error shapes Freesound uses before it is handed back.

RULES:
- The Authorization header is read from the shared AuthContext when each
  request is built, and is always sent (empty when unauthenticated)
- ``{"error": msg}`` raises ApiError(msg)
- ``{"detail": "Authentication credentials were not provided"}`` raises
  AuthRequired
- HTTP status codes are not interpreted for JSON calls; httpx errors and
  non-JSON bodies raise TransportError
- A POST with no fields and no files raises ValueError before sending
- Booleans are sent as "true"/"false"; None values are dropped
- No retries, no caching
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from freesound_client.api.auth import AuthContext
from freesound_client.api.uris import build_uri
from freesound_client.errors import ApiError, AuthRequired, TransportError

logger = logging.getLogger(__name__)

AUTH_MISSING_DETAIL = "Authentication credentials were not provided"

# name -> (filename, content)
FileParts = Mapping[str, "tuple[str, bytes]"]


class RequestExecutor:
    """Sends requests for a FreesoundClient and every handle it creates.

    Use ``open()``/``aclose()`` (FreesoundClient does this in its async
    context manager) around any call to ``execute()`` or ``fetch_bytes()``.
    """

    def __init__(
        self,
        auth: AuthContext,
        base_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.auth = auth
        self.base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def open(self) -> None:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                transport=self._transport,
            )

    async def aclose(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    def _ensure_client(self) -> httpx.AsyncClient:
        """Return the active httpx client, raising if it was never opened."""
        if self._client is None:
            raise RuntimeError(
                "FreesoundClient must be used as an async context manager: "
                "async with FreesoundClient() as client: ..."
            )
        return self._client

    def uri(self, template: str, *args: object) -> str:
        return build_uri(self.base_url, template, args)

    def _headers(self) -> dict[str, str]:
        return {"Authorization": self.auth.header_value}

    async def execute(
        self,
        uri: str,
        method: str = "GET",
        body: Mapping[str, Any] | None = None,
        files: FileParts | None = None,
    ) -> Any:
        """Send one request and return the decoded JSON body.

        Args:
            uri: Absolute URL, usually from ``uri()`` or a pagination cursor.
            method: "GET" or "POST".
            body: Flat field mapping; query string for GET, form parts for POST.
            files: Binary parts for POST, keyed by form field name.

        Raises:
            ApiError: The body carries an ``error`` field.
            AuthRequired: The server reports missing credentials.
            TransportError: httpx failed or the body is not JSON.
        """
        client = self._ensure_client()
        if method == "POST":
            parts = _multipart(body, files)
            if not parts:
                raise ValueError(f"POST {uri} needs at least one form field or file")
        logger.debug("%s %s", method, uri)

        try:
            if method == "GET":
                resp = await client.get(uri, params=_query_params(body), headers=self._headers())
            elif method == "POST":
                resp = await client.post(uri, files=parts, headers=self._headers())
            else:
                raise ValueError(f"Unsupported HTTP method: {method}")
        except httpx.HTTPError as exc:
            raise TransportError(f"{method} {uri} failed: {exc}") from exc

        try:
            payload = resp.json()
        except ValueError as exc:
            raise TransportError(
                f"{method} {uri} returned a non-JSON body (HTTP {resp.status_code})"
            ) from exc

        return check_payload(payload)

    async def fetch_bytes(self, uri: str) -> bytes:
        """GET ``uri`` following redirects and return the raw body.

        Used for sound and pack downloads, which answer with a redirect to
        the audio file rather than JSON. A JSON answer is an error report
        and goes through the same checks as ``execute()``.
        """
        client = self._ensure_client()
        logger.debug("GET %s (download)", uri)

        try:
            resp = await client.get(uri, headers=self._headers(), follow_redirects=True)
        except httpx.HTTPError as exc:
            raise TransportError(f"Download from {uri} failed: {exc}") from exc

        if resp.headers.get("content-type", "").startswith("application/json"):
            try:
                payload = resp.json()
            except ValueError as exc:
                raise TransportError(
                    f"Download from {uri} returned an undecodable JSON body "
                    f"(HTTP {resp.status_code})"
                ) from exc
            check_payload(payload)

        try:
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            raise TransportError(f"Download from {uri} failed: {exc}") from exc

        return resp.content


def check_payload(payload: Any) -> Any:
    """Raise for Freesound's error bodies, otherwise return ``payload``."""
    if isinstance(payload, dict):
        error = payload.get("error")
        if error:
            logger.warning("Freesound API error: %s", error)
            raise ApiError(str(error))
        if payload.get("detail") == AUTH_MISSING_DETAIL:
            raise AuthRequired(AUTH_MISSING_DETAIL)
    return payload


def _form_value(value: Any) -> str:
    # tags are sent space separated
    if isinstance(value, (list, tuple)):
        return " ".join(_form_value(v) for v in value)
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _query_params(body: Mapping[str, Any] | None) -> dict[str, str] | None:
    if not body:
        return None
    return {name: _form_value(value) for name, value in body.items() if value is not None}


def _multipart(
    body: Mapping[str, Any] | None,
    files: FileParts | None,
) -> list[tuple[str, tuple[str | None, str | bytes]]]:
    """Build httpx ``files=`` parts so that plain fields are multipart too.

    A part with a None filename is rendered by httpx as an ordinary form
    field, which keeps every POST multipart/form-data even without files.
    """
    parts: list[tuple[str, tuple[str | None, str | bytes]]] = [
        (name, (None, _form_value(value)))
        for name, value in (body or {}).items()
        if value is not None
    ]
    for name, (filename, content) in (files or {}).items():
        parts.append((name, (filename, content)))
    return parts
