"""Shared test fixtures for the freesound_client test suite.

WHY: Every test module needs the same sample Freesound payloads and a way
to stand in for the Freesound server without touching the network.

HOW: FakeFreesound routes requests by URL path to canned JSON bodies via
httpx.MockTransport and records every request it sees, so tests can
assert on both the returned handle and the outgoing request.

RULES:
- No test touches the network
- Sample payloads are trimmed copies of real APIv2 responses
- Routes are keyed by URL path (``/apiv2/sounds/96541/``); unknown paths
  answer 404 with Freesound's ``{"detail": "Not found."}`` body
"""

from __future__ import annotations

import asyncio
from email.parser import BytesParser
from email.policy import default as default_policy
from typing import Any, Dict, List

import httpx
import pytest

from freesound_client.api.client import FreesoundClient

BASE_URL = "https://freesound.org/apiv2"


def api_path(path: str) -> str:
    """URL path as the server sees it, e.g. ``/apiv2/sounds/1/``."""
    return "/apiv2" + path


# ---------------------------------------------------------------------------
# Sample payloads
# ---------------------------------------------------------------------------

RAW_SOUND: Dict[str, Any] = {
    "id": 96541,
    "url": "https://freesound.org/people/Jovica/sounds/96541/",
    "name": "test.wav",
    "tags": ["cello", "tenuto"],
    "username": "Jovica",
    "duration": 2.5,
    "download": "https://freesound.org/apiv2/sounds/96541/download/",
    "previews": {"preview-hq-mp3": "https://cdn.freesound.org/previews/96/96541_hq.mp3"},
    "analysis": None,
    "results": [],
}

RAW_PACK: Dict[str, Any] = {
    "id": 9678,
    "url": "https://freesound.org/people/Jovica/packs/9678/",
    "name": "Cello notes",
    "username": "Jovica",
    "num_sounds": 2,
    "sounds": "https://freesound.org/apiv2/packs/9678/sounds/",
}

RAW_USER: Dict[str, Any] = {
    "url": "https://freesound.org/people/Jovica/",
    "username": "Jovica",
    "about": "Sound designer",
    "num_sounds": 12,
    "num_packs": 1,
    "sounds": "https://freesound.org/apiv2/users/Jovica/sounds/",
    "packs": "https://freesound.org/apiv2/users/Jovica/packs/",
}


def sound_page(
    ids: List[int],
    next_url: Any = None,
    previous_url: Any = None,
    count: int = 0,
) -> Dict[str, Any]:
    """A paginated sound listing with the given result ids."""
    return {
        "count": count or len(ids),
        "next": next_url,
        "previous": previous_url,
        "results": [{"id": i, "name": "sound-{}.wav".format(i), "username": "Jovica"} for i in ids],
    }


# ---------------------------------------------------------------------------
# Fake server
# ---------------------------------------------------------------------------


class FakeFreesound:
    """Canned-response Freesound server for httpx.MockTransport."""

    def __init__(self) -> None:
        self.routes: Dict[str, Any] = {}
        self.requests: List[httpx.Request] = []

    def route(self, path: str, body: Any) -> None:
        """Answer ``path`` (relative to /apiv2) with ``body``.

        ``body`` is JSON-encoded unless it already is an httpx.Response.
        """
        self.routes[api_path(path)] = body

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        body = self.routes.get(request.url.path)
        if body is None:
            return httpx.Response(404, json={"detail": "Not found."})
        if isinstance(body, httpx.Response):
            return body
        return httpx.Response(200, json=body)

    def client(self, **kwargs: Any) -> FreesoundClient:
        kwargs.setdefault("base_url", BASE_URL)
        return FreesoundClient(transport=httpx.MockTransport(self.handler), **kwargs)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def fake() -> FakeFreesound:
    return FakeFreesound()


def run(coro):
    """Drive one coroutine to completion."""
    return asyncio.run(coro)


def form_fields(request: httpx.Request) -> Dict[str, bytes]:
    """Decode a multipart/form-data request body into {name: bytes}."""
    content_type = request.headers["content-type"]
    message = BytesParser(policy=default_policy).parsebytes(
        b"Content-Type: " + content_type.encode("ascii") + b"\r\n\r\n" + request.content
    )
    fields = {}
    for part in message.iter_parts():
        name = part.get_param("name", header="content-disposition")
        fields[name] = part.get_payload(decode=True)
    return fields


def form_filenames(request: httpx.Request) -> Dict[str, Any]:
    """Map multipart part names to their filename (None for plain fields)."""
    content_type = request.headers["content-type"]
    message = BytesParser(policy=default_policy).parsebytes(
        b"Content-Type: " + content_type.encode("ascii") + b"\r\n\r\n" + request.content
    )
    return {
        part.get_param("name", header="content-disposition"): part.get_filename()
        for part in message.iter_parts()
    }
