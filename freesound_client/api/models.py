"""Typed records for Freesound responses that carry no operations.

WHY: Most Freesound payloads become live resource handles (see
resources.py), but two are plain data: the OAuth2 token exchange response
and a sound comment. Typed dataclasses make their fields explicit.

HOW: Each dataclass maps 1:1 to the API JSON object with a ``from_dict``
factory, the same way the handles are built from raw responses.

RULES:
- AccessTokenResponse.expires_in_seconds comes from ``expires_in``
- refresh_token and scope may be absent in a refresh response
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class AccessTokenResponse:
    """Response from POST /oauth2/access_token/.

    RULES:
    - access_token is installed with set_token(value, "oauth") by the caller
    - access tokens expire after ``expires_in_seconds`` (24h on Freesound)
    - refresh_token is exchanged via post_access_code(token, "refresh")
    """

    access_token: str
    scope: str | None = None
    expires_in_seconds: int | None = None
    refresh_token: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> AccessTokenResponse:
        expires_in = data.get("expires_in")
        return cls(
            access_token=data["access_token"],
            scope=data.get("scope"),
            expires_in_seconds=int(expires_in) if expires_in is not None else None,
            refresh_token=data.get("refresh_token"),
        )


@dataclass
class Comment:
    """One entry of GET /sounds/<id>/comments/."""

    username: str
    comment: str
    created: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> Comment:
        return cls(
            username=data["username"],
            comment=data["comment"],
            created=data.get("created"),
        )
