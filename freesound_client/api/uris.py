"""Freesound API URL templates and the positional placeholder builder.

WHY: Every endpoint is a fixed path with zero or more ``<name>``
placeholders (sound id, pack id, username, bookmark category id). Keeping
the templates as plain data means adding an endpoint is a one-line change.

HOW: build_uri() replaces the leftmost remaining placeholder with each
argument in turn, then prefixes the API base URL.

RULES:
- Arguments are substituted left-to-right, one per placeholder occurrence
- Fewer arguments than placeholders leaves the rest verbatim (not an error)
- Extra arguments are ignored
- Values are inserted with str() and are not percent-encoded
"""

from __future__ import annotations

import re
from collections.abc import Sequence

_PLACEHOLDER = re.compile(r"<[\w_]+>")

TEXT_SEARCH = "/search/text/"
CONTENT_SEARCH = "/search/content/"
COMBINED_SEARCH = "/search/combined/"

SOUND = "/sounds/<sound_id>/"
SOUND_ANALYSIS = "/sounds/<sound_id>/analysis/"
SIMILAR_SOUNDS = "/sounds/<sound_id>/similar/"
COMMENTS = "/sounds/<sound_id>/comments/"
DOWNLOAD = "/sounds/<sound_id>/download/"
BOOKMARK = "/sounds/<sound_id>/bookmark/"
RATE = "/sounds/<sound_id>/rate/"
COMMENT = "/sounds/<sound_id>/comment/"
EDIT = "/sounds/<sound_id>/edit/"

UPLOAD = "/sounds/upload/"
DESCRIBE = "/sounds/describe/"
PENDING_UPLOADS = "/sounds/pending_uploads/"

AUTHORIZE = "/oauth2/authorize/"
LOGOUT_AND_AUTHORIZE = "/oauth2/logout_and_authorize/"
ACCESS_TOKEN = "/oauth2/access_token/"
ME = "/me/"

USER = "/users/<username>/"
USER_SOUNDS = "/users/<username>/sounds/"
USER_PACKS = "/users/<username>/packs/"
USER_BOOKMARK_CATEGORIES = "/users/<username>/bookmark_categories/"
USER_BOOKMARK_CATEGORY_SOUNDS = "/users/<username>/bookmark_categories/<category_id>/sounds/"

PACK = "/packs/<pack_id>/"
PACK_SOUNDS = "/packs/<pack_id>/sounds/"
PACK_DOWNLOAD = "/packs/<pack_id>/download/"


def build_uri(base: str, template: str, args: Sequence[object] = ()) -> str:
    """Substitute ``args`` into ``template`` and prefix ``base``.

    >>> build_uri("https://freesound.org/apiv2", SOUND, [96541])
    'https://freesound.org/apiv2/sounds/96541/'
    """
    uri = template
    for arg in args:
        uri = _PLACEHOLDER.sub(lambda _m, value=str(arg): value, uri, count=1)
    return base.rstrip("/") + uri
