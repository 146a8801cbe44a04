"""Live resource handles: raw Freesound JSON plus bound operations.

WHY: A sound, pack, user or page of results is more useful when it can be
navigated directly (``await sound.get_similar()``, ``await
page.next_page()``) instead of passing ids back to the client. The handles
keep the server's fields untouched and add methods next to them.

HOW: Resource stores a private copy of the raw JSON object and a reference
to the RequestExecutor (which in turn holds the shared AuthContext). Data
fields are read with ``handle["field"]``, ``handle.get("field")`` or, when
no method has the same name, ``handle.field``. Collection pages remember
the item wrapper they were built with and reuse it for every page they
fetch.

RULES:
- Wrapping never mutates the input mapping and never drops or renames fields
- Methods take precedence over same-named fields for attribute access
  (e.g. ``sound.download`` is the method, ``sound["download"]`` the URL)
- Collection.get_item(i) is defined for 0 <= i < len(results); anything
  else raises IndexError without touching the network
- next_page()/previous_page() raise NoSuchPage when the cursor is absent
  or empty, and otherwise GET the cursor URL as-is
- Privileged operations call auth.require_oauth() before building a request
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Iterator, Mapping
from typing import Any, Generic, TypeVar

from freesound_client.api import uris
from freesound_client.api.executor import RequestExecutor
from freesound_client.api.models import Comment
from freesound_client.errors import NoSuchPage

T = TypeVar("T")


class Resource:
    """Base for every handle: read-only access to the raw JSON fields."""

    def __init__(self, data: Mapping[str, Any], executor: RequestExecutor) -> None:
        self._data = dict(data)
        self._executor = executor

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails, so methods shadow fields
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._data[name]
        except KeyError:
            raise AttributeError(
                f"{type(self).__name__} has no field or operation {name!r}"
            ) from None

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def keys(self):
        return self._data.keys()

    def to_dict(self) -> dict[str, Any]:
        """Return a copy of the raw fields this handle was built from."""
        return dict(self._data)

    def __repr__(self) -> str:
        label = self._data.get("id", self._data.get("username"))
        return f"<{type(self).__name__} {label!r}>"


class Collection(Resource, Generic[T]):
    """One page of a paginated listing.

    Attributes (read-only, from the raw page):
        count: Total number of results across all pages.
        results: Raw result records on this page.
        next / previous: Absolute cursor URLs, or None at either end.
    """

    def __init__(
        self,
        data: Mapping[str, Any],
        executor: RequestExecutor,
        item_factory: Callable[[dict], T] | None = None,
    ) -> None:
        super().__init__(data, executor)
        self._item_factory = item_factory

    @property
    def count(self) -> int | None:
        return self._data.get("count")

    @property
    def results(self) -> list[dict]:
        return list(self._data.get("results") or [])

    @property
    def next(self) -> str | None:
        return self._data.get("next") or None

    @property
    def previous(self) -> str | None:
        return self._data.get("previous") or None

    @property
    def has_next(self) -> bool:
        return self.next is not None

    @property
    def has_previous(self) -> bool:
        return self.previous is not None

    def get_item(self, index: int) -> T:
        """Return result ``index`` of this page, wrapped when a wrapper is set."""
        results = self._data.get("results") or []
        if not 0 <= index < len(results):
            raise IndexError(
                f"index {index} out of range for a page of {len(results)} results"
            )
        raw = results[index]
        if self._item_factory is None:
            return raw
        return self._item_factory(raw)

    def iter_items(self) -> Iterator[T]:
        """Yield every result on this page through ``get_item``."""
        for index in range(len(self._data.get("results") or [])):
            yield self.get_item(index)

    async def next_page(self) -> Collection[T]:
        return await self._follow(self.next, "next")

    async def previous_page(self) -> Collection[T]:
        return await self._follow(self.previous, "previous")

    async def _follow(self, cursor: str | None, direction: str) -> Collection[T]:
        if cursor is None:
            raise NoSuchPage(f"There is no {direction} page")
        raw = await self._executor.execute(cursor, "GET")
        return Collection(raw, self._executor, self._item_factory)


class Sound(Resource):
    """A Freesound sound: metadata plus analysis, similarity and account actions."""

    def _uri(self, template: str) -> str:
        return self._executor.uri(template, self._data["id"])

    async def get_analysis(self, descriptors: str | None = None) -> Any:
        """Fetch the analysis descriptors, optionally filtered by name."""
        return await self._executor.execute(
            self._uri(uris.SOUND_ANALYSIS), "GET", {"descriptors": descriptors}
        )

    async def get_similar(self, params: Mapping[str, Any] | None = None) -> Collection[Sound]:
        raw = await self._executor.execute(self._uri(uris.SIMILAR_SOUNDS), "GET", params)
        return sound_collection(raw, self._executor)

    async def get_comments(self) -> Collection[Comment]:
        raw = await self._executor.execute(self._uri(uris.COMMENTS), "GET")
        return Collection(raw, self._executor, Comment.from_dict)

    async def comment(self, text: str) -> Any:
        self._executor.auth.require_oauth()
        return await self._executor.execute(self._uri(uris.COMMENT), "POST", {"comment": text})

    async def rate(self, value: int) -> Any:
        """Rate the sound (Freesound accepts 0-5). OAuth2 required."""
        self._executor.auth.require_oauth()
        return await self._executor.execute(self._uri(uris.RATE), "POST", {"rating": value})

    async def bookmark(self, name: str, category: str | None = None) -> Any:
        self._executor.auth.require_oauth()
        body = {"name": name}
        if category:
            body["category"] = category
        return await self._executor.execute(self._uri(uris.BOOKMARK), "POST", body)

    async def download(self) -> bytes:
        """Download the original audio file. OAuth2 required."""
        self._executor.auth.require_oauth()
        return await self._executor.fetch_bytes(self._uri(uris.DOWNLOAD))

    async def edit(self, fields: Mapping[str, Any]) -> Any:
        """Edit the sound description (name, tags, description, license, ...)."""
        self._executor.auth.require_oauth()
        return await self._executor.execute(self._uri(uris.EDIT), "POST", fields)


class Pack(Resource):
    """A named group of sounds."""

    async def sounds(self, params: Mapping[str, Any] | None = None) -> Collection[Sound]:
        uri = self._executor.uri(uris.PACK_SOUNDS, self._data["id"])
        raw = await self._executor.execute(uri, "GET", params)
        return sound_collection(raw, self._executor)

    async def download(self) -> bytes:
        self._executor.auth.require_oauth()
        return await self._executor.fetch_bytes(
            self._executor.uri(uris.PACK_DOWNLOAD, self._data["id"])
        )


class User(Resource):
    """A Freesound account's public profile."""

    def _uri(self, template: str, *extra: object) -> str:
        return self._executor.uri(template, self._data["username"], *extra)

    async def sounds(self, params: Mapping[str, Any] | None = None) -> Collection[Sound]:
        raw = await self._executor.execute(self._uri(uris.USER_SOUNDS), "GET", params)
        return sound_collection(raw, self._executor)

    async def packs(self) -> Collection[Pack]:
        raw = await self._executor.execute(self._uri(uris.USER_PACKS), "GET")
        return pack_collection(raw, self._executor)

    async def bookmark_categories(self) -> Collection[dict]:
        raw = await self._executor.execute(self._uri(uris.USER_BOOKMARK_CATEGORIES), "GET")
        return Collection(raw, self._executor)

    async def bookmark_category_sounds(
        self,
        category_id: int | str | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> Collection[Sound]:
        """List the sounds in one bookmark category.

        Without ``category_id`` the ``<category_id>`` placeholder is sent
        verbatim, matching build_uri's tolerance for missing arguments.
        """
        extra = () if category_id is None else (category_id,)
        raw = await self._executor.execute(
            self._uri(uris.USER_BOOKMARK_CATEGORY_SOUNDS, *extra), "GET", params
        )
        return sound_collection(raw, self._executor)


def sound_collection(raw: Mapping[str, Any], executor: RequestExecutor) -> Collection[Sound]:
    return Collection(raw, executor, functools.partial(Sound, executor=executor))


def pack_collection(raw: Mapping[str, Any], executor: RequestExecutor) -> Collection[Pack]:
    return Collection(raw, executor, functools.partial(Pack, executor=executor))
