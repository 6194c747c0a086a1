"""
Playlist domain models.

Contains the playback reference, the playlist entry wrapping it, and the
ordered playlist container shared by stored playlists, the free list and
the trash list.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class AudioResource:
    """A reference to something playable.

    Resolving the reference into an audio stream is done by the bot's
    resource factories, keyed by resource_type (e.g. 'youtube', 'media').
    """

    resource_type: str
    resource_id: str
    resource_title: Optional[str] = None


@dataclass
class PlaylistItemMeta:
    """Transient playback metadata, never persisted."""

    from_playlist: bool = False  # Set when surfaced by next/previous navigation


@dataclass
class PlaylistItem:
    """An entry of a playlist."""

    resource: AudioResource
    meta: PlaylistItemMeta = field(default_factory=PlaylistItemMeta)

    def copy(self) -> "PlaylistItem":
        """Independent copy with fresh metadata (resources are immutable)."""
        return PlaylistItem(self.resource)


def _require_item(item: Optional[PlaylistItem]) -> PlaylistItem:
    if item is None:
        raise ValueError("Playlist item must not be None")
    return item


class Playlist:
    """Ordered, mutable sequence of playlist items with identity metadata.

    get_resource() is a safe get: an index outside the current bounds yields
    None so that a list shrinking during navigation cannot crash the caller.
    """

    def __init__(self, name: str = "", owner_uid: Optional[str] = None) -> None:
        self.name = name
        self.owner_uid = owner_uid
        self._items: list[PlaylistItem] = []

    @property
    def count(self) -> int:
        return len(self._items)

    def add_item(self, item: PlaylistItem) -> int:
        """Append an item. Returns the position it was added at."""
        self._items.append(_require_item(item))
        return len(self._items) - 1

    def insert_item(self, item: PlaylistItem, index: int) -> int:
        """Insert an item, clamping the position to [0, count]. Returns the position used."""
        index = min(max(index, 0), len(self._items))
        self._items.insert(index, _require_item(item))
        return index

    def add_range(self, items: Iterable[PlaylistItem]) -> None:
        self._items.extend(_require_item(item) for item in items)

    def remove_at(self, index: int) -> Optional[PlaylistItem]:
        """Remove and return the item at index, or None if out of range."""
        if 0 <= index < len(self._items):
            return self._items.pop(index)
        return None

    def clear(self) -> None:
        self._items.clear()

    def get_resource(self, index: int) -> Optional[PlaylistItem]:
        if 0 <= index < len(self._items):
            return self._items[index]
        return None

    def items(self) -> list[PlaylistItem]:
        return list(self._items)

    def __iter__(self) -> Iterator[PlaylistItem]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"Playlist(name={self.name!r}, owner_uid={self.owner_uid!r}, count={len(self._items)})"
