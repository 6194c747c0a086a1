"""
Playlist manager: the live free list, the trash list and named playlist storage.

Navigation (current/next/previous) runs over the free list using a
sequencing algorithm that is either linear or pseudo-random. Named playlists
are stored as one file per playlist in the configured directory, with an
owner check before anything is overwritten or deleted.

A manager instance is meant to be driven by one playback task at a time;
callers serialize access themselves.
"""

import fnmatch
import random
import re
from collections.abc import Iterable
from pathlib import Path
from typing import Optional, Union

from loguru import logger

from bot_playlists.core.config import PlaylistsConfig
from bot_playlists.core.path_security import (
    is_path_within_directory,
    is_safe_file_name,
    unsafe_name_reason,
)
from bot_playlists.core.strings import get_string
from bot_playlists.domain.playback.shuffle import (
    LinearFeedbackShiftRegister,
    NormalOrder,
    SequencingAlgorithm,
)
from bot_playlists.domain.playback.state import LoopMode

from .file_format import is_valid_owner, read_playlist_file, write_playlist_file
from .models import Playlist, PlaylistItem
from .results import ErrorKind, PlaylistError, Result

QUEUE_LIST_NAME = ".queue"
TRASH_LIST_NAME = ".trash"

DEFAULT_PLAYLIST_NAME = "playlist"
MAX_CLEANSED_NAME_LENGTH = 63

_CLEANSE_PATTERN = re.compile(r"[^\w-]")

# Upper bound for generated seeds (exclusive)
SEED_RANGE = 2**31


class PlaylistManager:
    """Owns the free list, the trash list and the playlist store."""

    def __init__(self, config: PlaylistsConfig) -> None:
        self.config = config
        self._free_list = Playlist()
        self._trash_list = Playlist()
        self._normal_order = NormalOrder()
        self._random_order = LinearFeedbackShiftRegister()
        self._shuffle: SequencingAlgorithm = self._normal_order
        self._random = False
        self.loop = LoopMode.OFF

    # Navigation state

    @property
    def free_list(self) -> Playlist:
        return self._free_list

    @property
    def trash_list(self) -> Playlist:
        return self._trash_list

    @property
    def index(self) -> int:
        return self._shuffle.index

    @index.setter
    def index(self, value: int) -> None:
        self._shuffle.index = value

    @property
    def random(self) -> bool:
        return self._random

    @random.setter
    def random(self, value: bool) -> None:
        index = self._shuffle.index
        self._random = value
        self._shuffle = self._random_order if value else self._normal_order
        self._shuffle.length = self._free_list.count
        self._shuffle.index = index

    @property
    def seed(self) -> int:
        return self._shuffle.seed

    @seed.setter
    def seed(self, value: int) -> None:
        self._shuffle.seed = value

    def _set_random_seed(self) -> None:
        self._shuffle.seed = random.randrange(SEED_RANGE)

    def _normalize_values(self) -> bool:
        """Sync the algorithm with the free list. False if the free list is empty."""
        count = self._free_list.count
        if count == 0:
            return False

        if self._shuffle.length != count:
            self._shuffle.length = count

        if not 0 <= self.index < count:
            self.index = self.index % count

        return True

    # Navigation

    def current(self) -> Optional[PlaylistItem]:
        """Item at the current index, or None if the free list is empty."""
        if not self._normalize_values():
            return None
        return self._free_list.get_resource(self.index)

    def next(self, manually: bool = True) -> Optional[PlaylistItem]:
        """
        Move to the next item.

        Args:
            manually: True for a user request, False for automatic advancement
                at the end of a track

        Returns:
            The new current item, or None when playback should stop
        """
        return self._move_index(forward=True, manually=manually)

    def previous(self, manually: bool = True) -> Optional[PlaylistItem]:
        """Move to the previous item. See next()."""
        return self._move_index(forward=False, manually=manually)

    def _move_index(self, forward: bool, manually: bool) -> Optional[PlaylistItem]:
        if not self._normalize_values():
            return None

        # Loop one only holds automatic advancement; requests by the user still move
        if self.loop is LoopMode.ONE and not manually:
            return self._free_list.get_resource(self.index)

        start_index = self.index
        list_ended = self._shuffle.next() if forward else self._shuffle.prev()

        # Every pass through a shuffled list gets a fresh order
        if list_ended and self._random:
            self._set_random_seed()

        # Running off the end with loop off stops playback, unless the user asked
        # for the step; then the list behaves as if looped.
        if self.loop is LoopMode.OFF and list_ended and not manually:
            self.index = start_index
            return None

        entry = self._free_list.get_resource(self.index)
        if entry is not None:
            entry.meta.from_playlist = True
        return entry

    def play_freelist(self, playlist: Playlist) -> None:
        """Replace the free list with copies of the playlist's items and start at the top."""
        if playlist is None:
            raise ValueError("playlist must not be None")

        self._free_list.clear()
        self._free_list.add_range(item.copy() for item in playlist)

        self._normalize_values()
        self._set_random_seed()
        self.index = 0

    # Free list and trash

    def add_to_freelist(
        self, items: Union[PlaylistItem, Iterable[PlaylistItem]]
    ) -> Optional[int]:
        """Append one item (returns its position) or a batch (returns None)."""
        if isinstance(items, PlaylistItem):
            return self._free_list.add_item(items)
        if items is None:
            raise ValueError("items must not be None")
        self._free_list.add_range(items)
        return None

    def add_to_trash(
        self, items: Union[PlaylistItem, Iterable[PlaylistItem]]
    ) -> Optional[int]:
        """Append copies to the trash list so it never shares items with the free list."""
        if isinstance(items, PlaylistItem):
            return self._trash_list.add_item(items.copy())
        if items is None:
            raise ValueError("items must not be None")
        self._trash_list.add_range(item.copy() for item in items)
        return None

    def insert_to_freelist(self, item: PlaylistItem) -> int:
        """Insert an item right after the current one. Returns its position."""
        position = min(self.index + 1, self._free_list.count)
        return self._free_list.insert_item(item, position)

    def clear_freelist(self) -> None:
        self._free_list.clear()

    def clear_trash(self) -> None:
        self._trash_list.clear()

    # Storage

    def _get_file_path(self, name: str) -> Path:
        return Path(self.config.path) / name

    def _get_special_playlist(self, name: str) -> Result[Playlist]:
        if name == QUEUE_LIST_NAME:
            return Result.success(self._free_list)
        if name == TRASH_LIST_NAME:
            return Result.success(self._trash_list)
        return Result.failure(ErrorKind.SPECIAL_NOT_FOUND, name=name)

    def load_playlist(self, name: str, head_only: bool = False) -> Result[Playlist]:
        """
        Load a playlist by name.

        Names starting with a dot refer to the in-memory lists: '.queue' is
        the free list and '.trash' the trash list.

        Args:
            name: Playlist name (file name in the storage directory)
            head_only: Only read the header (name and owner), not the entries

        Returns:
            Result with the playlist, or a not-found / broken-file failure
        """
        if name is None:
            raise ValueError("name must not be None")
        if name.startswith("."):
            return self._get_special_playlist(name)

        reason = unsafe_name_reason(name)
        if reason is not None:
            return Result.failure(ErrorKind.INVALID_NAME, reason=reason)

        path = self._get_file_path(name)
        if not path.is_file():
            return Result.failure(ErrorKind.NOT_FOUND)

        try:
            result = read_playlist_file(path, name, head_only=head_only)
        except UnicodeDecodeError as e:
            logger.warning(f"Playlist file '{name}' is not valid UTF-8: {e}")
            return Result.failure(ErrorKind.BROKEN_FILE)
        except PermissionError:
            return Result.failure(ErrorKind.IO_MISSING_PERMISSION)
        except OSError as e:
            logger.warning(f"Could not read playlist file '{name}': {e}")
            return Result.failure(ErrorKind.IO_IN_USE)

        if not result:
            return Result.from_error(_broken_file(result.error))
        return result

    def _load_checked(self, name: str, owner_uid: Optional[str]) -> Result[Playlist]:
        """Head-only load that fails unless `owner_uid` may modify the file."""
        result = self.load_playlist(name, head_only=True)
        if not result:
            return result
        file_owner = result.value.owner_uid
        if file_owner is not None and file_owner != owner_uid:
            logger.warning(
                f"Refused access to playlist '{name}' owned by {file_owner} (requested by {owner_uid})"
            )
            return Result.failure(ErrorKind.ACCESS_DENIED)
        return result

    def save_playlist(self, playlist: Playlist, force: bool = False) -> Result[None]:
        """
        Save a playlist under its name, replacing any previous file.

        An existing file is only replaced if it has no owner or the same owner
        as the playlist being saved, unless `force` is set.
        """
        if playlist is None:
            raise ValueError("playlist must not be None")

        reason = unsafe_name_reason(playlist.name)
        if reason is not None:
            return Result.failure(ErrorKind.INVALID_NAME, reason=reason)

        if not is_valid_owner(playlist.owner_uid):
            return Result.failure(ErrorKind.INVALID_OWNER)

        if not Path(self.config.path).is_dir():
            return Result.failure(ErrorKind.NO_STORE_DIRECTORY)

        path = self._get_file_path(playlist.name)
        if not is_path_within_directory(path, Path(self.config.path)):
            return Result.failure(ErrorKind.INVALID_NAME, reason="path escapes the store")

        if path.exists() and not force:
            checked = self._load_checked(playlist.name, playlist.owner_uid)
            if not checked:
                return Result.from_error(checked.error)

        try:
            write_playlist_file(path, playlist)
        except PermissionError:
            return Result.failure(ErrorKind.IO_MISSING_PERMISSION)
        except OSError as e:
            logger.error(f"Could not write playlist file '{playlist.name}': {e}")
            return Result.failure(ErrorKind.IO_IN_USE)

        logger.info(f"Saved playlist '{playlist.name}' ({playlist.count} items)")
        return Result.success()

    def delete_playlist(
        self, name: str, requesting_uid: Optional[str], force: bool = False
    ) -> Result[None]:
        """Delete a stored playlist; only its owner may do so unless `force` is set."""
        reason = unsafe_name_reason(name)
        if reason is not None:
            return Result.failure(ErrorKind.INVALID_NAME, reason=reason)

        path = self._get_file_path(name)
        if not path.is_file():
            return Result.failure(ErrorKind.NOT_FOUND)

        if not force:
            checked = self._load_checked(name, requesting_uid)
            if not checked:
                return Result.from_error(checked.error)

        try:
            path.unlink()
        except FileNotFoundError:
            return Result.failure(ErrorKind.NOT_FOUND)
        except PermissionError:
            return Result.failure(ErrorKind.IO_MISSING_PERMISSION)
        except OSError as e:
            logger.error(f"Could not delete playlist file '{name}': {e}")
            return Result.failure(ErrorKind.IO_IN_USE)

        logger.info(f"Deleted playlist '{name}'")
        return Result.success()

    @staticmethod
    def cleanse_name(name: Optional[str]) -> str:
        """Turn arbitrary text into a safe playlist file name."""
        if not name:
            return DEFAULT_PLAYLIST_NAME
        if len(name) > MAX_CLEANSED_NAME_LENGTH:
            name = name[:MAX_CLEANSED_NAME_LENGTH]
        name = _CLEANSE_PATTERN.sub("", name)
        if not is_safe_file_name(name):
            return DEFAULT_PLAYLIST_NAME
        return name

    def get_available_playlists(self, pattern: Optional[str] = None) -> list[str]:
        """Names of stored playlists, optionally filtered by a glob pattern."""
        store = Path(self.config.path)
        if not store.is_dir():
            return []

        names = sorted(entry.name for entry in store.iterdir() if entry.is_file())
        if pattern:
            names = [name for name in names if fnmatch.fnmatch(name, pattern)]
        return names


def _broken_file(error: Optional[PlaylistError]) -> PlaylistError:
    message = get_string(ErrorKind.BROKEN_FILE.message_key)
    if error is None:
        return PlaylistError(ErrorKind.BROKEN_FILE, message)
    if error.kind is ErrorKind.BROKEN_FILE:
        return error
    return PlaylistError(ErrorKind.BROKEN_FILE, f"{message} ({error.message})", cause=error.kind)
