"""
Typed results for playlist store operations.

User-facing failures (missing files, broken files, ownership refusals, I/O
problems) are returned as a failed Result carrying a localized message
instead of being raised. Programmer errors such as None arguments still
raise ValueError.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

from bot_playlists.core.strings import get_string

T = TypeVar("T")


class ErrorKind(Enum):
    """Failure categories of playlist store operations."""

    NOT_FOUND = "error_playlist_not_found"
    SPECIAL_NOT_FOUND = "error_playlist_special_not_found"
    BROKEN_FILE = "error_playlist_broken_file"
    VERSION_TOO_NEW = "error_playlist_version_too_new"
    DUPLICATE_OWNER = "error_playlist_duplicate_owner"
    ACCESS_DENIED = "error_playlist_cannot_access_not_owned"
    NO_STORE_DIRECTORY = "error_playlist_no_store_directory"
    INVALID_NAME = "error_playlist_invalid_name"
    INVALID_OWNER = "error_playlist_invalid_owner"
    IO_IN_USE = "error_io_in_use"
    IO_MISSING_PERMISSION = "error_io_missing_permission"

    @property
    def message_key(self) -> str:
        return self.value


@dataclass(frozen=True)
class PlaylistError:
    """A localized failure. `cause` keeps the underlying kind when one error wraps another."""

    kind: ErrorKind
    message: str
    cause: Optional[ErrorKind] = None

    @classmethod
    def of(cls, kind: ErrorKind, **kwargs: object) -> "PlaylistError":
        """Build an error with the catalog message for its kind."""
        return cls(kind, get_string(kind.message_key, **kwargs))

    def __str__(self) -> str:
        return self.message


class PlaylistOperationError(Exception):
    """Raised by Result.unwrap() for callers that prefer exceptions."""

    def __init__(self, error: PlaylistError):
        self.error = error
        super().__init__(error.message)


@dataclass(frozen=True)
class Result(Generic[T]):
    """Success-or-error value. Truthy when the operation succeeded."""

    ok: bool
    value: Optional[T] = None
    error: Optional[PlaylistError] = None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(True, value, None)

    @classmethod
    def failure(cls, kind: ErrorKind, **kwargs: object) -> "Result[T]":
        return cls(False, None, PlaylistError.of(kind, **kwargs))

    @classmethod
    def from_error(cls, error: PlaylistError) -> "Result[T]":
        return cls(False, None, error)

    def unwrap(self) -> T:
        """Return the value, or raise PlaylistOperationError on failure."""
        if not self.ok:
            assert self.error is not None
            raise PlaylistOperationError(self.error)
        return self.value  # type: ignore[return-value]

    def __bool__(self) -> bool:
        return self.ok
