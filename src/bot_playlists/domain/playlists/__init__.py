"""Playlists domain - playlist container, file format, interchange and storage.

This domain handles:
- The playlist container and its items
- Reading/writing the playlist file format (versions 1 and 2)
- JSPF import/export
- The playlist manager: free list, trash list, navigation and storage
"""

# Models
from .models import AudioResource, Playlist, PlaylistItem, PlaylistItemMeta

# Results
from .results import ErrorKind, PlaylistError, PlaylistOperationError, Result

# File format
from .file_format import (
    FORMAT_VERSION,
    is_valid_owner,
    parse_body_line,
    read_playlist,
    read_playlist_file,
    write_playlist,
    write_playlist_file,
)

# Interchange
from .jspf import (
    JspfPlaylist,
    JspfTrack,
    dump_jspf,
    from_playlist,
    parse_jspf,
    to_playlist,
    track_paths,
)

# Manager
from .manager import QUEUE_LIST_NAME, TRASH_LIST_NAME, PlaylistManager

__all__ = [
    # Models
    "AudioResource",
    "Playlist",
    "PlaylistItem",
    "PlaylistItemMeta",
    # Results
    "ErrorKind",
    "PlaylistError",
    "PlaylistOperationError",
    "Result",
    # File format
    "FORMAT_VERSION",
    "is_valid_owner",
    "parse_body_line",
    "read_playlist",
    "read_playlist_file",
    "write_playlist",
    "write_playlist_file",
    # Interchange
    "JspfPlaylist",
    "JspfTrack",
    "dump_jspf",
    "from_playlist",
    "parse_jspf",
    "to_playlist",
    "track_paths",
    # Manager
    "PlaylistManager",
    "QUEUE_LIST_NAME",
    "TRASH_LIST_NAME",
]
