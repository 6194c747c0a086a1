"""
Playlist file format reader and writer.

A playlist file is UTF-8 text with a header and a body separated by a blank
line:

    version:2
    owner:<uid>
    <blank line>
    rsj:{"type":"youtube","resid":"abc","title":"Song"}
    rs:<owner hint>:<type>,<urlencoded id>,<urlencoded title>

Header errors (unsupported version, duplicate owner) fail the whole read.
Bad body lines are logged and skipped so a damaged file still loads as much
as it can.
"""

import json
import urllib.parse
from pathlib import Path
from typing import Iterable, Optional, TextIO

from loguru import logger

from .models import AudioResource, Playlist, PlaylistItem
from .results import ErrorKind, Result

FORMAT_VERSION = 2
FILE_ENCODING = "utf-8"

HEADER_KEYS = ("version", "owner")
DEPRECATED_KEYS = ("id", "ln")
BODY_KEYS = ("rs", "rsj") + DEPRECATED_KEYS


def read_playlist(
    stream: Iterable[str], name: str, head_only: bool = False
) -> Result[Playlist]:
    """
    Parse a playlist from a text stream.

    Args:
        stream: Iterable of lines (an open text file or io.StringIO)
        name: Name given to the resulting playlist
        head_only: Stop after the header; the playlist carries only name/owner

    Returns:
        Result with the parsed Playlist, or a failure for header errors
    """
    playlist = Playlist(name)
    version = 1
    owner_seen = False
    lines = iter(stream)
    first_body_line: Optional[str] = None

    for raw_line in lines:
        line = raw_line.rstrip("\r\n")
        if not line:
            break

        key, sep, value = line.partition(":")
        if sep and key in BODY_KEYS:
            # No header block, content starts right away
            first_body_line = line
            break
        if not sep:
            continue

        if key == "version":
            try:
                version = int(value.strip())
            except ValueError:
                logger.warning(f"Invalid playlist file '{name}': bad version '{value}'")
                return Result.failure(ErrorKind.BROKEN_FILE)
            if version > FORMAT_VERSION:
                logger.warning(f"Playlist file '{name}' has unsupported version {version}")
                return Result.failure(ErrorKind.VERSION_TOO_NEW)

        elif key == "owner":
            if owner_seen:
                logger.warning(f"Invalid playlist file '{name}': duplicate owner")
                return Result.failure(ErrorKind.DUPLICATE_OWNER)
            owner_seen = True
            # Owners written by version 1 files were never enforced
            if version == 2:
                playlist.owner_uid = value

    if head_only:
        return Result.success(playlist)

    if first_body_line is not None:
        _add_body_line(playlist, first_body_line)
    for raw_line in lines:
        _add_body_line(playlist, raw_line.rstrip("\r\n"))

    return Result.success(playlist)


def _add_body_line(playlist: Playlist, line: str) -> None:
    if not line:
        return
    item = parse_body_line(line)
    if item is not None:
        playlist.add_item(item)


def parse_body_line(line: str) -> Optional[PlaylistItem]:
    """
    Parse one body line into a playlist item.

    Returns:
        The item, or None when the line is deprecated or malformed (logged)
    """
    key, sep, value = line.partition(":")
    if not sep:
        logger.warning(f"Erroneous playlist data block: {line}")
        return None

    if key == "rs":
        resource = _parse_legacy_resource(value)
    elif key == "rsj":
        resource = _parse_json_resource(value)
    elif key in DEPRECATED_KEYS:
        logger.warning(f"Deprecated playlist data block: {line}")
        return None
    else:
        resource = None

    if resource is None:
        logger.warning(f"Erroneous playlist data block: {line}")
        return None
    return PlaylistItem(resource)


def _parse_legacy_resource(value: str) -> Optional[AudioResource]:
    # <owner hint>:<type>,<id>,<title>; the owner hint is not used
    _owner_hint, sep, content = value.partition(":")
    if not sep:
        return None

    parts = content.split(",", 2)
    if len(parts) < 3 or not parts[0].strip():
        return None

    resource_type, resource_id, title = parts
    title = urllib.parse.unquote(title)
    return AudioResource(
        resource_type=resource_type,
        resource_id=urllib.parse.unquote(resource_id),
        resource_title=title or None,
    )


def _parse_json_resource(value: str) -> Optional[AudioResource]:
    try:
        data = json.loads(value)
    except json.JSONDecodeError:
        return None
    if not isinstance(data, dict):
        return None

    resource_type = data.get("type")
    resource_id = data.get("resid")
    if not isinstance(resource_type, str) or not isinstance(resource_id, str):
        return None

    title = data.get("title")
    return AudioResource(
        resource_type=resource_type,
        resource_id=resource_id,
        resource_title=title if isinstance(title, str) else None,
    )


def resource_to_json(resource: AudioResource) -> str:
    """Compact single-line JSON for an rsj line; title omitted when absent."""
    data = {"type": resource.resource_type, "resid": resource.resource_id}
    if resource.resource_title is not None:
        data["title"] = resource.resource_title
    return json.dumps(data, ensure_ascii=False, separators=(",", ":"))


def is_valid_owner(owner_uid: Optional[str]) -> bool:
    """An owner is written as one header line, so it cannot contain line breaks."""
    return owner_uid is None or not any(c in owner_uid for c in "\r\n")


def write_playlist(stream: TextIO, playlist: Playlist) -> None:
    """
    Write a playlist in the newest format version.

    Raises:
        ValueError: If the owner contains a line break
    """
    if not is_valid_owner(playlist.owner_uid):
        raise ValueError(f"Playlist owner must be a single line: {playlist.owner_uid!r}")

    stream.write(f"version:{FORMAT_VERSION}\n")
    if playlist.owner_uid is not None:
        stream.write(f"owner:{playlist.owner_uid}\n")
    stream.write("\n")

    for item in playlist:
        stream.write(f"rsj:{resource_to_json(item.resource)}\n")


def read_playlist_file(path: Path, name: str, head_only: bool = False) -> Result[Playlist]:
    """Open and parse a playlist file. A leading BOM is tolerated."""
    with open(path, "r", encoding="utf-8-sig", newline="") as f:
        return read_playlist(f, name, head_only=head_only)


def write_playlist_file(path: Path, playlist: Playlist) -> None:
    """Write a playlist file, replacing any previous content."""
    with open(path, "w", encoding=FILE_ENCODING, newline="\n") as f:
        write_playlist(f, playlist)
