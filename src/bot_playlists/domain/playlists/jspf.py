"""
JSPF (JSON XSPF) interchange format.

Stateless conversion between JSPF documents and Playlist objects, used to
import playlists shared by other players and to export stored ones.
The resource type of an entry travels in a track meta entry keyed "type".
"""

import json
from typing import Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .models import AudioResource, Playlist, PlaylistItem

TYPE_META_KEY = "type"


class JspfTrack(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    duration: Optional[int] = None  # milliseconds
    meta: list[dict[str, str]] = Field(default_factory=list)
    location: list[str] = Field(default_factory=list)

    @field_validator("meta")
    @classmethod
    def _meta_entries_are_pairs(cls, value: list[dict[str, str]]) -> list[dict[str, str]]:
        for entry in value:
            if len(entry) != 1:
                raise ValueError("meta entries must hold exactly one key")
            ((key, val),) = entry.items()
            if not key or not val:
                raise ValueError("meta entries need a non-empty key and value")
        return value

    def meta_value(self, key: str) -> Optional[str]:
        for entry in self.meta:
            if key in entry:
                return entry[key]
        return None


class JspfPlaylist(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    creator: Optional[str] = None
    track: list[JspfTrack] = Field(default_factory=list)


def parse_jspf(text: str) -> JspfPlaylist:
    """
    Parse a JSPF document.

    Accepts both the standard envelope {"playlist": {...}} and a bare
    playlist object.

    Raises:
        ValueError: If the text is empty or not a valid JSPF playlist
    """
    if not text or not text.strip():
        raise ValueError("Playlist text cannot be empty")

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Failed to parse JSPF playlist: {e}") from e

    if isinstance(data, dict) and isinstance(data.get("playlist"), dict):
        data = data["playlist"]

    try:
        return JspfPlaylist.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Failed to parse JSPF playlist: {e}") from e


def dump_jspf(playlist: JspfPlaylist, envelope: bool = True) -> str:
    """Serialize a JSPF playlist, wrapped in the standard envelope by default."""
    data = playlist.model_dump(exclude_none=True)
    if envelope:
        data = {"playlist": data}
    return json.dumps(data, ensure_ascii=False, indent=2)


def track_paths(playlist: JspfPlaylist) -> list[str]:
    """First location of every track; tracks without a location are skipped."""
    return [track.location[0] for track in playlist.track if track.location]


def to_playlist(
    jspf: JspfPlaylist, name: str, default_type: str = "media"
) -> Playlist:
    """
    Convert a JSPF playlist to a Playlist.

    Args:
        jspf: Parsed JSPF playlist
        name: Name for the resulting playlist
        default_type: Resource type for tracks without a "type" meta entry

    Returns:
        Playlist with one item per track that has a location
    """
    playlist = Playlist(name)
    for position, track in enumerate(jspf.track):
        if not track.location:
            logger.warning(f"Skipping JSPF track {position} without location: {track.title!r}")
            continue
        resource = AudioResource(
            resource_type=track.meta_value(TYPE_META_KEY) or default_type,
            resource_id=track.location[0],
            resource_title=track.title,
        )
        playlist.add_item(PlaylistItem(resource))
    return playlist


def from_playlist(playlist: Playlist) -> JspfPlaylist:
    """Convert a Playlist to JSPF; the owner becomes the creator."""
    tracks = [
        JspfTrack(
            title=item.resource.resource_title,
            location=[item.resource.resource_id],
            meta=[{TYPE_META_KEY: item.resource.resource_type}],
        )
        for item in playlist
    ]
    return JspfPlaylist(
        title=playlist.name or None, creator=playlist.owner_uid, track=tracks
    )
