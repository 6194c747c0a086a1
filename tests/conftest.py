"""Shared fixtures for bot-playlists tests."""

from pathlib import Path

import pytest

from bot_playlists.core.config import PlaylistsConfig
from bot_playlists.domain.playlists.manager import PlaylistManager
from bot_playlists.domain.playlists.models import AudioResource, Playlist, PlaylistItem


def make_item(resource_id: str, title: str | None = None, resource_type: str = "youtube") -> PlaylistItem:
    """Build a playlist item for a test resource."""
    return PlaylistItem(AudioResource(resource_type, resource_id, title))


def make_playlist(name: str, count: int, owner_uid: str | None = None) -> Playlist:
    """Playlist with items 'res0'..'res{count-1}' titled 'Track 0'.."""
    playlist = Playlist(name, owner_uid)
    for i in range(count):
        playlist.add_item(make_item(f"res{i}", f"Track {i}"))
    return playlist


@pytest.fixture
def store_dir(tmp_path: Path) -> Path:
    """Existing, empty playlist storage directory."""
    store = tmp_path / "playlists"
    store.mkdir()
    return store


@pytest.fixture
def manager(store_dir: Path) -> PlaylistManager:
    """Playlist manager storing into the temporary directory."""
    return PlaylistManager(PlaylistsConfig(path=str(store_dir)))


@pytest.fixture
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG directories and the working directory at a temp location."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.delenv("BOT_PLAYLISTS_PATH", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
