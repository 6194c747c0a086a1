"""Domain layer - playback sequencing and playlists."""
