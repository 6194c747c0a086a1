"""
bot-playlists: playlist storage and queue navigation for music bots.

Architecture:
    core/               - Configuration, logging, console, name safety, messages
    domain/playback/    - Linear and pseudo-random index sequencing, loop modes
    domain/playlists/   - Playlist container, file format, JSPF, manager
    cli.py              - Command line access to the playlist store
"""

__version__ = "0.1.0"
