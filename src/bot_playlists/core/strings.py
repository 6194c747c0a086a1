"""
User-facing message catalog.

Messages are looked up by key so an embedding bot can install translations
with set_strings(). Missing keys fall back to the English defaults.
"""

from collections.abc import Mapping

DEFAULT_STRINGS: dict[str, str] = {
    "error_playlist_not_found": "The playlist could not be found.",
    "error_playlist_special_not_found": "There is no special playlist named '{name}'.",
    "error_playlist_broken_file": "The playlist file is broken.",
    "error_playlist_version_too_new": "The file version is too new and can't be read.",
    "error_playlist_duplicate_owner": "The playlist file declares more than one owner.",
    "error_playlist_cannot_access_not_owned": "You cannot access a playlist which you don't own.",
    "error_playlist_no_store_directory": "The playlist storage directory does not exist.",
    "error_playlist_invalid_name": "The playlist name is not valid: {reason}.",
    "error_playlist_invalid_owner": "The playlist owner must be a single line.",
    "error_io_in_use": "The file is in use by another process.",
    "error_io_missing_permission": "Missing file permissions for this operation.",
}

_strings: dict[str, str] = dict(DEFAULT_STRINGS)


def set_strings(translations: Mapping[str, str]) -> None:
    """Install translated messages; keys not given keep their English text."""
    _strings.clear()
    _strings.update(DEFAULT_STRINGS)
    _strings.update(translations)


def get_string(key: str, **kwargs: object) -> str:
    """Look up a message and fill in its placeholders."""
    template = _strings.get(key, key)
    if kwargs:
        return template.format(**kwargs)
    return template
