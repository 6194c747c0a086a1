"""
File name safety checks for the playlist store.

Provides pure functions that decide whether a user supplied name can be used
as a file name directly inside the storage directory, and whether a resolved
path stays inside that directory.
"""

import re
from pathlib import Path

# Names Windows refuses regardless of extension
RESERVED_NAMES = frozenset(
    ["CON", "PRN", "AUX", "NUL"]
    + [f"COM{i}" for i in range(1, 10)]
    + [f"LPT{i}" for i in range(1, 10)]
)

MAX_NAME_LENGTH = 255

_UNSAFE_CHARS = re.compile(r'[\x00-\x1f<>:"/\\|?*]')


def unsafe_name_reason(name: str | None) -> str | None:
    """Pure function - explains why a name is not a safe file name.

    Args:
        name: Candidate file name (no directory components allowed)

    Returns:
        A short reason string, or None if the name is safe
    """
    if not name:
        return "name is empty"
    if len(name) > MAX_NAME_LENGTH:
        return "name is too long"
    if name in (".", "..") or name.startswith("."):
        return "name must not start with a dot"
    if _UNSAFE_CHARS.search(name):
        return "name contains characters that are not allowed in file names"
    if name.endswith((" ", ".")):
        return "name must not end with a space or dot"
    if name.split(".")[0].upper() in RESERVED_NAMES:
        return "name is reserved by the operating system"
    return None


def is_safe_file_name(name: str | None) -> bool:
    """Pure function - True if the name can be used as a plain file name."""
    return unsafe_name_reason(name) is None


def is_path_within_directory(file_path: Path, directory: Path) -> bool:
    """Pure function - validates path is within the given directory.

    Uses Path.resolve() to handle symlinks and relative paths, then checks if
    the resolved path is a child of the resolved directory.
    """
    try:
        file_path.resolve().relative_to(directory.resolve())
        return True
    except ValueError:
        # relative_to raises ValueError if path is not a subpath
        return False
    except (OSError, RuntimeError):
        # Path.resolve() can raise OSError for invalid paths or RuntimeError for recursion
        return False
