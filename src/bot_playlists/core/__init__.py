"""Core infrastructure layer - no playlist logic dependencies.

This module provides foundation-level services:
- Configuration management (TOML)
- Logging setup (Loguru)
- Console management (Rich)
- File name safety checks
- User-facing message catalog
"""

# Configuration
from .config import (
    Config,
    LoggingConfig,
    PlaylistsConfig,
    create_default_config,
    ensure_directories,
    get_config_dir,
    get_config_path,
    get_data_dir,
    get_log_file_path,
    load_config,
)

# Logging
from .output import setup_loguru

# Path safety
from .path_security import is_path_within_directory, is_safe_file_name, unsafe_name_reason

# Messages
from .strings import get_string, set_strings

__all__ = [
    # Config
    "Config",
    "LoggingConfig",
    "PlaylistsConfig",
    "create_default_config",
    "ensure_directories",
    "get_config_dir",
    "get_config_path",
    "get_data_dir",
    "get_log_file_path",
    "load_config",
    # Logging
    "setup_loguru",
    # Path safety
    "is_path_within_directory",
    "is_safe_file_name",
    "unsafe_name_reason",
    # Messages
    "get_string",
    "set_strings",
]
