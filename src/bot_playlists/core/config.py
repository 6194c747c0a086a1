"""
Configuration management for bot-playlists
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from loguru import logger


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "bot-playlists"
    return Path.home() / ".config" / "bot-playlists"


def get_data_dir() -> Path:
    """Get the data directory path."""
    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        return Path(data_home) / "bot-playlists"
    return Path.home() / ".local" / "share" / "bot-playlists"


@dataclass
class PlaylistsConfig:
    """Configuration for playlist storage."""

    path: str = field(default_factory=lambda: str(get_data_dir() / "playlists"))


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file: Optional[str] = None  # default: <data dir>/bot-playlists.log
    max_file_size_mb: int = 10
    backup_count: int = 5
    console_output: bool = False


@dataclass
class Config:
    """Main configuration object."""

    playlists: PlaylistsConfig = field(default_factory=PlaylistsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_config_path() -> Path:
    """Get the main configuration file path.

    Checks for config.toml in the following order:
    1. Current working directory
    2. XDG_CONFIG_HOME/bot-playlists (or ~/.config/bot-playlists)
    """
    local_config = Path.cwd() / "config.toml"
    if local_config.exists():
        return local_config

    return get_config_dir() / "config.toml"


def create_default_config() -> str:
    """Create a default configuration TOML content."""
    return """
# bot-playlists configuration

[playlists]
# Directory holding one file per saved playlist
# path = "~/.local/share/bot-playlists/playlists"

[logging]
# Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
level = "INFO"

# Custom log file path (default: ~/.local/share/bot-playlists/bot-playlists.log)
# log_file = "/path/to/custom/bot-playlists.log"

# Maximum log file size in MB before rotation
max_file_size_mb = 10

# Number of backup log files to keep
backup_count = 5

# Also output logs to console (useful for debugging)
console_output = false
""".strip()


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from file or create default.

    Environment variables override TOML values:
    - BOT_PLAYLISTS_PATH
    """
    from dotenv import load_dotenv

    env_path = get_config_dir() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            f.write(create_default_config())
        logger.info(f"Created default configuration at: {config_path}")
        config = Config()
    else:
        try:
            with open(config_path, "rb") as f:
                toml_data = tomllib.load(f)
            config = _parse_config(toml_data)
        except (tomllib.TOMLDecodeError, OSError, TypeError, ValueError) as e:
            logger.warning(f"Error loading configuration from {config_path}: {e}")
            logger.warning("Using default configuration.")
            config = Config()

    path_override = os.environ.get("BOT_PLAYLISTS_PATH")
    if path_override:
        config.playlists.path = str(Path(path_override).expanduser())

    return config


def _parse_config(toml_data: dict) -> Config:
    config = Config()

    if "playlists" in toml_data:
        playlists_data = toml_data["playlists"]
        path = playlists_data.get("path")
        if path is not None:
            if not isinstance(path, str):
                raise TypeError("[playlists] path must be a string")
            config.playlists = PlaylistsConfig(path=str(Path(path).expanduser()))

    if "logging" in toml_data:
        logging_data = toml_data["logging"]
        log_file = logging_data.get("log_file")
        if log_file:
            log_file = str(Path(log_file).expanduser())
        config.logging = LoggingConfig(
            level=logging_data.get("level", config.logging.level).upper(),
            log_file=log_file,
            max_file_size_mb=logging_data.get(
                "max_file_size_mb", config.logging.max_file_size_mb
            ),
            backup_count=logging_data.get("backup_count", config.logging.backup_count),
            console_output=logging_data.get(
                "console_output", config.logging.console_output
            ),
        )

    return config


def get_log_file_path(config: Config) -> Path:
    """Get the log file path configured for this run."""
    if config.logging.log_file:
        return Path(config.logging.log_file)
    return get_data_dir() / "bot-playlists.log"


def ensure_directories(config: Config) -> None:
    """Ensure all necessary directories exist."""
    get_data_dir().mkdir(parents=True, exist_ok=True)
    Path(config.playlists.path).mkdir(parents=True, exist_ok=True)
