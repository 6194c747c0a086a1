"""
bot-playlists CLI - inspect and maintain the playlist store

Works directly on the configured storage directory, so playlists can be
listed, shown, deleted and moved in and out of JSPF while the bot is offline.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from bot_playlists.core.config import (
    Config,
    ensure_directories,
    get_log_file_path,
    load_config,
)
from bot_playlists.core.console import print_error, safe_print
from bot_playlists.core.output import setup_loguru
from bot_playlists.domain.playlists.jspf import dump_jspf, from_playlist, parse_jspf, to_playlist
from bot_playlists.domain.playlists.manager import PlaylistManager
from bot_playlists.domain.playlists.results import PlaylistOperationError


def run_list(manager: PlaylistManager, pattern: Optional[str]) -> int:
    names = manager.get_available_playlists(pattern)
    if not names:
        safe_print("No playlists found.", style="yellow")
        return 0
    for name in names:
        safe_print(name)
    return 0


def run_show(manager: PlaylistManager, name: str) -> int:
    playlist = manager.load_playlist(name).unwrap()
    owner = playlist.owner_uid or "(none)"
    safe_print(f"Playlist: {playlist.name}", style="bold")
    safe_print(f"Owner: {owner}")
    safe_print(f"Items: {playlist.count}")
    for position, item in enumerate(playlist, start=1):
        resource = item.resource
        title = resource.resource_title or resource.resource_id
        safe_print(f"  {position:>3}. [{resource.resource_type}] {title}")
    return 0


def run_delete(
    manager: PlaylistManager, name: str, owner: Optional[str], force: bool
) -> int:
    manager.delete_playlist(name, owner, force=force).unwrap()
    safe_print(f"Deleted playlist '{name}'", style="green")
    return 0


def run_import_jspf(
    manager: PlaylistManager,
    source: Path,
    name: str,
    owner: Optional[str],
    force: bool,
) -> int:
    text = source.read_text(encoding="utf-8")
    playlist = to_playlist(parse_jspf(text), PlaylistManager.cleanse_name(name))
    playlist.owner_uid = owner
    manager.save_playlist(playlist, force=force).unwrap()
    safe_print(
        f"Imported {playlist.count} items into playlist '{playlist.name}'", style="green"
    )
    return 0


def run_export_jspf(manager: PlaylistManager, name: str, target: Path) -> int:
    playlist = manager.load_playlist(name).unwrap()
    target.write_text(dump_jspf(from_playlist(playlist)) + "\n", encoding="utf-8")
    safe_print(f"Exported {playlist.count} items to {target}", style="green")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bot-playlists",
        description="Manage the playlist files of a music bot",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--config", type=Path, help="Path to config.toml")
    parser.add_argument(
        "--verbose", action="store_true", help="Also print log messages to stderr"
    )

    subparsers = parser.add_subparsers(dest="subcommand", required=True)

    list_parser = subparsers.add_parser("list", help="List stored playlists")
    list_parser.add_argument("pattern", nargs="?", help="Glob pattern, e.g. 'rock*'")

    show_parser = subparsers.add_parser("show", help="Show a playlist and its items")
    show_parser.add_argument("name")

    delete_parser = subparsers.add_parser("delete", help="Delete a stored playlist")
    delete_parser.add_argument("name")
    delete_parser.add_argument("--owner", help="UID of the requesting user")
    delete_parser.add_argument(
        "--force", action="store_true", help="Delete even if owned by someone else"
    )

    import_parser = subparsers.add_parser("import-jspf", help="Import a JSPF file")
    import_parser.add_argument("file", type=Path)
    import_parser.add_argument("name")
    import_parser.add_argument("--owner", help="UID to record as owner")
    import_parser.add_argument(
        "--force", action="store_true", help="Overwrite even if owned by someone else"
    )

    export_parser = subparsers.add_parser("export-jspf", help="Export a playlist as JSPF")
    export_parser.add_argument("name")
    export_parser.add_argument("file", type=Path)

    return parser


def _setup(args: argparse.Namespace) -> Config:
    config = load_config(args.config)
    setup_loguru(
        get_log_file_path(config),
        level=config.logging.level,
        max_file_size_mb=config.logging.max_file_size_mb,
        backup_count=config.logging.backup_count,
        console_output=config.logging.console_output or args.verbose,
    )
    return config


def run(argv: Optional[list[str]] = None) -> int:
    """Run the CLI and return the exit code."""
    args = build_parser().parse_args(argv)
    config = _setup(args)
    manager = PlaylistManager(config.playlists)

    try:
        if args.subcommand == "list":
            return run_list(manager, args.pattern)
        elif args.subcommand == "show":
            return run_show(manager, args.name)
        elif args.subcommand == "delete":
            return run_delete(manager, args.name, args.owner, args.force)
        elif args.subcommand == "import-jspf":
            ensure_directories(config)
            return run_import_jspf(manager, args.file, args.name, args.owner, args.force)
        elif args.subcommand == "export-jspf":
            return run_export_jspf(manager, args.name, args.file)
    except PlaylistOperationError as e:
        print_error(f"Error: {e}")
        return 1
    except (ValueError, OSError) as e:
        logger.exception(f"Command '{args.subcommand}' failed")
        print_error(f"Error: {e}")
        return 1

    return 1


def main() -> None:
    """Main entry point for the bot-playlists command."""
    sys.exit(run())


if __name__ == "__main__":
    main()
