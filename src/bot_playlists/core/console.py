"""Rich consoles for command line output (stdout for results, stderr for failures)."""

from rich.console import Console
from rich.markup import escape

_consoles: dict[bool, Console] = {}


def get_console(stderr: bool = False) -> Console:
    """Get or create the shared Rich Console for stdout or stderr."""
    console = _consoles.get(stderr)
    if console is None:
        console = Console(stderr=stderr, highlight=False)
        _consoles[stderr] = console
    return console


def safe_print(message: str, style: str | None = None) -> None:
    """Print user data without interpreting Rich markup in it.

    Playlist names and titles may contain square brackets, so the message
    is escaped before printing.
    """
    get_console().print(escape(message), style=style)


def print_error(message: str) -> None:
    """Print a failure message to stderr in red."""
    get_console(stderr=True).print(escape(message), style="bold red")
