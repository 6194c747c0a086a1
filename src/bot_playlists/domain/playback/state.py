"""
Playback state definitions for free list navigation.
"""

from enum import Enum


class LoopMode(Enum):
    """How the free list behaves when automatic advancement reaches the end.

    OFF: Stop at the end of the list (manual next/previous still wraps)
    ONE: Repeat the current item on automatic advancement
    ALL: Wrap around and keep playing
    """

    OFF = "off"
    ONE = "one"
    ALL = "all"

    @classmethod
    def parse(cls, value: "str | LoopMode") -> "LoopMode":
        """
        Parse a loop mode from user input.

        Accepts the enum itself, its value ("off", "one", "all") or the
        common toggle words "on"/"true" (ALL) and "false" (OFF).

        Raises:
            ValueError: If the text does not name a loop mode
        """
        if isinstance(value, LoopMode):
            return value
        text = value.strip().lower()
        aliases = {"on": cls.ALL, "true": cls.ALL, "false": cls.OFF}
        if text in aliases:
            return aliases[text]
        try:
            return cls(text)
        except ValueError:
            raise ValueError(
                f"Invalid loop mode: {value}. Must be 'off', 'one' or 'all'"
            ) from None
