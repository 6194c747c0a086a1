"""Playback domain - index sequencing and loop state for the free list.

This domain handles:
- Linear and pseudo-random (LFSR) index sequencing
- Loop mode definitions
"""

from .shuffle import (
    LFSR_MASKS,
    LinearFeedbackShiftRegister,
    NormalOrder,
    SequencingAlgorithm,
    register_width_for,
    scramble_for,
)
from .state import LoopMode

__all__ = [
    "LFSR_MASKS",
    "LinearFeedbackShiftRegister",
    "LoopMode",
    "NormalOrder",
    "SequencingAlgorithm",
    "register_width_for",
    "scramble_for",
]
