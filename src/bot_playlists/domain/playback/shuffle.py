"""
Index sequencing for free list navigation.

Two interchangeable algorithms step through the indices of a list:

- NormalOrder walks front to back and wraps around.
- LinearFeedbackShiftRegister visits every index exactly once per cycle in a
  pseudo-random order. It keeps O(1) state no matter how long the list is, and
  the order is fully determined by (length, seed, start index).

Both report "list ended" from next()/prev() when the step crosses the cycle
boundary, which the playlist manager uses for loop mode decisions.
"""

import math
from typing import Callable, Protocol

# Galois (right shift) toggle masks of maximal-length polynomials, keyed by
# register width. Bit (t - 1) is set for every tap t of the polynomial.
# Taps from the Xilinx XAPP052 table.
LFSR_MASKS: dict[int, int] = {
    2: 0x3,
    3: 0x6,
    4: 0xC,
    5: 0x14,
    6: 0x30,
    7: 0x60,
    8: 0xB8,
    9: 0x110,
    10: 0x240,
    11: 0x500,
    12: 0x829,
    13: 0x100D,
    14: 0x2015,
    15: 0x6000,
    16: 0xD008,
    17: 0x12000,
    18: 0x20400,
    19: 0x40023,
    20: 0x90000,
    21: 0x140000,
    22: 0x300000,
    23: 0x420000,
    24: 0xE10000,
    25: 0x1200000,
    26: 0x2000023,
    27: 0x4000013,
    28: 0x9000000,
    29: 0x14000000,
    30: 0x20000029,
    31: 0x48000000,
    32: 0x80200003,
}

MIN_REGISTER_WIDTH = min(LFSR_MASKS)
MAX_REGISTER_WIDTH = max(LFSR_MASKS)


class SequencingAlgorithm(Protocol):
    """Steps an index through [0, length) in some order."""

    @property
    def length(self) -> int: ...

    @length.setter
    def length(self, value: int) -> None: ...

    @property
    def seed(self) -> int: ...

    @seed.setter
    def seed(self, value: int) -> None: ...

    @property
    def index(self) -> int: ...

    @index.setter
    def index(self, value: int) -> None: ...

    def next(self) -> bool:
        """Advance one step. Returns True if the step wrapped past the end."""
        ...

    def prev(self) -> bool:
        """Go back one step. Returns True if the step wrapped past the start."""
        ...


class NormalOrder:
    """Linear order: index + 1 forward, index - 1 backward, wrapping at the ends."""

    def __init__(self) -> None:
        self._index = 0
        self._length = 0
        self._seed = 0

    @property
    def length(self) -> int:
        return self._length

    @length.setter
    def length(self, value: int) -> None:
        self._length = max(0, value)

    @property
    def seed(self) -> int:
        # Linear order ignores the seed; it is only kept for symmetry
        return self._seed

    @seed.setter
    def seed(self, value: int) -> None:
        self._seed = value

    @property
    def index(self) -> int:
        return self._index

    @index.setter
    def index(self, value: int) -> None:
        self._index = value

    def next(self) -> bool:
        if self._length <= 0:
            self._index = 0
            return False
        self._index += 1
        if self._index >= self._length:
            self._index = 0
            return True
        return False

    def prev(self) -> bool:
        if self._length <= 0:
            self._index = 0
            return False
        self._index -= 1
        if self._index < 0:
            self._index = self._length - 1
            return True
        return False

    def __repr__(self) -> str:
        return f"NormalOrder(index={self._index}, length={self._length})"


def register_width_for(length: int) -> int:
    """Smallest supported register width whose cycle covers `length` values."""
    width = MIN_REGISTER_WIDTH
    while (1 << width) - 1 < length:
        width += 1
    if width > MAX_REGISTER_WIDTH:
        raise ValueError(f"List too long for pseudo-random order: {length}")
    return width


# Knuth's multiplicative hash constant; spreads nearby seeds over the multipliers
_SEED_HASH = 2654435761


def scramble_for(length: int, seed: int) -> tuple[int, int]:
    """
    Multiplier and offset of the seeded affine map from registers to indices.

    The index of register r is (multiplier * (r - 1) + offset) % length. The
    multiplier is coprime to the length, so the map is a bijection, and a
    different multiplier changes which index follows which instead of only
    rotating the order.
    """
    if length <= 1:
        return 1, 0
    multiplier = 1 + (seed * _SEED_HASH) % (length - 1)
    while math.gcd(multiplier, length) != 1:
        multiplier = multiplier % (length - 1) + 1
    return multiplier, seed % length


class LinearFeedbackShiftRegister:
    """
    Pseudo-random order backed by a maximal-length Galois LFSR.

    A register of width w cycles through every value in [1, 2**w - 1] before
    repeating. Values greater than the list length are skipped, so each of
    the `length` indices comes up exactly once per cycle. The seed picks the
    affine register-to-index map (see scramble_for), which gives a different
    order for each seed.

    Setting the index, seed or length marks the current register as the
    start of a new cycle; the step that returns to it reports "list ended".
    """

    def __init__(self) -> None:
        self._length = 0
        self._seed = 0
        self._width = MIN_REGISTER_WIDTH
        self._mask = LFSR_MASKS[MIN_REGISTER_WIDTH]
        self._multiplier = 1
        self._offset = 0
        self._register = 1
        self._start = 1

    def _rescramble(self) -> None:
        self._multiplier, self._offset = scramble_for(self._length, self._seed)

    @property
    def length(self) -> int:
        return self._length

    @length.setter
    def length(self, value: int) -> None:
        value = max(0, value)
        old_index = self.index
        self._width = register_width_for(max(value, 1))
        self._mask = LFSR_MASKS[self._width]
        self._length = value
        self._rescramble()
        if value > 0:
            self.index = old_index % value
        else:
            self._register = self._start = 1

    @property
    def seed(self) -> int:
        return self._seed

    @seed.setter
    def seed(self, value: int) -> None:
        self._seed = value
        self._rescramble()
        self._start = self._register

    @property
    def index(self) -> int:
        if self._length <= 0:
            return 0
        return (self._multiplier * (self._register - 1) + self._offset) % self._length

    @index.setter
    def index(self, value: int) -> None:
        if self._length <= 0:
            return
        inverse = pow(self._multiplier, -1, self._length)
        self._register = inverse * (value - self._offset) % self._length + 1
        self._start = self._register

    def _step_forward(self, register: int) -> int:
        lsb = register & 1
        register >>= 1
        if lsb:
            register ^= self._mask
        return register

    def _step_back(self, register: int) -> int:
        # The mask always has the top bit set, so the top bit after a forward
        # step tells whether the shifted-out bit was 1.
        if (register >> (self._width - 1)) & 1:
            return ((register ^ self._mask) << 1) | 1
        return register << 1

    def _walk(self, step: Callable[[int], int]) -> None:
        register = step(self._register)
        while register > self._length:
            register = step(register)
        self._register = register

    def next(self) -> bool:
        if self._length <= 0:
            return False
        self._walk(self._step_forward)
        return self._register == self._start

    def prev(self) -> bool:
        # Backing out of the cycle start wraps to the end of the cycle
        if self._length <= 0:
            return False
        leaving_start = self._register == self._start
        self._walk(self._step_back)
        return leaving_start

    def __repr__(self) -> str:
        return (
            f"LinearFeedbackShiftRegister(index={self.index}, length={self._length}, "
            f"seed={self._seed})"
        )
