"""
Deterministic pseudo-random stream built on a 32-bit Galois LFSR.

The same stream serves two purposes:
- a noise source for the evolutionary loop (selection, crossover, mutation)
- an implicit weight table: a layer replays its stream from a stored seed
  on every inference call, so unstored synapses come back identical

A stream is owned by exactly one component and advanced synchronously.
"""

from typing import Optional, Tuple


# Tap mask with a maximal period over the 32-bit state space
LFSR_MASK = 0x80000057

# Default initial state
LFSR_INIT = 0x55555555

UINT32_MAX = 0xFFFFFFFF


def advance(state: int, mask: int = LFSR_MASK) -> Tuple[int, int]:
    """
    Advance a Galois LFSR by one step.

    Args:
        state: Current register state
        mask: Tap mask

    Returns:
        Tuple of (new_state, bit) where bit is the low bit shifted out
    """
    bit = state & 1
    if bit:
        return (state >> 1) ^ mask, bit
    return state >> 1, bit


class Stream:
    """
    Reproducible bit generator over a 32-bit state.

    Both draws consume exactly one advance step. Two streams created from
    the same state produce the same infinite sequence.
    """

    __slots__ = ('state',)

    def __init__(self, state: int = LFSR_INIT):
        self.state = state & UINT32_MAX

    def next_uint32(self) -> int:
        """Raw 32-bit draw."""
        self.state, _ = advance(self.state)
        return self.state

    def next_unit_float(self) -> float:
        """Draw normalized to [0, 1]."""
        return self.next_uint32() / UINT32_MAX

    def next_signed(self) -> float:
        """Draw mapped to [-1, 1]."""
        return 2 * self.next_unit_float() - 1

    def copy(self) -> 'Stream':
        return Stream(self.state)

    def __repr__(self) -> str:
        return f"Stream(0x{self.state:08x})"


def index_mask(columns: int) -> int:
    """Largest 2^k - 1 that keeps a masked index below `columns`."""
    if columns < 1:
        raise ValueError(f"columns must be positive, got {columns}")
    return (1 << (columns.bit_length() - 1)) - 1


def draw_index(stream: Stream, n: int) -> int:
    """
    Draw an index in [0, n) by masking and rejection.

    The draw is masked to the next power of two and redrawn while it lands
    in the invalid upper region. A single choice consumes no draw.
    """
    if n < 1:
        raise ValueError(f"cannot draw an index from {n} choices")
    if n == 1:
        return 0
    mask = (1 << (n - 1).bit_length()) - 1
    value = stream.next_uint32() & mask
    while value >= n:
        value = stream.next_uint32() & mask
    return value


# =============================================================================
# Period search
# =============================================================================

def period(mask: int, width: int = 32, limit: Optional[int] = None) -> Optional[int]:
    """
    Count the steps a `width`-bit Galois register takes to return to state 1.

    Args:
        mask: Tap mask (the top bit should be set for an invertible register)
        width: Register width in bits
        limit: Give up after this many steps

    Returns:
        The period, or None if `limit` was reached first
    """
    register_mask = (1 << width) - 1
    mask &= register_mask
    state, steps = 1, 0
    while True:
        state, _ = advance(state, mask)
        steps += 1
        if state == 1:
            return steps
        if limit is not None and steps >= limit:
            return None


def find_maximal_mask(width: int) -> Optional[int]:
    """
    Brute-force search for the first tap mask with a maximal period.

    Candidates are scanned upward from 1 << (width - 1). Only practical for
    narrow registers; the 32-bit mask is precomputed as LFSR_MASK.

    Returns:
        The first mask whose period is 2^width - 1, or None
    """
    if width < 2:
        raise ValueError(f"width must be at least 2, got {width}")
    maximal = (1 << width) - 1
    for candidate in range(1 << (width - 1), 1 << width):
        if period(candidate, width, limit=maximal) == maximal:
            return candidate
    return None
