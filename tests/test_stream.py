"""
Tests for the LFSR stream and period search.

Run with: python -m pytest tests/test_stream.py -v
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from rndnet.core.stream import (
    Stream,
    LFSR_MASK,
    LFSR_INIT,
    UINT32_MAX,
    advance,
    draw_index,
    index_mask,
    period,
    find_maximal_mask,
)


class TestAdvance:
    """Tests for the single-step register update."""

    def test_constants(self):
        assert LFSR_MASK == 0x80000057
        assert LFSR_INIT == 0x55555555

    def test_odd_state_applies_mask(self):
        """Low bit 1: shift then xor with the tap mask."""
        state, bit = advance(0x55555555)
        assert bit == 1
        assert state == (0x55555555 >> 1) ^ LFSR_MASK
        assert state == 0xAAAAAAFD

    def test_even_state_shifts(self):
        state, bit = advance(0x7AAAAA9A)
        assert bit == 0
        assert state == 0x3D55554D

    def test_zero_is_fixed(self):
        assert advance(0) == (0, 0)


class TestStream:
    """Tests for Stream draws."""

    def test_first_draws_regression(self):
        """Pinned sequence from the default initial state."""
        stream = Stream(LFSR_INIT)
        assert [stream.next_uint32() for _ in range(4)] == [
            0xAAAAAAFD,
            0xD5555529,
            0xEAAAAAC3,
            0xF5555536,
        ]

    def test_unit_float_normalization(self):
        stream = Stream(LFSR_INIT)
        assert stream.next_unit_float() == 0xAAAAAAFD / UINT32_MAX

    def test_each_draw_consumes_one_step(self):
        a, b = Stream(1234), Stream(1234)
        a.next_unit_float()
        b.next_uint32()
        assert a.state == b.state

    def test_reproducible(self):
        """Identical initial state gives identical sequences."""
        a, b = Stream(LFSR_INIT + 42), Stream(LFSR_INIT + 42)
        assert [a.next_uint32() for _ in range(10)] == [b.next_uint32() for _ in range(10)]
        assert [a.next_unit_float() for _ in range(10)] == [b.next_unit_float() for _ in range(10)]

    def test_unit_float_range(self):
        stream = Stream(7)
        values = [stream.next_unit_float() for _ in range(1000)]
        assert all(0.0 <= v <= 1.0 for v in values)

    def test_signed_range(self):
        stream = Stream(7)
        values = [stream.next_signed() for _ in range(1000)]
        assert all(-1.0 <= v <= 1.0 for v in values)
        assert min(values) < 0 < max(values)

    def test_copy_is_independent(self):
        stream = Stream(99)
        clone = stream.copy()
        clone.next_uint32()
        clone.next_uint32()
        assert stream.state == 99
        assert stream.next_uint32() == Stream(99).next_uint32()

    def test_seed_wraps_to_32_bits(self):
        assert Stream(LFSR_INIT + (1 << 32)).state == LFSR_INIT


class TestIndexDraws:
    """Tests for masking and bounded index draws."""

    @pytest.mark.parametrize('columns,mask', [(1, 0), (2, 1), (3, 1), (4, 3), (6, 3), (8, 7)])
    def test_index_mask(self, columns, mask):
        assert index_mask(columns) == mask

    def test_index_mask_rejects_zero(self):
        with pytest.raises(ValueError):
            index_mask(0)

    def test_single_choice_consumes_nothing(self):
        stream = Stream(LFSR_INIT)
        assert draw_index(stream, 1) == 0
        assert stream.state == LFSR_INIT

    def test_draws_stay_in_range(self):
        stream = Stream(LFSR_INIT)
        draws = [draw_index(stream, 3) for _ in range(300)]
        assert set(draws) == {0, 1, 2}

    def test_power_of_two_uses_one_draw(self):
        stream = Stream(LFSR_INIT)
        value = draw_index(stream, 4)
        assert value == 0xAAAAAAFD & 3
        assert stream.state == 0xAAAAAAFD

    def test_empty_choice_raises(self):
        with pytest.raises(ValueError):
            draw_index(Stream(), 0)


class TestPeriodSearch:
    """Tests for the brute-force tap mask search."""

    def test_maximal_period(self):
        assert period(0x9, width=4) == 15

    def test_short_period(self):
        assert period(0x8, width=4) == 4

    def test_limit(self):
        assert period(0x9, width=4, limit=5) is None

    @pytest.mark.parametrize('width,mask', [(2, 0x3), (3, 0x5), (4, 0x9)])
    def test_find_maximal_mask(self, width, mask):
        assert find_maximal_mask(width) == mask

    def test_found_masks_are_maximal(self):
        for width in range(2, 11):
            mask = find_maximal_mask(width)
            assert period(mask, width) == (1 << width) - 1

    def test_width_too_small(self):
        with pytest.raises(ValueError):
            find_maximal_mask(1)
