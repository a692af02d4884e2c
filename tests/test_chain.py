"""Tests for the LED chain shift register simulation."""

import numpy as np
import pytest

from ledchain.common.color import BLACK
from ledchain.common.exceptions import ValidationError
from ledchain.core.config import SystemDefaults
from ledchain.core.frame_buffer import FrameBuffer
from ledchain.led.chain import LedChain


def gray(level):
    return (level, level, level)


class TestChainConstruction:
    """Test chain topology"""

    def test_default_length(self):
        """Chains default to 30 modules"""
        chain = LedChain()
        assert len(chain) == SystemDefaults.DEFAULT_CHAIN_LENGTH == 30

    def test_downstream_links_follow_order(self):
        """Each module points at the next one, the tail at nothing"""
        chain = LedChain(5)
        assert [m.downstream for m in chain] == [1, 2, 3, 4, None]
        assert [m.index for m in chain] == [0, 1, 2, 3, 4]

    def test_downstream_is_read_only(self):
        """Modules cannot rewire the chain"""
        chain = LedChain(3)
        with pytest.raises(AttributeError):
            chain[0].downstream = 2

    def test_initial_state_is_unset(self):
        """Nothing is pending or displayed before the first push"""
        chain = LedChain(4)
        assert chain.pending == [None] * 4
        assert chain.displayed == [None] * 4

    def test_resize_replaces_modules(self):
        """Resizing builds a new module sequence"""
        chain = LedChain(3)
        chain.send([gray(1), gray(2), gray(3)])
        old_modules = chain.modules
        chain.resize(5)
        assert chain.modules is not old_modules
        assert len(chain) == 5
        assert chain.displayed == [None] * 5
        assert chain[4].downstream is None

    @pytest.mark.parametrize("length", [-1, SystemDefaults.MAX_CHAIN_LENGTH + 1, 2.5])
    def test_invalid_length_rejected(self, length):
        """Bad lengths are rejected at construction"""
        with pytest.raises(ValidationError):
            LedChain(length)


class TestPushAndLatch:
    """Test shift and commit semantics"""

    def test_three_module_scenario(self):
        """Last pushed value ends up at the head"""
        chain = LedChain(3)
        chain.push(gray(10))
        chain.push(gray(20))
        chain.push(gray(30))
        chain.latch()
        assert chain.displayed == [gray(30), gray(20), gray(10)]

    @pytest.mark.parametrize("length", [1, 2, 7, 48])
    def test_shift_property(self, length):
        """N pushes then a latch reverse the pushed order"""
        chain = LedChain(length)
        values = [gray(i) for i in range(length)]
        for value in values:
            chain.push(value)
        chain.latch()
        for i in range(length):
            assert chain.displayed[i] == values[length - 1 - i]

    def test_push_does_not_display(self):
        """Pushed values stay pending until latched"""
        chain = LedChain(2)
        chain.push(gray(5))
        assert chain[0].pending == gray(5)
        assert chain[0].displayed is None

    def test_latch_clears_pending(self):
        """Latching moves pending values to the display"""
        chain = LedChain(2)
        chain.push(gray(5))
        chain.latch()
        assert chain.pending == [None, None]
        assert chain.displayed == [gray(5), None]

    def test_overflow_drops_oldest(self):
        """Values shifted past the tail are discarded"""
        chain = LedChain(2)
        for level in (1, 2, 3, 4):
            chain.push(gray(level))
        chain.latch()
        assert chain.displayed == [gray(4), gray(3)]

    def test_partial_fill_keeps_tail_unset(self):
        """Fewer pushes than modules leave the tail untouched"""
        chain = LedChain(4)
        chain.push(gray(1))
        chain.push(gray(2))
        chain.latch()
        assert chain.displayed == [gray(2), gray(1), None, None]

    def test_partial_fill_keeps_previous_display(self):
        """Modules without a new value keep showing the old one"""
        chain = LedChain(4)
        chain.send([gray(1), gray(2), gray(3), gray(4)])
        chain.push(gray(9))
        chain.latch()
        assert chain.displayed == [gray(9), gray(3), gray(2), gray(1)]

    def test_latch_without_push_changes_nothing(self):
        """A bare latch is harmless"""
        chain = LedChain(3)
        chain.send([gray(1), gray(2), gray(3)])
        before = chain.displayed
        chain.latch()
        assert chain.displayed == before
        assert chain.latch_count == 2

    def test_empty_chain_is_noop(self):
        """Pushing into a zero length chain does nothing"""
        chain = LedChain(0)
        chain.push(gray(1))
        chain.latch()
        assert chain.send([gray(1)]) == []
        assert chain.push_count == 0


class TestSend:
    """Test batch sending"""

    def test_send_pushes_then_latches(self):
        """send is N pushes and one latch"""
        chain = LedChain(3)
        displayed = chain.send([gray(1), gray(2), gray(3)])
        assert displayed == [gray(3), gray(2), gray(1)]
        assert chain.push_count == 3
        assert chain.latch_count == 1

    def test_send_ignores_excess_entries(self):
        """Entries beyond the chain length are never pushed"""
        chain = LedChain(3)
        chain.send([gray(i) for i in range(1, 6)])
        assert chain.displayed == [gray(3), gray(2), gray(1)]
        assert chain.push_count == 3

    def test_send_malformed_entries_become_black(self):
        """Missing or bad triplets are replaced by black"""
        chain = LedChain(3)
        chain.send([gray(1), None, "bogus"])
        assert chain.displayed == [BLACK, BLACK, gray(1)]

    def test_send_non_finite_entries_become_black(self):
        """Infinite or NaN channels do not abort the frame"""
        chain = LedChain(3)
        chain.send([gray(1), (float("inf"), 0, 0), (0, float("nan"), 0)])
        assert chain.displayed == [BLACK, BLACK, gray(1)]
        assert chain.latch_count == 1

    def test_send_clamps_channels(self):
        """Channel values are clamped at the chain boundary"""
        chain = LedChain(1)
        chain.send([(300, -20, 40)])
        assert chain.displayed == [(255, 0, 40)]

    def test_send_frame_buffer(self):
        """A FrameBuffer can be sent directly"""
        buffer = FrameBuffer(3)
        buffer.put(0, (10, 0, 0))
        buffer.put(2, (0, 0, 30))
        chain = LedChain(3)
        chain.send(buffer)
        assert chain.displayed == [(0, 0, 30), BLACK, (10, 0, 0)]

    def test_to_array_renders_unset_as_off(self):
        """Unset modules read as black in the array view"""
        chain = LedChain(3)
        chain.send([gray(7)])
        pixels = chain.to_array()
        assert pixels.dtype == np.uint8
        assert pixels.shape == (3, 3)
        assert pixels.tolist() == [[7, 7, 7], [0, 0, 0], [0, 0, 0]]

    def test_reset_and_state(self):
        """State snapshot counts lit modules, reset forgets everything"""
        chain = LedChain(3)
        chain.send([gray(1), BLACK, gray(2)])
        state = chain.get_state()
        assert state["length"] == 3
        assert state["lit_modules"] == 2
        chain.reset()
        assert chain.displayed == [None, None, None]
