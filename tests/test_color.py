"""Tests for color triplets and integer color math."""

import numpy as np
import pytest

from ledchain.common.color import BLACK, ColorTriplet, add_clipped, scale


class TestColorTriplet:
    """Test the triplet value type"""

    def test_equality_with_tuples(self):
        """Triplets compare equal to plain tuples"""
        assert ColorTriplet(1, 2, 3) == (1, 2, 3)
        assert ColorTriplet() == BLACK == (0, 0, 0)

    def test_coerce_clamps_channels(self):
        """Out-of-range channels are clamped"""
        assert ColorTriplet.coerce((300, -5, 128)) == (255, 0, 128)
        assert ColorTriplet.coerce([1.9, 2.2, 3.0]) == (1, 2, 3)
        assert ColorTriplet.coerce(np.array([10, 20, 30], dtype=np.uint8)) == (
            10,
            20,
            30,
        )

    @pytest.mark.parametrize(
        "value",
        [
            None,
            "red",
            (1, 2),
            (1, 2, 3, 4),
            ("a", "b", "c"),
            42,
            [None, 0, 0],
            (float("inf"), 0, 0),
            (0, float("-inf"), 0),
            (0, 0, float("nan")),
        ],
    )
    def test_coerce_malformed_is_black(self, value):
        """Malformed input becomes black instead of failing"""
        assert ColorTriplet.coerce(value) == BLACK


class TestColorMath:
    """Test scaling and saturating addition"""

    def test_scale_floor_division(self):
        """Scaling is floor(c * amp / 256)"""
        assert scale((200, 0, 0), 128) == (100, 0, 0)
        assert scale((255, 255, 255), 1) == (0, 0, 0)
        assert scale((200, 75, 75), 200) == (156, 58, 58)

    def test_scale_range(self):
        """Scaled channels stay within [0, 255] for all amplitudes"""
        for amp in range(0, 257, 8):
            for c in (0, 1, 127, 128, 254, 255):
                (value, _, _) = scale((c, 0, 0), amp)
                assert value == (c * amp) // 256
                assert 0 <= value <= 255

    def test_scale_full_and_zero_amplitude(self):
        """256 is identity and 0 is black"""
        assert scale((12, 34, 56), 256) == (12, 34, 56)
        assert scale((12, 34, 56), 0) == BLACK

    def test_add_clipped_saturates(self):
        """Additive blending never wraps"""
        for a in range(256):
            for b in range(256):
                assert add_clipped((a, 0, 0), (b, 0, 0)).r == min(255, a + b)

    def test_add_clipped_malformed_operand(self):
        """A malformed operand counts as black"""
        assert add_clipped(None, (1, 2, 3)) == (1, 2, 3)
        assert add_clipped((4, 5, 6), "bogus") == (4, 5, 6)
