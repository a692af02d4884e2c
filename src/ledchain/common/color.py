"""RGB triplet value type and the integer color math shared by all patterns."""

import logging
from typing import Any, NamedTuple

logger = logging.getLogger(__name__)

CHANNEL_MIN = 0
CHANNEL_MAX = 255
AMPLITUDE_MAX = 256  # full scale, (c * 256) >> 8 == c


def clamp_channel(value: int) -> int:
    """Clamp a single channel to the 8-bit range"""
    if value < CHANNEL_MIN:
        return CHANNEL_MIN
    if value > CHANNEL_MAX:
        return CHANNEL_MAX
    return value


class ColorTriplet(NamedTuple):
    """Immutable (r, g, b) intensity triplet"""

    r: int = 0
    g: int = 0
    b: int = 0

    @classmethod
    def coerce(cls, value: Any) -> "ColorTriplet":
        """Convert arbitrary input into a valid triplet.

        Anything that is not a three item sequence of finite numbers
        becomes black. Numeric channels are truncated to int and clamped to
        [0, 255].
        """
        if isinstance(value, cls):
            return cls(*(clamp_channel(c) for c in value))
        if value is None or isinstance(value, (str, bytes)):
            return BLACK
        try:
            r, g, b = value
            return cls(
                clamp_channel(int(r)), clamp_channel(int(g)), clamp_channel(int(b))
            )
        except (TypeError, ValueError, OverflowError):
            logger.debug(f"Malformed color {value!r}, substituting black")
            return BLACK


BLACK = ColorTriplet(0, 0, 0)
WHITE = ColorTriplet(255, 255, 255)


def scale(color: Any, amplitude: int) -> ColorTriplet:
    """Scale a color by amplitude/256 using integer floor division"""
    r, g, b = ColorTriplet.coerce(color)
    return ColorTriplet((r * amplitude) >> 8, (g * amplitude) >> 8, (b * amplitude) >> 8)


def add_clipped(first: Any, second: Any) -> ColorTriplet:
    """Saturating per-channel addition"""
    a = ColorTriplet.coerce(first)
    b = ColorTriplet.coerce(second)
    return ColorTriplet(
        min(CHANNEL_MAX, a.r + b.r),
        min(CHANNEL_MAX, a.g + b.g),
        min(CHANNEL_MAX, a.b + b.b),
    )
