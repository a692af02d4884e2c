"""Per-tick pixel buffer that pattern generators draw into."""

import logging
from typing import Any, Iterator, List

import numpy as np

from ..common.color import CHANNEL_MAX, ColorTriplet
from .config import validate_length

logger = logging.getLogger(__name__)


class FrameBuffer:
    """Fixed-length sequence of RGB triplets backed by an (N, 3) uint8 array"""

    def __init__(self, length: int):
        self.length = validate_length(length)
        self.pixels = np.zeros((self.length, 3), dtype=np.uint8)

    def __len__(self) -> int:
        return self.length

    def _check_index(self, index: int) -> int:
        if not 0 <= index < self.length:
            raise IndexError(
                f"Pixel index {index} out of range for buffer of {self.length}"
            )
        return index

    def __getitem__(self, index: int) -> ColorTriplet:
        r, g, b = self.pixels[self._check_index(index)]
        return ColorTriplet(int(r), int(g), int(b))

    def __setitem__(self, index: int, color: Any) -> None:
        self.put(index, color)

    def __iter__(self) -> Iterator[ColorTriplet]:
        for r, g, b in self.pixels.tolist():
            yield ColorTriplet(r, g, b)

    def clear(self) -> None:
        """Reset every slot to black"""
        self.pixels.fill(0)

    def put(self, index: int, color: Any) -> None:
        """Overwrite one slot"""
        self.pixels[self._check_index(index)] = ColorTriplet.coerce(color)

    def blend(self, index: int, color: Any) -> None:
        """Saturating additive write into one slot"""
        index = self._check_index(index)
        total = self.pixels[index].astype(np.uint16) + np.array(
            ColorTriplet.coerce(color), dtype=np.uint16
        )
        self.pixels[index] = np.minimum(total, CHANNEL_MAX).astype(np.uint8)

    def to_list(self) -> List[ColorTriplet]:
        return list(self)

    def to_array(self) -> np.ndarray:
        return self.pixels.copy()
