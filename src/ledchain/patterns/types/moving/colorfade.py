from typing import Any, Dict, List

from ....common.color import CHANNEL_MAX, ColorTriplet
from ....core.frame_buffer import FrameBuffer
from ...base import BasePattern


class ColorFade(BasePattern):
    """Odometer-style color sweep.

    A running (r, g, b) accumulator advances by 256 // length per slot.
    Red rolls over into green and green into blue, so consecutive frames
    walk slowly through the whole color cube.
    """

    name = "colorfade"
    description = "Looping color sweep"

    def __init__(self):
        super().__init__()
        self.r = 0
        self.g = 0
        self.b = 0
        self._frame: List[ColorTriplet] = []

    def advance(self, length: int) -> None:
        increment = 256 // length if length else 0
        frame = []
        for _ in range(length):
            self.r += increment
            if self.r >= CHANNEL_MAX:
                self.r = 0
                self.g += increment
            if self.g >= CHANNEL_MAX:
                self.g = 0
                self.b += increment
            if self.b >= CHANNEL_MAX:
                self.b = 0
            frame.append(ColorTriplet(self.r, self.g, self.b))
        self._frame = frame

    def draw(self, buffer: FrameBuffer) -> None:
        for i, color in enumerate(self._frame[: len(buffer)]):
            buffer.put(i, color)

    def get_state(self) -> Dict[str, Any]:
        state = super().get_state()
        state["accumulator"] = (self.r, self.g, self.b)
        return state
