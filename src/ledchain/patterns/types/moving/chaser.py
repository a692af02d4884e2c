from typing import Any, Dict, Optional, Sequence

from ....common.color import ColorTriplet, scale
from ....common.exceptions import ValidationError
from ....core.config import SystemDefaults, validate_color
from ....core.frame_buffer import FrameBuffer
from ...base import BasePattern, Parameter


class Chaser(BasePattern):
    """Fading comet that bounces between the two ends of the strip.

    The head moves one slot per step. The trail is drawn behind the head
    using the amplitude profile, and folds back on itself at the far end
    of the buffer. Chasers blend additively, so several of them can share
    one buffer.
    """

    name = "chaser"
    description = "Bouncing trail with additive blending"

    parameters = [
        Parameter(
            name="position",
            type=int,
            default=0,
            min_value=0,
            description="Head position",
        ),
        Parameter(
            name="amplitude",
            type=int,
            default=256,
            min_value=1,
            max_value=256,
            description="Trail brightness entry, 256 is full scale",
        ),
    ]

    def __init__(
        self,
        color: Any,
        position: int = 0,
        forward: bool = True,
        amplitudes: Optional[Sequence[int]] = None,
        length: Optional[int] = None,
    ):
        super().__init__()
        self.color = ColorTriplet(*validate_color(color))
        self.position = self.validate_parameter("position", position)
        if length is not None and self.position >= length:
            raise ValidationError(
                f"Chaser position {self.position} outside buffer of {length}"
            )
        self.forward = bool(forward)
        if amplitudes is None:
            amplitudes = SystemDefaults.DEFAULT_AMPLITUDES
        self.amplitudes = tuple(
            self.validate_parameter("amplitude", a) for a in amplitudes
        )

    def advance(self, length: int) -> None:
        if self.forward:
            self.position += 1
            if self.position >= length:
                self.position = length - 1
                self.forward = False
        else:
            self.position -= 1
            if self.position <= 0:
                self.position = 0
                self.forward = True

    def draw(self, buffer: FrameBuffer) -> None:
        length = len(buffer)
        self.check_position(length)
        step = -1 if self.forward else 1
        pos = self.position

        for amplitude in self.amplitudes:
            # trail past the head end of the strip is simply not drawn
            if 0 <= pos < length:
                buffer.blend(pos, scale(self.color, amplitude))
            pos += step

            if pos == length:
                step = -step
                pos = length - 1

    def get_state(self) -> Dict[str, Any]:
        state = super().get_state()
        state.update(
            {
                "color": tuple(self.color),
                "position": self.position,
                "forward": self.forward,
            }
        )
        return state
