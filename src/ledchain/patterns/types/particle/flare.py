import logging
import random
from typing import Any, Dict, List, Optional

from ....common.color import AMPLITUDE_MAX, WHITE, ColorTriplet, scale
from ....common.exceptions import ValidationError
from ....core.config import SystemDefaults, validate_color
from ....core.frame_buffer import FrameBuffer
from ...base import BasePattern, Parameter

logger = logging.getLogger(__name__)

# Re-trigger ranges
BRIGHTNESS_MAX = 250
BRIGHTNESS_SPAN = 125  # channels land in [126, 250]
AMPLITUDE_SEED_MIN = 100
AMPLITUDE_SEED_SPAN = 100
SPEED_MIN = 4
SPEED_STEPS = 8  # speeds 4, 6, ... 18

# Written as "-speed >> 2 + 1", which binds as a shift by 3
DECAY_SHIFT = 3


class Flare(BasePattern):
    """Single pixel that ramps up to full brightness, then decays to off"""

    name = "flare"
    description = "Pulse that ramps up and decays at one position"

    parameters = [
        Parameter(
            name="position",
            type=int,
            default=0,
            min_value=0,
            description="Pixel index",
        ),
        Parameter(
            name="amplitude",
            type=int,
            default=0,
            min_value=0,
            max_value=AMPLITUDE_MAX,
            description="Current brightness, 256 is full scale",
        ),
        Parameter(
            name="speed",
            type=int,
            default=0,
            description="Amplitude change per step, negative while decaying",
        ),
    ]

    def __init__(
        self,
        color: Any = WHITE,
        position: int = 0,
        amplitude: int = 0,
        speed: int = 0,
        length: Optional[int] = None,
    ):
        super().__init__()
        self.color = ColorTriplet(*validate_color(color))
        self.position = self.validate_parameter("position", position)
        if length is not None and self.position >= length:
            raise ValidationError(
                f"Flare position {self.position} outside buffer of {length}"
            )
        self.amplitude = self.validate_parameter("amplitude", amplitude)
        self.speed = self.validate_parameter("speed", speed)

    @property
    def extinguished(self) -> bool:
        return self.amplitude == 0

    def advance(self, length: int = 0) -> None:
        if self.speed < 0 and -self.speed > self.amplitude:
            self.amplitude = 0
        else:
            self.amplitude += self.speed
            if self.amplitude > AMPLITUDE_MAX:
                self.amplitude = AMPLITUDE_MAX
                self.speed = -self.speed >> DECAY_SHIFT

    def draw(self, buffer: FrameBuffer) -> None:
        self.check_position(len(buffer))
        buffer.put(self.position, scale(self.color, self.amplitude))

    def randomize(self, length: int, rng: Optional[random.Random] = None) -> None:
        """Re-ignite with a random bright color, position and speed"""
        if length < 1:
            raise ValidationError("Cannot place a flare in an empty buffer")
        rng = rng or random
        self.color = ColorTriplet(
            *(BRIGHTNESS_MAX - rng.randrange(BRIGHTNESS_SPAN) for _ in range(3))
        )
        self.amplitude = rng.randrange(AMPLITUDE_SEED_SPAN) + AMPLITUDE_SEED_MIN
        self.position = rng.randrange(length)
        self.speed = 2 * rng.randrange(SPEED_STEPS) + SPEED_MIN

    def get_state(self) -> Dict[str, Any]:
        state = super().get_state()
        state.update(
            {
                "color": tuple(self.color),
                "position": self.position,
                "amplitude": self.amplitude,
                "speed": self.speed,
            }
        )
        return state


class FlarePool:
    """Fixed set of flares re-ignited one at a time in round-robin order"""

    def __init__(
        self,
        count: int = SystemDefaults.DEFAULT_FLARE_COUNT,
        pause: int = SystemDefaults.DEFAULT_FLARE_PAUSE,
        rng: Optional[random.Random] = None,
    ):
        if count < 1:
            raise ValidationError("Flare pool needs at least one flare")
        if pause < 0:
            raise ValidationError("Flare pause must not be negative")
        self.flares: List[Flare] = [Flare() for _ in range(count)]
        self.current = 0
        self.pause = pause
        self.rng = rng or random.Random()

    def __len__(self) -> int:
        return len(self.flares)

    def retrigger(self, length: int) -> Optional[Flare]:
        """Per-tick re-trigger pass, returns the flare that was ignited"""
        if self.pause:
            self.pause -= 1
            return None

        flare = self.flares[self.current]
        if not flare.extinguished:
            return None

        flare.randomize(length, self.rng)
        logger.debug(
            f"Ignited flare {self.current} at {flare.position} "
            f"color={tuple(flare.color)} speed={flare.speed}"
        )
        self.current = (self.current + 1) % len(self.flares)
        return flare

    def step(self, buffer: FrameBuffer) -> None:
        """Step every flare in pool order"""
        for flare in self.flares:
            flare.step(buffer)

    def get_state(self) -> Dict[str, Any]:
        return {
            "count": len(self.flares),
            "current": self.current,
            "pause": self.pause,
            "active": sum(1 for f in self.flares if not f.extinguished),
        }
