from dataclasses import dataclass, field, fields, replace
from typing import Any, ClassVar, Dict, List, Optional, Tuple
import logging

from ..common.exceptions import ValidationError

logger = logging.getLogger(__name__)


@dataclass
class SystemDefaults:
    """Chain and animation constants"""

    # Chain
    DEFAULT_CHAIN_LENGTH: ClassVar[int] = 30
    MAX_CHAIN_LENGTH: ClassVar[int] = 1000

    # Animation session
    DEFAULT_ANIMATION_LENGTH: ClassVar[int] = 48
    DEFAULT_SPEED_DIVISOR: ClassVar[int] = 3  # only every Nth tick draws
    DEFAULT_MODE: ClassVar[str] = "chasers"
    MODES: ClassVar[Tuple[str, ...]] = ("chasers", "flares", "colorfade", "stop")

    # Flares
    DEFAULT_FLARE_COUNT: ClassVar[int] = 16
    DEFAULT_FLARE_PAUSE: ClassVar[int] = 1

    # Chaser trail, brighter than the classic ws2811 table so the tail shows
    DEFAULT_AMPLITUDES: ClassVar[Tuple[int, ...]] = (
        256, 200, 175, 150, 125, 100, 80, 60, 50, 40, 30, 20, 15, 10, 6, 1,
    )

    @classmethod
    def get_all_defaults(cls) -> Dict[str, Any]:
        """Get all default values as a dictionary"""
        return {
            name: value
            for name, value in vars(cls).items()
            if name.startswith("DEFAULT_")
        }


def validate_length(length: int) -> int:
    """Check a chain or buffer length"""
    if isinstance(length, bool) or not isinstance(length, int):
        raise ValidationError(f"Length must be an integer, got {length!r}")
    if not 0 <= length <= SystemDefaults.MAX_CHAIN_LENGTH:
        raise ValidationError(
            f"Length must be between 0 and {SystemDefaults.MAX_CHAIN_LENGTH}"
        )
    return length


def validate_color(color: Any) -> Tuple[int, int, int]:
    """Strict color check for configuration input"""
    try:
        r, g, b = color
        values = (int(r), int(g), int(b))
    except (TypeError, ValueError):
        raise ValidationError(f"Color must be an (r, g, b) triplet, got {color!r}")
    if not all(0 <= v <= 255 for v in values):
        raise ValidationError(f"Color channels must be between 0 and 255: {color!r}")
    return values


@dataclass
class ChaserConfig:
    """One chaser of the chasers animation"""

    color: Tuple[int, int, int] = (200, 75, 75)
    offset: float = 0.0  # fraction of the chain length
    forward: bool = True
    amplitudes: Optional[List[int]] = None

    def validate(self) -> None:
        self.color = validate_color(self.color)
        if not 0.0 <= self.offset < 1.0:
            raise ValidationError(f"Chaser offset must be in [0, 1): {self.offset}")
        if self.amplitudes is not None:
            if not self.amplitudes:
                raise ValidationError("Amplitude profile must not be empty")
            if not all(1 <= a <= 256 for a in self.amplitudes):
                raise ValidationError(
                    f"Amplitudes must be between 1 and 256: {self.amplitudes}"
                )

    def position(self, length: int) -> int:
        """Starting position of this chaser in a buffer of the given length"""
        return int(length * self.offset)


@dataclass
class FlareConfig:
    """Flare pool settings"""

    count: int = SystemDefaults.DEFAULT_FLARE_COUNT
    pause: int = SystemDefaults.DEFAULT_FLARE_PAUSE

    def validate(self) -> None:
        if self.count < 1:
            raise ValidationError("Flare count must be at least 1")
        if self.pause < 0:
            raise ValidationError("Flare pause must not be negative")


def default_chasers() -> List[ChaserConfig]:
    """The five chasers of the classic demo, spread along the chain"""
    return [
        ChaserConfig(color=(200, 75, 75), offset=0.0, forward=True),
        ChaserConfig(color=(75, 200, 75), offset=0.2, forward=False),
        ChaserConfig(color=(75, 75, 200), offset=0.4, forward=True),
        ChaserConfig(color=(200, 200, 75), offset=0.6, forward=False),
        ChaserConfig(color=(220, 75, 175), offset=0.8, forward=True),
    ]


@dataclass
class SessionConfig:
    """Animation session configuration"""

    length: int = SystemDefaults.DEFAULT_ANIMATION_LENGTH
    speed_divisor: int = SystemDefaults.DEFAULT_SPEED_DIVISOR
    mode: str = SystemDefaults.DEFAULT_MODE
    chasers: List[ChaserConfig] = field(default_factory=default_chasers)
    flares: FlareConfig = field(default_factory=FlareConfig)
    seed: Optional[int] = None

    def __post_init__(self):
        """Validate entire configuration"""
        try:
            self.validate()
        except ValidationError as e:
            logger.error(f"Configuration validation failed: {e}")
            raise

    def validate(self) -> None:
        validate_length(self.length)
        if self.length < 1:
            raise ValidationError("Animation length must be at least 1")
        if self.speed_divisor < 1:
            raise ValidationError("Speed divisor must be at least 1")
        if self.mode not in SystemDefaults.MODES:
            raise ValidationError(
                f"Unknown mode {self.mode!r}, expected one of {SystemDefaults.MODES}"
            )
        for chaser in self.chasers:
            chaser.validate()
        self.flares.validate()

    @classmethod
    def create_default(cls) -> "SessionConfig":
        """Create default configuration"""
        return cls()

    def update(self, updates: Dict[str, Any]) -> None:
        """Update configuration with new values, all or nothing"""
        changes = {
            name: updates[name]
            for name in ("length", "speed_divisor", "mode", "seed")
            if name in updates
        }
        if "chasers" in updates:
            changes["chasers"] = [ChaserConfig(**c) for c in updates["chasers"]]
        if "flares" in updates:
            changes["flares"] = FlareConfig(**updates["flares"])

        # replace() revalidates, so a bad override leaves self untouched
        updated = replace(self, **changes)
        for f in fields(self):
            setattr(self, f.name, getattr(updated, f.name))
