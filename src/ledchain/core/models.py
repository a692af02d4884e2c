"""On-disk configuration schema (YAML) for animation sessions."""

import logging
from pathlib import Path
from typing import List, Optional, Tuple, Union

import yaml
from pydantic import BaseModel, Field, ValidationError as SchemaError, field_validator

from ..common.exceptions import ConfigurationError, ValidationError
from .config import ChaserConfig, FlareConfig, SessionConfig, SystemDefaults

logger = logging.getLogger(__name__)


class ChainSection(BaseModel):
    """LED chain hardware description"""

    length: int = Field(
        SystemDefaults.DEFAULT_ANIMATION_LENGTH,
        ge=1,
        le=SystemDefaults.MAX_CHAIN_LENGTH,
    )


class AnimationSection(BaseModel):
    """Driver loop settings"""

    mode: str = SystemDefaults.DEFAULT_MODE
    speed_divisor: int = Field(SystemDefaults.DEFAULT_SPEED_DIVISOR, ge=1)
    seed: Optional[int] = None

    @field_validator("mode")
    @classmethod
    def validate_mode(cls, v):
        if v not in SystemDefaults.MODES:
            raise ValueError(f"Mode must be one of {', '.join(SystemDefaults.MODES)}")
        return v


class ChaserSection(BaseModel):
    """A single chaser"""

    color: Tuple[int, int, int]
    offset: float = Field(0.0, ge=0.0, lt=1.0)
    forward: bool = True
    amplitudes: Optional[List[int]] = None

    @field_validator("color")
    @classmethod
    def validate_color(cls, v):
        for component in v:
            if not 0 <= component <= 255:
                raise ValueError("Color components must be between 0 and 255")
        return v

    @field_validator("amplitudes")
    @classmethod
    def validate_amplitudes(cls, v):
        if v is None:
            return v
        if not v:
            raise ValueError("Amplitude profile must not be empty")
        if not all(1 <= a <= 256 for a in v):
            raise ValueError("Amplitudes must be between 1 and 256")
        return v


class FlareSection(BaseModel):
    """Flare pool settings"""

    count: int = Field(SystemDefaults.DEFAULT_FLARE_COUNT, ge=1)
    pause: int = Field(SystemDefaults.DEFAULT_FLARE_PAUSE, ge=0)


class ConfigDocument(BaseModel):
    """Top level configuration file"""

    led_chain: ChainSection = Field(default_factory=ChainSection)
    animation: AnimationSection = Field(default_factory=AnimationSection)
    chasers: Optional[List[ChaserSection]] = None
    flares: FlareSection = Field(default_factory=FlareSection)

    def to_config(self) -> SessionConfig:
        """Convert the validated document into runtime configuration"""
        kwargs = {
            "length": self.led_chain.length,
            "speed_divisor": self.animation.speed_divisor,
            "mode": self.animation.mode,
            "seed": self.animation.seed,
            "flares": FlareConfig(count=self.flares.count, pause=self.flares.pause),
        }
        if self.chasers is not None:
            kwargs["chasers"] = [
                ChaserConfig(
                    color=c.color,
                    offset=c.offset,
                    forward=c.forward,
                    amplitudes=c.amplitudes,
                )
                for c in self.chasers
            ]
        return SessionConfig(**kwargs)


def load_config(path: Union[str, Path]) -> SessionConfig:
    """Load and validate a YAML session configuration file"""
    path = Path(path)
    try:
        with open(path, "r") as f:
            raw = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")

    try:
        config = ConfigDocument.model_validate(raw).to_config()
    except (SchemaError, ValidationError) as e:
        raise ConfigurationError(f"Invalid configuration in {path}: {e}") from e

    logger.info(
        f"Loaded config from {path}: {config.length} LEDs, mode {config.mode}"
    )
    return config
