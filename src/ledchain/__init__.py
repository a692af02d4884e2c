"""Simulated WS2811/WS2812 LED chain and the animations that drive it"""

from .common import ColorTriplet
from .common.exceptions import (
    ConfigurationError,
    LedChainError,
    PatternError,
    ValidationError,
)
from .core import FrameBuffer, SessionConfig, load_config
from .led import LedChain, LedModule
from .patterns import AnimationSession, Chaser, ColorFade, Flare, FlarePool

__version__ = "0.1.0"

__all__ = [
    "ColorTriplet",
    "ConfigurationError",
    "LedChainError",
    "PatternError",
    "ValidationError",
    "FrameBuffer",
    "SessionConfig",
    "load_config",
    "LedChain",
    "LedModule",
    "AnimationSession",
    "Chaser",
    "ColorFade",
    "Flare",
    "FlarePool",
]
