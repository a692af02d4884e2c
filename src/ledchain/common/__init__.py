"""Common components shared across modules."""

from .color import BLACK, WHITE, ColorTriplet, add_clipped, scale
from .exceptions import (
    ConfigurationError,
    LedChainError,
    PatternError,
    ValidationError,
)

__all__ = [
    "BLACK",
    "WHITE",
    "ColorTriplet",
    "add_clipped",
    "scale",
    "ConfigurationError",
    "LedChainError",
    "PatternError",
    "ValidationError",
]
