"""Pattern type implementations."""

from .moving import Chaser, ColorFade
from .particle import Flare, FlarePool

__all__ = [
    "Chaser",
    "ColorFade",
    "Flare",
    "FlarePool",
]
