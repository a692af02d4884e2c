"""Moving pattern implementations."""

from .chaser import Chaser
from .colorfade import ColorFade

__all__ = ["Chaser", "ColorFade"]
