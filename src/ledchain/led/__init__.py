"""LED chain simulation"""

from .chain import LedChain, LedModule

__all__ = ["LedChain", "LedModule"]
