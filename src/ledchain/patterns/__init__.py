"""Pattern generators and the animation session that drives them"""

from .base import BasePattern, Parameter, PatternMetrics
from .engine import AnimationSession, EngineMetrics
from .types import Chaser, ColorFade, Flare, FlarePool

__all__ = [
    "BasePattern",
    "Parameter",
    "PatternMetrics",
    "AnimationSession",
    "EngineMetrics",
    "Chaser",
    "ColorFade",
    "Flare",
    "FlarePool",
]
