"""Particle-based pattern implementations."""

from .flare import Flare, FlarePool

__all__ = ["Flare", "FlarePool"]
