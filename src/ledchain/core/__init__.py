"""Core configuration and frame buffer components"""

from .config import (
    ChaserConfig,
    FlareConfig,
    SessionConfig,
    SystemDefaults,
    validate_length,
)
from .frame_buffer import FrameBuffer
from .models import ConfigDocument, load_config

__all__ = [
    "ChaserConfig",
    "FlareConfig",
    "SessionConfig",
    "SystemDefaults",
    "validate_length",
    "FrameBuffer",
    "ConfigDocument",
    "load_config",
]
