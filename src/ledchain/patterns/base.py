from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, List, Optional
import logging

from ..common.exceptions import PatternError, ValidationError
from ..core.frame_buffer import FrameBuffer

logger = logging.getLogger(__name__)


@dataclass
class PatternMetrics:
    """Pattern step counters"""

    step_count: int = 0
    error_count: int = 0
    last_error: str = ""


@dataclass
class Parameter:
    """Pattern parameter definition with validation"""

    name: str
    type: type
    default: Any
    min_value: Optional[Any] = None
    max_value: Optional[Any] = None
    description: str = ""

    def validate(self, value: Any) -> Any:
        """Validate and normalize parameter value"""
        try:
            value = self.type(value)
        except (ValueError, TypeError) as e:
            raise ValidationError(
                f"Invalid value for parameter {self.name}: {value!r}. {str(e)}"
            )

        if self.min_value is not None and value < self.min_value:
            raise ValidationError(
                f"{self.name} must be at least {self.min_value}, got {value}"
            )
        if self.max_value is not None and value > self.max_value:
            raise ValidationError(
                f"{self.name} must be at most {self.max_value}, got {value}"
            )
        return value


class BasePattern(ABC):
    """Base class for pattern generators.

    A generator keeps its own animation state and, once per tick, advances
    that state and draws into a shared FrameBuffer. Clearing the buffer is
    the caller's job.
    """

    name: ClassVar[str] = ""
    description: ClassVar[str] = ""
    parameters: ClassVar[List[Parameter]] = []

    def __init__(self):
        self.metrics = PatternMetrics()

    @classmethod
    def _get_parameter_def(cls, name: str) -> Optional[Parameter]:
        """Get parameter definition by name"""
        return next((p for p in cls.parameters if p.name == name), None)

    @classmethod
    def validate_parameter(cls, name: str, value: Any) -> Any:
        param_def = cls._get_parameter_def(name)
        if param_def is None:
            raise ValidationError(f"Unknown parameter for {cls.name}: {name}")
        return param_def.validate(value)

    def check_position(self, length: int) -> None:
        """Reject a head position that does not fit a buffer of this length"""
        position = getattr(self, "position", 0)
        if not 0 <= position < length:
            raise PatternError(
                f"{self.name} position {position} outside buffer of {length}"
            )

    def step(self, buffer: FrameBuffer) -> None:
        """Advance one tick and draw into the buffer"""
        try:
            self.advance(len(buffer))
            self.draw(buffer)
            self.metrics.step_count += 1
        except Exception as e:
            self.metrics.error_count += 1
            self.metrics.last_error = str(e)
            raise

    @abstractmethod
    def advance(self, length: int) -> None:
        """Update state for the next frame"""
        pass

    @abstractmethod
    def draw(self, buffer: FrameBuffer) -> None:
        """Write this pattern's pixels into the buffer"""
        pass

    def get_state(self) -> Dict[str, Any]:
        """Get pattern state"""
        return {
            "name": self.name,
            "metrics": {
                "step_count": self.metrics.step_count,
                "error_count": self.metrics.error_count,
                "last_error": self.metrics.last_error,
            },
        }
