import logging
import random
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from ..common.exceptions import ValidationError
from ..core.config import SessionConfig, SystemDefaults
from ..core.frame_buffer import FrameBuffer
from ..led.chain import LedChain
from .types import Chaser, ColorFade, FlarePool

logger = logging.getLogger(__name__)


@dataclass
class EngineMetrics:
    """Animation session counters"""

    current_mode: str = ""
    mode_changes: int = 0
    total_ticks: int = 0
    frames_sent: int = 0
    dropped_frames: int = 0
    error_count: int = 0
    last_error: str = ""
    last_error_time: float = 0.0
    error_history: List[Dict[str, Any]] = field(default_factory=list)

    def record_error(self, error: str) -> None:
        """Record an error occurrence"""
        self.error_count += 1
        self.last_error = error
        self.last_error_time = time.time()

        # Keep track of error history (last 10 errors)
        self.error_history.append(
            {
                "timestamp": self.last_error_time,
                "message": error,
                "mode": self.current_mode,
            }
        )
        if len(self.error_history) > 10:
            self.error_history.pop(0)


class AnimationSession:
    """Owns the chain, the frame buffer and all generators of one animation run.

    Each call to tick() is one animation frame request. Only every
    speed_divisor-th request actually builds a frame, sends it down the
    chain and latches.
    """

    def __init__(
        self,
        config: Optional[SessionConfig] = None,
        chain: Optional[LedChain] = None,
    ):
        self.config = config or SessionConfig.create_default()
        self.length = self.config.length

        if chain is None:
            chain = LedChain(self.length)
        elif len(chain) != self.length:
            raise ValidationError(
                f"Chain has {len(chain)} modules, session expects {self.length}"
            )
        self.chain = chain
        self.buffer = FrameBuffer(self.length)
        self.rng = random.Random(self.config.seed)

        # Generators, stepped in list order so blending is deterministic
        self.chasers = [
            Chaser(
                c.color,
                position=c.position(self.length),
                forward=c.forward,
                amplitudes=c.amplitudes,
                length=self.length,
            )
            for c in self.config.chasers
        ]
        self.flares = FlarePool(
            count=self.config.flares.count,
            pause=self.config.flares.pause,
            rng=self.rng,
        )
        self.colorfade = ColorFade()

        self.speed_divisor = self.config.speed_divisor
        self.tick_count = 0
        self.metrics = EngineMetrics()

        self._builders: Dict[str, Optional[Callable[[], None]]] = {
            "chasers": self._build_chasers,
            "flares": self._build_flares,
            "colorfade": self._build_colorfade,
            "stop": None,
        }
        self.mode = ""
        self.set_mode(self.config.mode)

        logger.info(
            f"Animation session ready: {self.length} LEDs, {len(self.chasers)} "
            f"chasers, {len(self.flares)} flares, mode {self.mode}"
        )

    def set_mode(self, mode: str) -> None:
        """Switch the active animation, starting from a clean buffer"""
        if mode not in self._builders:
            raise ValidationError(
                f"Unknown mode: {mode}, expected one of {SystemDefaults.MODES}"
            )
        self.buffer.clear()
        if self.mode and mode != self.mode:
            self.metrics.mode_changes += 1
            logger.info(f"Mode changed from {self.mode} to {mode}")
        self.mode = mode
        self.metrics.current_mode = mode

    def _build_chasers(self) -> None:
        self.buffer.clear()
        for chaser in self.chasers:
            chaser.step(self.buffer)

    def _build_flares(self) -> None:
        self.buffer.clear()
        self.flares.retrigger(self.length)
        self.flares.step(self.buffer)

    def _build_colorfade(self) -> None:
        # overwrites every slot, no clear needed
        self.colorfade.step(self.buffer)

    def tick(self) -> bool:
        """Run one animation tick, returns True if a frame was latched"""
        builder = self._builders[self.mode]
        if builder is None:
            return False

        self.metrics.total_ticks += 1
        throttled = self.tick_count % self.speed_divisor != 0
        self.tick_count += 1
        if throttled:
            return False

        try:
            builder()
        except Exception as e:
            self.metrics.record_error(f"Frame generation failed: {str(e)}")
            self.metrics.dropped_frames += 1
            logger.error(f"Frame generation failed in {self.mode} mode: {e}")
            self.buffer.clear()

        self.chain.send(self.buffer)
        self.metrics.frames_sent += 1
        logger.debug(f"Latched frame {self.metrics.frames_sent} ({self.mode})")
        return True

    def run(self, ticks: int) -> int:
        """Run a number of ticks back to back, returns frames latched"""
        return sum(1 for _ in range(ticks) if self.tick())

    def get_state(self) -> Dict[str, Any]:
        """Get session state"""
        return {
            "mode": self.mode,
            "length": self.length,
            "tick_count": self.tick_count,
            "speed_divisor": self.speed_divisor,
            "chain": self.chain.get_state(),
            "chasers": [c.get_state() for c in self.chasers],
            "flares": self.flares.get_state(),
            "metrics": {
                "mode_changes": self.metrics.mode_changes,
                "total_ticks": self.metrics.total_ticks,
                "frames_sent": self.metrics.frames_sent,
                "dropped_frames": self.metrics.dropped_frames,
                "error_count": self.metrics.error_count,
                "last_error": self.metrics.last_error,
            },
        }
