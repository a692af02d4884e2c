"""Simulation of a serially chained WS2811/WS2812 module string.

Each module buffers one RGB triplet. Pushing a new triplet into the head
shifts every buffered value one module further down the chain, and a
latch makes every module display what it has buffered. Whole triplets are
pushed at once; the bit-level 800kHz protocol is not modelled.
"""

import logging
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from ..common.color import ColorTriplet
from ..core.config import SystemDefaults, validate_length

logger = logging.getLogger(__name__)


class LedModule:
    """One link of the chain"""

    __slots__ = ("_index", "_downstream", "pending", "displayed")

    def __init__(self, index: int, downstream: Optional[int]):
        self._index = index
        self._downstream = downstream
        self.pending: Optional[ColorTriplet] = None
        self.displayed: Optional[ColorTriplet] = None

    @property
    def index(self) -> int:
        return self._index

    @property
    def downstream(self) -> Optional[int]:
        """Index of the next module in the owning chain, None for the tail"""
        return self._downstream

    def commit(self) -> None:
        """Show the buffered value, if any, and empty the buffer"""
        if self.pending is not None:
            self.displayed = self.pending
            self.pending = None

    def __repr__(self) -> str:
        return (
            f"LedModule(index={self._index}, pending={self.pending}, "
            f"displayed={self.displayed})"
        )


class LedChain:
    """Ordered string of LED modules, index 0 is the head"""

    def __init__(self, length: int = SystemDefaults.DEFAULT_CHAIN_LENGTH):
        self.modules: Tuple[LedModule, ...] = ()
        self.push_count = 0
        self.latch_count = 0
        self.resize(length)

    def resize(self, length: int) -> None:
        """Replace the module sequence with a fresh chain of the given length"""
        length = validate_length(length)
        self.modules = tuple(
            LedModule(i, i + 1 if i + 1 < length else None) for i in range(length)
        )
        logger.debug(f"Built LED chain with {length} modules")

    def __len__(self) -> int:
        return len(self.modules)

    def __iter__(self) -> Iterator[LedModule]:
        return iter(self.modules)

    def __getitem__(self, index: int) -> LedModule:
        return self.modules[index]

    def _walk(self) -> Iterator[LedModule]:
        """Follow downstream links from the head to the tail"""
        if not self.modules:
            return
        index: Optional[int] = 0
        while index is not None:
            module = self.modules[index]
            yield module
            index = module.downstream

    def push(self, triplet: Any) -> None:
        """Inject one triplet at the head of the chain.

        A module that already holds a value hands it to its downstream
        neighbour before taking the new one; the value leaving the tail is
        dropped.
        """
        if not self.modules:
            return
        self.push_count += 1

        # Occupied run starting at the head, up to the first empty module
        path: List[LedModule] = []
        for module in self._walk():
            path.append(module)
            if module.pending is None:
                break

        tail = path[-1]
        if tail.downstream is None and tail.pending is not None:
            logger.debug(f"Value {tail.pending} shifted off the end of the chain")

        # Forward far end first so every value moves exactly one link
        for k in range(len(path) - 1, 0, -1):
            path[k].pending = path[k - 1].pending
        path[0].pending = ColorTriplet.coerce(triplet)

    def latch(self) -> None:
        """Commit every buffered value to the display, head to tail"""
        self.latch_count += 1
        for module in self._walk():
            module.commit()

    def send(self, triplets: Sequence[Any]) -> List[Optional[ColorTriplet]]:
        """Push up to len(chain) triplets in order, then latch once"""
        count = min(len(self.modules), len(triplets))
        for i in range(count):
            self.push(triplets[i])
        self.latch()
        return self.displayed

    @property
    def displayed(self) -> List[Optional[ColorTriplet]]:
        """Committed color of each module, None where nothing was ever shown"""
        return [module.displayed for module in self.modules]

    @property
    def pending(self) -> List[Optional[ColorTriplet]]:
        return [module.pending for module in self.modules]

    def to_array(self) -> np.ndarray:
        """Displayed colors as an (N, 3) uint8 array, unset modules read as off"""
        pixels = np.zeros((len(self.modules), 3), dtype=np.uint8)
        for module in self.modules:
            if module.displayed is not None:
                pixels[module.index] = module.displayed
        return pixels

    def reset(self) -> None:
        """Forget all buffered and displayed values"""
        for module in self.modules:
            module.pending = None
            module.displayed = None
        logger.info(f"Reset LED chain of {len(self.modules)} modules")

    def get_state(self) -> Dict[str, Any]:
        """Get current chain state"""
        return {
            "length": len(self.modules),
            "push_count": self.push_count,
            "latch_count": self.latch_count,
            "lit_modules": sum(
                1
                for module in self.modules
                if module.displayed is not None and any(module.displayed)
            ),
        }
