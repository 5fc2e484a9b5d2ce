# bag.py (7-bag randomizer)
import random
import time
from typing import List, Optional

from core_game import PIECE_TYPES


class SevenBag:
    """Shuffled queue of all seven pieces, refilled only when empty."""

    def __init__(self, seed: Optional[int] = None):
        if seed is None:
            seed = time.perf_counter_ns()
        self.rng = random.Random(seed)
        self.queue: List[str] = []

    def _refill(self, queue: List[str], rng: random.Random) -> None:
        pieces = list(PIECE_TYPES)
        rng.shuffle(pieces)
        queue.extend(pieces)

    def next(self) -> str:
        if not self.queue:
            self._refill(self.queue, self.rng)
        return self.queue.pop()

    def peek(self, n: int) -> List[str]:
        """Upcoming n pieces, drawn from copies of the queue and generator."""
        if n < 0:
            raise ValueError("preview count must be non-negative")
        queue = list(self.queue)
        rng = random.Random()
        rng.setstate(self.rng.getstate())

        preview = []
        while len(preview) < n:
            if not queue:
                self._refill(queue, rng)
            preview.append(queue.pop())
        return preview
