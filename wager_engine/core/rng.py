import random
import secrets
import threading
from typing import Optional


class RandomSource:
    """
    Draws uniformly distributed integers using Python's `secrets` module.
    This is the only source of non-determinism in the engine; `secrets` reads
    from the OS generator, so concurrent draws need no locking.
    """

    def random_int(self, min_val: int, max_val: int) -> int:
        """Returns a random integer in the range [min_val, max_val] (inclusive)."""
        # secrets.randbelow(n) returns [0, n). So we need (max - min + 1)
        if min_val > max_val:
            raise ValueError("min_val must be less than or equal to max_val")
        return min_val + secrets.randbelow(max_val - min_val + 1)


class SeededRandomSource(RandomSource):
    """
    Reproducible source for replays and staging environments.
    The generator is shared, so each draw is serialized behind a lock.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._random = random.Random(seed)
        self._lock = threading.Lock()

    def random_int(self, min_val: int, max_val: int) -> int:
        if min_val > max_val:
            raise ValueError("min_val must be less than or equal to max_val")
        with self._lock:
            return self._random.randint(min_val, max_val)


rng = RandomSource()
