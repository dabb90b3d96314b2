import itertools
import random
from typing import List, Optional

from arena.models import Collectible
from .movement import Bounds


class CollectibleGenerator:
    """Creates collectibles at random in-bounds positions.

    The generator owns the id counter, so ids are strictly increasing and
    never handed out twice for the lifetime of the process.
    """

    def __init__(self, bounds: Bounds, max_value: int = 5, rng: Optional[random.Random] = None):
        self.bounds = bounds
        self.max_value = max_value
        self.rng = rng or random.Random()
        self._ids = itertools.count(1)

    def create(self) -> Collectible:
        x, y = self.bounds.random_point(self.rng)
        value = self.rng.randint(1, self.max_value)
        return Collectible(id=next(self._ids), x=x, y=y, value=value)

    def initial_batch(self, count: int) -> List[Collectible]:
        return [self.create() for _ in range(count)]
