"""
point2d_ga/evolution/cluster.py

One generation's population, split into performance tiers.

Lifecycle per generation:
    EMPTY --add_all--> POPULATED --map--> TRANSFORMED --clear--> EMPTY

The cluster holds no state across generations. It is cleared and refilled
every time the population changes.
"""

from __future__ import annotations
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Tuple
import logging
import numpy as np

from .individual import Individual, random_item
from .selection import Selection, Selector, Tier

logger = logging.getLogger(__name__)

TierHandler = Callable[[Individual, float], Individual]


class ClusterIncompleteError(RuntimeError):
    """
    The cluster does not hold exactly `n` records when transformed.

    Always an integration error (a partial or doubled add_all). Not
    retried: the population must have exactly `n` individuals before
    tiering.
    """

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Cluster not finished. n = {expected} but actual size = {actual}"
        )


class ClusterState(Enum):
    EMPTY = "empty"
    POPULATED = "populated"
    TRANSFORMED = "transformed"


class PopulationCluster:
    """
    Tiered view of a population of fixed size `n`.

    Records inside each tier are kept sorted by fitness, ascending.
    Random accessors return None for an empty tier; they never raise.
    """

    def __init__(
        self,
        n: int,
        selector: Selector,
        rng: Optional[np.random.Generator] = None,
        sort_tiers: bool = True,
    ):
        self.n = n
        self.selector = selector
        self.rng = rng if rng is not None else np.random.default_rng()
        self.sort_tiers = sort_tiers

        self._tiers: Dict[Tier, List[Selection]] = {tier: [] for tier in Tier}
        self.state = ClusterState.EMPTY

    def __len__(self) -> int:
        return sum(len(records) for records in self._tiers.values())

    @property
    def elite(self) -> Tuple[Selection, ...]:
        return tuple(self._tiers[Tier.ELITE])

    @property
    def graced(self) -> Tuple[Selection, ...]:
        return tuple(self._tiers[Tier.GRACED])

    @property
    def remaining(self) -> Tuple[Selection, ...]:
        return tuple(self._tiers[Tier.REMAINING])

    def sizes(self) -> Dict[Tier, int]:
        return {tier: len(records) for tier, records in self._tiers.items()}

    def is_finished(self) -> bool:
        return len(self) == self.n

    def clear(self) -> None:
        for records in self._tiers.values():
            records.clear()
        self.state = ClusterState.EMPTY

    def add_all(self, population: Iterable[Individual]) -> None:
        """Tier every individual, then sort each tier by fitness."""
        for individual in population:
            selection = self.selector.select(individual)
            self._tiers[selection.tier].append(selection)

        if self.sort_tiers:
            # list.sort is stable: ties keep their insertion order
            for records in self._tiers.values():
                records.sort(key=lambda record: record.fitness_value)

        self.state = ClusterState.POPULATED

    # ---- sampling ----

    def random_elite(self) -> Optional[Selection]:
        return random_item(self._tiers[Tier.ELITE], self.rng)

    def random_graced(self) -> Optional[Selection]:
        return random_item(self._tiers[Tier.GRACED], self.rng)

    def random_remaining(self) -> Optional[Selection]:
        return random_item(self._tiers[Tier.REMAINING], self.rng)

    def random_ascending(self) -> Optional[Selection]:
        """Sample preferring REMAINING, then GRACED, then ELITE."""
        return self._first_available(
            self.random_remaining, self.random_graced, self.random_elite
        )

    def random_descending(self) -> Optional[Selection]:
        """Sample preferring ELITE, then GRACED, then REMAINING."""
        return self._first_available(
            self.random_elite, self.random_graced, self.random_remaining
        )

    @staticmethod
    def _first_available(*samplers: Callable[[], Optional[Selection]]) -> Optional[Selection]:
        for sampler in samplers:
            record = sampler()
            if record is not None:
                return record
        return None

    # ---- transform ----

    def map(
        self,
        elite_fn: TierHandler,
        graced_fn: TierHandler,
        remaining_fn: TierHandler,
    ) -> List[Individual]:
        """
        Build the next population, tier by tier.

        Results are concatenated ELITE, GRACED, REMAINING, each in tier
        order. Raises ClusterIncompleteError unless exactly `n` records
        are held.
        """
        if not self.is_finished():
            raise ClusterIncompleteError(self.n, len(self))

        offspring = [
            elite_fn(record.individual, record.fitness_value)
            for record in self._tiers[Tier.ELITE]
        ]
        offspring.extend(
            graced_fn(record.individual, record.fitness_value)
            for record in self._tiers[Tier.GRACED]
        )
        offspring.extend(
            remaining_fn(record.individual, record.fitness_value)
            for record in self._tiers[Tier.REMAINING]
        )

        self.state = ClusterState.TRANSFORMED
        logger.debug(
            f"Cluster mapped: elite={len(self._tiers[Tier.ELITE])} "
            f"graced={len(self._tiers[Tier.GRACED])} "
            f"remaining={len(self._tiers[Tier.REMAINING])}"
        )
        return offspring
