"""
point2d_ga/evolution/offspring.py

How each tier produces the next generation.

- Elite: step toward the previous best, then jitter and rotate so the
  tier does not collapse onto a single point.
- Graced: randomly spread midpoint of two parents, pulled halfway toward
  an elite.
- Remaining: cut losses (fresh random point), get lucky (plain midpoint),
  or be pulled toward the elite like the graced.

The geometric strategies are pure given their inputs and `rng`.
TierHandlers binds them to one generation's cluster and previous best.
"""

from __future__ import annotations
from typing import Callable, Optional
import logging
import math
import numpy as np

from .cluster import PopulationCluster
from .individual import (
    Individual,
    compute_distance,
    middle_point,
    random_sign,
    rotate,
)

logger = logging.getLogger(__name__)

MAX_ROTATION = math.pi / 4


class OffspringStrategy:
    """Geometric offspring synthesis."""

    @staticmethod
    def create_from_elite(
        individual: Individual,
        fitness: float,
        previous_best: Individual,
        previous_best_fitness: float,
        distance: float,
        rng: np.random.Generator,
    ) -> Individual:
        """
        Controlled step toward `previous_best`.

        The radius shrinks as the best score rises. The step along the line
        toward the best is scaled by distance over fitness gap, jittered by
        up to +-radius, then the result is rotated by up to 45 degrees about
        the origin. `distance` must be positive.

        A candidate at least as fit as the previous best has no gap to
        scale by and is returned unchanged.
        """
        diff = previous_best_fitness - fitness
        if diff <= 0:
            return individual

        radius = 100 - previous_best_fitness
        dr = radius * (distance / diff)
        dz = distance - dr + rng.random() * dr * random_sign(rng)
        dx = (previous_best.x - individual.x) * dz / distance
        dy = (previous_best.y - individual.y) * dz / distance
        stepped = Individual(individual.x + dx, individual.y + dy)

        angle = rng.random() * MAX_ROTATION * random_sign(rng)
        return rotate(stepped, angle)

    @staticmethod
    def create_from_overfitted_elite(elite: Individual, mate: Individual) -> Individual:
        return OffspringStrategy.create_by_middle_point(elite, mate)

    @staticmethod
    def create_and_approach_elite(
        p1: Individual,
        p2: Individual,
        elite: Individual,
        spread: float = 2.0,
    ) -> Individual:
        """
        Two-step pull: combine the parents, then take the midpoint with `elite`.

        The parents' sum is divided by `spread`; 2 is their plain midpoint.
        Other values push the first point off the parents' hull so the
        population can still reach a target outside it.
        """
        return middle_point(middle_point(p1, p2, spread), elite)

    @staticmethod
    def random_spread(rng: np.random.Generator) -> float:
        """Spread factor in [0.75, 2.25)."""
        return (rng.random() + 0.5) * 1.5

    @staticmethod
    def create_by_middle_point(p1: Individual, p2: Individual) -> Individual:
        return middle_point(p1, p2)


class TierHandlers:
    """
    The three per-tier handlers for one generation.

    Closes over the populated cluster and the previous generation's best.
    Pass `elite`, `graced` and `remaining` to PopulationCluster.map.
    """

    def __init__(
        self,
        cluster: PopulationCluster,
        previous_best: Optional[Individual],
        previous_best_fitness: float,
        new_random: Callable[[], Individual],
        rng: np.random.Generator,
        remaining_luck_chance: float = 0.2,
        max_fit_to_substitute_remaining: float = 1.0,
        approach_spread: bool = True,
    ):
        self.cluster = cluster
        self.previous_best = previous_best
        self.previous_best_fitness = previous_best_fitness
        self.new_random = new_random
        self.rng = rng
        self.remaining_luck_chance = remaining_luck_chance
        self.max_fit_to_substitute_remaining = max_fit_to_substitute_remaining
        self.approach_spread = approach_spread

    def _ascending_mate(self) -> Individual:
        record = self.cluster.random_ascending()
        return record.individual if record is not None else self.new_random()

    def _descending_mate(self) -> Individual:
        record = self.cluster.random_descending()
        return record.individual if record is not None else self.new_random()

    def _spread(self) -> float:
        if not self.approach_spread:
            return 2.0
        return OffspringStrategy.random_spread(self.rng)

    def _elite_or(self, fallback: Callable[[], Individual]) -> Individual:
        record = self.cluster.random_elite()
        return record.individual if record is not None else fallback()

    def elite(self, individual: Individual, fitness: float) -> Individual:
        previous_best = self.previous_best

        # First generation: nothing to approach yet
        if previous_best is None or individual.is_same(previous_best):
            return individual

        distance = compute_distance(individual, previous_best)
        if distance > 0:
            return OffspringStrategy.create_from_elite(
                individual,
                fitness,
                previous_best,
                self.previous_best_fitness,
                distance,
                self.rng,
            )

        # Same coordinates as the best but a different point. Possibly an
        # unintended split from the pass-through above; kept separate.
        logger.debug(f"Overfitted elite at ({individual.x:.3f}, {individual.y:.3f})")
        mate = self._ascending_mate()
        return OffspringStrategy.create_from_overfitted_elite(individual, mate)

    def graced(self, individual: Individual, fitness: float) -> Individual:
        mate = self._descending_mate()
        elite = self._elite_or(self.new_random)
        return OffspringStrategy.create_and_approach_elite(
            individual, mate, elite, self._spread()
        )

    def remaining(self, individual: Individual, fitness: float) -> Individual:
        if fitness <= self.max_fit_to_substitute_remaining:
            return self.new_random()

        if self.rng.random() < self.remaining_luck_chance:
            mate = self._ascending_mate()
            return OffspringStrategy.create_by_middle_point(individual, mate)

        mate1 = self._ascending_mate()
        mate2 = self._ascending_mate()
        elite = self._elite_or(self._descending_mate)
        return OffspringStrategy.create_and_approach_elite(
            mate1, mate2, elite, self._spread()
        )
