"""
point2d_ga/evolution/selection.py

Classify one individual into a performance tier.

    fitness >= elite_min            -> ELITE
    graced_min <= fitness < elite   -> GRACED
    otherwise                       -> REMAINING

The elite carry the best-known region. The graced may still make it.
The remaining are recycled.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Callable, TYPE_CHECKING

from .individual import Individual

if TYPE_CHECKING:
    from .config import GAConfig


class Tier(Enum):
    ELITE = 0
    GRACED = 1
    REMAINING = 2


@dataclass(frozen=True)
class Selection:
    """A tiered record: the individual, its fitness and its tier."""

    individual: Individual
    fitness_value: float
    tier: Tier


class Selector:
    """
    Tier classification with injected fitness and thresholds.

    Stateless: the same individual always gets the same tier.
    """

    def __init__(
        self,
        fitness_fn: Callable[[Individual], float],
        elite_min: float = 80.0,
        graced_min: float = 60.0,
    ):
        if graced_min > elite_min:
            raise ValueError(
                f"graced_min ({graced_min}) must not exceed elite_min ({elite_min})"
            )
        self.fitness_fn = fitness_fn
        self.elite_min = elite_min
        self.graced_min = graced_min

    @classmethod
    def from_config(
        cls,
        fitness_fn: Callable[[Individual], float],
        config: GAConfig,
    ) -> "Selector":
        return cls(fitness_fn, config.elite_min, config.graced_min)

    def classify(self, fitness_value: float) -> Tier:
        if fitness_value >= self.elite_min:
            return Tier.ELITE
        if fitness_value >= self.graced_min:
            return Tier.GRACED
        return Tier.REMAINING

    def select(self, individual: Individual) -> Selection:
        fitness_value = self.fitness_fn(individual)
        return Selection(individual, fitness_value, self.classify(fitness_value))
