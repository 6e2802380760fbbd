"""
observations/recorder.py

Watch the run without touching it.

A GenerationRecorder is a ready-made `on_generation` callback: it keeps a
trail of the best point per generation and logs progress. It never feeds
anything back into the algorithm.
"""

from __future__ import annotations
from typing import List, Optional, Tuple
import logging
import numpy as np

from point2d_ga.evolution.individual import Individual

logger = logging.getLogger(__name__)


class GenerationRecorder:
    """
    Records (best, fitness) pairs reported once per generation.

    `trail_length` bounds the kept trail of points (None keeps all);
    fitness history is always kept in full.
    """

    def __init__(
        self,
        log_every: int = 100,
        trail_length: Optional[int] = None,
    ):
        self.log_every = log_every
        self.trail_length = trail_length

        self.generation = 0
        self.trail: List[Individual] = []
        self.fitness_history: List[float] = []

    def __call__(self, best: Individual, best_fitness: float) -> None:
        self.generation += 1
        self.trail.append(best)
        self.fitness_history.append(best_fitness)

        # Trim to trail length
        if self.trail_length is not None and len(self.trail) > self.trail_length:
            self.trail = self.trail[-self.trail_length:]

        if self.log_every and self.generation % self.log_every == 0:
            logger.info(
                f"Generation {self.generation}: best ({best.x:.2f}, {best.y:.2f}) "
                f"fitness {best_fitness:.2f}%"
            )

    @property
    def best_fitness(self) -> float:
        return max(self.fitness_history) if self.fitness_history else float('-inf')

    def generations_to_reach(self, fitness: float) -> Optional[int]:
        """First generation (1-based) whose best reached `fitness`, if any."""
        for generation, value in enumerate(self.fitness_history, start=1):
            if value >= fitness:
                return generation
        return None

    def trail_array(self) -> np.ndarray:
        """Kept trail as an (m, 2) array."""
        if not self.trail:
            return np.empty((0, 2))
        return np.array([point.to_array() for point in self.trail])

    def summary(self) -> Tuple[int, float]:
        return self.generation, self.best_fitness
