"""
point2d_ga/evolution/algorithm.py

The generation loop.

Each generation:
1. Select: clear the cluster and tier the current population
2. Crossover: map every tier through its offspring handler
3. Mutate: jitter everyone except the tracked best
4. Track the best of the new population
5. Report (best, best_fitness) to the host

No gradients. Only relative fitness decides who survives and where the
offspring land.
"""

from __future__ import annotations
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple
import logging
import time
import numpy as np

from .cluster import PopulationCluster
from .config import GAConfig
from .fitness import TargetFitness
from .individual import Individual, random_sign
from .offspring import TierHandlers
from .selection import Selector, Tier

logger = logging.getLogger(__name__)

GenerationCallback = Callable[[Individual, float], None]


class RunState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    FINISHED = "finished"


class GeneticAlgorithm:
    """
    Evolves a population of 2D points toward `target`.

    All randomness comes from `rng`, so a seeded generator reproduces a
    run exactly.
    """

    def __init__(
        self,
        target: Individual,
        config: Optional[GAConfig] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        self.target = target
        self.config = (config or GAConfig()).validate()
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)

        self.fitness_fn = TargetFitness(target)
        self.selector = Selector.from_config(self.fitness_fn, self.config)
        self.cluster = PopulationCluster(self.config.n, self.selector, self.rng)

        self.population: List[Individual] = []
        self.best: Optional[Individual] = None
        self.best_fitness = -1.0

        self.state = RunState.IDLE
        self.generation = 0
        self.history: List[Dict[str, Any]] = []

    def new_random_individual(self) -> Individual:
        return Individual.random(self.rng, self.config.width, self.config.height)

    def init_population(self) -> None:
        self.population = [self.new_random_individual() for _ in range(self.config.n)]

    def start(
        self,
        on_generation: GenerationCallback,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """
        Run `threshold_generations` generations, reporting after each.

        Generations are paced by `cadence_ms`; pass a no-op `sleep` (or a
        zero cadence) to run back-to-back.
        """
        if self.state is not RunState.IDLE:
            raise RuntimeError(f"Cannot start a run in state {self.state.value}")

        self.state = RunState.RUNNING
        self.init_population()
        logger.info(
            f"Starting run: n={self.config.n}, "
            f"generations={self.config.threshold_generations}, "
            f"target=({self.target.x}, {self.target.y})"
        )

        delay = self.config.cadence_ms / 1000.0
        for counter in range(self.config.threshold_generations):
            best, best_fitness = self.run_generation()
            on_generation(best, best_fitness)
            if delay > 0 and counter + 1 < self.config.threshold_generations:
                sleep(delay)

        self.state = RunState.FINISHED
        logger.info(
            f"Run finished after {self.generation} generations, "
            f"best fitness {self.best_fitness:.4f}"
        )

    def run_generation(self) -> Tuple[Individual, float]:
        """Compute one full generation and return the new best."""
        if not self.population:
            self.init_population()

        self._select()
        sizes = self.cluster.sizes()
        self._crossover()
        self._mutate()
        self._set_best_individual()

        self.generation += 1
        self._record(sizes)
        logger.debug(
            f"Generation {self.generation}: best fitness {self.best_fitness:.4f}"
        )
        return self.best, self.best_fitness

    def _select(self) -> None:
        self.cluster.clear()
        self.cluster.add_all(self.population)

    def _crossover(self) -> None:
        handlers = TierHandlers(
            self.cluster,
            previous_best=self.best,
            previous_best_fitness=self.best_fitness,
            new_random=self.new_random_individual,
            rng=self.rng,
            remaining_luck_chance=self.config.remaining_luck_chance,
            max_fit_to_substitute_remaining=self.config.max_fit_to_substitute_remaining,
            approach_spread=self.config.approach_spread,
        )
        self.population = self.cluster.map(
            handlers.elite, handlers.graced, handlers.remaining
        )

    def mutate(self, individual: Individual) -> Individual:
        """Offset each coordinate by up to +-max_abs_mutation."""
        limit = self.config.max_abs_mutation
        mx = self.rng.random() * limit * random_sign(self.rng)
        my = self.rng.random() * limit * random_sign(self.rng)
        return Individual(individual.x + mx, individual.y + my)

    def _mutate(self) -> None:
        chance = self.config.mutation_chance
        self.population = [
            self.mutate(individual)
            if not individual.is_same(self.best) and self.rng.random() < chance
            else individual
            for individual in self.population
        ]

    def _set_best_individual(self) -> None:
        selected = self.population[0]
        score = self.fitness_fn(selected)

        for individual in self.population[1:]:
            fitness = self.fitness_fn(individual)
            if fitness > score:
                selected = individual
                score = fitness

        self.best = selected
        self.best_fitness = score

    def _record(self, sizes: Dict[Tier, int]) -> None:
        fitnesses = [self.fitness_fn(individual) for individual in self.population]
        self.history.append({
            'generation': self.generation,
            'best_fitness': self.best_fitness,
            'mean_fitness': float(np.mean(fitnesses)),
            'elite': sizes[Tier.ELITE],
            'graced': sizes[Tier.GRACED],
            'remaining': sizes[Tier.REMAINING],
        })

    def get_best(self) -> Tuple[Optional[Individual], float]:
        return self.best, self.best_fitness

    def get_statistics(self) -> Dict[str, Any]:
        return {
            'generation': self.generation,
            'state': self.state.value,
            'population_size': self.config.n,
            'best_fitness': self.best_fitness,
        }
