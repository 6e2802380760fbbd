"""
point2d_ga/evolution/

The optimization engine.

Per generation:
- Tier the population (fast, deterministic)
- Breed each tier with its own strategy (random, injected rng)
- Mutate, then track the best

Modules:
- individual: immutable 2D point and geometry primitives
- fitness: bounded, distance-decreasing score
- selection: tier classification
- cluster: tiered population with validated transform
- offspring: tier-specific offspring synthesis
- algorithm: the generation loop
"""

from .algorithm import GeneticAlgorithm, RunState
from .cluster import ClusterIncompleteError, ClusterState, PopulationCluster
from .config import GAConfig, load_config
from .fitness import TargetFitness, compute_fitness
from .individual import Individual, compute_distance, middle_point, rotate
from .offspring import OffspringStrategy, TierHandlers
from .selection import Selection, Selector, Tier

__all__ = [
    "GeneticAlgorithm",
    "RunState",
    "ClusterIncompleteError",
    "ClusterState",
    "PopulationCluster",
    "GAConfig",
    "load_config",
    "TargetFitness",
    "compute_fitness",
    "Individual",
    "compute_distance",
    "middle_point",
    "rotate",
    "OffspringStrategy",
    "TierHandlers",
    "Selection",
    "Selector",
    "Tier",
]
