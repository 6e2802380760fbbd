"""
point2d_ga/evolution/fitness.py

Fitness: how close an individual is to the target.

Only relative comparisons drive the search, so the score only has to be
bounded and strictly decreasing in distance. A modified logistic curve
maps distance 0 to 100 and long distances toward 0.
"""

from __future__ import annotations
from dataclasses import dataclass
import math
import numpy as np

from .individual import Individual, compute_distance

# Distances on the working plane (0 to ~560) are shrunk by this factor
# before the sigmoid. With 0.04:
#   distance 10  -> ~80
#   distance 50  -> ~23
#   distance 100 -> ~3
DEFAULT_SHRINK = 0.04

MAX_FITNESS = 100.0
MIN_SIGMOID = float(np.finfo(float).tiny)


def modified_sigmoid(r: float) -> float:
    """
    2 - 2 e^r / (e^r + 1), decreasing from 2 at r = 0 toward 0.

    Evaluated as 2 e^-r / (1 + e^-r) so that large r does not overflow to
    inf / inf. Floored at the smallest normal float so the score stays
    strictly positive. r must be non-negative.
    """
    decay = math.exp(-r)
    return max(2.0 * decay / (1.0 + decay), MIN_SIGMOID)


def compute_fitness(
    individual: Individual,
    target: Individual,
    shrink: float = DEFAULT_SHRINK,
) -> float:
    """
    Fitness of `individual` with respect to `target`, in (0, 100].

    100 only at zero distance.
    """
    distance = compute_distance(individual, target)
    return modified_sigmoid(distance * shrink) * MAX_FITNESS


@dataclass(frozen=True)
class TargetFitness:
    """Fitness function bound to a fixed target."""

    target: Individual
    shrink: float = DEFAULT_SHRINK

    def __call__(self, individual: Individual) -> float:
        return compute_fitness(individual, self.target, self.shrink)
