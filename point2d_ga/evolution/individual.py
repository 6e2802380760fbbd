"""
point2d_ga/evolution/individual.py

The unit of the population: an immutable 2D point.

Individuals never change in place. Crossover, mutation and rotation all
produce new points. Each point carries a creation tag so that a
generation can recognise the exact point it kept as its best.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from itertools import count
from typing import Optional, Sequence, TypeVar
import math
import numpy as np

T = TypeVar("T")

_uids = count()


@dataclass(frozen=True)
class Individual:
    """
    A candidate solution: a point in the plane.

    Equality and hashing use the coordinates only. `uid` is assigned at
    construction and survives only when the same object is carried over.
    """

    x: float = 0.0
    y: float = 0.0
    uid: int = field(default_factory=lambda: next(_uids), compare=False, repr=False)

    @classmethod
    def random(
        cls,
        rng: np.random.Generator,
        width: float,
        height: float,
    ) -> "Individual":
        """Sample uniformly over [0, width) x [0, height)."""
        return cls(float(rng.uniform(0, width)), float(rng.uniform(0, height)))

    def is_same(self, other: Optional["Individual"]) -> bool:
        """True if `other` carries this individual's creation tag."""
        return other is not None and other.uid == self.uid

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y])


def compute_distance(p1: Individual, p2: Individual) -> float:
    """Euclidean distance between two points."""
    return math.hypot(p1.x - p2.x, p1.y - p2.y)


def middle_point(p1: Individual, p2: Individual, factor: float = 2.0) -> Individual:
    """
    Sum of the parents divided by `factor`.

    The default 2 is the plain midpoint. Other factors scale the midpoint
    about the origin.
    """
    return Individual((p1.x + p2.x) / factor, (p1.y + p2.y) / factor)


def rotate(point: Individual, angle: float) -> Individual:
    """Rotate `point` by `angle` radians about the origin (not the target)."""
    cos, sin = math.cos(angle), math.sin(angle)
    return Individual(
        point.x * cos - point.y * sin,
        point.y * cos + point.x * sin,
    )


def random_sign(rng: np.random.Generator) -> int:
    return -1 if rng.random() < 0.5 else 1


def random_item(items: Sequence[T], rng: np.random.Generator) -> Optional[T]:
    """
    Pick one item uniformly, or None if `items` is empty.

    None is the empty-tier signal; callers decide the fallback.
    """
    if not items:
        return None
    return items[int(rng.integers(len(items)))]
