"""
Tests for point2d_ga/evolution/fitness.py

Bounded, strictly decreasing fitness.
"""

import numpy as np
import pytest

from point2d_ga.evolution.fitness import (
    TargetFitness,
    compute_fitness,
    modified_sigmoid,
)
from point2d_ga.evolution.individual import Individual, compute_distance


TARGET = Individual(125, 270)


class TestModifiedSigmoid:
    """Tests for the sigmoid transform."""

    def test_two_at_zero(self):
        assert modified_sigmoid(0.0) == 2.0

    def test_decreasing(self):
        values = [modified_sigmoid(r) for r in np.linspace(0, 30, 100)]
        assert all(a > b for a, b in zip(values, values[1:]))

    def test_no_overflow_for_huge_input(self):
        assert 0.0 < modified_sigmoid(1e6) < 1e-300

    def test_far_points_stay_positive(self):
        """Distances past the exp underflow still score above zero."""
        far = Individual(125 + 1e6, 270)
        assert compute_fitness(far, TARGET) > 0
        assert compute_fitness(Individual(125 + 20_000, 270), TARGET) > 0


class TestComputeFitness:
    """Tests for compute_fitness."""

    def test_hundred_at_target(self):
        assert compute_fitness(TARGET, TARGET) == 100.0

    def test_reference_values(self):
        """Shape anchors for the default shrink factor."""
        assert compute_fitness(Individual(135, 270), TARGET) == pytest.approx(80.3, abs=0.1)
        assert compute_fitness(Individual(125, 320), TARGET) == pytest.approx(23.8, abs=0.1)
        assert compute_fitness(Individual(25, 270), TARGET) == pytest.approx(3.6, abs=0.1)

    def test_bounds(self):
        rng = np.random.default_rng(42)
        for _ in range(200):
            point = Individual.random(rng, 400, 400)
            fitness = compute_fitness(point, TARGET)
            assert 0 < fitness <= 100

    def test_below_hundred_away_from_target(self):
        assert compute_fitness(Individual(125, 270.001), TARGET) < 100

    def test_monotonic_in_distance(self):
        """Closer points always score higher."""
        rng = np.random.default_rng(42)
        points = [Individual.random(rng, 400, 400) for _ in range(200)]
        points.sort(key=lambda p: compute_distance(p, TARGET))
        scores = [compute_fitness(p, TARGET) for p in points]
        for (p, sp), (q, sq) in zip(zip(points, scores), zip(points[1:], scores[1:])):
            if compute_distance(p, TARGET) < compute_distance(q, TARGET):
                assert sp > sq

    def test_custom_shrink(self):
        """A smaller shrink factor is more forgiving at the same distance."""
        point = Individual(175, 270)
        assert compute_fitness(point, TARGET, shrink=0.01) > compute_fitness(point, TARGET)


class TestTargetFitness:
    """Tests for the bound fitness callable."""

    def test_matches_compute_fitness(self):
        fitness_fn = TargetFitness(TARGET)
        point = Individual(100, 200)
        assert fitness_fn(point) == compute_fitness(point, TARGET)

    def test_does_not_cache_on_individual(self):
        fitness_fn = TargetFitness(TARGET)
        point = Individual(100, 200)
        fitness_fn(point)
        assert not hasattr(point, "fitness")
