"""
point2d_ga/evolution/config.py

Run configuration for the genetic algorithm.

One explicit object per run, never process-wide state, so independent
runs never interfere.
"""

from __future__ import annotations
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union
import logging

import yaml

logger = logging.getLogger(__name__)


@dataclass
class GAConfig:
    """Configuration for a GeneticAlgorithm run."""
    # Population
    n: int = 10                               # Individuals per generation
    threshold_generations: int = 1000         # Generations before finishing

    # Tiers
    elite_min: float = 80.0                   # fitness >= elite_min -> elite
    graced_interval: float = 20.0             # graced band below elite_min

    # Variation
    mutation_chance: float = 0.25             # Per individual, per generation
    max_abs_mutation: float = 0.02            # Max offset per coordinate
    remaining_luck_chance: float = 0.2        # Plain midpoint for remaining
    max_fit_to_substitute_remaining: float = 1.0  # At or below: resample
    approach_spread: bool = True              # Random factor on the first midpoint

    # Pacing between generations (0 runs back-to-back)
    cadence_ms: float = 50.0

    # Sampling rectangle for new individuals
    width: float = 400.0
    height: float = 400.0

    # Random seed (None draws fresh entropy)
    seed: Optional[int] = None

    @property
    def graced_min(self) -> float:
        return self.elite_min - self.graced_interval

    def validate(self) -> "GAConfig":
        """Raise ValueError on an unusable configuration."""
        if self.n < 1:
            raise ValueError(f"n must be at least 1, got {self.n}")
        if self.threshold_generations < 0:
            raise ValueError(
                f"threshold_generations must be non-negative, got {self.threshold_generations}"
            )
        for name in ("mutation_chance", "remaining_luck_chance"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be in [0, 1], got {value}")
        if self.graced_interval < 0:
            raise ValueError(f"graced_interval must be non-negative, got {self.graced_interval}")
        if self.max_abs_mutation < 0:
            raise ValueError(f"max_abs_mutation must be non-negative, got {self.max_abs_mutation}")
        if self.cadence_ms < 0:
            raise ValueError(f"cadence_ms must be non-negative, got {self.cadence_ms}")
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Sampling bounds must be positive, got {self.width}x{self.height}")
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GAConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {unknown}")
        return cls(**{key: value for key, value in data.items() if key in known}).validate()


def load_config(
    config_path: Union[str, Path],
    section: Optional[str] = None,
) -> GAConfig:
    """Load a GAConfig from YAML, optionally from one top-level section."""
    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    if section is not None:
        if section not in data:
            raise KeyError(f"Section '{section}' not found in {config_path}")
        data = data[section] or {}

    logger.info(f"Loaded config from {config_path}")
    return GAConfig.from_dict(data)
