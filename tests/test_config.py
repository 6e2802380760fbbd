"""
Tests for point2d_ga/evolution/config.py

Defaults, validation and YAML loading.
"""

import logging

import pytest
import yaml

from point2d_ga.evolution.config import GAConfig, load_config


class TestGAConfig:
    """Tests for the GAConfig dataclass."""

    def test_default_config(self):
        config = GAConfig()
        assert config.n == 10
        assert config.threshold_generations == 1000
        assert config.mutation_chance == 0.25
        assert config.elite_min == 80.0
        assert config.graced_interval == 20.0
        assert config.max_abs_mutation == 0.02
        assert config.remaining_luck_chance == 0.2
        assert config.approach_spread is True
        assert config.cadence_ms == 50.0
        assert (config.width, config.height) == (400.0, 400.0)

    def test_graced_min(self):
        assert GAConfig().graced_min == 60.0
        assert GAConfig(elite_min=90.0, graced_interval=5.0).graced_min == 85.0

    def test_validate_returns_self(self):
        config = GAConfig()
        assert config.validate() is config

    @pytest.mark.parametrize(
        "overrides",
        [
            {"n": 0},
            {"threshold_generations": -1},
            {"mutation_chance": -0.1},
            {"remaining_luck_chance": 1.1},
            {"graced_interval": -5.0},
            {"max_abs_mutation": -0.01},
            {"cadence_ms": -1.0},
            {"width": 0.0},
        ],
    )
    def test_validate_rejects(self, overrides):
        with pytest.raises(ValueError):
            GAConfig(**overrides).validate()

    def test_dict_roundtrip(self):
        config = GAConfig(n=15, seed=3)
        assert GAConfig.from_dict(config.to_dict()) == config

    def test_from_dict_ignores_unknown_keys(self, caplog):
        with caplog.at_level(logging.WARNING):
            config = GAConfig.from_dict({"n": 12, "colour": "red"})

        assert config.n == 12
        assert "colour" in caplog.text


class TestLoadConfig:
    """Tests for YAML loading."""

    def test_load_flat_file(self, tmp_path):
        path = tmp_path / "ga.yaml"
        path.write_text(yaml.safe_dump({"n": 15, "mutation_chance": 0.05}))

        config = load_config(path)

        assert config.n == 15
        assert config.mutation_chance == 0.05
        assert config.elite_min == 80.0

    def test_load_section(self, tmp_path):
        path = tmp_path / "ga.yaml"
        path.write_text(yaml.safe_dump({
            "quick": {"threshold_generations": 100},
            "long": {"threshold_generations": 10000},
        }))

        assert load_config(path, section="long").threshold_generations == 10000

    def test_missing_section_raises(self, tmp_path):
        path = tmp_path / "ga.yaml"
        path.write_text(yaml.safe_dump({"quick": {}}))

        with pytest.raises(KeyError):
            load_config(path, section="long")

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "ga.yaml"
        path.write_text("")

        assert load_config(path) == GAConfig()

    def test_invalid_values_rejected(self, tmp_path):
        path = tmp_path / "ga.yaml"
        path.write_text(yaml.safe_dump({"mutation_chance": 2.0}))

        with pytest.raises(ValueError):
            load_config(path)
