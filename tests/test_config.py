"""Tests for configuration loading and validation."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from exome_pipeline.config import load_config, load_config_with_overrides
from exome_pipeline.config.schema import DEFAULT_OFF_TARGET_EFFECTS, PipelineConfig


DEFAULT_CONFIG = Path(__file__).resolve().parent.parent / "config" / "default.yaml"


@pytest.fixture
def config_file(tmp_path):
    """Minimal valid config pointing into tmp_path."""
    config_path = tmp_path / "config.yaml"
    config_path.write_text(f"""
data_dir: {tmp_path / "data"}
duckdb_path: {tmp_path / "phenodigm.duckdb"}
filters:
  min_quality: 20.0
  max_frequency_pct: 2.5
phenodigm:
  disease_id: "ORPHANET:558"
  lookup_timeout_seconds: 2.0
""")
    return config_path


def test_load_default_config():
    """Test loading the shipped default configuration."""
    config = load_config(DEFAULT_CONFIG)

    assert isinstance(config, PipelineConfig)
    assert config.filters.min_quality == 30.0
    assert config.filters.max_frequency_pct == 1.0
    assert config.phenodigm.disease_id == "OMIM:101600"
    assert config.phenodigm.lookup_timeout_seconds == 5.0
    assert "synonymous_variant" in config.filters.off_target_effects


def test_load_config_values(config_file):
    config = load_config(config_file)

    assert config.filters.min_quality == 20.0
    assert config.filters.max_frequency_pct == 2.5
    assert config.phenodigm.disease_id == "ORPHANET:558"
    # Sections not present in the file fall back to defaults
    assert config.filters.off_target_effects == DEFAULT_OFF_TARGET_EFFECTS
    assert config.versions.phenodigm_release


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_invalid_config_missing_field(tmp_path):
    """Test that missing required field raises ValidationError."""
    invalid_config = tmp_path / "invalid.yaml"
    invalid_config.write_text("""
duckdb_path: data/phenodigm.duckdb
""")

    with pytest.raises(ValidationError) as exc_info:
        load_config(invalid_config)

    assert "data_dir" in str(exc_info.value)


def test_negative_min_quality_rejected(tmp_path):
    """A negative quality threshold is rejected, never clamped."""
    invalid_config = tmp_path / "invalid_quality.yaml"
    invalid_config.write_text(f"""
data_dir: {tmp_path / "data"}
duckdb_path: {tmp_path / "phenodigm.duckdb"}
filters:
  min_quality: -1.0
""")

    with pytest.raises(ValidationError) as exc_info:
        load_config(invalid_config)

    assert "min_quality" in str(exc_info.value)


def test_blank_disease_id_rejected(tmp_path):
    invalid_config = tmp_path / "invalid_disease.yaml"
    invalid_config.write_text(f"""
data_dir: {tmp_path / "data"}
duckdb_path: {tmp_path / "phenodigm.duckdb"}
phenodigm:
  disease_id: "   "
""")

    with pytest.raises(ValidationError):
        load_config(invalid_config)


def test_overrides_apply_dotted_keys(config_file):
    config = load_config_with_overrides(config_file, {
        "filters.min_quality": 45.0,
        "phenodigm.disease_id": "OMIM:154700",
    })

    assert config.filters.min_quality == 45.0
    assert config.phenodigm.disease_id == "OMIM:154700"
    assert config.filters.max_frequency_pct == 2.5


def test_overrides_skip_none(config_file):
    """Unset CLI options (None) leave file values in place."""
    config = load_config_with_overrides(config_file, {"filters.min_quality": None})

    assert config.filters.min_quality == 20.0


def test_invalid_override_rejected(config_file):
    with pytest.raises(ValidationError):
        load_config_with_overrides(config_file, {"filters.max_frequency_pct": 150.0})


def test_config_hash_deterministic(config_file):
    """Test that config hash is deterministic and changes with config."""
    config1 = load_config(config_file)
    config2 = load_config(config_file)

    assert config1.config_hash() == config2.config_hash()
    assert len(config1.config_hash()) == 64

    config3 = load_config_with_overrides(
        config_file,
        {"phenodigm.lookup_timeout_seconds": 10.0},
    )
    assert config3.config_hash() != config1.config_hash()


def test_config_creates_data_directory(tmp_path):
    """Test that loading config creates the data directory."""
    data_dir = tmp_path / "new_data"
    config_file = tmp_path / "config.yaml"
    config_file.write_text(f"""
data_dir: {data_dir}
duckdb_path: {tmp_path / "phenodigm.duckdb"}
""")

    assert not data_dir.exists()

    load_config(config_file)

    assert data_dir.is_dir()
