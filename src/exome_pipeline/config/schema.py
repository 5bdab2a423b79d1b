"""Pydantic models for pipeline configuration."""

import hashlib
import json
from pathlib import Path

from pydantic import BaseModel, Field, field_validator


DEFAULT_OFF_TARGET_EFFECTS = [
    "intergenic_variant",
    "intron_variant",
    "upstream_gene_variant",
    "downstream_gene_variant",
    "synonymous_variant",
    "non_coding_transcript_exon_variant",
]


class DataSourceVersions(BaseModel):
    """Version information for the phenotype reference data."""

    phenodigm_release: str = Field(
        default="2014-06",
        description="PhenoDigm release used to build the reference tables",
    )
    mgi_release: str = Field(
        default="6.23",
        description="MGI release of the mouse gene summaries",
    )


class FilterSettings(BaseModel):
    """Thresholds for the per-variant filters."""

    min_quality: float = Field(
        default=30.0,
        ge=0.0,
        description="Minimum Phred-scaled variant quality (strictly greater passes)",
    )
    max_frequency_pct: float = Field(
        default=1.0,
        ge=0.0,
        le=100.0,
        description="Maximum population allele frequency in percent",
    )
    off_target_effects: list[str] = Field(
        default_factory=lambda: list(DEFAULT_OFF_TARGET_EFFECTS),
        min_length=1,
        description="Variant effects removed by the target filter",
    )


class PhenodigmSettings(BaseModel):
    """Settings for the mouse phenotype similarity priority."""

    disease_id: str = Field(
        default="OMIM:101600",
        min_length=1,
        description="Query disease identifier (OMIM or ORPHANET)",
    )
    lookup_timeout_seconds: float = Field(
        default=5.0,
        gt=0.0,
        description="Upper bound for a single reference database lookup",
    )

    @field_validator("disease_id")
    @classmethod
    def strip_disease_id(cls, v: str) -> str:
        """Reject blank disease identifiers."""
        v = v.strip()
        if not v:
            raise ValueError("disease_id must not be blank")
        return v


class PipelineConfig(BaseModel):
    """Main pipeline configuration."""

    data_dir: Path = Field(
        ...,
        description="Directory for pipeline outputs",
    )
    duckdb_path: Path = Field(
        ...,
        description="Path to DuckDB database holding the PhenoDigm reference tables",
    )
    versions: DataSourceVersions = Field(
        default_factory=DataSourceVersions,
        description="Reference data version information",
    )
    filters: FilterSettings = Field(
        default_factory=FilterSettings,
        description="Variant filter thresholds",
    )
    phenodigm: PhenodigmSettings = Field(
        default_factory=PhenodigmSettings,
        description="Phenotype similarity priority settings",
    )

    @field_validator("data_dir")
    @classmethod
    def create_directory(cls, v: Path) -> Path:
        """Create directory if it doesn't exist."""
        v.mkdir(parents=True, exist_ok=True)
        return v

    def config_hash(self) -> str:
        """
        Compute SHA-256 hash of the configuration.

        Returns a deterministic hash based on all config values,
        useful for tracking config changes between runs.
        """
        config_dict = self.model_dump(mode="python")
        config_json = json.dumps(
            config_dict,
            sort_keys=True,
            default=str,
        )
        return hashlib.sha256(config_json.encode()).hexdigest()
