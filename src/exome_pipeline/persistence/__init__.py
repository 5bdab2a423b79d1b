"""Persistence layer: DuckDB store and provenance tracking."""

from exome_pipeline.persistence.duckdb_store import PipelineStore
from exome_pipeline.persistence.provenance import ProvenanceTracker

__all__ = ["PipelineStore", "ProvenanceTracker"]
