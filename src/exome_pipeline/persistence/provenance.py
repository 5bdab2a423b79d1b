"""Run provenance: what configuration, data and steps produced an output."""

import json
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional


class ProvenanceTracker:
    """
    Collects provenance for one prioritization (or reference load) run.

    Each run gets a random ``run_id`` so sidecar files and rows of the
    ``_provenance`` table can be matched up. Steps are kept in the order
    they were recorded.
    """

    def __init__(self, pipeline_version: str, config: "PipelineConfig"):
        self.run_id = uuid.uuid4().hex
        self.pipeline_version = pipeline_version
        self.config_hash = config.config_hash()
        self.data_source_versions = config.versions.model_dump()
        self.disease_id = config.phenodigm.disease_id
        self.started_at = datetime.now(timezone.utc)
        self._steps: list[dict] = []

    def record_step(self, step_name: str, details: Optional[dict] = None) -> None:
        """
        Append a step; ``details`` must be JSON-serialisable.

        Args:
            step_name: Short identifier such as "run_filters"
            details: Counts or parameters of the step, omitted when empty
        """
        now = datetime.now(timezone.utc)
        step = {
            "step_name": step_name,
            "timestamp": now.isoformat(),
            "elapsed_seconds": round((now - self.started_at).total_seconds(), 3),
        }
        if details:
            step["details"] = details
        self._steps.append(step)

    def get_steps(self) -> list[dict]:
        return list(self._steps)

    def create_metadata(self) -> dict:
        return {
            "run_id": self.run_id,
            "pipeline_version": self.pipeline_version,
            "disease_id": self.disease_id,
            "config_hash": self.config_hash,
            "data_source_versions": self.data_source_versions,
            "created_at": self.started_at.isoformat(),
            "processing_steps": self.get_steps(),
        }

    def save_sidecar(self, output_path: Path) -> Path:
        """
        Write metadata as JSON next to an output file.

        ``results/ranked_genes.tsv`` gets ``results/ranked_genes.provenance.json``.

        Returns:
            Path of the sidecar
        """
        sidecar_path = Path(output_path).with_suffix(".provenance.json")
        sidecar_path.parent.mkdir(parents=True, exist_ok=True)
        sidecar_path.write_text(json.dumps(self.create_metadata(), indent=2, default=str))
        return sidecar_path

    @staticmethod
    def load_sidecar(sidecar_path: Path) -> dict:
        return json.loads(Path(sidecar_path).read_text())

    def save_to_store(self, store: "PipelineStore") -> None:
        """Insert (or refresh) this run's row in the ``_provenance`` table."""
        store.conn.execute("""
            CREATE TABLE IF NOT EXISTS _provenance (
                run_id VARCHAR PRIMARY KEY,
                pipeline_version VARCHAR,
                config_hash VARCHAR,
                disease_id VARCHAR,
                created_at TIMESTAMP,
                steps_json VARCHAR
            )
        """)
        store.conn.execute("""
            INSERT OR REPLACE INTO _provenance
                (run_id, pipeline_version, config_hash, disease_id, created_at, steps_json)
            VALUES (?, ?, ?, ?, ?, ?)
        """, [
            self.run_id,
            self.pipeline_version,
            self.config_hash,
            self.disease_id,
            self.started_at,
            json.dumps(self._steps, default=str),
        ])

    @classmethod
    def from_config(
        cls,
        config: "PipelineConfig",
        version: Optional[str] = None
    ) -> "ProvenanceTracker":
        """Tracker for ``config``; version defaults to the installed package version."""
        if version is None:
            from exome_pipeline import __version__
            version = __version__
        return cls(version, config)
