"""Load PhenoDigm reference tables into DuckDB with provenance tracking."""

from pathlib import Path
from typing import Optional

import polars as pl
import structlog

from exome_pipeline.lookup.models import (
    ORTHOLOG_COLUMNS,
    ORTHOLOG_TABLE_NAME,
    SUMMARY_COLUMNS,
    SUMMARY_TABLE_NAME,
)
from exome_pipeline.persistence import PipelineStore, ProvenanceTracker

logger = structlog.get_logger(__name__)


def read_reference_tsv(path: Path) -> pl.DataFrame:
    """Read a tab-separated reference dump (columns are checked on load)."""
    return pl.read_csv(path, separator="\t", null_values=["", "NA", "\\N"])


def _validate_frame(df: pl.DataFrame, columns: list[str], table_name: str) -> pl.DataFrame:
    missing = [col for col in columns if col not in df.columns]
    if missing:
        raise ValueError(f"{table_name} frame is missing columns: {missing}")
    return df.select(columns)


def load_reference_tables(
    store: PipelineStore,
    orthologs: pl.DataFrame,
    summary: pl.DataFrame,
    provenance: Optional[ProvenanceTracker] = None,
) -> None:
    """Replace the ortholog and gene-level summary tables (idempotent).

    Args:
        store: PipelineStore to write into
        orthologs: human_gene_symbol, mgi_gene_id, mgi_gene_symbol
        summary: disease_id, mgi_gene_id, mgi_gene_symbol, max_combined_perc
        provenance: Optional tracker; a load step with row counts is recorded
    """
    orthologs = _validate_frame(orthologs, ORTHOLOG_COLUMNS, ORTHOLOG_TABLE_NAME)
    summary = _validate_frame(summary, SUMMARY_COLUMNS, SUMMARY_TABLE_NAME).with_columns(
        pl.col("max_combined_perc").cast(pl.Float64)
    )

    logger.info(
        "phenodigm_load_start",
        ortholog_rows=orthologs.height,
        summary_rows=summary.height,
    )

    store.save_dataframe(
        orthologs,
        ORTHOLOG_TABLE_NAME,
        description="Human to mouse ortholog mapping",
    )
    store.save_dataframe(
        summary,
        SUMMARY_TABLE_NAME,
        description="PhenoDigm disease to mouse gene similarity summary",
    )

    diseases = summary["disease_id"].n_unique()
    mouse_genes = summary["mgi_gene_id"].n_unique()

    if provenance is not None:
        provenance.record_step("load_phenodigm_reference", {
            "ortholog_rows": orthologs.height,
            "summary_rows": summary.height,
            "disease_count": diseases,
            "mouse_gene_count": mouse_genes,
        })

    logger.info(
        "phenodigm_load_complete",
        disease_count=diseases,
        mouse_gene_count=mouse_genes,
    )


def reference_tables_loaded(store: PipelineStore) -> bool:
    return store.is_registered(ORTHOLOG_TABLE_NAME) and store.is_registered(SUMMARY_TABLE_NAME)
