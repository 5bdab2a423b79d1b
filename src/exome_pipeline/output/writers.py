"""Dual-format TSV+Parquet writer for ranked genes with a YAML provenance sidecar."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Sequence

import polars as pl
import yaml

from exome_pipeline.model import NO_PHENODIGM_DATA, Gene, PriorityKind


RANKED_GENE_SCHEMA = {
    "rank": pl.Int64,
    "gene_symbol": pl.String,
    "variant_count": pl.Int64,
    "phenodigm_score": pl.Float64,
    "mgi_gene_id": pl.String,
    "mgi_gene_symbol": pl.String,
    "has_mouse_model": pl.Boolean,
}


def genes_to_frame(genes: Sequence[Gene]) -> pl.DataFrame:
    """
    Convert ranked genes to a DataFrame, one row per gene in the given order.

    phenodigm_score is NULL for genes without a phenotyped mouse model (the
    NO_PHENODIGM_DATA sentinel) or never scored; 0.0 stays 0.0.
    """
    rows = []
    for rank, gene in enumerate(genes, start=1):
        priority_score = gene.priority_score(PriorityKind.PHENODIGM_MGI)
        has_model = priority_score is not None and priority_score.score != NO_PHENODIGM_DATA
        rows.append({
            "rank": rank,
            "gene_symbol": gene.symbol,
            "variant_count": gene.variant_count,
            "phenodigm_score": priority_score.score if has_model else None,
            "mgi_gene_id": priority_score.external_id if priority_score else None,
            "mgi_gene_symbol": priority_score.external_label if priority_score else None,
            "has_mouse_model": has_model,
        })
    return pl.DataFrame(rows, schema=RANKED_GENE_SCHEMA)


def write_ranked_genes(
    genes: Sequence[Gene],
    output_dir: Path,
    filename_base: str = "ranked_genes",
) -> dict:
    """
    Write ranked genes to TSV and Parquet formats with provenance sidecar.

    Args:
        genes: Genes in rank order (see runner.rank_genes)
        output_dir: Directory to write output files (created if doesn't exist)
        filename_base: Base filename without extension

    Returns:
        Dictionary with output file paths:
        {"tsv": ..., "parquet": ..., "provenance": ...}
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    df = genes_to_frame(genes)

    tsv_path = output_dir / f"{filename_base}.tsv"
    parquet_path = output_dir / f"{filename_base}.parquet"
    provenance_path = output_dir / f"{filename_base}.provenance.yaml"

    df.write_csv(tsv_path, separator="\t", include_header=True)
    df.write_parquet(parquet_path, compression="snappy", use_pyarrow=True)

    with_model = df.filter(pl.col("has_mouse_model")).height
    positive = df.filter(pl.col("phenodigm_score") > 0).height

    provenance = {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "output_files": [tsv_path.name, parquet_path.name],
        "statistics": {
            "total_genes": df.height,
            "genes_with_mouse_model": with_model,
            "genes_with_positive_score": positive,
            "genes_without_mouse_model": df.height - with_model,
        },
        "column_count": len(df.columns),
        "column_names": df.columns,
    }

    with open(provenance_path, "w") as f:
        yaml.dump(provenance, f, default_flow_style=False, sort_keys=False)

    return {
        "tsv": tsv_path,
        "parquet": parquet_path,
        "provenance": provenance_path,
    }
