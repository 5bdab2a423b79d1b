"""Read pre-annotated variant tables into Variant records."""

from pathlib import Path

import polars as pl
import structlog

from exome_pipeline.model import Variant

logger = structlog.get_logger(__name__)

REQUIRED_COLUMNS = ["chrom", "pos", "ref", "alt", "quality"]
OPTIONAL_COLUMNS = ["gene_symbol", "effect", "frequency_pct"]


def variants_from_frame(df: pl.DataFrame) -> list[Variant]:
    """
    Build Variant records from a DataFrame.

    Required columns: chrom, pos, ref, alt, quality. Optional columns
    (gene_symbol, effect, frequency_pct) are filled with NULL when absent.

    Raises:
        ValueError: If a required column is missing
        pydantic.ValidationError: If a row holds invalid values
    """
    missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing:
        raise ValueError(f"Variant table is missing required columns: {missing}")

    df = df.with_columns([
        pl.lit(None).alias(col) for col in OPTIONAL_COLUMNS if col not in df.columns
    ]).with_columns([
        pl.col("chrom").cast(pl.String),
        pl.col("pos").cast(pl.Int64),
        pl.col("quality").cast(pl.Float64),
        pl.col("frequency_pct").cast(pl.Float64),
    ])

    return [
        Variant(**row)
        for row in df.select(REQUIRED_COLUMNS + OPTIONAL_COLUMNS).iter_rows(named=True)
    ]


def read_variants_tsv(path: Path) -> list[Variant]:
    """Read a tab-separated variant table (one annotated variant per row)."""
    df = pl.read_csv(
        path,
        separator="\t",
        null_values=["", "NA"],
        schema_overrides={"chrom": pl.String, "ref": pl.String, "alt": pl.String},
    )
    variants = variants_from_frame(df)
    logger.info("read_variants_complete", path=str(path), variant_count=len(variants))
    return variants
