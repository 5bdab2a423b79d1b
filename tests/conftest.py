"""Shared fixtures: a small PhenoDigm reference database and variants."""

import polars as pl
import pytest

from exome_pipeline.lookup import PhenodigmLookup, load_reference_tables
from exome_pipeline.model import Variant
from exome_pipeline.persistence import PipelineStore


MARFAN = "OMIM:154700"


@pytest.fixture
def ortholog_df():
    """Human to mouse orthologs. GENEX has none; TTN has no phenotype summary."""
    return pl.DataFrame({
        "human_gene_symbol": ["FBN1", "MYO7A", "USH2A", "TTN"],
        "mgi_gene_id": ["MGI:95489", "MGI:104510", "MGI:1341292", "MGI:98864"],
        "mgi_gene_symbol": ["Fbn1", "Myo7a", "Ush2a", "Ttn"],
    })


@pytest.fixture
def summary_df():
    """PhenoDigm summary rows.

    - FBN1: 45% similarity to Marfan syndrome
    - MYO7A: data only for Usher syndrome 1B, none for Marfan
    - USH2A: Marfan row with 0% similarity
    """
    return pl.DataFrame({
        "disease_id": [MARFAN, "OMIM:101600", "OMIM:276900", MARFAN],
        "mgi_gene_id": ["MGI:95489", "MGI:95489", "MGI:104510", "MGI:1341292"],
        "mgi_gene_symbol": ["Fbn1", "Fbn1", "Myo7a", "Ush2a"],
        "max_combined_perc": [45.0, 12.0, 80.0, 0.0],
    })


@pytest.fixture
def reference_store(tmp_path, ortholog_df, summary_df):
    """PipelineStore with the PhenoDigm reference tables loaded."""
    store = PipelineStore(tmp_path / "phenodigm.duckdb")
    load_reference_tables(store, ortholog_df, summary_df)
    yield store
    store.close()


@pytest.fixture
def lookup(reference_store):
    with PhenodigmLookup.open(reference_store, timeout_seconds=5.0) as handle:
        yield handle


@pytest.fixture
def make_variant():
    """Factory for variants with sensible defaults."""
    def _make(
        quality=50.0,
        gene_symbol="FBN1",
        effect="missense_variant",
        frequency_pct=None,
        pos=48700000,
        chrom="15",
    ):
        return Variant(
            chrom=chrom,
            pos=pos,
            ref="G",
            alt="A",
            quality=quality,
            gene_symbol=gene_symbol,
            effect=effect,
            frequency_pct=frequency_pct,
        )
    return _make
