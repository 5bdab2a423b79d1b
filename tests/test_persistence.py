"""Tests for persistence layer (DuckDB store and provenance tracking)."""

import json

import polars as pl
import pytest

from exome_pipeline.config.loader import load_config
from exome_pipeline.persistence import PipelineStore, ProvenanceTracker


@pytest.fixture
def test_config(tmp_path):
    """Create a minimal test config."""
    config_path = tmp_path / "test_config.yaml"
    config_path.write_text("""
data_dir: {data_dir}
duckdb_path: {duckdb_path}
versions:
  phenodigm_release: "2014-06"
  mgi_release: "6.23"
phenodigm:
  disease_id: "OMIM:154700"
""".format(
        data_dir=str(tmp_path / "data"),
        duckdb_path=str(tmp_path / "test.duckdb"),
    ))
    return load_config(config_path)


def _read_table(store, table_name):
    return store.cursor().execute(f"SELECT * FROM {table_name}").pl()


# ============================================================================
# DuckDB Store Tests
# ============================================================================

def test_store_creates_database(tmp_path):
    """Test that PipelineStore creates .duckdb file at specified path."""
    db_path = tmp_path / "nested" / "test.duckdb"
    assert not db_path.exists()

    store = PipelineStore(db_path)
    store.close()

    assert db_path.exists()


def test_save_and_load_polars(tmp_path):
    store = PipelineStore(tmp_path / "test.duckdb")

    df = pl.DataFrame({
        "human_gene_symbol": ["FBN1", "MYO7A"],
        "mgi_gene_id": ["MGI:95489", "MGI:104510"],
    })
    store.save_dataframe(df, "orthologs", "test orthologs")

    loaded = _read_table(store, "orthologs")

    assert loaded.shape == df.shape
    assert loaded.columns == df.columns
    assert loaded["human_gene_symbol"].to_list() == ["FBN1", "MYO7A"]

    store.close()


def test_save_rejects_non_polars(tmp_path):
    with PipelineStore(tmp_path / "test.duckdb") as store:
        with pytest.raises(ValueError):
            store.save_dataframe({"a": [1]}, "bad")


@pytest.mark.parametrize("table_name", ["bad name", "x; DROP TABLE y", "1abc"])
def test_invalid_table_name_rejected(tmp_path, table_name):
    with PipelineStore(tmp_path / "test.duckdb") as store:
        with pytest.raises(ValueError, match="Invalid table name"):
            store.save_dataframe(pl.DataFrame({"a": [1]}), table_name)


def test_append_mode(tmp_path):
    with PipelineStore(tmp_path / "test.duckdb") as store:
        store.save_dataframe(pl.DataFrame({"val": [1, 2]}), "vals")
        store.save_dataframe(pl.DataFrame({"val": [3]}), "vals", replace=False)

        assert _read_table(store, "vals")["val"].to_list() == [1, 2, 3]


def test_is_registered(tmp_path):
    with PipelineStore(tmp_path / "test.duckdb") as store:
        assert not store.is_registered("orthologs")

        store.save_dataframe(pl.DataFrame({"col": [1]}), "orthologs", "test")

        assert store.is_registered("orthologs")

        # Tables created directly are not registered
        store.conn.execute("CREATE TABLE raw_table (x INTEGER)")
        assert not store.is_registered("raw_table")


def test_registered_tables(tmp_path):
    store = PipelineStore(tmp_path / "test.duckdb")

    for i in range(3):
        df = pl.DataFrame({"val": list(range(i + 1))})
        store.save_dataframe(df, f"table_{i}", f"description {i}")

    tables = store.registered_tables()

    assert len(tables) == 3
    table_0 = [t for t in tables if t["table_name"] == "table_0"][0]
    assert table_0["row_count"] == 1
    assert table_0["description"] == "description 0"

    store.close()


def test_cursor_sees_same_database(tmp_path):
    with PipelineStore(tmp_path / "test.duckdb") as store:
        store.save_dataframe(pl.DataFrame({"val": [7]}), "vals")

        cursor = store.cursor()
        assert cursor.execute("SELECT val FROM vals").fetchone() == (7,)
        cursor.close()


def test_context_manager(tmp_path):
    """Data written inside the context persists after close."""
    db_path = tmp_path / "test.duckdb"

    with PipelineStore(db_path) as store:
        store.save_dataframe(pl.DataFrame({"col": [1, 2, 3]}), "test_table", "test")

    assert store.conn is None

    with PipelineStore(db_path) as store:
        loaded = _read_table(store, "test_table")
        assert loaded.shape == (3, 1)


# ============================================================================
# Provenance Tests
# ============================================================================

def test_provenance_metadata_structure(test_config):
    tracker = ProvenanceTracker("0.1.0", test_config)

    metadata = tracker.create_metadata()

    assert metadata["pipeline_version"] == "0.1.0"
    assert metadata["disease_id"] == "OMIM:154700"
    assert metadata["data_source_versions"]["phenodigm_release"] == "2014-06"
    assert metadata["config_hash"] == test_config.config_hash()
    assert metadata["processing_steps"] == []
    assert len(metadata["run_id"]) == 32


def test_provenance_records_steps(test_config):
    tracker = ProvenanceTracker("0.1.0", test_config)

    tracker.record_step("read_variants")
    tracker.record_step("run_filters", {"quality": {"before": 10, "after": 7}})

    steps = tracker.get_steps()

    assert [s["step_name"] for s in steps] == ["read_variants", "run_filters"]
    assert "details" not in steps[0]
    assert steps[1]["details"]["quality"]["after"] == 7
    assert all("timestamp" in s for s in steps)


def test_provenance_sidecar_roundtrip(test_config, tmp_path):
    tracker = ProvenanceTracker("0.1.0", test_config)
    tracker.record_step("test_step", {"key": "value"})

    sidecar_path = tracker.save_sidecar(tmp_path / "ranked_genes.tsv")

    assert sidecar_path == tmp_path / "ranked_genes.provenance.json"
    loaded = ProvenanceTracker.load_sidecar(sidecar_path)
    assert loaded["config_hash"] == test_config.config_hash()
    assert loaded["run_id"] == tracker.run_id
    assert loaded["processing_steps"][0]["step_name"] == "test_step"


def test_provenance_from_config_uses_package_version(test_config):
    from exome_pipeline import __version__

    tracker = ProvenanceTracker.from_config(test_config)

    assert tracker.pipeline_version == __version__


def test_provenance_save_to_store(test_config, tmp_path):
    """Saving a run twice refreshes its row; each run gets its own row."""
    store = PipelineStore(tmp_path / "test.duckdb")
    tracker = ProvenanceTracker("0.1.0", test_config)
    tracker.record_step("test_step")

    tracker.save_to_store(store)
    tracker.record_step("second_step")
    tracker.save_to_store(store)
    ProvenanceTracker("0.1.0", test_config).save_to_store(store)

    rows = store.conn.execute(
        "SELECT pipeline_version, config_hash, disease_id, steps_json FROM _provenance "
        "WHERE run_id = ?",
        [tracker.run_id],
    ).fetchall()
    assert len(rows) == 1
    assert rows[0][0] == "0.1.0"
    assert rows[0][1] == test_config.config_hash()
    assert rows[0][2] == "OMIM:154700"
    assert [s["step_name"] for s in json.loads(rows[0][3])] == ["test_step", "second_step"]
    assert store.conn.execute("SELECT COUNT(*) FROM _provenance").fetchone()[0] == 2

    store.close()
