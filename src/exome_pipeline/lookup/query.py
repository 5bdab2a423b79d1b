"""Parameterized PhenoDigm queries with a bounded per-call timeout."""

import math
import threading
from typing import Any, Optional, Sequence

import duckdb
import structlog

from exome_pipeline.lookup.models import (
    ORTHOLOG_TABLE_NAME,
    SUMMARY_TABLE_NAME,
    OrthologRecord,
    PhenodigmLookupError,
    PhenodigmRecord,
)

logger = structlog.get_logger(__name__)


# Gene must have a mouse ortholog AND some phenotype summary data.
ORTHOLOG_QUERY = f"""
    SELECT H.human_gene_symbol, H.mgi_gene_id, H.mgi_gene_symbol
    FROM {ORTHOLOG_TABLE_NAME} H
    JOIN {SUMMARY_TABLE_NAME} M ON M.mgi_gene_id = H.mgi_gene_id
    WHERE H.human_gene_symbol = ?
    ORDER BY H.mgi_gene_id
    LIMIT 1
"""

SCORE_QUERY = f"""
    SELECT M.mgi_gene_id, M.mgi_gene_symbol, M.max_combined_perc
    FROM {SUMMARY_TABLE_NAME} M
    JOIN {ORTHOLOG_TABLE_NAME} H ON M.mgi_gene_id = H.mgi_gene_id
    WHERE M.disease_id = ? AND H.human_gene_symbol = ?
    ORDER BY M.max_combined_perc DESC, M.mgi_gene_id
    LIMIT 1
"""


def _require_text(value: Any, column: str) -> str:
    if not isinstance(value, str) or not value:
        raise PhenodigmLookupError(f"Malformed {column}: {value!r}")
    return value


def _require_percentage(value: Any) -> float:
    try:
        perc = float(value)
    except (TypeError, ValueError) as e:
        raise PhenodigmLookupError(f"Malformed max_combined_perc: {value!r}") from e
    if math.isnan(perc) or perc < 0:
        raise PhenodigmLookupError(f"Malformed max_combined_perc: {value!r}")
    return perc


class PhenodigmLookup:
    """Read-only handle on the PhenoDigm reference tables.

    Wraps a single DuckDB connection. Use ``open`` to get a handle on its own
    cursor for one run; the lookup is a context manager and releases that
    cursor on exit. A handle must not be shared between threads.
    """

    def __init__(
        self,
        conn: duckdb.DuckDBPyConnection,
        timeout_seconds: float = 5.0,
        owns_connection: bool = False,
    ):
        if timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be positive, got {timeout_seconds}")
        self._conn = conn
        self.timeout_seconds = timeout_seconds
        self._owns_connection = owns_connection

    @classmethod
    def open(cls, store: "PipelineStore", timeout_seconds: float = 5.0) -> "PhenodigmLookup":
        """Acquire a per-run lookup handle on the store's database."""
        return cls(store.cursor(), timeout_seconds=timeout_seconds, owns_connection=True)

    @property
    def closed(self) -> bool:
        return self._conn is None

    def _fetch_one(self, query: str, params: list[Any]) -> Optional[Sequence[Any]]:
        if self._conn is None:
            raise PhenodigmLookupError("Lookup handle is closed")

        conn = self._conn
        timed_out = threading.Event()

        def _interrupt() -> None:
            timed_out.set()
            conn.interrupt()

        # One short-lived timer thread per call, cancelled once the query returns
        timer = threading.Timer(self.timeout_seconds, _interrupt)
        timer.daemon = True
        timer.start()
        try:
            row = conn.execute(query, params).fetchone()
        except duckdb.Error as e:
            if timed_out.is_set():
                logger.warning("phenodigm_query_timeout", timeout_seconds=self.timeout_seconds)
                raise PhenodigmLookupError(
                    f"PhenoDigm query exceeded {self.timeout_seconds}s timeout"
                ) from e
            raise PhenodigmLookupError(f"PhenoDigm query failed: {e}") from e
        finally:
            timer.cancel()

        if row is not None and len(row) != 3:
            raise PhenodigmLookupError(f"Expected 3 columns, got {len(row)}")
        return row

    def find_ortholog(self, gene_symbol: str) -> Optional[OrthologRecord]:
        """Ortholog check: phenotyped mouse ortholog of a human gene, if any."""
        row = self._fetch_one(ORTHOLOG_QUERY, [gene_symbol])
        if row is None:
            return None
        return OrthologRecord(
            human_gene_symbol=_require_text(row[0], "human_gene_symbol"),
            mgi_gene_id=_require_text(row[1], "mgi_gene_id"),
            mgi_gene_symbol=_require_text(row[2], "mgi_gene_symbol"),
        )

    def find_score(self, disease_id: str, gene_symbol: str) -> Optional[PhenodigmRecord]:
        """Score lookup: best PhenoDigm match for a (disease, human gene) pair."""
        row = self._fetch_one(SCORE_QUERY, [disease_id, gene_symbol])
        if row is None:
            return None
        return PhenodigmRecord(
            mgi_gene_id=_require_text(row[0], "mgi_gene_id"),
            mgi_gene_symbol=_require_text(row[1], "mgi_gene_symbol"),
            max_combined_perc=_require_percentage(row[2]),
        )

    def close(self) -> None:
        if self._conn is not None and self._owns_connection:
            self._conn.close()
        self._conn = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
