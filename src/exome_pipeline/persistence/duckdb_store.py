"""DuckDB database holding the PhenoDigm reference tables and run records."""

import re
from pathlib import Path
import duckdb
import polars as pl


_TABLE_NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _check_table_name(table_name: str) -> str:
    # Table names are interpolated into SQL, so only plain identifiers pass
    if not _TABLE_NAME_PATTERN.match(table_name):
        raise ValueError(f"Invalid table name: {table_name!r}")
    return table_name


class PipelineStore:
    """
    Single-file DuckDB store.

    Frames written with ``save_dataframe`` are recorded in the
    ``_table_registry`` table (row count, description, load time), which is
    how ``info`` and ``prioritize`` decide whether the reference data is in
    place. Lookups should run on their own ``cursor()``.
    """

    def __init__(self, db_path: Path):
        """
        Args:
            db_path: Database file; missing parent directories are created.
        """
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self.conn = duckdb.connect(str(self.db_path))
        self.conn.execute("""
            CREATE TABLE IF NOT EXISTS _table_registry (
                table_name VARCHAR PRIMARY KEY,
                loaded_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                row_count BIGINT,
                description VARCHAR
            )
        """)

    def save_dataframe(
        self,
        df: pl.DataFrame,
        table_name: str,
        description: str = "",
        replace: bool = True
    ) -> None:
        """
        Write a polars DataFrame to a table and register it.

        Args:
            df: Frame to write
            table_name: Target table (plain SQL identifier)
            description: Free text kept in the registry
            replace: Replace the table if True, append rows if False
        """
        if not isinstance(df, pl.DataFrame):
            raise ValueError("df must be a polars.DataFrame")
        _check_table_name(table_name)

        self.conn.register("_incoming_frame", df)
        try:
            if replace:
                self.conn.execute(
                    f"CREATE OR REPLACE TABLE {table_name} AS SELECT * FROM _incoming_frame"
                )
            else:
                self.conn.execute(f"INSERT INTO {table_name} SELECT * FROM _incoming_frame")
        finally:
            self.conn.unregister("_incoming_frame")

        row_count = self.conn.execute(f"SELECT COUNT(*) FROM {table_name}").fetchone()[0]
        self.conn.execute("""
            INSERT OR REPLACE INTO _table_registry (table_name, row_count, description, loaded_at)
            VALUES (?, ?, ?, CURRENT_TIMESTAMP)
        """, [table_name, row_count, description])

    def is_registered(self, table_name: str) -> bool:
        row = self.conn.execute(
            "SELECT COUNT(*) FROM _table_registry WHERE table_name = ?",
            [table_name]
        ).fetchone()
        return row[0] > 0

    def registered_tables(self) -> list[dict]:
        """Registry rows, most recently loaded first."""
        rows = self.conn.execute("""
            SELECT table_name, loaded_at, row_count, description
            FROM _table_registry
            ORDER BY loaded_at DESC, table_name
        """).fetchall()
        keys = ("table_name", "loaded_at", "row_count", "description")
        return [dict(zip(keys, row)) for row in rows]

    def cursor(self) -> duckdb.DuckDBPyConnection:
        """Separate handle on the same database (one per run or thread)."""
        return self.conn.cursor()

    def close(self) -> None:
        if self.conn is not None:
            self.conn.close()
            self.conn = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    @classmethod
    def from_config(cls, config: "PipelineConfig") -> "PipelineStore":
        return cls(config.duckdb_path)
