"""PhenoDigm reference database access.

Two read-only queries back the mouse phenotype priority:
- ortholog check: does a human gene have a phenotyped mouse ortholog?
- score lookup: PhenoDigm similarity of that ortholog to the query disease.
"""

from exome_pipeline.lookup.models import (
    ORTHOLOG_COLUMNS,
    ORTHOLOG_TABLE_NAME,
    SUMMARY_COLUMNS,
    SUMMARY_TABLE_NAME,
    OrthologRecord,
    PhenodigmLookupError,
    PhenodigmRecord,
)
from exome_pipeline.lookup.query import PhenodigmLookup
from exome_pipeline.lookup.load import (
    load_reference_tables,
    read_reference_tsv,
    reference_tables_loaded,
)

__all__ = [
    "ORTHOLOG_COLUMNS",
    "ORTHOLOG_TABLE_NAME",
    "SUMMARY_COLUMNS",
    "SUMMARY_TABLE_NAME",
    "OrthologRecord",
    "PhenodigmLookupError",
    "PhenodigmRecord",
    "PhenodigmLookup",
    "load_reference_tables",
    "read_reference_tsv",
    "reference_tables_loaded",
]
