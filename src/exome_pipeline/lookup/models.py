"""Records and table layout of the PhenoDigm reference database."""

from dataclasses import dataclass


ORTHOLOG_TABLE_NAME = "human2mouse_orthologs"
SUMMARY_TABLE_NAME = "mouse_gene_level_summary"

ORTHOLOG_COLUMNS = ["human_gene_symbol", "mgi_gene_id", "mgi_gene_symbol"]
SUMMARY_COLUMNS = ["disease_id", "mgi_gene_id", "mgi_gene_symbol", "max_combined_perc"]


class PhenodigmLookupError(Exception):
    """The reference database could not answer a lookup.

    Covers connection errors, query timeouts and rows of unexpected shape.
    """


@dataclass(frozen=True)
class OrthologRecord:
    """Ortholog-check row: a human gene with a phenotyped mouse ortholog.

    Attributes:
        human_gene_symbol: Queried human gene symbol (echoed back)
        mgi_gene_id: MGI accession of the mouse ortholog (e.g. MGI:95489)
        mgi_gene_symbol: Mouse gene symbol (e.g. Fbn1)
    """

    human_gene_symbol: str
    mgi_gene_id: str
    mgi_gene_symbol: str


@dataclass(frozen=True)
class PhenodigmRecord:
    """Score row for a (disease, human gene) pair.

    Attributes:
        mgi_gene_id: MGI accession of the best-matching mouse gene
        mgi_gene_symbol: Mouse gene symbol
        max_combined_perc: PhenoDigm combined similarity, percent (0-100)
    """

    mgi_gene_id: str
    mgi_gene_symbol: str
    max_combined_perc: float
