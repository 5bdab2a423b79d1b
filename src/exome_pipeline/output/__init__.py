"""Output generation: ranked gene tables and the HTML message report."""

from exome_pipeline.output.report import build_html_report, write_html_report
from exome_pipeline.output.writers import (
    RANKED_GENE_SCHEMA,
    genes_to_frame,
    write_ranked_genes,
)

__all__ = [
    "RANKED_GENE_SCHEMA",
    "genes_to_frame",
    "write_ranked_genes",
    "build_html_report",
    "write_html_report",
]
