"""Mouse phenotype similarity priority backed by MGI PhenoDigm data.

Scores each candidate gene by how closely the phenotypes of mouse models
disrupting its ortholog match the query disease (PhenoDigm/OWLSim).

Three outcomes are kept numerically distinct:
- no phenotyped mouse ortholog: NO_PHENODIGM_DATA
- ortholog known but no similarity record for the disease: 0.0
- similarity record found: max_combined_perc / 100
"""

from typing import Optional

import structlog

from exome_pipeline.lookup import PhenodigmLookup, PhenodigmLookupError
from exome_pipeline.model import Gene, PriorityKind, PriorityScore
from exome_pipeline.priority.base import InvalidPriorityConfigError, Priority
from exome_pipeline.priority.messages import (
    phenodigm_anchor_message,
    phenodigm_title_message,
)

logger = structlog.get_logger(__name__)


def percentage_to_score(max_combined_perc: float) -> float:
    """Convert a PhenoDigm percentage to the priority score scale."""
    return max_combined_perc / 100.0


class PhenodigmPriority(Priority):
    """Prioritize genes by mouse model phenotype similarity to a disease.

    Args:
        disease_id: Query disease, e.g. "OMIM:154700" or "ORPHANET:558"
        lookup: Open PhenodigmLookup; injected and not closed by the priority
    """

    def __init__(self, disease_id: str, lookup: PhenodigmLookup):
        super().__init__()
        if not isinstance(disease_id, str) or not disease_id.strip():
            raise InvalidPriorityConfigError(f"Invalid disease identifier: {disease_id!r}")
        self._disease_id = disease_id
        self._lookup = lookup

        self.add_message(phenodigm_title_message())
        self.add_message(phenodigm_anchor_message(disease_id))

    @property
    def disease_id(self) -> str:
        return self._disease_id

    @property
    def name(self) -> str:
        return "MGI PhenoDigm"

    @property
    def summary_label(self) -> str:
        return "Mouse PhenoDigm"

    @property
    def kind(self) -> PriorityKind:
        return PriorityKind.PHENODIGM_MGI

    def score(self, gene: Gene) -> PriorityScore:
        """Run the ortholog check, then the disease score lookup, for one gene.

        Lookup failures are logged and never raised; the gene keeps whatever
        was resolved before the failure.
        """
        score = 0.0
        mgi_gene_id: Optional[str] = None
        mgi_gene_symbol: Optional[str] = None

        try:
            ortholog = self._lookup.find_ortholog(gene.symbol)
            if ortholog is None:
                logger.debug("phenodigm_no_mouse_model", gene=gene.symbol)
                return PriorityScore.no_data(self.kind)

            mgi_gene_id = ortholog.mgi_gene_id
            mgi_gene_symbol = ortholog.mgi_gene_symbol

            record = self._lookup.find_score(self._disease_id, gene.symbol)
            if record is not None:
                mgi_gene_id = record.mgi_gene_id
                mgi_gene_symbol = record.mgi_gene_symbol
                score = percentage_to_score(record.max_combined_perc)
                if score > 0:
                    self._count_record_found()
        except PhenodigmLookupError:
            logger.error(
                "phenodigm_lookup_failed",
                gene=gene.symbol,
                disease_id=self._disease_id,
                exc_info=True,
            )

        return PriorityScore(self.kind, mgi_gene_id, mgi_gene_symbol, score)
