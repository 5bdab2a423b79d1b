"""Gene aggregate: variants grouped by symbol plus their priority scores."""

from typing import Iterable, Optional

import structlog

from exome_pipeline.model.results import PriorityKind, PriorityScore
from exome_pipeline.model.variant import VariantEvaluation

logger = structlog.get_logger(__name__)


class Gene:
    """A candidate gene carrying one score per priority kind."""

    def __init__(self, symbol: str, variant_evaluations: Optional[list[VariantEvaluation]] = None):
        self.symbol = symbol
        self.variant_evaluations: list[VariantEvaluation] = list(variant_evaluations or [])
        self._scores: dict[PriorityKind, PriorityScore] = {}

    def add_variant(self, evaluation: VariantEvaluation) -> None:
        self.variant_evaluations.append(evaluation)

    def add_priority_score(self, score: PriorityScore) -> None:
        self._scores[score.kind] = score

    def priority_score(self, kind: PriorityKind) -> Optional[PriorityScore]:
        return self._scores.get(kind)

    @property
    def priority_scores(self) -> dict[PriorityKind, PriorityScore]:
        return dict(self._scores)

    @property
    def variant_count(self) -> int:
        return len(self.variant_evaluations)

    def __repr__(self) -> str:
        return f"Gene({self.symbol!r}, variants={self.variant_count}, scores={len(self._scores)})"


def group_by_gene(
    evaluations: Iterable[VariantEvaluation],
    passed_only: bool = True,
) -> list[Gene]:
    """Group variant evaluations into genes by affected gene symbol.

    Genes appear in the order their first variant is seen. Variants without
    a gene symbol cannot be prioritised and are skipped.

    Args:
        evaluations: Evaluated variants
        passed_only: If True, only variants that passed every filter are grouped

    Returns:
        List of Gene objects, one per distinct symbol
    """
    genes: dict[str, Gene] = {}
    skipped_unannotated = 0
    skipped_failed = 0

    for evaluation in evaluations:
        symbol = evaluation.gene_symbol
        if not symbol:
            skipped_unannotated += 1
            continue
        if passed_only and not evaluation.passed_filters():
            skipped_failed += 1
            continue
        gene = genes.get(symbol)
        if gene is None:
            gene = genes[symbol] = Gene(symbol)
        gene.add_variant(evaluation)

    logger.info(
        "group_by_gene_complete",
        gene_count=len(genes),
        skipped_unannotated=skipped_unannotated,
        skipped_failed=skipped_failed,
    )

    return list(genes.values())
