"""Apply filters to variants and priorities to genes, tracking counts and messages."""

from dataclasses import dataclass, field
from typing import Iterable, Sequence

import structlog

from exome_pipeline.filters import VariantFilter
from exome_pipeline.model import (
    NO_PHENODIGM_DATA,
    FilterKind,
    FilterResult,
    Gene,
    PriorityKind,
    Variant,
    VariantEvaluation,
    group_by_gene,
)
from exome_pipeline.priority import Priority, PriorityRunSummary, summary_message

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class FilterReport:
    """Variant counts around one filter.

    Attributes:
        kind: Filter kind
        before: Variants evaluated
        after: Variants whose verdict for this filter is PASS
        errors: Variants the filter could not evaluate
    """

    kind: FilterKind
    before: int
    after: int
    errors: int = 0


@dataclass
class AnalysisResult:
    """Everything produced by one analysis run."""

    evaluations: list[VariantEvaluation]
    filter_reports: list[FilterReport]
    genes: list[Gene]
    priority_summaries: list[PriorityRunSummary] = field(default_factory=list)


def rank_genes(genes: Iterable[Gene], kind: PriorityKind = PriorityKind.PHENODIGM_MGI) -> list[Gene]:
    """Order genes by score for a priority kind, best first.

    Unscored genes and genes with NO_PHENODIGM_DATA rank after every scored
    gene; ties are broken by gene symbol.
    """
    def sort_key(gene: Gene):
        priority_score = gene.priority_score(kind)
        if priority_score is None or priority_score.score == NO_PHENODIGM_DATA:
            return (1, 0.0, gene.symbol)
        return (0, -priority_score.score, gene.symbol)

    return sorted(genes, key=sort_key)


class AnalysisRunner:
    """Runs an ordered filter chain and an ordered priority chain.

    Filtering is status-based: variants are never removed from the input,
    each one collects a verdict per filter kind. ``before_count`` and
    ``after_count`` describe the most recent filter run.
    """

    def __init__(self):
        self._before_count = 0
        self._after_count = 0

    @property
    def before_count(self) -> int:
        return self._before_count

    @property
    def after_count(self) -> int:
        return self._after_count

    def run_filters(
        self,
        filters: Sequence[VariantFilter],
        evaluations: Sequence[VariantEvaluation],
    ) -> list[FilterReport]:
        """Evaluate every filter on every variant and record the verdicts.

        A filter raising on a variant records an ERROR verdict for it and
        the run continues.
        """
        reports = []
        for variant_filter in filters:
            passed = 0
            errors = 0
            for evaluation in evaluations:
                try:
                    result = variant_filter.evaluate(evaluation.variant)
                except Exception:
                    logger.error(
                        "filter_evaluation_failed",
                        filter=repr(variant_filter),
                        variant=evaluation.variant.key,
                        exc_info=True,
                    )
                    result = FilterResult.errored(variant_filter.kind)
                    errors += 1
                evaluation.add_filter_result(result)
                if result.passed:
                    passed += 1

            report = FilterReport(
                kind=variant_filter.kind,
                before=len(evaluations),
                after=passed,
                errors=errors,
            )
            reports.append(report)
            logger.info(
                "filter_complete",
                filter=variant_filter.kind.value,
                before=report.before,
                after=report.after,
                errors=report.errors,
            )

        self._before_count = len(evaluations)
        self._after_count = sum(
            1 for evaluation in evaluations
            if evaluation.last_result is not None and evaluation.last_result.passed
        )
        return reports

    def run_priorities(
        self,
        priorities: Sequence[Priority],
        genes: Sequence[Gene],
    ) -> list[PriorityRunSummary]:
        """Score every gene with every priority, then log a summary message on each."""
        summaries = []
        for priority in priorities:
            summary = priority.prioritize_genes(genes)
            priority.add_message(summary_message(len(genes), priority.summary_label))
            summaries.append(summary)
            logger.info(
                "priority_complete",
                priority=priority.name,
                analysed_genes=summary.analysed_genes,
                records_found=summary.records_found,
            )
        return summaries

    def analyse(
        self,
        variants: Iterable[Variant],
        filters: Sequence[VariantFilter],
        priorities: Sequence[Priority],
    ) -> AnalysisResult:
        """Filter variants, group survivors into genes, prioritize and rank them."""
        evaluations = [VariantEvaluation(variant) for variant in variants]
        logger.info(
            "analysis_start",
            variant_count=len(evaluations),
            filters=[f.kind.value for f in filters],
            priorities=[p.name for p in priorities],
        )

        filter_reports = self.run_filters(filters, evaluations)
        genes = group_by_gene(evaluations, passed_only=True)
        summaries = self.run_priorities(priorities, genes)

        ranked = rank_genes(genes)
        logger.info("analysis_complete", gene_count=len(ranked))

        return AnalysisResult(
            evaluations=evaluations,
            filter_reports=filter_reports,
            genes=ranked,
            priority_summaries=summaries,
        )
