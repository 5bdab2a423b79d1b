"""Core data model: variants, genes, filter verdicts and priority scores."""

from exome_pipeline.model.results import (
    NO_PHENODIGM_DATA,
    FilterKind,
    FilterResult,
    FilterResultStatus,
    PriorityKind,
    PriorityScore,
)
from exome_pipeline.model.variant import Variant, VariantEvaluation
from exome_pipeline.model.gene import Gene, group_by_gene

__all__ = [
    "NO_PHENODIGM_DATA",
    "FilterKind",
    "FilterResult",
    "FilterResultStatus",
    "PriorityKind",
    "PriorityScore",
    "Variant",
    "VariantEvaluation",
    "Gene",
    "group_by_gene",
]
