"""Variant record and the per-variant filter verdict container."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from exome_pipeline.model.results import FilterKind, FilterResult


class Variant(BaseModel):
    """A single annotated variant call.

    Attributes:
        chrom: Chromosome name (e.g. "1", "chrX")
        pos: 1-based position
        ref: Reference allele
        alt: Alternate allele
        quality: Phred-scaled variant quality (QUAL)
        gene_symbol: Affected gene symbol, if annotated
        effect: Sequence Ontology effect term, if annotated
        frequency_pct: Population allele frequency in percent, if known
    """

    model_config = ConfigDict(frozen=True)

    chrom: str = Field(..., min_length=1, description="Chromosome")
    pos: int = Field(..., ge=1, description="1-based position")
    ref: str = Field(..., min_length=1, description="Reference allele")
    alt: str = Field(..., min_length=1, description="Alternate allele")
    quality: float = Field(..., description="Phred-scaled variant quality")
    gene_symbol: Optional[str] = Field(None, description="Affected gene symbol")
    effect: Optional[str] = Field(None, description="Sequence Ontology effect term")
    frequency_pct: Optional[float] = Field(
        None,
        ge=0.0,
        le=100.0,
        description="Population allele frequency (percent)",
    )

    @property
    def key(self) -> str:
        return f"{self.chrom}:{self.pos}:{self.ref}>{self.alt}"


class VariantEvaluation:
    """Owns one variant and the verdicts recorded against it.

    Verdicts are keyed by filter kind; recording a second verdict of the
    same kind replaces the first.
    """

    def __init__(self, variant: Variant):
        self.variant = variant
        self._results: dict[FilterKind, FilterResult] = {}
        self._last_kind: Optional[FilterKind] = None

    def add_filter_result(self, result: FilterResult) -> None:
        self._results[result.kind] = result
        self._last_kind = result.kind

    @property
    def filter_results(self) -> dict[FilterKind, FilterResult]:
        return dict(self._results)

    def result_for(self, kind: FilterKind) -> Optional[FilterResult]:
        return self._results.get(kind)

    @property
    def last_result(self) -> Optional[FilterResult]:
        """Most recently recorded verdict, or None before any filter ran."""
        if self._last_kind is None:
            return None
        return self._results[self._last_kind]

    def passed_filters(self) -> bool:
        """True when every recorded verdict is PASS (vacuously true if none)."""
        return all(result.passed for result in self._results.values())

    @property
    def gene_symbol(self) -> Optional[str]:
        return self.variant.gene_symbol

    def __repr__(self) -> str:
        statuses = ", ".join(
            f"{kind.value}={result.status.value}" for kind, result in self._results.items()
        )
        return f"VariantEvaluation({self.variant.key}, [{statuses}])"
