"""Population allele frequency filter."""

from exome_pipeline.filters.base import InvalidFilterConfigError, VariantFilter
from exome_pipeline.model import FilterKind, FilterResult, Variant


class FrequencyFilter(VariantFilter):
    """Pass rare variants: population frequency at or below a maximum (percent).

    Variants with no frequency record pass; absence from population
    databases is taken as evidence of rarity.
    """

    def __init__(self, max_frequency_pct: float):
        if not 0.0 <= max_frequency_pct <= 100.0:
            raise InvalidFilterConfigError(
                f"Frequency threshold must be within [0, 100] percent, got {max_frequency_pct}"
            )
        self.max_frequency_pct = float(max_frequency_pct)

    @property
    def kind(self) -> FilterKind:
        return FilterKind.FREQUENCY

    def evaluate(self, variant: Variant) -> FilterResult:
        if variant.frequency_pct is None:
            return self._verdict(True)
        return self._verdict(variant.frequency_pct <= self.max_frequency_pct)

    def _config(self) -> tuple[float]:
        return (self.max_frequency_pct,)
