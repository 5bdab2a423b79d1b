"""Variant quality (QUAL) threshold filter."""

from exome_pipeline.filters.base import InvalidFilterConfigError, VariantFilter
from exome_pipeline.model import FilterKind, FilterResult, Variant


class QualityFilter(VariantFilter):
    """Pass variants whose Phred quality is strictly above a minimum.

    A variant whose quality equals the threshold fails.
    """

    def __init__(self, min_quality: float):
        if not min_quality >= 0:
            raise InvalidFilterConfigError(
                f"Quality threshold must be non-negative, got {min_quality}"
            )
        self.min_quality = float(min_quality)

    @property
    def kind(self) -> FilterKind:
        return FilterKind.QUALITY

    def over_quality_threshold(self, quality: float) -> bool:
        return quality > self.min_quality

    def evaluate(self, variant: Variant) -> FilterResult:
        return self._verdict(self.over_quality_threshold(variant.quality))

    def _config(self) -> tuple[float]:
        return (self.min_quality,)
