"""Per-variant filters.

Each filter is a pure predicate producing a FilterResult; filters compare
equal when they share type and configuration.
"""

from exome_pipeline.config.schema import FilterSettings
from exome_pipeline.filters.base import InvalidFilterConfigError, VariantFilter
from exome_pipeline.filters.frequency import FrequencyFilter
from exome_pipeline.filters.quality import QualityFilter
from exome_pipeline.filters.target import TargetFilter


def build_filters(settings: FilterSettings) -> list[VariantFilter]:
    """Build the ordered filter chain from configuration.

    Order: target, frequency, quality. Invalid thresholds raise
    InvalidFilterConfigError before any variant is evaluated.
    """
    return [
        TargetFilter(settings.off_target_effects),
        FrequencyFilter(settings.max_frequency_pct),
        QualityFilter(settings.min_quality),
    ]


__all__ = [
    "InvalidFilterConfigError",
    "VariantFilter",
    "QualityFilter",
    "FrequencyFilter",
    "TargetFilter",
    "build_filters",
]
