"""Off-target variant effect filter."""

from typing import Iterable

from exome_pipeline.config.schema import DEFAULT_OFF_TARGET_EFFECTS
from exome_pipeline.filters.base import InvalidFilterConfigError, VariantFilter
from exome_pipeline.model import FilterKind, FilterResult, Variant


class TargetFilter(VariantFilter):
    """Fail variants whose predicted effect lies outside the exome target.

    Effects are compared case-insensitively. Variants without an effect
    annotation pass.
    """

    def __init__(self, off_target_effects: Iterable[str] = DEFAULT_OFF_TARGET_EFFECTS):
        effects = frozenset(
            effect.strip().lower() for effect in off_target_effects if effect.strip()
        )
        if not effects:
            raise InvalidFilterConfigError("Target filter needs at least one off-target effect")
        self.off_target_effects = effects

    @property
    def kind(self) -> FilterKind:
        return FilterKind.TARGET

    def evaluate(self, variant: Variant) -> FilterResult:
        if not variant.effect:
            return self._verdict(True)
        return self._verdict(variant.effect.lower() not in self.off_target_effects)

    def _config(self) -> tuple[frozenset[str]]:
        return (self.off_target_effects,)
