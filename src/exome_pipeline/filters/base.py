"""Contract shared by all per-variant filters."""

from abc import ABC, abstractmethod
from typing import Any

from exome_pipeline.model import FilterKind, FilterResult, Variant


class InvalidFilterConfigError(ValueError):
    """Raised when a filter is constructed with an unusable configuration."""


class VariantFilter(ABC):
    """A pass/fail predicate evaluated on each variant.

    Filters are pure: ``evaluate`` only produces a FilterResult, the runner
    records it. Two filters are equal when they are the same type with the
    same configuration, which makes filter lists comparable and hashable.
    """

    @property
    @abstractmethod
    def kind(self) -> FilterKind:
        """Filter kind used as the result key."""

    @abstractmethod
    def evaluate(self, variant: Variant) -> FilterResult:
        """Return the verdict for one variant."""

    @abstractmethod
    def _config(self) -> tuple[Any, ...]:
        """Configuration values that define equality."""

    def _verdict(self, passed: bool) -> FilterResult:
        if passed:
            return FilterResult.passing(self.kind)
        return FilterResult.failing(self.kind)

    def identity_key(self) -> tuple[Any, ...]:
        """Type name, kind and configuration; equal filters share a key."""
        return (type(self).__name__, self.kind, self._config())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VariantFilter):
            return NotImplemented
        return type(self) is type(other) and self.identity_key() == other.identity_key()

    def __hash__(self) -> int:
        return hash(self.identity_key())

    def __repr__(self) -> str:
        config = ", ".join(repr(value) for value in self._config())
        return f"{type(self).__name__}({config})"
