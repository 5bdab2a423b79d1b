"""Contract shared by all gene priorities."""

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable

from exome_pipeline.model import Gene, PriorityKind, PriorityScore


class InvalidPriorityConfigError(ValueError):
    """Raised when a priority is constructed with an unusable configuration."""


@dataclass(frozen=True)
class PriorityRunSummary:
    """Outcome of one priority pass over a gene list.

    Attributes:
        kind: Priority kind that ran
        analysed_genes: Number of genes scored
        records_found: Genes with a positive score from the external source
    """

    kind: PriorityKind
    analysed_genes: int
    records_found: int


class Priority(ABC):
    """A per-gene scoring module.

    Subclasses implement ``score``. The message list is append-only over the
    lifetime of the instance and appends are serialized by a lock.
    """

    def __init__(self):
        self._messages: list[str] = []
        self._lock = threading.Lock()
        self._records_found = 0

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name of the prioritization algorithm."""

    @property
    @abstractmethod
    def kind(self) -> PriorityKind:
        """Priority kind used as the score key on a gene."""

    @property
    def summary_label(self) -> str:
        """Label used in the per-run "Data analysed for N genes" line."""
        return self.name

    @abstractmethod
    def score(self, gene: Gene) -> PriorityScore:
        """Compute the score for one gene without storing it."""

    @property
    def messages(self) -> list[str]:
        with self._lock:
            return list(self._messages)

    def add_message(self, message: str) -> None:
        with self._lock:
            self._messages.append(message)

    @property
    def records_found(self) -> int:
        """Genes with a positive external score in the current (or last) run."""
        return self._records_found

    def _count_record_found(self) -> None:
        with self._lock:
            self._records_found += 1

    def prioritize_genes(self, genes: Iterable[Gene]) -> PriorityRunSummary:
        """Score every gene and store the score on it.

        Resets ``records_found`` at the start of the pass.
        """
        with self._lock:
            self._records_found = 0

        analysed = 0
        for gene in genes:
            gene.add_priority_score(self.score(gene))
            analysed += 1

        return PriorityRunSummary(
            kind=self.kind,
            analysed_genes=analysed,
            records_found=self.records_found,
        )
