"""Value objects for filter verdicts and priority scores."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


# Reserved PhenoDigm score meaning "no phenotyped mouse model exists".
# Distinct from 0.0, which means a model exists but similarity is zero.
NO_PHENODIGM_DATA = -1.0


class FilterKind(str, Enum):
    """Closed set of variant filter kinds, used as result map keys."""

    QUALITY = "quality"
    FREQUENCY = "frequency"
    TARGET = "target"


class PriorityKind(str, Enum):
    """Closed set of gene priority kinds, used as score map keys."""

    PHENODIGM_MGI = "phenodigm_mgi"


class FilterResultStatus(str, Enum):
    PASS = "PASS"
    FAIL = "FAIL"
    ERROR = "ERROR"


@dataclass(frozen=True)
class FilterResult:
    """Verdict of one filter on one variant.

    Attributes:
        kind: Filter kind that produced the verdict
        status: PASS, FAIL or ERROR
    """

    kind: FilterKind
    status: FilterResultStatus

    @property
    def passed(self) -> bool:
        return self.status is FilterResultStatus.PASS

    @classmethod
    def passing(cls, kind: FilterKind) -> "FilterResult":
        return cls(kind, FilterResultStatus.PASS)

    @classmethod
    def failing(cls, kind: FilterKind) -> "FilterResult":
        return cls(kind, FilterResultStatus.FAIL)

    @classmethod
    def errored(cls, kind: FilterKind) -> "FilterResult":
        return cls(kind, FilterResultStatus.ERROR)


@dataclass(frozen=True)
class PriorityScore:
    """Score of one priority for one gene.

    Attributes:
        kind: Priority kind that produced the score
        external_id: Identifier of the matched external record (e.g. MGI:96952)
        external_label: Label of the matched external record (mouse gene symbol)
        score: 0 means no relevance; not guaranteed to lie in [0, 1].
            NO_PHENODIGM_DATA marks genes without any external record.
    """

    kind: PriorityKind
    external_id: Optional[str]
    external_label: Optional[str]
    score: float

    @property
    def has_data(self) -> bool:
        return self.score != NO_PHENODIGM_DATA

    @classmethod
    def no_data(cls, kind: PriorityKind) -> "PriorityScore":
        return cls(kind, None, None, NO_PHENODIGM_DATA)
