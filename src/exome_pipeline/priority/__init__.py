"""Gene priorities and their report messages."""

from exome_pipeline.priority.base import (
    InvalidPriorityConfigError,
    Priority,
    PriorityRunSummary,
)
from exome_pipeline.priority.messages import (
    disease_url,
    messages_to_html,
    phenodigm_anchor_message,
    phenodigm_title_message,
    summary_message,
)
from exome_pipeline.priority.phenodigm import PhenodigmPriority, percentage_to_score

__all__ = [
    "InvalidPriorityConfigError",
    "Priority",
    "PriorityRunSummary",
    "PhenodigmPriority",
    "percentage_to_score",
    "disease_url",
    "messages_to_html",
    "phenodigm_anchor_message",
    "phenodigm_title_message",
    "summary_message",
]
