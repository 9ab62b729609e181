"""Functional core - pure business logic with no I/O."""

from .activities import (
    Activity,
    ActivityDraft,
    ActivityType,
    calculate_priority,
    check_overlap,
    sort_activities,
    refresh_priorities,
    filter_activities,
)
from .workload import ChartPoint, aggregate_load
from .validation import SubmissionError, SCORE_RANGES, parse_submission, validate_new_activity
from .advice import AdviceResult, BurnoutRisk, build_advice_prompt, parse_advice

__all__ = [
    # Activities
    "Activity",
    "ActivityDraft",
    "ActivityType",
    "calculate_priority",
    "check_overlap",
    "sort_activities",
    "refresh_priorities",
    "filter_activities",
    # Workload
    "ChartPoint",
    "aggregate_load",
    # Validation
    "SubmissionError",
    "SCORE_RANGES",
    "parse_submission",
    "validate_new_activity",
    # Advice
    "AdviceResult",
    "BurnoutRisk",
    "build_advice_prompt",
    "parse_advice",
]
