"""Submission checks for new activities - no I/O dependencies."""

from dataclasses import dataclass
from datetime import date, time

from .activities import ActivityDraft, ActivityType, Activity, find_overlaps

REQUIRED_FIELDS_MESSAGE = "Please fill in all required fields."
OVERLAP_MESSAGE = "This activity overlaps with an existing schedule item!"


class SubmissionError(ValueError):
    """Raised when a submitted activity is rejected."""

    pass


@dataclass(frozen=True)
class ScoreRange:
    """Allowed importance scores for one activity type."""

    min: int
    max: int
    default: int
    label: str

    def contains(self, score: int) -> bool:
        return self.min <= score <= self.max


SCORE_RANGES: dict[ActivityType, ScoreRange] = {
    ActivityType.FINAL: ScoreRange(8, 10, 10, "Critical (8-10)"),
    ActivityType.MIDTERM: ScoreRange(6, 9, 8, "High (6-9)"),
    ActivityType.WORKSHOP: ScoreRange(3, 7, 5, "Medium (3-7)"),
    ActivityType.CLUB: ScoreRange(1, 10, 5, "Flexible (1-10)"),
    ActivityType.PERSONAL: ScoreRange(1, 10, 5, "Flexible (1-10)"),
    ActivityType.OTHER: ScoreRange(1, 10, 5, "Flexible (1-10)"),
}

# 15 minutes to 6 hours
DURATION_OPTIONS = [(i + 1) * 15 for i in range(24)]
DEFAULT_DURATION = 60


def parse_activity_type(value: str | ActivityType) -> ActivityType:
    """Match a type name case-insensitively."""
    if isinstance(value, ActivityType):
        return value
    for activity_type in ActivityType:
        if activity_type.value.lower() == value.strip().lower():
            return activity_type
    choices = ", ".join(t.value for t in ActivityType)
    raise SubmissionError(f"Unknown activity type '{value}'. Choose one of: {choices}")


def parse_submission(
    name: str | None,
    activity_type: str | ActivityType,
    date_str: str | None,
    time_str: str | None,
    duration: int = DEFAULT_DURATION,
    score: int | None = None,
) -> ActivityDraft:
    """
    Turn raw form input into an ActivityDraft.

    Raises SubmissionError describing the first problem found.
    """
    if not (name and name.strip()) or not (date_str and date_str.strip()) or not (time_str and time_str.strip()):
        raise SubmissionError(REQUIRED_FIELDS_MESSAGE)

    kind = parse_activity_type(activity_type)

    try:
        day = date.fromisoformat(date_str.strip())
    except ValueError:
        raise SubmissionError(f"Invalid date '{date_str}'. Use YYYY-MM-DD.")

    try:
        start = time.fromisoformat(time_str.strip())
    except ValueError:
        raise SubmissionError(f"Invalid time '{time_str}'. Use HH:MM.")

    if duration not in DURATION_OPTIONS:
        raise SubmissionError(
            f"Duration must be a multiple of 15 minutes between 15 and 360, got {duration}."
        )

    score_range = SCORE_RANGES[kind]
    if score is None:
        score = score_range.default
    elif not score_range.contains(score):
        raise SubmissionError(f"Importance for {kind.value} must be {score_range.label}, got {score}.")

    return ActivityDraft(
        name=name.strip(),
        type=kind,
        date=day,
        time=start.replace(second=0, microsecond=0),
        duration_minutes=duration,
        base_score=score,
    )


def validate_new_activity(draft: ActivityDraft, existing: list[Activity]) -> None:
    """Reject a draft that collides with the existing schedule, naming the conflicts."""
    conflicts = find_overlaps(draft, existing)
    if conflicts:
        names = ", ".join(
            f"{a.name} ({a.start.strftime('%H:%M')}-{a.end.strftime('%H:%M')})" for a in conflicts
        )
        raise SubmissionError(f"{OVERLAP_MESSAGE} Conflicts with: {names}")
