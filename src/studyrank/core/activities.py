"""Pure activity domain logic - priority scoring and conflict checks, no I/O."""

from dataclasses import dataclass, replace
from datetime import date, datetime, time, timedelta
from enum import Enum


class ActivityType(str, Enum):
    """Kinds of activity a user can schedule."""

    FINAL = "Final"
    MIDTERM = "Midterm"
    WORKSHOP = "Workshop"
    CLUB = "Club"
    PERSONAL = "Personal"
    OTHER = "Other"


TYPE_WEIGHTS = {
    ActivityType.FINAL: 1.5,
    ActivityType.MIDTERM: 1.4,
    ActivityType.WORKSHOP: 1.1,
}
DEFAULT_TYPE_WEIGHT = 1.0

# Urgency contributed when an activity starts right now (and while overdue)
MAX_URGENCY = 50.0

HIGH_PRIORITY_THRESHOLD = 50.0


@dataclass
class ActivityDraft:
    """An activity as submitted, before it has an id or a score."""

    name: str
    type: ActivityType
    date: date
    time: time
    duration_minutes: int
    base_score: int

    @property
    def start(self) -> datetime:
        return datetime.combine(self.date, self.time)

    @property
    def end(self) -> datetime:
        return self.start + timedelta(minutes=self.duration_minutes)

    def to_activity(self, activity_id: str) -> "Activity":
        return Activity(
            id=activity_id,
            name=self.name,
            type=self.type,
            date=self.date,
            time=self.time,
            duration_minutes=self.duration_minutes,
            base_score=self.base_score,
        )


@dataclass
class Activity:
    """
    A scheduled activity.

    priority_score, is_overdue and is_today are projections of the other
    fields and a reference instant. They go stale as soon as time moves, so
    run calculate_priority() before relying on them.
    """

    id: str
    name: str
    type: ActivityType
    date: date
    time: time
    duration_minutes: int
    base_score: int
    priority_score: float = 0.0
    is_overdue: bool = False
    is_today: bool = False

    @property
    def start(self) -> datetime:
        return datetime.combine(self.date, self.time)

    @property
    def end(self) -> datetime:
        return self.start + timedelta(minutes=self.duration_minutes)

    def to_dict(self) -> dict:
        """Serialize to the stored JSON shape."""
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "date": self.date.isoformat(),
            "time": self.time.strftime("%H:%M"),
            "durationMinutes": self.duration_minutes,
            "baseScore": self.base_score,
            "priorityScore": self.priority_score,
            "isOverdue": self.is_overdue,
            "isToday": self.is_today,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Activity":
        """Create Activity from stored JSON. Derived fields are not restored."""
        return cls(
            id=data["id"],
            name=data["name"],
            type=ActivityType(data["type"]),
            date=date.fromisoformat(data["date"]),
            time=time.fromisoformat(data["time"]),
            duration_minutes=int(data["durationMinutes"]),
            base_score=int(data["baseScore"]),
        )


def days_until(activity: Activity | ActivityDraft, now: datetime) -> float:
    """Fractional days from now until the activity starts (negative once started)."""
    return (activity.start - now) / timedelta(days=1)


def type_weight(activity_type: ActivityType) -> float:
    return TYPE_WEIGHTS.get(activity_type, DEFAULT_TYPE_WEIGHT)


def time_component(activity_type: ActivityType, days: float) -> float:
    """
    Proximity urgency for an activity starting in `days` days.

    Workshops get no proximity boost. Overdue activities keep the maximum
    so they stay near the top instead of decaying.
    """
    if activity_type == ActivityType.WORKSHOP:
        return 0.0
    if days < 0:
        return MAX_URGENCY
    return MAX_URGENCY / (days + 1)


def calculate_priority(activity: Activity, now: datetime | None = None) -> Activity:
    """
    Return a copy of the activity with derived fields computed for `now`.

    Pure function - no I/O.
    """
    now = now or datetime.now()
    days = days_until(activity, now)
    score = activity.base_score * type_weight(activity.type) * 5 + time_component(activity.type, days)
    return replace(
        activity,
        priority_score=score,
        is_overdue=days < 0,
        is_today=activity.date == now.date(),
    )


def _overlaps(a: Activity | ActivityDraft, b: Activity | ActivityDraft) -> bool:
    # Spans crossing midnight are not compared against the next day
    if a.date != b.date:
        return False
    return a.start < b.end and b.start < a.end


def check_overlap(candidate: Activity | ActivityDraft, existing: list[Activity]) -> bool:
    """
    Check whether the candidate collides with any existing activity.

    Intervals are half-open, so back-to-back activities do not conflict.
    Pure function - no I/O.
    """
    return any(_overlaps(candidate, other) for other in existing)


def find_overlaps(candidate: Activity | ActivityDraft, existing: list[Activity]) -> list[Activity]:
    """All existing activities that collide with the candidate."""
    return [other for other in existing if _overlaps(candidate, other)]


def sort_activities(activities: list[Activity]) -> list[Activity]:
    """
    Sort by priority score, highest first. Ties keep their input order.

    Pure function - no I/O.
    """
    return sorted(activities, key=lambda a: -a.priority_score)


def refresh_priorities(activities: list[Activity], now: datetime | None = None) -> list[Activity]:
    """Recompute every activity against one reference instant, then sort."""
    now = now or datetime.now()
    return sort_activities([calculate_priority(a, now) for a in activities])


def filter_today(activities: list[Activity]) -> list[Activity]:
    return [a for a in activities if a.is_today]


def filter_high_priority(
    activities: list[Activity],
    threshold: float = HIGH_PRIORITY_THRESHOLD,
) -> list[Activity]:
    return [a for a in activities if a.priority_score > threshold]


FILTER_MODES = ("all", "today", "high")


def filter_activities(
    activities: list[Activity],
    mode: str = "all",
    threshold: float = HIGH_PRIORITY_THRESHOLD,
) -> list[Activity]:
    """Apply a list view filter: all, today, or high."""
    if mode == "today":
        return filter_today(activities)
    if mode == "high":
        return filter_high_priority(activities, threshold)
    return list(activities)
