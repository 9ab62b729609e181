"""Pure workload aggregation for charting - no I/O dependencies."""

from dataclasses import dataclass
from datetime import date

from .activities import Activity

# Days scheduled beyond this many minutes are flagged as overloaded
OVERLOAD_MINUTES = 180


@dataclass
class ChartPoint:
    """Total scheduled minutes on one date."""

    date: date
    load: int

    @property
    def label(self) -> str:
        return self.date.strftime("%b %d")

    @property
    def is_overloaded(self) -> bool:
        return self.load > OVERLOAD_MINUTES


def aggregate_load(activities: list[Activity]) -> list[ChartPoint]:
    """
    Sum durations per date, one point per date, earliest first.

    Pure function - no I/O.
    """
    totals: dict[date, int] = {}
    for activity in activities:
        totals[activity.date] = totals.get(activity.date, 0) + activity.duration_minutes
    return [ChartPoint(date=d, load=load) for d, load in sorted(totals.items())]


def total_load(points: list[ChartPoint]) -> int:
    return sum(p.load for p in points)


def busiest_day(points: list[ChartPoint]) -> ChartPoint | None:
    """The point with the highest load. Earliest date wins a tie."""
    if not points:
        return None
    return max(points, key=lambda p: (p.load, -p.date.toordinal()))
