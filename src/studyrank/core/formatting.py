"""Pure text rendering for activities, workload and advice - no I/O."""

from .activities import Activity
from .advice import AdviceResult
from .workload import ChartPoint, busiest_day, total_load


def format_duration(minutes: int) -> str:
    """Human-readable duration, e.g. '45 min' or '2 hrs 30 min'."""
    hours, mins = divmod(minutes, 60)
    if hours == 0:
        return f"{mins} min"
    unit = "hrs" if hours > 1 else "hr"
    if mins == 0:
        return f"{hours} {unit}"
    return f"{hours} {unit} {mins} min"


def format_activity_line(activity: Activity) -> str:
    """
    Format a single activity for the priority list.

    Pure function - no I/O.
    """
    flags = []
    if activity.is_today:
        flags.append("TODAY")
    if activity.is_overdue:
        flags.append("OVERDUE")
    flag_str = f" [{', '.join(flags)}]" if flags else ""

    return (
        f"{round(activity.priority_score):>4}  {activity.name} ({activity.type.value}){flag_str}\n"
        f"      {activity.date.isoformat()} {activity.time.strftime('%H:%M')} "
        f"({format_duration(activity.duration_minutes)}), "
        f"importance {activity.base_score}/10, id {activity.id[:8]}"
    )


def format_chart(points: list[ChartPoint], width: int = 40) -> str:
    """Horizontal bar chart of minutes per date."""
    if not points:
        return "No data to display"

    peak = max(p.load for p in points)
    lines = []
    for point in points:
        bar_len = round(point.load / peak * width) if peak else 0
        flag = " OVERLOADED" if point.is_overloaded else ""
        lines.append(f"{point.label}  {'#' * max(bar_len, 1)} {point.load} min{flag}")

    busiest = busiest_day(points)
    lines.append("")
    lines.append(
        f"Total: {format_duration(total_load(points))}, "
        f"busiest day: {busiest.label} ({format_duration(busiest.load)})"
    )
    return "\n".join(lines)


def format_advice(result: AdviceResult) -> str:
    tips = "\n".join(f"- {tip}" for tip in result.tips) or "- None"
    return f"""{result.summary}

Tips:
{tips}

Burnout risk: {result.burnout_risk.value}"""
