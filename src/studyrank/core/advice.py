"""Schedule advice: prompt building, response parsing and fallbacks - no I/O."""

import json
from dataclasses import dataclass, field
from enum import Enum

from .activities import Activity


class BurnoutRisk(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


@dataclass
class AdviceResult:
    """Structured advice about the current schedule."""

    summary: str
    tips: list[str] = field(default_factory=list)
    burnout_risk: BurnoutRisk = BurnoutRisk.LOW

    def to_dict(self) -> dict:
        return {
            "summary": self.summary,
            "tips": list(self.tips),
            "burnoutRisk": self.burnout_risk.value,
        }


# Fallbacks are built fresh on each call so callers can't alter later ones


def missing_key_advice() -> AdviceResult:
    return AdviceResult(
        summary="API Key is missing. Cannot generate analysis.",
        tips=["Please configure your API key to use AI features."],
    )


def empty_schedule_advice() -> AdviceResult:
    return AdviceResult(
        summary="Your schedule is empty! Good time to relax or plan ahead.",
        tips=["Add some activities to get started."],
    )


def failed_advice() -> AdviceResult:
    return AdviceResult(
        summary="Could not analyze schedule at this time.",
        tips=["Focus on your earliest deadline first.", "Take regular breaks."],
    )

ADVISOR_SYSTEM_INSTRUCTION = (
    "You are an academic advisor for a first-year university student. "
    "Provide a structured JSON response."
)

ADVICE_RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "summary": {"type": "STRING"},
        "tips": {"type": "ARRAY", "items": {"type": "STRING"}},
        "burnoutRisk": {"type": "STRING", "enum": [r.value for r in BurnoutRisk]},
    },
    "required": ["summary", "tips", "burnoutRisk"],
}


def format_digest_line(activity: Activity) -> str:
    return (
        f"- {activity.name} ({activity.type.value}): {activity.date.isoformat()} "
        f"at {activity.time.strftime('%H:%M')} for {activity.duration_minutes}mins. "
        f"Importance: {activity.base_score}/10."
    )


def build_schedule_digest(activities: list[Activity]) -> str:
    """One line per activity with the fields the advisor needs."""
    return "\n".join(format_digest_line(a) for a in activities)


def build_advice_prompt(activities: list[Activity]) -> str:
    return f"""Analyze the following schedule:
{build_schedule_digest(activities)}

Determine:
1. A brief 1-2 sentence summary of their current workload.
2. 3 specific, actionable tips to handle the highest priority items or conflicts.
3. Assessment of burnout risk (Low, Medium, High).
"""


def parse_advice(text: str) -> AdviceResult:
    """
    Parse the advisor's JSON reply.

    Raises ValueError if the reply does not match ADVICE_RESPONSE_SCHEMA.
    """
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError("Advice response is not a JSON object")

    summary = data.get("summary")
    tips = data.get("tips")
    risk = data.get("burnoutRisk")

    if not isinstance(summary, str):
        raise ValueError("Advice response is missing 'summary'")
    if not isinstance(tips, list) or not all(isinstance(t, str) for t in tips):
        raise ValueError("Advice response 'tips' must be a list of strings")
    try:
        burnout_risk = BurnoutRisk(risk)
    except ValueError:
        raise ValueError(f"Unknown burnout risk: {risk!r}")

    return AdviceResult(summary=summary, tips=tips, burnout_risk=burnout_risk)
