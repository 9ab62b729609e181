"""Sample schedule generation for trying the tool out."""

import random
import uuid
from datetime import date, time, timedelta

from .activities import Activity, ActivityType

SUBJECTS = ["Calculus", "Physics", "History", "Comp Sci", "Literature", "Economics"]
TASK_KINDS = ["Homework", "Project", "Study Session", "Exam Prep", "Group Meeting", "Lab Report"]
DEMO_DURATIONS = [15, 30, 45, 60, 75, 90, 120]
DEMO_DAYS_AHEAD = 14


def generate_demo_activities(
    count: int = 20,
    today: date | None = None,
    rng: random.Random | None = None,
) -> list[Activity]:
    """
    Random activities over the next two weeks, 09:00-18:00 starts.

    Derived fields are left stale; run them through refresh_priorities().
    Demo items may overlap each other.
    """
    today = today or date.today()
    rng = rng or random.Random()
    types = list(ActivityType)

    activities = []
    for _ in range(count):
        activities.append(
            Activity(
                id=str(uuid.UUID(int=rng.getrandbits(128), version=4)),
                name=f"{rng.choice(SUBJECTS)} {rng.choice(TASK_KINDS)}",
                type=rng.choice(types),
                date=today + timedelta(days=rng.randrange(DEMO_DAYS_AHEAD)),
                time=time(9 + rng.randrange(10), 0),
                duration_minutes=rng.choice(DEMO_DURATIONS),
                base_score=rng.randint(1, 10),
            )
        )
    return activities
