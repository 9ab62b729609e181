"""Shared workflow layer between the CLI and the refresh scheduler.

Every read goes through refresh_priorities() because stored scores are
stale the moment they are written.
"""

import logging
import random
import uuid
from datetime import datetime
from pathlib import Path
from typing import Callable

from .adapters.file_store import JsonFileActivityStore
from .adapters.gemini_api import GeminiService
from .config import DATA_DIR, Config
from .core.activities import Activity, ActivityDraft, refresh_priorities
from .core.advice import (
    ADVICE_RESPONSE_SCHEMA,
    ADVISOR_SYSTEM_INSTRUCTION,
    AdviceResult,
    build_advice_prompt,
    empty_schedule_advice,
    failed_advice,
    missing_key_advice,
    parse_advice,
)
from .core.demo import generate_demo_activities
from .core.validation import validate_new_activity
from .ports import ActivityStore, LLMService

logger = logging.getLogger(__name__)


class ActivityNotFound(LookupError):
    """Raised when an id does not identify exactly one activity."""

    pass


def get_store(config: Config) -> JsonFileActivityStore:
    """Resolve the data file from config."""
    if config.data_file:
        return JsonFileActivityStore(Path(config.data_file).expanduser())
    return JsonFileActivityStore(DATA_DIR / "activities.json")


def load_activities(store: ActivityStore, now: datetime | None = None) -> list[Activity]:
    """Load the schedule with scores recomputed for now, highest first."""
    return refresh_priorities(store.load(), now)


def add_activity(
    store: ActivityStore,
    draft: ActivityDraft,
    now: datetime | None = None,
    id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
) -> Activity:
    """
    Overlap-check, score and insert a new activity, then save.

    Raises SubmissionError if it collides with an existing activity.
    """
    now = now or datetime.now()
    existing = load_activities(store, now)
    validate_new_activity(draft, existing)

    activity = draft.to_activity(id_factory())
    activities = refresh_priorities([*existing, activity], now)
    store.save(activities)
    logger.info(f"Added activity {activity.id} ({activity.name})")
    return next(a for a in activities if a.id == activity.id)


def resolve_activity_id(activities: list[Activity], id_or_prefix: str) -> Activity:
    """Find an activity by full id or unique id prefix."""
    exact = [a for a in activities if a.id == id_or_prefix]
    if exact:
        return exact[0]

    matches = [a for a in activities if a.id.startswith(id_or_prefix)]
    if not matches:
        raise ActivityNotFound(f"No activity with id '{id_or_prefix}'")
    if len(matches) > 1:
        raise ActivityNotFound(f"Id prefix '{id_or_prefix}' matches {len(matches)} activities")
    return matches[0]


def remove_activity(store: ActivityStore, id_or_prefix: str, now: datetime | None = None) -> Activity:
    """Remove one activity and save. Returns the removed activity."""
    activities = load_activities(store, now)
    target = resolve_activity_id(activities, id_or_prefix)
    store.save([a for a in activities if a.id != target.id])
    logger.info(f"Removed activity {target.id} ({target.name})")
    return target


def refresh_store(store: ActivityStore, now: datetime | None = None) -> list[Activity]:
    """Recompute and persist scores for now. This is the periodic tick."""
    activities = load_activities(store, now)
    store.save(activities)
    return activities


def load_demo(
    store: ActivityStore,
    now: datetime | None = None,
    rng: random.Random | None = None,
    count: int = 20,
) -> list[Activity]:
    """Replace the schedule with random demo activities."""
    now = now or datetime.now()
    activities = refresh_priorities(generate_demo_activities(count, now.date(), rng), now)
    store.save(activities)
    logger.info(f"Loaded {len(activities)} demo activities")
    return activities


def get_advisor(config: Config) -> GeminiService:
    return GeminiService(
        api_key=config.gemini_api_key,
        model=config.gemini_model,
        system_instruction=ADVISOR_SYSTEM_INSTRUCTION,
        response_schema=ADVICE_RESPONSE_SCHEMA,
        timeout=config.advisor_timeout,
    )


def analyze_schedule(
    config: Config,
    activities: list[Activity],
    llm: LLMService | None = None,
) -> AdviceResult:
    """
    Ask the advisor about the schedule.

    Never raises for a missing key, an empty schedule or an advisor
    failure; each returns a fixed fallback instead.
    """
    if not config.gemini_api_key:
        return missing_key_advice()
    if not activities:
        return empty_schedule_advice()

    llm = llm or get_advisor(config)
    try:
        return parse_advice(llm.generate(build_advice_prompt(activities)))
    except (RuntimeError, ValueError) as e:
        logger.error(f"Schedule analysis failed: {e}")
        return failed_advice()
