"""studyrank CLI - deadline-aware activity prioritizer."""

import json
import sys

import click

from .adapters.file_store import StoreError
from .config import load_config
from .core.activities import FILTER_MODES, ActivityType, filter_activities
from .core.formatting import format_activity_line, format_advice, format_chart
from .core.validation import DEFAULT_DURATION, SCORE_RANGES, SubmissionError, parse_submission
from .core.workload import aggregate_load
from .workflows import (
    ActivityNotFound,
    add_activity,
    analyze_schedule,
    get_store,
    load_activities,
    load_demo,
    remove_activity,
)

TYPE_NAMES = [t.value for t in ActivityType]


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _load_or_fail(store):
    try:
        return load_activities(store)
    except StoreError as e:
        _fail(str(e))


def _show_activities(activities: list, as_json: bool, empty_msg: str = "No activities found.") -> None:
    """Shared list display logic."""
    if as_json:
        click.echo(json.dumps([a.to_dict() for a in activities], indent=2))
        return

    if not activities:
        click.echo(empty_msg)
        return

    for activity in activities:
        click.echo(format_activity_line(activity))


@click.group()
@click.version_option(package_name="studyrank")
def main():
    """studyrank - Prioritize activities by importance and deadline."""
    pass


@main.command()
@click.argument("name")
@click.option("--type", "-t", "activity_type", type=click.Choice(TYPE_NAMES, case_sensitive=False),
              default=ActivityType.OTHER.value, show_default=True, help="Activity type")
@click.option("--date", "-d", "date_str", required=True, help="Date (YYYY-MM-DD)")
@click.option("--time", "time_str", required=True, help="Start time (HH:MM)")
@click.option("--duration", "-m", type=int, default=DEFAULT_DURATION, show_default=True,
              help="Duration in minutes (15 to 360, in 15 minute steps)")
@click.option("--score", "-s", type=int, default=None,
              help="Importance (defaults to the type's default)")
def add(name: str, activity_type: str, date_str: str, time_str: str, duration: int, score: int | None):
    """Add an activity to the schedule."""
    config = load_config()
    store = get_store(config)
    try:
        draft = parse_submission(name, activity_type, date_str, time_str, duration, score)
        activity = add_activity(store, draft)
    except (SubmissionError, StoreError) as e:
        _fail(str(e))

    click.echo("Added:")
    click.echo(format_activity_line(activity))


@main.command("list")
@click.option("--filter", "-f", "mode", type=click.Choice(FILTER_MODES), default="all",
              show_default=True, help="Which activities to show")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def list_activities(mode: str, as_json: bool):
    """List activities, highest priority first."""
    config = load_config()
    activities = _load_or_fail(get_store(config))
    shown = filter_activities(activities, mode, config.high_priority_threshold)
    _show_activities(shown, as_json, "No activities found. Add one or run 'studyrank demo'.")


@main.command()
@click.argument("activity_id")
def remove(activity_id: str):
    """Remove an activity by id (or unique id prefix)."""
    config = load_config()
    try:
        removed = remove_activity(get_store(config), activity_id)
    except (ActivityNotFound, StoreError) as e:
        _fail(str(e))
    click.echo(f"Removed: {removed.name}")


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def chart(as_json: bool):
    """Show scheduled minutes per day."""
    config = load_config()
    points = aggregate_load(_load_or_fail(get_store(config)))
    if as_json:
        click.echo(json.dumps(
            [{"date": p.label, "load": p.load, "overloaded": p.is_overloaded} for p in points],
            indent=2,
        ))
    else:
        click.echo(format_chart(points))


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def advise(as_json: bool):
    """Get AI advice about the current schedule."""
    config = load_config()
    activities = _load_or_fail(get_store(config))
    result = analyze_schedule(config, activities)
    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        click.echo(format_advice(result))


@main.command()
@click.option("--yes", "-y", is_flag=True, help="Replace existing activities without asking")
def demo(yes: bool):
    """Replace the schedule with generated demo activities."""
    config = load_config()
    store = get_store(config)
    if store.exists() and not yes:
        if not click.confirm("This replaces your current schedule. Continue?"):
            return
    activities = load_demo(store)
    click.echo(f"Loaded {len(activities)} demo activities.")


@main.command()
def types():
    """Show activity types and their importance ranges."""
    for activity_type, score_range in SCORE_RANGES.items():
        click.echo(f"{activity_type.value:10} {score_range.label:18} default {score_range.default}")


@main.command()
@click.option("--interval", "-i", type=int, default=None,
              help="Seconds between refreshes (defaults to REFRESH_INTERVAL)")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def watch(interval: int | None, debug: bool):
    """Keep the priority list up to date as time passes."""
    import logging

    from .scheduler import refresh_job, setup_scheduler

    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if debug else logging.INFO,
    )

    config = load_config()
    store = get_store(config)
    if interval is None:
        interval = config.refresh_interval

    def render(activities):
        click.clear()
        click.echo(f"Priorities (refreshing every {interval}s, Ctrl+C to stop)\n")
        _show_activities(activities, as_json=False)

    try:
        scheduler = setup_scheduler(store, interval, render)
        refresh_job(store, render)
        scheduler.start()
    except (StoreError, ValueError) as e:
        _fail(str(e))
    except KeyboardInterrupt:
        click.echo("\nStopped.")


if __name__ == "__main__":
    main()
