"""File-based activity storage adapter."""

import json
import logging
from pathlib import Path

from studyrank.core.activities import Activity

logger = logging.getLogger(__name__)


class StoreError(RuntimeError):
    """Raised when the data file cannot be read."""

    pass


class JsonFileActivityStore:
    """
    JSON file activity storage.

    Implements ActivityStore protocol. The whole list lives in one file.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> list[Activity]:
        """Load all activities. A missing file is an empty schedule."""
        if not self.path.exists():
            return []

        try:
            data = json.loads(self.path.read_text())
        except json.JSONDecodeError as e:
            raise StoreError(f"Data file {self.path} is not valid JSON: {e}")

        if not isinstance(data, list):
            raise StoreError(f"Data file {self.path} must contain a list of activities")

        try:
            activities = [Activity.from_dict(item) for item in data]
        except (KeyError, TypeError, ValueError) as e:
            raise StoreError(f"Data file {self.path} has a malformed activity: {e}")

        logger.debug(f"Loaded {len(activities)} activities from {self.path}")
        return activities

    def save(self, activities: list[Activity]) -> None:
        """Overwrite the data file with the given list."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps([a.to_dict() for a in activities], indent=2))
        logger.debug(f"Saved {len(activities)} activities to {self.path}")
