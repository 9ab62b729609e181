"""Activity storage interface."""

from typing import Protocol

from studyrank.core.activities import Activity


class ActivityStore(Protocol):
    """Interface for loading and saving the whole activity list."""

    def load(self) -> list[Activity]:
        """Load all stored activities. Derived fields must be recomputed by the caller."""
        ...

    def save(self, activities: list[Activity]) -> None:
        """Replace the stored list."""
        ...
