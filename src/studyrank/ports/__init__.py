"""Ports - interfaces/protocols for external dependencies."""

from .activity_store import ActivityStore
from .llm_service import LLMService

__all__ = [
    "ActivityStore",
    "LLMService",
]
