"""Adapters - I/O implementations of ports."""

from .file_store import JsonFileActivityStore, StoreError
from .gemini_api import GeminiService, GeminiError

__all__ = [
    "JsonFileActivityStore",
    "StoreError",
    "GeminiService",
    "GeminiError",
]
