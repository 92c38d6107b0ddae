"""Domain layer - core business logic."""

from .errors import RetentionError
from .models import DirectoryEntry, EntryKind, RetentionPolicy, RunCounters

__all__ = [
    "DirectoryEntry",
    "EntryKind",
    "RetentionError",
    "RetentionPolicy",
    "RunCounters",
]
