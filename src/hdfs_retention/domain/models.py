"""Domain models."""

import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from .errors import PolicyError

DEFAULT_ROOT = "/tmp"
MIN_AGE_SECONDS = 300
MAX_BATCH_SIZE = 100


class EntryKind(str, Enum):
    """Leading discriminator of a listing line."""

    FILE = "-"
    DIRECTORY = "d"


@dataclass(frozen=True)
class DirectoryEntry:
    """One parsed line of directory listing output."""

    kind: EntryKind
    permissions: str
    replication: str
    owner: str
    group: str
    size: int
    modified_at: datetime | None  # Local, truncated to the minute; None for dirs
    path: str

    @property
    def is_file(self) -> bool:
        return self.kind is EntryKind.FILE


@dataclass(frozen=True)
class RetentionPolicy:
    """Validated run configuration. Never mutated after construction."""

    days: int = 0
    hours: int = 0
    mins: int = 0
    include: re.Pattern[str] | None = None
    exclude: re.Pattern[str] | None = None
    batch_size: int = 0
    dry_run: bool = True
    skip_trash: bool = False
    roots: tuple[str, ...] = (DEFAULT_ROOT,)

    def __post_init__(self) -> None:
        if self.max_age_seconds <= MIN_AGE_SECONDS:
            raise PolicyError("must specify a total max age > 5 minutes")
        if not 0 <= self.batch_size <= MAX_BATCH_SIZE:
            raise PolicyError(
                f"batch size must be between 0 and {MAX_BATCH_SIZE}, "
                f"got {self.batch_size}"
            )
        roots = tuple(dict.fromkeys(self.roots)) or (DEFAULT_ROOT,)
        object.__setattr__(self, "roots", roots)

    @property
    def max_age_seconds(self) -> int:
        return self.days * 86400 + self.hours * 3600 + self.mins * 60

    @property
    def grouped(self) -> bool:
        return self.batch_size >= 2


@dataclass
class RunCounters:
    """Tallies accumulated over one run."""

    checked: int = 0
    excluded: int = 0
    protected: int = 0  # Hardcoded denylist hits
    removed: int = 0
