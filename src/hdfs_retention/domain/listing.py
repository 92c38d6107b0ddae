"""Parser for `hadoop fs -ls -R` output lines."""

import logging
import re
from datetime import datetime

from .errors import TimestampError
from .models import DirectoryEntry, EntryKind

logger = logging.getLogger(__name__)

MONTHS = {
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "may": 5,
    "jun": 6,
    "jul": 7,
    "aug": 8,
    "sep": 9,
    "oct": 10,
    "nov": 11,
    "dec": 12,
}

HEADER_PATTERN = re.compile(r"^Found\s\d+\sitems")
PERMISSIONS_PATTERN = re.compile(
    r"^(?P<kind>[d-])(?P<bits>[r-][w-][xsS-][r-][w-][xsS-][r-][w-][xtT-])$"
)
REPLICATION_PATTERN = re.compile(r"^(?:\d+|-)$")
PRINCIPAL_PATTERN = re.compile(r"^\w+$")
SIZE_PATTERN = re.compile(r"^\d+$")
DATE_PATTERN = re.compile(
    r"^(?P<year>\d{4})-"
    r"(?P<month>\d{2}|(?i:jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec))"
    r"-(?P<day>\d{2})$"
)
TIME_PATTERN = re.compile(r"^(?P<hour>\d{2}):(?P<minute>\d{2})$")
# Quotes are accepted here so the safety denylist can count them.
FILENAME_PATTERN = re.compile(r"^[\w\s/.:,*()=%?+@~#'\"-]+$")

FIELD_COUNT = 8


def is_header(line: str) -> bool:
    return bool(HEADER_PATTERN.match(line))


def is_valid_filename(name: str) -> bool:
    """Check a path against the restrictive filename grammar."""
    return bool(FILENAME_PATTERN.match(name))


def parse_month(value: str) -> int:
    """Normalize a two-digit or three-letter English month to 1-12."""
    if value.isdigit():
        return int(value)
    try:
        return MONTHS[value.lower()]
    except KeyError:
        raise TimestampError(f"Unknown month abbreviation: {value}") from None


def build_timestamp(
    year: str, month: str, day: str, hour: str, minute: str
) -> datetime:
    """Assemble a local, second-less timestamp from listing fields.

    Raises TimestampError if the fields do not form a valid calendar time.
    """
    try:
        return datetime(
            int(year), parse_month(month), int(day), int(hour), int(minute)
        )
    except ValueError as e:
        raise TimestampError(
            f"Failed to convert timestamp {year}-{month}-{day} "
            f"{hour}:{minute} for comparison: {e}"
        ) from e


def tokenize(line: str) -> list[str] | None:
    """Split a line into the fixed listing fields, path last.

    The path keeps any embedded whitespace.
    """
    fields = line.split(None, FIELD_COUNT - 1)
    if len(fields) != FIELD_COUNT:
        return None
    return fields


def parse_line(line: str) -> DirectoryEntry | None:
    """Parse one listing line.

    Returns None for the "Found N items" header and for lines that do not
    match the listing grammar; the latter are logged as warnings.
    """
    line = line.rstrip("\r\n")
    if is_header(line):
        return None

    fields = tokenize(line)
    entry = _parse_fields(fields) if fields else None
    if entry is None:
        logger.warning(f'Failed to match line from hadoop output: "{line}"')
    return entry


def _parse_fields(fields: list[str]) -> DirectoryEntry | None:
    permissions, replication, owner, group, size, day, clock, path = fields

    perms = PERMISSIONS_PATTERN.match(permissions)
    date = DATE_PATTERN.match(day)
    time = TIME_PATTERN.match(clock)
    if not (perms and date and time):
        return None
    if not REPLICATION_PATTERN.match(replication):
        return None
    if not (PRINCIPAL_PATTERN.match(owner) and PRINCIPAL_PATTERN.match(group)):
        return None
    if not SIZE_PATTERN.match(size) or not is_valid_filename(path):
        return None

    kind = EntryKind(perms.group("kind"))
    # Directories are never eligible; skip timestamp assembly for them.
    if kind is EntryKind.DIRECTORY:
        modified_at = None
    else:
        modified_at = build_timestamp(
            date.group("year"),
            date.group("month"),
            date.group("day"),
            time.group("hour"),
            time.group("minute"),
        )

    return DirectoryEntry(
        kind=kind,
        permissions=perms.group("bits"),
        replication=replication,
        owner=owner,
        group=group,
        size=int(size),
        modified_at=modified_at,
        path=path,
    )
