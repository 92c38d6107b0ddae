"""Safety filtering of age-eligible paths."""

import re
from enum import Enum

from .models import RetentionPolicy

# Never delete from these, whatever the user asks for.
# /tmp is not anchored so that relative listings like ../../tmp/mapred/ match.
PROTECTED_PATTERN = re.compile(
    r"""
    /tmp/mapred/ |
    /hbase/      |
    /solr/       |
    \.Trash/     |
    warehouse/   |
    share/lib/   |
    \.cloudera_health_monitoring_canary_files |
    ['"]
    """,
    re.IGNORECASE | re.VERBOSE,
)


class Verdict(str, Enum):
    """Outcome of running a path through the safety filter."""

    ELIGIBLE = "eligible"
    PROTECTED = "protected"  # Hardcoded denylist
    EXCLUDED = "excluded"  # User exclude regex
    NOT_SELECTED = "not_selected"  # Missed the user include regex


def is_protected(path: str) -> bool:
    return bool(PROTECTED_PATTERN.search(path))


def classify(path: str, policy: RetentionPolicy) -> Verdict:
    """Apply denylist, then exclude, then include, in that order."""
    if is_protected(path):
        return Verdict.PROTECTED
    if policy.exclude is not None and policy.exclude.search(path):
        return Verdict.EXCLUDED
    if policy.include is not None and not policy.include.search(path):
        return Verdict.NOT_SELECTED
    return Verdict.ELIGIBLE
