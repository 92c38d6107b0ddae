"""Completion summary text."""

from .models import RetentionPolicy, RunCounters


def plural(count: int) -> str:
    return "" if count == 1 else "s"


def format_threshold(policy: RetentionPolicy) -> str:
    return (
        f"{policy.days} day{plural(policy.days)} "
        f"{policy.hours} hour{plural(policy.hours)} "
        f"{policy.mins} min{plural(policy.mins)}"
    )


def format_summary(
    counters: RunCounters, policy: RetentionPolicy, prog: str = "hdfs-retention"
) -> str:
    """Render the one-line run summary.

    The hardcoded-exclusion count only appears when something was protected.
    """
    parts = [
        f"{prog} complete - {counters.checked} file{plural(counters.checked)} checked",
        f"{counters.excluded} excluded",
    ]
    if counters.protected:
        parts.append(f"{counters.protected} hardcoded excluded for safety")

    action = "would be removed" if policy.dry_run else "removed"
    parts.append(
        f"{counters.removed} file{plural(counters.removed)} older than "
        f"{format_threshold(policy)} {action}"
    )
    return ", ".join(parts)
