"""Domain services - orchestrate the pruning run."""

import logging
import shlex
from collections.abc import Callable, Sequence
from datetime import datetime

from ..ports.delete import DeletePort
from ..ports.listing import ListingPort
from .age import is_expired
from .batching import Batch, BatchPlanner
from .filters import Verdict, classify
from .listing import parse_line
from .models import RetentionPolicy, RunCounters

logger = logging.getLogger(__name__)


class RetentionService:
    """Runs the listing through parser, age check, filter and batcher."""

    def __init__(
        self,
        policy: RetentionPolicy,
        listing: ListingPort,
        deleter: DeletePort,
        echo: Callable[[str], None] = print,
        arg_max: int | None = None,
    ) -> None:
        self.policy = policy
        self.listing = listing
        self.deleter = deleter
        self.echo = echo
        self.planner = BatchPlanner(
            policy.batch_size, self._command_for, arg_max=arg_max
        )

    def run(self, now: datetime | None = None) -> RunCounters:
        """Process the whole listing and flush every eligible batch.

        Pipeline per line:
            1. Parse (unmatched lines are warned about and skipped)
            2. Drop directories
            3. Age check against max_age_seconds
            4. Safety filter (denylist, exclude, include)
            5. Hand to the batch planner

        Grouped batches are flushed only after the listing is exhausted.
        Any RetentionError aborts the run.
        """
        now = now or datetime.now()
        counters = RunCounters()
        max_age = self.policy.max_age_seconds

        for line in self.listing.list_files(self.policy.roots):
            logger.debug(f"output: {line.rstrip()}")
            entry = parse_line(line)
            if entry is None or not entry.is_file:
                continue

            counters.checked += 1
            if not is_expired(entry.modified_at, now, max_age):
                continue

            verdict = classify(entry.path, self.policy)
            if verdict is Verdict.PROTECTED:
                counters.protected += 1
                continue
            if verdict is Verdict.EXCLUDED:
                counters.excluded += 1
                continue
            if verdict is Verdict.NOT_SELECTED:
                continue

            counters.removed += 1
            batch = self.planner.add(entry.path)
            if batch is not None:
                self._flush(batch)

        for batch in self.planner.drain():
            self.echo(f"file batch {batch.first} - {batch.last}:")
            self._flush(batch)

        return counters

    def _command_for(self, paths: Sequence[str]) -> list[str]:
        return self.deleter.build_command(paths, skip_trash=self.policy.skip_trash)

    def _flush(self, batch: Batch) -> None:
        if self.policy.dry_run:
            self.echo(shlex.join(self._command_for(batch.paths)))
            return
        logger.info(f"Deleting {len(batch)} file(s)")
        self.deleter.delete(batch.paths, skip_trash=self.policy.skip_trash)
