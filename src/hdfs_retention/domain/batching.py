"""Grouping of eligible paths into delete batches."""

import logging
import os
import shlex
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass

from .errors import CommandTooLongError

logger = logging.getLogger(__name__)

FALLBACK_ARG_MAX = 131072


@dataclass(frozen=True)
class Batch:
    """Paths for a single delete invocation.

    first/last are 1-based positions within the run's eligible paths.
    """

    paths: tuple[str, ...]
    first: int
    last: int

    def __len__(self) -> int:
        return len(self.paths)


def system_arg_max() -> int:
    """Return the OS limit on exec() argument length."""
    try:
        value = os.sysconf("SC_ARG_MAX")
    except (ValueError, OSError, AttributeError):
        value = -1
    if value <= 0:
        logger.debug(f"ARG_MAX unavailable, assuming {FALLBACK_ARG_MAX}")
        return FALLBACK_ARG_MAX
    return value


def check_command_length(argv: Sequence[str], arg_max: int) -> None:
    """Raise CommandTooLongError if the quoted command exceeds arg_max."""
    command = shlex.join(argv)
    if len(command) > arg_max:
        raise CommandTooLongError(command, arg_max)
    logger.debug(f"Command length {len(command)}, ARG_MAX {arg_max}")


class BatchPlanner:
    """Accumulates eligible paths and hands out batches.

    With batch_size < 2 every path is released immediately as its own batch.
    Otherwise paths are buffered for the whole listing and released by drain()
    in groups of at most batch_size, each checked against arg_max first.
    """

    def __init__(
        self,
        batch_size: int,
        command_for: Callable[[Sequence[str]], list[str]],
        arg_max: int | None = None,
    ) -> None:
        self.batch_size = batch_size
        self.command_for = command_for
        self.arg_max = arg_max if arg_max is not None else system_arg_max()
        self._pending: list[str] = []
        self._seen = 0

    @property
    def grouped(self) -> bool:
        return self.batch_size >= 2

    @property
    def pending(self) -> int:
        return len(self._pending)

    def add(self, path: str) -> Batch | None:
        """Register an eligible path; returns a batch to flush right away, if any."""
        self._seen += 1
        if not self.grouped:
            return Batch(paths=(path,), first=self._seen, last=self._seen)
        self._pending.append(path)
        return None

    def drain(self) -> Iterator[Batch]:
        """Yield the buffered paths in consecutive groups, in discovery order."""
        pending, self._pending = self._pending, []
        for start in range(0, len(pending), self.batch_size):
            paths = tuple(pending[start : start + self.batch_size])
            check_command_length(self.command_for(paths), self.arg_max)
            yield Batch(paths=paths, first=start + 1, last=start + len(paths))
