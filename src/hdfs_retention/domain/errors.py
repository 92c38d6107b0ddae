"""Fatal errors - any of these aborts the whole run."""


class RetentionError(Exception):
    """Base class for run-aborting failures."""


class PolicyError(RetentionError):
    """Retention policy failed validation."""


class HadoopNotFoundError(RetentionError):
    """The hadoop program could not be located."""


class TimestampError(RetentionError):
    """A listing timestamp could not be turned into a calendar time."""


class CommandTooLongError(RetentionError):
    """A batched delete command exceeds the OS argument length limit."""

    def __init__(self, command: str, arg_max: int) -> None:
        self.command = command
        self.arg_max = arg_max
        super().__init__(
            f"resulting delete command length {len(command)} exceeds the "
            f"operating system's ARG_MAX ({arg_max}). Reduce the batch size, "
            "this may be caused by very long filenames coupled with a large "
            f"batch size.\n\nHere is the would-be command:\n\n{command}"
        )


class DeleteError(RetentionError):
    """The external delete invocation returned a non-zero status."""


class ListingError(RetentionError):
    """The external listing invocation failed."""


class RunTimeoutError(RetentionError):
    """The run exceeded its time budget."""
