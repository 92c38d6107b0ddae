"""Listing and delete adapter using the hadoop CLI."""

import logging
import os
import shlex
import shutil
import subprocess
import threading
import time
from collections.abc import Iterator, Sequence
from pathlib import Path

from ...domain.errors import (
    DeleteError,
    HadoopNotFoundError,
    ListingError,
    RunTimeoutError,
)
from ...ports.delete import DeletePort
from ...ports.listing import ListingPort

logger = logging.getLogger(__name__)

EXTRA_BIN_DIRS = ["/opt/hadoop/bin", "/usr/local/hadoop/bin"]
DEFAULT_TIMEOUT = 1800  # hadoop fs -ls -R on a busy /tmp can take minutes


def locate_hadoop(program: str = "hadoop") -> str:
    """Resolve the hadoop program, also searching common install dirs."""
    search_path = os.pathsep.join(
        [os.environ.get("PATH", ""), *EXTRA_BIN_DIRS]
    )
    resolved = shutil.which(program, path=search_path)
    if resolved is None:
        raise HadoopNotFoundError(f"Could not find '{program}' in $PATH")
    if Path(resolved).name != "hadoop":
        raise HadoopNotFoundError(
            f"invalid hadoop program '{resolved}' given, should be called hadoop!"
        )
    return resolved


class HadoopCLIAdapter(ListingPort, DeletePort):
    """Lists and deletes HDFS files by shelling out to `hadoop fs`.

    All invocations share one deadline, started when the adapter is created.
    """

    def __init__(self, hadoop_bin: str = "hadoop", timeout: float = DEFAULT_TIMEOUT) -> None:
        self.hadoop_bin = hadoop_bin
        self.timeout = timeout
        self._deadline = time.monotonic() + timeout

    def _remaining(self) -> float:
        remaining = self._deadline - time.monotonic()
        if remaining <= 0:
            raise RunTimeoutError(f"Timed out after {self.timeout} seconds")
        return remaining

    def listing_command(self, roots: Sequence[str]) -> list[str]:
        return [self.hadoop_bin, "fs", "-ls", "-R", *roots]

    def list_files(self, roots: Sequence[str]) -> Iterator[str]:
        cmd = self.listing_command(roots)
        logger.info(f"Listing: {shlex.join(cmd)}")

        remaining = self._remaining()
        expired = threading.Event()
        try:
            proc = subprocess.Popen(
                cmd, stdout=subprocess.PIPE, text=True, errors="replace"
            )
        except OSError as e:
            raise ListingError(f"Failed to run {shlex.join(cmd)}: {e}") from e

        def expire() -> None:
            expired.set()
            proc.kill()

        timer = threading.Timer(remaining, expire)
        timer.daemon = True
        timer.start()
        try:
            for line in proc.stdout:
                yield line.rstrip("\n")
            returncode = proc.wait()
        finally:
            timer.cancel()
            if proc.poll() is None:
                proc.kill()
                proc.wait()
            if proc.stdout is not None:
                proc.stdout.close()

        if expired.is_set():
            raise RunTimeoutError(
                f"Timed out after {self.timeout} seconds listing {shlex.join(roots)}"
            )
        if returncode != 0:
            raise ListingError(
                f"{returncode} returned from command \"{shlex.join(cmd)}\""
            )

    def build_command(self, paths: Sequence[str], skip_trash: bool = False) -> list[str]:
        cmd = [self.hadoop_bin, "fs", "-rm"]
        if skip_trash:
            cmd.append("-skipTrash")
        cmd.extend(paths)
        return cmd

    def delete(self, paths: Sequence[str], skip_trash: bool = False) -> None:
        cmd = self.build_command(paths, skip_trash=skip_trash)
        logger.info(f"Running: {shlex.join(cmd)}")

        try:
            result = subprocess.run(cmd, timeout=self._remaining(), check=False)
        except subprocess.TimeoutExpired as e:
            raise RunTimeoutError(
                f"Timed out after {self.timeout} seconds deleting files"
            ) from e
        except OSError as e:
            raise DeleteError(f"Failed to run {shlex.join(cmd)}: {e}") from e

        if result.returncode != 0:
            raise DeleteError(
                f"{result.returncode} returned from command \"{shlex.join(cmd)}\""
            )
