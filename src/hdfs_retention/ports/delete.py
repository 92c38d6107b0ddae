"""Delete port - interface for batch file removal."""

from abc import ABC, abstractmethod
from collections.abc import Sequence


class DeletePort(ABC):
    """Interface for removing a batch of files."""

    @abstractmethod
    def build_command(self, paths: Sequence[str], skip_trash: bool = False) -> list[str]:
        """Return the argv that would delete the given paths."""
        pass

    @abstractmethod
    def delete(self, paths: Sequence[str], skip_trash: bool = False) -> None:
        """Delete the given paths in one invocation.

        Raises DeleteError on failure.
        """
        pass
