"""Listing port - interface for recursive directory listings."""

from abc import ABC, abstractmethod
from collections.abc import Iterator, Sequence


class ListingPort(ABC):
    """Interface for a recursive listing line source."""

    @abstractmethod
    def list_files(self, roots: Sequence[str]) -> Iterator[str]:
        """Yield raw listing lines for every entry under the given roots.

        Lines are produced as the listing runs, not collected up front.
        """
        pass
