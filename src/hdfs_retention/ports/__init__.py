"""Ports - interfaces for external dependencies."""

from .delete import DeletePort
from .listing import ListingPort

__all__ = ["DeletePort", "ListingPort"]
