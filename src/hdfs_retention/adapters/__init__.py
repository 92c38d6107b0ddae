"""Adapters - concrete implementations of ports."""

from .hadoop import HadoopCLIAdapter, locate_hadoop

__all__ = ["HadoopCLIAdapter", "locate_hadoop"]
