"""Hadoop adapters."""

from .cli import HadoopCLIAdapter, locate_hadoop

__all__ = ["HadoopCLIAdapter", "locate_hadoop"]
