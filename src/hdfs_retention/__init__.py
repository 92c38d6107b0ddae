"""Age-based retention pruning for HDFS directory trees."""

__version__ = "0.6.0"
