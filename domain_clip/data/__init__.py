"""Multi-domain dataset container."""

from .partitioned_dataset import PartitionedDataSet

__all__ = ["PartitionedDataSet"]
