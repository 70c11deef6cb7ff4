"""Infrastructure adapters for the maintenance bounded context.

This module provides the infrastructure layer implementations for maintenance
data, including loading snapshots from JSON exports.
"""

from .json_snapshot_adapter import JsonSnapshotAdapter

__all__ = ["JsonSnapshotAdapter"]
