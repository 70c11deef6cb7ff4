"""Maintenance Bounded Context - Error Hierarchy.

The aggregator never raises for well-formed value objects and the validator
reports failure through ValidationResult. These errors serve boundary code
that prefers exceptions, and snapshot adapters.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from domain.maintenance.value_objects import ValidationResult


class MaintenanceError(Exception):
    """Base error for maintenance operations."""


class InvalidEventError(MaintenanceError):
    """Proposed event lies outside the resolved topology.

    Attributes:
        result: The failed ValidationResult
    """

    def __init__(self, result: "ValidationResult") -> None:
        self.result = result
        super().__init__(result.message or "Invalid event")


class SnapshotError(MaintenanceError):
    """Snapshot source is unreadable, malformed, or too large."""
