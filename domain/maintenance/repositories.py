"""Domain Port(s) for Maintenance data.

Defines interfaces (Protocols) that infrastructure adapters must implement.
No concrete I/O here.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from .value_objects import MaintenanceSnapshot


class MaintenanceSnapshotRepository(Protocol):
    """Port for obtaining a consistent snapshot of projects and events.

    Implementations live in infrastructure (e.g., JSON export adapter).
    """

    def load_snapshot(self, source: Path | str) -> MaintenanceSnapshot:
        """Load projects, events and global defaults as one snapshot."""
        ...
