"""Streamer Maintenance Domain Layer.

This package contains the core business logic organized by bounded contexts:
- topology: Cable layout defaults, project overrides, effective topology
- addressing: Section labels, channel ranges, equipment-box (EB) modules
- maintenance: Cleaning events, coverage/recency aggregation, validation
"""

# Imports alphabetized per project style (isort)
from domain import addressing, maintenance, topology

__all__ = ["addressing", "maintenance", "topology"]
