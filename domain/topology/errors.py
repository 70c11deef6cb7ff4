"""Topology Bounded Context - Error Hierarchy.

Topology resolution itself never fails: an unknown project falls back to the
global defaults. These errors cover explicit lookups only.
"""

from __future__ import annotations


class TopologyError(Exception):
    """Base error for topology operations."""


class UnknownProjectError(TopologyError):
    """Project number does not match any known project.

    Attributes:
        project_number: The requested project number
    """

    def __init__(self, project_number: str) -> None:
        self.project_number = project_number
        super().__init__(f"Unknown project: {project_number!r}")
