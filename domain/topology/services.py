"""Topology Bounded Context - Domain Services.

Pure resolution of the effective cable topology for a project scope.
NO I/O operations - callers pass a full snapshot of projects on every call.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from domain.topology.errors import UnknownProjectError
from domain.topology.value_objects import Project, Topology

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Project Lookup
# ---------------------------------------------------------------------------
def find_project(
    projects: Iterable[Project], project_number: str | None
) -> Project | None:
    """Return the project with the given number, or None.

    Project numbers are compared after stripping surrounding whitespace.
    """
    wanted = (project_number or "").strip()
    if not wanted:
        return None
    for project in projects:
        if project.project_number == wanted:
            return project
    return None


def get_project(projects: Iterable[Project], project_number: str) -> Project:
    """Strict variant of `find_project`.

    Raises:
        UnknownProjectError: If no project matches
    """
    project = find_project(projects, project_number)
    if project is None:
        raise UnknownProjectError(project_number)
    return project


def active_project_for_vessel(
    projects: Iterable[Project], vessel_tag: str | None
) -> Project | None:
    """Return the first active project registered for `vessel_tag`."""
    if not vessel_tag:
        return None
    tag = vessel_tag.strip()
    for project in projects:
        if project.is_active and project.vessel_tag == tag:
            return project
    return None


# ---------------------------------------------------------------------------
# Main Service: resolve_topology
# ---------------------------------------------------------------------------
def resolve_topology(
    defaults: Topology,
    projects: Iterable[Project],
    project_number: str | None = None,
) -> Topology:
    """Merge global defaults with a project's overrides.

    Each Topology field takes the project's override when one is present,
    otherwise the global default. Total function: an absent or unknown
    project number returns `defaults` unchanged.

    Args:
        defaults: Global default topology
        projects: Snapshot of all known projects
        project_number: Scope to resolve, or None for the global scope

    Returns:
        The effective Topology for the scope

    Example:
        >>> p = Project(project_number="P1", overrides={"section_length_m": 50})
        >>> resolve_topology(DEFAULT_TOPOLOGY, [p], "P1").section_length_m
        50
    """
    if project_number is None:
        return defaults
    project = find_project(projects, project_number)
    if project is None:
        logger.debug(
            "Project %r not found; using global topology defaults", project_number
        )
        return defaults
    return project.overrides.apply(defaults)


def resolve_effective_topology(
    defaults: Topology,
    projects: Iterable[Project],
    project_number: str | None = None,
    vessel_tag: str | None = None,
) -> Topology:
    """Resolve the topology a request should use.

    An explicit project number wins; otherwise the vessel's active project
    (if any) supplies the overrides; otherwise the global defaults apply.
    """
    snapshot = tuple(projects)
    if project_number:
        return resolve_topology(defaults, snapshot, project_number)
    active = active_project_for_vessel(snapshot, vessel_tag)
    if active is None:
        return defaults
    return active.overrides.apply(defaults)
