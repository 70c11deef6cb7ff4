"""Maintenance Bounded Context - Event Validator.

Checks a proposed event's streamer and section bounds against the topology
resolved for its project. Consults topology only, never event history.

Public bounds are 1-based: sections 1..total_sections treat active and tail
sections as one contiguous range, the way operators enter them.
"""

from __future__ import annotations

from collections.abc import Iterable

from domain.maintenance.errors import InvalidEventError
from domain.maintenance.value_objects import ValidationResult
from domain.topology.services import resolve_topology
from domain.topology.value_objects import Project, Topology


def validate(
    streamer_id: int,
    start_section: int,
    end_section: int,
    project_number: str | None = None,
    *,
    defaults: Topology,
    projects: Iterable[Project],
) -> ValidationResult:
    """Validate 1-based streamer and section bounds.

    Valid iff 1 <= streamer_id <= num_streamers and both section bounds lie
    in [1, total_sections]. Each bound is checked on its own; their order is
    not normalized here (callers order them with `normalize_range`).

    Returns:
        ValidationResult; never raises for integer input
    """
    topology = resolve_topology(defaults, projects, project_number)
    max_streamer = topology.num_streamers
    max_section = topology.total_sections

    valid = (
        1 <= streamer_id <= max_streamer
        and 1 <= start_section <= max_section
        and 1 <= end_section <= max_section
    )
    if valid:
        return ValidationResult(
            valid=True, max_streamer=max_streamer, max_section=max_section
        )
    return ValidationResult(
        valid=False,
        max_streamer=max_streamer,
        max_section=max_section,
        message=f"Streamer must be 1-{max_streamer}, sections must be 1-{max_section}.",
    )


def ensure_valid(
    streamer_id: int,
    start_section: int,
    end_section: int,
    project_number: str | None = None,
    *,
    defaults: Topology,
    projects: Iterable[Project],
) -> Topology:
    """Like `validate`, but return the resolved topology or raise.

    Raises:
        InvalidEventError: If the bounds are invalid
    """
    snapshot = tuple(projects)
    result = validate(
        streamer_id,
        start_section,
        end_section,
        project_number,
        defaults=defaults,
        projects=snapshot,
    )
    if not result.valid:
        raise InvalidEventError(result)
    return resolve_topology(defaults, snapshot, project_number)
