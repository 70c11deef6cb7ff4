"""Maintenance Bounded Context - Domain Services.

Pure aggregation of cleaning-event history into per-section recency and
coverage figures. NO I/O operations - callers pass a full snapshot of events
on every call, and identical inputs always produce identical outputs.

Slot layout:
    Each streamer maps to a list of ``topology.total_sections`` slots. Slots
    0..sections_per_streamer-1 are active sections; the remaining slots are
    tail sections 0..tail_section_count-1.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping, Sequence
from datetime import date, datetime, time, timezone

import numpy as np
from numpy.typing import NDArray

from domain.addressing.value_objects import SectionType
from domain.maintenance.value_objects import (
    AgeBucket,
    CleaningEvent,
    CleaningMethod,
    EventFilter,
    Stats,
    StreamerDeployment,
    StreamerSummary,
    as_utc,
)
from domain.topology.value_objects import Topology

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
SECONDS_PER_DAY = 86_400

LastCleanedMap = dict[int, list[datetime | None]]


# ---------------------------------------------------------------------------
# Filtering
# ---------------------------------------------------------------------------
def _within_bounds(cleaned_at: datetime, flt: EventFilter) -> bool:
    """Inclusive date-window check; date bounds compare calendar days."""
    if flt.start is not None:
        if isinstance(flt.start, datetime):
            if cleaned_at < flt.start:
                return False
        elif cleaned_at.date() < flt.start:
            return False
    if flt.end is not None:
        if isinstance(flt.end, datetime):
            if cleaned_at > flt.end:
                return False
        elif cleaned_at.date() > flt.end:
            return False
    return True


def matches_filter(event: CleaningEvent, flt: EventFilter | None) -> bool:
    """Return True if `event` is visible under `flt`.

    See EventFilter for the scoping rules. A None filter matches everything.
    """
    if flt is None:
        return True
    if flt.project_number is not None:
        if event.project_number is None:
            if not flt.include_global:
                return False
        elif event.project_number != flt.project_number:
            return False
    if flt.vessel_tag is not None and event.vessel_tag != flt.vessel_tag:
        return False
    return _within_bounds(event.cleaned_at, flt)


def filter_events(
    events: Iterable[CleaningEvent], flt: EventFilter | None = None
) -> list[CleaningEvent]:
    """Return matching events, preserving input order."""
    return [e for e in events if matches_filter(e, flt)]


# ---------------------------------------------------------------------------
# Slot Mapping
# ---------------------------------------------------------------------------
def event_slots(event: CleaningEvent, topology: Topology) -> range:
    """Slot indices covered by an event, before clipping to total_sections.

    Tail events normally use tail-relative indices. Legacy payloads encode
    tail sections as ``sections_per_streamer + k``; such indices (too large
    to be tail-relative) are taken as already global.
    """
    start, end = event.section_index_start, event.section_index_end
    if start > end:
        return range(0)
    if event.section_type is SectionType.TAIL:
        already_global = (
            start >= topology.sections_per_streamer
            and start >= topology.tail_section_count
        )
        base = 0 if already_global else topology.sections_per_streamer
        return range(base + start, base + end + 1)
    return range(start, end + 1)


# ---------------------------------------------------------------------------
# Main Service: last_cleaned_map
# ---------------------------------------------------------------------------
def last_cleaned_map(
    events: Iterable[CleaningEvent],
    topology: Topology,
    flt: EventFilter | None = None,
) -> LastCleanedMap:
    """Fold events into the latest cleaning timestamp per section slot.

    Every slot keeps the maximum ``cleaned_at`` of the matching events that
    cover it, so event order never matters. Untouched slots stay None.
    Events for streamers outside 1..num_streamers and slots beyond
    ``total_sections`` are ignored.

    Args:
        events: Snapshot of cleaning events
        topology: Resolved topology for the query scope
        flt: Optional scope/date filter

    Returns:
        {streamer_id: [timestamp | None] * total_sections}
    """
    total = topology.total_sections
    result: LastCleanedMap = {
        streamer_id: [None] * total
        for streamer_id in range(1, topology.num_streamers + 1)
    }
    ignored = 0
    for event in filter_events(events, flt):
        slots = result.get(event.streamer_id)
        if slots is None:
            ignored += 1
            continue
        for idx in event_slots(event, topology):
            if idx >= total:
                break
            current = slots[idx]
            if current is None or event.cleaned_at > current:
                slots[idx] = event.cleaned_at
    if ignored:
        logger.debug(
            "Ignored %d event(s) for streamers outside 1..%d",
            ignored,
            topology.num_streamers,
        )
    return result


# ---------------------------------------------------------------------------
# Recency
# ---------------------------------------------------------------------------
def days_since(timestamp: datetime | None, now: datetime) -> int | None:
    """Whole days elapsed from `timestamp` to `now`, floored.

    Naive datetimes are taken as UTC. Returns None for a None timestamp.
    """
    if timestamp is None:
        return None
    delta = as_utc(now) - as_utc(timestamp)
    return math.floor(delta.total_seconds() / SECONDS_PER_DAY)


def age_bucket(days: int | None) -> AgeBucket:
    """Classify days since last cleaning into a risk tier.

    None -> never; <= 3 -> fresh; 4-6 -> 4plus; 7-9 -> 7plus;
    10-13 -> 10plus; >= 14 -> 14plus.
    """
    if days is None:
        return AgeBucket.NEVER
    if days >= 14:
        return AgeBucket.FOURTEEN_PLUS
    if days >= 10:
        return AgeBucket.TEN_PLUS
    if days >= 7:
        return AgeBucket.SEVEN_PLUS
    if days >= 4:
        return AgeBucket.FOUR_PLUS
    return AgeBucket.FRESH


def age_bucket_map(
    last_cleaned: Mapping[int, Sequence[datetime | None]], now: datetime
) -> dict[int, list[AgeBucket]]:
    """Bucket every slot of a last-cleaned map relative to `now`."""
    return {
        streamer_id: [age_bucket(days_since(ts, now)) for ts in slots]
        for streamer_id, slots in last_cleaned.items()
    }


def age_matrix(
    last_cleaned: Mapping[int, Sequence[datetime | None]],
    topology: Topology,
    now: datetime,
) -> NDArray[np.float64]:
    """Days-since-cleaning grid, one row per streamer (heatmap layout).

    Shape is (num_streamers, total_sections); never-cleaned cells are NaN.
    Streamers missing from `last_cleaned` yield all-NaN rows. The returned
    array is read-only.
    """
    grid = np.full(
        (topology.num_streamers, topology.total_sections), np.nan, dtype=np.float64
    )
    for row in range(topology.num_streamers):
        slots = last_cleaned.get(row + 1)
        if not slots:
            continue
        for col, ts in enumerate(slots[: topology.total_sections]):
            days = days_since(ts, now)
            if days is not None:
                grid[row, col] = days
    grid.flags.writeable = False
    return grid


# ---------------------------------------------------------------------------
# Main Service: compute_stats
# ---------------------------------------------------------------------------
def compute_stats(
    events: Iterable[CleaningEvent],
    topology: Topology,
    flt: EventFilter | None = None,
) -> Stats:
    """Summarise the events matching `flt`.

    Distances use the topology's section length for every event. Unique
    section counts come from the aggregated last-cleaned map, so overlapping
    events count once per slot, restricted to the topology's bounds.

    Example:
        >>> stats = compute_stats(events, topology, EventFilter(project_number="P1"))
        >>> print(f"{stats.total_distance_m / 1000:.1f} km cleaned")
    """
    matching = filter_events(events, flt)
    section_length = topology.section_length_m

    total_sections = 0
    by_method: dict[CleaningMethod, int] = {}
    last_cleaning: datetime | None = None
    for event in matching:
        count = event.section_count
        total_sections += count
        by_method[event.cleaning_method] = (
            by_method.get(event.cleaning_method, 0) + count * section_length
        )
        if last_cleaning is None or event.cleaned_at > last_cleaning:
            last_cleaning = event.cleaned_at

    active_cleaned = 0
    tail_cleaned = 0
    for slots in last_cleaned_map(matching, topology).values():
        for idx, ts in enumerate(slots):
            if ts is None:
                continue
            if idx < topology.sections_per_streamer:
                active_cleaned += 1
            else:
                tail_cleaned += 1

    return Stats(
        total_events=len(matching),
        total_sections=total_sections,
        total_distance_m=total_sections * section_length,
        unique_cleaned_sections=active_cleaned + tail_cleaned,
        active_cleaned_sections=active_cleaned,
        tail_cleaned_sections=tail_cleaned,
        by_method_distance=by_method,
        last_cleaning=last_cleaning,
        total_available_active=topology.total_available_active,
        total_available_tail=topology.total_available_tail,
    )


def event_counts_by_project(events: Iterable[CleaningEvent]) -> dict[str, int]:
    """Number of events per project; global-scope events are not counted."""
    counts: dict[str, int] = {}
    for event in events:
        if event.project_number is not None:
            counts[event.project_number] = counts.get(event.project_number, 0) + 1
    return counts


# ---------------------------------------------------------------------------
# Streamer Summary
# ---------------------------------------------------------------------------
def _coating_label(is_coated: bool | None) -> str:
    if is_coated is True:
        return "Coated"
    if is_coated is False:
        return "Uncoated"
    return "Unknown"


def _start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def streamer_summary(
    streamer_id: int,
    events: Iterable[CleaningEvent],
    last_cleaned: Mapping[int, Sequence[datetime | None]],
    deployment: StreamerDeployment | None = None,
) -> StreamerSummary:
    """Digest of one streamer's cleaning history.

    ``days_to_first_cleaning`` counts whole days from the deployment date
    (midnight UTC) to the earliest event; it is None when the deployment date
    is unknown, there are no events, or the first event predates deployment.
    """
    own = [e for e in events if e.streamer_id == streamer_id]
    dated = [ts for ts in last_cleaned.get(streamer_id, ()) if ts is not None]
    last = max(dated) if dated else None

    days_to_first: int | None = None
    deployed_on = deployment.deployment_date if deployment is not None else None
    if deployed_on is not None and own:
        first = min(e.cleaned_at for e in own)
        raw = days_since(_start_of_day(deployed_on), first)
        if raw is not None and raw >= 0:
            days_to_first = raw

    return StreamerSummary(
        streamer_id=streamer_id,
        last_cleaned=last,
        days_to_first_cleaning=days_to_first,
        coating_label=_coating_label(
            deployment.is_coated if deployment is not None else None
        ),
        event_count=len(own),
        has_deployment_date=deployed_on is not None,
    )
