"""Addressing Bounded Context - Domain Services.

Pure conversions between section indices, human labels, channel numbers and
equipment-box (EB) modules. NO I/O operations.

Index conventions:
    - Active and tail sections are separate 0-based ranges.
    - The "global" index space places tail section k at
      ``sections_per_streamer + k``; some legacy payloads use it.
    - Module positions are 1-based active section numbers.
"""

from __future__ import annotations

from domain.addressing.errors import SectionOutOfRangeError
from domain.addressing.value_objects import (
    ModulePosition,
    RangeCheck,
    RangeSplit,
    SectionRange,
    SectionType,
)
from domain.topology.value_objects import Topology

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
UNRESOLVED_EB = "-"  # No module anywhere around the range
TAIL_EB = "—"  # Tail sections carry no modules
TAIL_ADAPTOR = "Tail Adaptor"


# ---------------------------------------------------------------------------
# Labels
# ---------------------------------------------------------------------------
def section_label(index: int, section_type: SectionType | str = SectionType.ACTIVE) -> str:
    """Return the display label of a section.

    Active section i -> ``AS`` + (i+1) zero-padded to two digits ("AS01",
    "AS107"); tail section i -> ``T`` + (i+1) ("T1"). The two label families
    never overlap.

    Raises:
        ValueError: If index is negative or section_type is unknown
    """
    if index < 0:
        raise ValueError(f"Section index must be >= 0, got {index}")
    section_type = SectionType(section_type)
    if section_type is SectionType.TAIL:
        return f"T{index + 1}"
    return f"AS{index + 1:02d}"


def format_module(number: int) -> str:
    """Return the EB label for a module number ("EB01")."""
    return f"EB{number:02d}"


# ---------------------------------------------------------------------------
# Channels
# ---------------------------------------------------------------------------
def channel_range(active_index: int, topology: Topology) -> tuple[int, int]:
    """Return the inclusive 1-based channel numbers of an active section.

    Tail sections carry no channels and have no channel range.

    Raises:
        SectionOutOfRangeError: If active_index is outside the active range
    """
    if not 0 <= active_index < topology.sections_per_streamer:
        raise SectionOutOfRangeError(active_index, topology.sections_per_streamer)
    start = active_index * topology.channels_per_section + 1
    return (start, start + topology.channels_per_section - 1)


def format_channel_range(active_index: int, topology: Topology) -> str:
    start, end = channel_range(active_index, topology)
    return f"Ch {start}-{end}"


# ---------------------------------------------------------------------------
# Modules (Equipment Boxes)
# ---------------------------------------------------------------------------
def module_number(section_number: int, topology: Topology) -> int:
    """Module number for a 1-based section position: floor((n-1)/f) + 1."""
    return (section_number - 1) // topology.module_frequency + 1


def is_module_position(section_number: int, topology: Topology) -> bool:
    """True if a module sits at the 1-based active section `section_number`.

    Rules: first section, every n > 1 with (n-1) % frequency == 0, last section.
    """
    if not 1 <= section_number <= topology.sections_per_streamer:
        return False
    if section_number == 1 or section_number == topology.sections_per_streamer:
        return True
    return (section_number - 1) % topology.module_frequency == 0


def module_positions(topology: Topology) -> tuple[ModulePosition, ...]:
    """All module positions along the active range, ordered by position.

    First and last positions are included even when they coincide with a
    regular position; a position never carries two modules.
    """
    last = topology.sections_per_streamer
    positions: list[ModulePosition] = []
    for n in range(1, last + 1):
        if not is_module_position(n, topology):
            continue
        if n == 1:
            kind = "first"
        elif (n - 1) % topology.module_frequency == 0:
            kind = "regular"
        else:
            kind = "last"
        positions.append(
            ModulePosition(number=module_number(n, topology), section_number=n, kind=kind)
        )
    return tuple(positions)


def _format_module_span(high: int, low: int) -> str:
    if high == low:
        return format_module(high)
    return f"{format_module(high)} - {format_module(low)}"


# ---------------------------------------------------------------------------
# Main Service: eb_range
# ---------------------------------------------------------------------------
def eb_range(
    start_section: int,
    end_section: int,
    topology: Topology,
    section_type: SectionType | str = SectionType.ACTIVE,
) -> str:
    """Describe the equipment boxes bounding a 0-based active section range.

    If modules sit inside the range, returns "EB<max> - EB<min>" (or a single
    label). Otherwise the nearest module before the range and the nearest
    after it are used:

        both found    -> "EB<after> - EB<before>"
        only before   -> "Tail Adaptor - EB<before>"
        only after    -> "EB<after>"
        neither       -> "-"

    Tail ranges have no modules and return "—"; an unknown section type
    returns "-". Never raises; a reversed range is read in ascending order.

    Example:
        >>> eb_range(0, 3, DEFAULT_TOPOLOGY)
        'EB01'
        >>> eb_range(0, 4, DEFAULT_TOPOLOGY)
        'EB02 - EB01'
    """
    try:
        section_type = SectionType(section_type)
    except ValueError:
        return UNRESOLVED_EB
    if section_type is SectionType.TAIL:
        return TAIL_EB

    low, high = normalize_range(start_section, end_section)
    first_n, last_n = low + 1, high + 1
    modules = module_positions(topology)

    inside = [m.number for m in modules if first_n <= m.section_number <= last_n]
    if inside:
        return _format_module_span(max(inside), min(inside))

    before = next(
        (m for m in reversed(modules) if m.section_number < first_n), None
    )
    after = next((m for m in modules if m.section_number > last_n), None)

    if before is not None and after is not None:
        return _format_module_span(after.number, before.number)
    if before is not None:
        return f"{TAIL_ADAPTOR} - {format_module(before.number)}"
    if after is not None:
        return format_module(after.number)
    return UNRESOLVED_EB


# ---------------------------------------------------------------------------
# Range helpers (active / tail partitions)
# ---------------------------------------------------------------------------
def normalize_range(start: int, end: int) -> tuple[int, int]:
    """Return (min, max) of a possibly reversed range."""
    return (start, end) if start <= end else (end, start)


def to_global_index(index: int, section_type: SectionType | str, topology: Topology) -> int:
    """Map a partition-relative index into the global index space."""
    if SectionType(section_type) is SectionType.TAIL:
        return topology.sections_per_streamer + index
    return index


def from_global_index(global_index: int, topology: Topology) -> tuple[SectionType, int]:
    """Map a global index back to (partition, relative index).

    Raises:
        SectionOutOfRangeError: If global_index is outside [0, total_sections)
    """
    if not 0 <= global_index < topology.total_sections:
        raise SectionOutOfRangeError(global_index, topology.total_sections, "global")
    if global_index < topology.sections_per_streamer:
        return (SectionType.ACTIVE, global_index)
    return (SectionType.TAIL, global_index - topology.sections_per_streamer)


def split_section_range(start: int, end: int, topology: Topology) -> RangeSplit:
    """Split a global 0-based range into active and tail-relative parts.

    The range is ordered first. Parts beyond the configured tail are dropped;
    a range lying entirely in a non-existent tail yields an empty split.
    """
    low, high = normalize_range(start, end)
    active_count = topology.sections_per_streamer
    tail_count = topology.tail_section_count
    if high < 0:
        return RangeSplit()

    active: SectionRange | None = None
    tail: SectionRange | None = None

    if low < active_count:
        active = SectionRange(start=max(low, 0), end=min(high, active_count - 1))
    if high >= active_count and tail_count > 0:
        tail_low = max(low, active_count) - active_count
        tail_high = min(high, active_count + tail_count - 1) - active_count
        if tail_low <= tail_high:
            tail = SectionRange(start=tail_low, end=tail_high)
    return RangeSplit(active=active, tail=tail)


def validate_range_for_type(
    start: int, end: int, section_type: SectionType | str, topology: Topology
) -> RangeCheck:
    """Check a 0-based range against a single partition (order-insensitive)."""
    try:
        section_type = SectionType(section_type)
    except ValueError:
        return RangeCheck(valid=False, message="section_type must be 'active' or 'tail'")

    low, high = normalize_range(start, end)
    if section_type is SectionType.ACTIVE:
        limit = topology.sections_per_streamer
        if low < 0 or high >= limit:
            return RangeCheck(valid=False, message=f"Active sections must be 0..{limit - 1}")
        return RangeCheck(valid=True)

    limit = topology.tail_section_count
    if limit == 0:
        return RangeCheck(
            valid=False, message="Tail sections not configured (use_rope_for_tail)"
        )
    if low < 0 or high >= limit:
        return RangeCheck(valid=False, message=f"Tail sections must be 0..{limit - 1}")
    return RangeCheck(valid=True)
