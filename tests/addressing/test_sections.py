"""Tests for section labels, channel ranges and active/tail range helpers."""

from __future__ import annotations

import pytest

from domain.addressing.errors import SectionOutOfRangeError
from domain.addressing.services import (
    channel_range,
    format_channel_range,
    from_global_index,
    normalize_range,
    section_label,
    split_section_range,
    to_global_index,
    validate_range_for_type,
)
from domain.addressing.value_objects import SectionRange, SectionType
from domain.topology.value_objects import DEFAULT_TOPOLOGY


# ===========================================================================
# Labels
# ===========================================================================
def test_active_labels_are_zero_padded():
    assert section_label(0, "active") == "AS01"
    assert section_label(8, SectionType.ACTIVE) == "AS09"
    assert section_label(106, "active") == "AS107"


def test_tail_labels_use_distinct_family():
    assert section_label(0, "tail") == "T1"
    assert section_label(4, SectionType.TAIL) == "T5"


def test_labels_are_bijective(topology):
    labels = [section_label(i, "active") for i in range(topology.sections_per_streamer)]
    labels += [section_label(i, "tail") for i in range(topology.tail_section_count)]
    assert len(labels) == topology.total_sections
    assert len(set(labels)) == len(labels)


def test_negative_index_rejected():
    with pytest.raises(ValueError):
        section_label(-1, "active")


def test_unknown_section_type_rejected():
    with pytest.raises(ValueError):
        section_label(0, "middle")


# ===========================================================================
# Channels
# ===========================================================================
def test_channel_range_first_and_last(topology):
    assert channel_range(0, topology) == (1, 6)
    assert channel_range(1, topology) == (7, 12)
    assert channel_range(106, topology) == (637, 642)


def test_channel_range_width_matches_channels_per_section(small_topology):
    start, end = channel_range(3, small_topology)
    assert end - start + 1 == small_topology.channels_per_section


def test_channel_range_outside_active_range_raises(topology):
    with pytest.raises(SectionOutOfRangeError):
        channel_range(107, topology)  # First tail slot: no channels
    with pytest.raises(SectionOutOfRangeError):
        channel_range(-1, topology)


def test_format_channel_range(topology):
    assert format_channel_range(0, topology) == "Ch 1-6"


# ===========================================================================
# Global index space
# ===========================================================================
def test_global_index_round_trip_for_tail(topology):
    assert to_global_index(2, "tail", topology) == 109
    assert from_global_index(109, topology) == (SectionType.TAIL, 2)
    assert from_global_index(5, topology) == (SectionType.ACTIVE, 5)


def test_global_index_out_of_range(topology):
    with pytest.raises(SectionOutOfRangeError):
        from_global_index(112, topology)


# ===========================================================================
# split_section_range
# ===========================================================================
def test_normalize_range():
    assert normalize_range(3, 9) == (3, 9)
    assert normalize_range(9, 3) == (3, 9)


def test_split_active_only(topology):
    split = split_section_range(0, 10, topology)
    assert split.active == SectionRange(start=0, end=10)
    assert split.tail is None


def test_split_crossing_into_tail(topology):
    split = split_section_range(105, 109, topology)
    assert split.active == SectionRange(start=105, end=106)
    assert split.tail == SectionRange(start=0, end=2)


def test_split_tail_only_is_clipped(topology):
    split = split_section_range(120, 108, topology)
    assert split.active is None
    assert split.tail == SectionRange(start=1, end=4)


def test_split_tail_without_tail_sections_is_empty():
    split = split_section_range(108, 109, DEFAULT_TOPOLOGY)
    assert split.is_empty()


def test_split_crossing_without_tail_keeps_active_part():
    split = split_section_range(100, 110, DEFAULT_TOPOLOGY)
    assert split.active == SectionRange(start=100, end=106)
    assert split.tail is None


def test_section_range_rejects_reversed_bounds():
    with pytest.raises(ValueError):
        SectionRange(start=5, end=2)


# ===========================================================================
# validate_range_for_type
# ===========================================================================
def test_validate_active_range(topology):
    assert validate_range_for_type(0, 106, "active", topology).valid
    assert validate_range_for_type(106, 0, "active", topology).valid

    check = validate_range_for_type(0, 107, "active", topology)
    assert not check.valid
    assert check.message == "Active sections must be 0..106"


def test_validate_tail_range(topology):
    assert validate_range_for_type(0, 4, "tail", topology).valid
    check = validate_range_for_type(0, 5, "tail", topology)
    assert not check.valid
    assert check.message == "Tail sections must be 0..4"


def test_validate_tail_range_without_tail():
    check = validate_range_for_type(0, 1, "tail", DEFAULT_TOPOLOGY)
    assert not check.valid
    assert "not configured" in check.message


def test_validate_unknown_section_type(topology):
    check = validate_range_for_type(0, 1, "middle", topology)
    assert not check.valid
    assert check.message == "section_type must be 'active' or 'tail'"
