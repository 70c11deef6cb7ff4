"""Root pytest configuration for all tests.

Shared fixtures build value objects directly: domain tests never touch I/O.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

import pytest

from domain.maintenance.value_objects import CleaningEvent
from domain.topology.value_objects import Topology

# Reference instant used by recency tests
NOW = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def topology() -> Topology:
    """12 streamers x 107 active sections with a 5-section tail (112 total)."""
    return Topology(
        num_streamers=12,
        sections_per_streamer=107,
        section_length_m=75,
        module_frequency=4,
        channels_per_section=6,
        use_rope_for_tail=False,
    )


@pytest.fixture
def small_topology() -> Topology:
    """2 streamers x 10 active sections, tail enabled (15 total)."""
    return Topology(
        num_streamers=2,
        sections_per_streamer=10,
        section_length_m=100,
        module_frequency=4,
        channels_per_section=8,
        use_rope_for_tail=False,
    )


@pytest.fixture
def make_event() -> Callable[..., CleaningEvent]:
    """Factory for CleaningEvents with sensible defaults and auto ids."""
    counter = iter(range(1, 10_000))

    def _make(**overrides: Any) -> CleaningEvent:
        fields: dict[str, Any] = {
            "id": next(counter),
            "streamer_id": 1,
            "section_index_start": 0,
            "section_index_end": 0,
            "section_type": "active",
            "cleaning_method": "rope",
            "cleaned_at": datetime(2024, 3, 1, 8, 0, tzinfo=timezone.utc),
            "project_number": None,
        }
        fields.update(overrides)
        return CleaningEvent(**fields)

    return _make
