"""Tests for topology resolution (global defaults + project overrides).

Projects are built directly; no persistence layer is involved.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from domain.topology.errors import UnknownProjectError
from domain.topology.services import (
    active_project_for_vessel,
    find_project,
    get_project,
    resolve_effective_topology,
    resolve_topology,
)
from domain.topology.value_objects import (
    DEFAULT_TOPOLOGY,
    Project,
    Topology,
    TopologyOverride,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def make_projects() -> list[Project]:
    return [
        Project(project_number="P1", overrides={"section_length_m": 50}),
        Project(
            project_number="P2",
            vessel_tag="V2",
            is_active=True,
            overrides={"num_streamers": 8, "use_rope_for_tail": False},
        ),
        Project(project_number="P3"),
    ]


# ===========================================================================
# Topology value object
# ===========================================================================
def test_default_topology_values():
    assert DEFAULT_TOPOLOGY.num_streamers == 12
    assert DEFAULT_TOPOLOGY.sections_per_streamer == 107
    assert DEFAULT_TOPOLOGY.section_length_m == 75
    assert DEFAULT_TOPOLOGY.module_frequency == 4
    assert DEFAULT_TOPOLOGY.channels_per_section == 6
    assert DEFAULT_TOPOLOGY.use_rope_for_tail is True


def test_tail_sections_follow_rope_flag(topology):
    """Rope tail -> no tail sections; otherwise a fixed tail of 5."""
    assert topology.tail_section_count == 5
    assert topology.total_sections == 112
    assert DEFAULT_TOPOLOGY.tail_section_count == 0
    assert DEFAULT_TOPOLOGY.total_sections == 107


def test_available_section_totals(topology):
    assert topology.total_available_active == 12 * 107
    assert topology.total_available_tail == 12 * 5


@pytest.mark.parametrize(
    "field,value",
    [
        ("num_streamers", 0),
        ("sections_per_streamer", 0),
        ("section_length_m", 0),
        ("module_frequency", 0),
        ("channels_per_section", 0),
    ],
)
def test_topology_rejects_non_positive_fields(field, value):
    data = DEFAULT_TOPOLOGY.model_dump()
    data[field] = value
    with pytest.raises(ValidationError):
        Topology(**data)


def test_topology_accepts_legacy_camel_case_keys():
    t = Topology.model_validate(
        {
            "numCables": 6,
            "sectionsPerCable": 90,
            "sectionLength": 100,
            "moduleFrequency": 3,
            "channelsPerSection": 8,
            "useRopeForTail": False,
        }
    )
    assert t.num_streamers == 6
    assert t.sections_per_streamer == 90
    assert t.section_length_m == 100


def test_topology_is_frozen():
    with pytest.raises(ValidationError):
        DEFAULT_TOPOLOGY.num_streamers = 3  # type: ignore[misc]


# ===========================================================================
# Project value object
# ===========================================================================
def test_project_folds_flat_legacy_columns_into_overrides():
    p = Project.model_validate(
        {
            "projectNumber": "P9",
            "numCables": 10,
            "sectionLength": None,
            "useRopeForTail": 0,
            "isActive": 1,
        }
    )
    assert p.overrides.num_streamers == 10
    assert p.overrides.section_length_m is None
    assert p.overrides.use_rope_for_tail is False
    assert p.is_active is True


def test_project_number_is_stripped():
    assert Project(project_number="  P7 ").project_number == "P7"


def test_blank_project_number_rejected():
    with pytest.raises(ValidationError):
        Project(project_number="   ")


def test_override_reports_overridden_fields():
    override = TopologyOverride(section_length_m=50, use_rope_for_tail=False)
    assert set(override.overridden_fields()) == {"section_length_m", "use_rope_for_tail"}
    assert not override.is_empty()
    assert TopologyOverride().is_empty()


# ===========================================================================
# resolve_topology
# ===========================================================================
def test_no_project_number_returns_defaults_unchanged(topology):
    assert resolve_topology(topology, make_projects()) is topology


def test_unknown_project_falls_back_to_defaults(topology):
    assert resolve_topology(topology, make_projects(), "NOPE") is topology


def test_single_field_override_changes_only_that_field(topology):
    resolved = resolve_topology(topology, make_projects(), "P1")

    assert resolved.section_length_m == 50
    expected = topology.model_dump()
    expected["section_length_m"] = 50
    assert resolved.model_dump() == expected


def test_override_is_field_by_field(topology):
    resolved = resolve_topology(topology, make_projects(), "P2")

    assert resolved.num_streamers == 8
    assert resolved.use_rope_for_tail is False
    assert resolved.sections_per_streamer == topology.sections_per_streamer
    assert resolved.module_frequency == topology.module_frequency


def test_false_override_is_not_treated_as_inherit():
    """use_rope_for_tail=False must override a True default."""
    projects = [Project(project_number="P", overrides={"use_rope_for_tail": False})]
    resolved = resolve_topology(DEFAULT_TOPOLOGY, projects, "P")
    assert resolved.use_rope_for_tail is False
    assert resolved.total_sections == 112


def test_project_without_overrides_matches_defaults(topology):
    assert resolve_topology(topology, make_projects(), "P3") == topology


def test_resolution_is_idempotent(topology):
    projects = make_projects()
    first = resolve_topology(topology, projects, "P2")
    second = resolve_topology(topology, projects, "P2")
    assert first == second
    assert first.model_dump() == second.model_dump()


def test_resolution_does_not_mutate_defaults(topology):
    before = topology.model_dump()
    resolve_topology(topology, make_projects(), "P1")
    assert topology.model_dump() == before


def test_project_number_lookup_ignores_whitespace(topology):
    assert resolve_topology(topology, make_projects(), " P1 ").section_length_m == 50


# ===========================================================================
# Lookups and vessel context
# ===========================================================================
def test_find_project():
    projects = make_projects()
    assert find_project(projects, "P2").vessel_tag == "V2"
    assert find_project(projects, "") is None
    assert find_project(projects, None) is None


def test_get_project_raises_for_unknown():
    with pytest.raises(UnknownProjectError, match="P404"):
        get_project(make_projects(), "P404")


def test_active_project_for_vessel():
    projects = make_projects()
    assert active_project_for_vessel(projects, "V2").project_number == "P2"
    assert active_project_for_vessel(projects, "TTN") is None
    assert active_project_for_vessel(projects, None) is None


def test_effective_topology_prefers_explicit_project(topology):
    resolved = resolve_effective_topology(
        topology, make_projects(), project_number="P1", vessel_tag="V2"
    )
    assert resolved.section_length_m == 50
    assert resolved.num_streamers == topology.num_streamers


def test_effective_topology_uses_vessel_active_project(topology):
    resolved = resolve_effective_topology(topology, make_projects(), vessel_tag="V2")
    assert resolved.num_streamers == 8


def test_effective_topology_falls_back_to_defaults(topology):
    assert resolve_effective_topology(topology, make_projects(), vessel_tag="TTN") is topology
