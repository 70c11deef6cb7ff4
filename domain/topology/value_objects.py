"""Topology Bounded Context - Value Objects.

Immutable descriptions of streamer cable layouts and the projects that own them.
All validation occurs at construction time via Pydantic.
"""

from __future__ import annotations

from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
TAIL_SECTION_COUNT = 5  # Fixed tail length when tail is not replaced by rope
DEFAULT_VESSEL_TAG = "TTN"


class Topology(BaseModel):
    """Effective cable layout for one scope (Value Object).

    Invariants:
        TO-1: num_streamers >= 1
        TO-2: sections_per_streamer >= 1
        TO-3: section_length_m > 0
        TO-4: module_frequency >= 1
        TO-5: channels_per_section >= 1
    """

    num_streamers: int = Field(
        ge=1, validation_alias=AliasChoices("num_streamers", "numStreamers", "num_cables", "numCables")
    )
    sections_per_streamer: int = Field(
        ge=1,
        validation_alias=AliasChoices(
            "sections_per_streamer", "sectionsPerStreamer", "sections_per_cable", "sectionsPerCable"
        ),
    )
    section_length_m: int = Field(
        gt=0,
        validation_alias=AliasChoices(
            "section_length_m", "sectionLengthMeters", "section_length", "sectionLength"
        ),
    )
    module_frequency: int = Field(
        ge=1, validation_alias=AliasChoices("module_frequency", "moduleFrequency")
    )
    channels_per_section: int = Field(
        ge=1, validation_alias=AliasChoices("channels_per_section", "channelsPerSection")
    )
    use_rope_for_tail: bool = Field(
        validation_alias=AliasChoices("use_rope_for_tail", "useRopeForTail")
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @property
    def tail_section_count(self) -> int:
        """Number of tail sections (0 when the tail is rope)."""
        return 0 if self.use_rope_for_tail else TAIL_SECTION_COUNT

    @property
    def total_sections(self) -> int:
        """Active plus tail sections on one streamer."""
        return self.sections_per_streamer + self.tail_section_count

    @property
    def total_available_active(self) -> int:
        return self.num_streamers * self.sections_per_streamer

    @property
    def total_available_tail(self) -> int:
        return self.num_streamers * self.tail_section_count


DEFAULT_TOPOLOGY = Topology(
    num_streamers=12,
    sections_per_streamer=107,
    section_length_m=75,
    module_frequency=4,
    channels_per_section=6,
    use_rope_for_tail=True,
)

# Legacy project columns, mapped to Topology field names
_LEGACY_OVERRIDE_KEYS: dict[str, str] = {
    "num_cables": "num_streamers",
    "numCables": "num_streamers",
    "num_streamers": "num_streamers",
    "numStreamers": "num_streamers",
    "sections_per_cable": "sections_per_streamer",
    "sectionsPerCable": "sections_per_streamer",
    "sections_per_streamer": "sections_per_streamer",
    "sectionsPerStreamer": "sections_per_streamer",
    "section_length": "section_length_m",
    "sectionLength": "section_length_m",
    "section_length_m": "section_length_m",
    "sectionLengthMeters": "section_length_m",
    "module_frequency": "module_frequency",
    "moduleFrequency": "module_frequency",
    "channels_per_section": "channels_per_section",
    "channelsPerSection": "channels_per_section",
    "use_rope_for_tail": "use_rope_for_tail",
    "useRopeForTail": "use_rope_for_tail",
}


class TopologyOverride(BaseModel):
    """Per-project override of individual Topology fields (Value Object).

    Each field is either an explicit override or None ("inherit the global
    default"). Merging is field-by-field, never all-or-nothing.
    """

    num_streamers: int | None = Field(default=None, ge=1)
    sections_per_streamer: int | None = Field(default=None, ge=1)
    section_length_m: int | None = Field(default=None, gt=0)
    module_frequency: int | None = Field(default=None, ge=1)
    channels_per_section: int | None = Field(default=None, ge=1)
    use_rope_for_tail: bool | None = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def normalize_keys(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {_LEGACY_OVERRIDE_KEYS.get(k, k): v for k, v in data.items()}
        return data

    def overridden_fields(self) -> tuple[str, ...]:
        """Names of fields carrying an explicit override."""
        return tuple(
            name for name in type(self).model_fields if getattr(self, name) is not None
        )

    def is_empty(self) -> bool:
        return not self.overridden_fields()

    def apply(self, base: Topology) -> Topology:
        """Return `base` with every non-None field of this override replaced."""
        updates = {name: getattr(self, name) for name in self.overridden_fields()}
        if not updates:
            return base
        return base.model_copy(update=updates)


class Project(BaseModel):
    """Named scope with its own (optionally overridden) topology (Value Object).

    Flat legacy columns (``num_cables``, ``sectionsPerCable``, ...) found on the
    payload are folded into ``overrides``.
    """

    project_number: str = Field(
        min_length=1, validation_alias=AliasChoices("project_number", "projectNumber")
    )
    project_name: str | None = Field(
        default=None, validation_alias=AliasChoices("project_name", "projectName")
    )
    vessel_tag: str = Field(
        default=DEFAULT_VESSEL_TAG, validation_alias=AliasChoices("vessel_tag", "vesselTag")
    )
    overrides: TopologyOverride = Field(default_factory=TopologyOverride)
    is_active: bool = Field(
        default=False, validation_alias=AliasChoices("is_active", "isActive")
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def fold_legacy_overrides(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        flat = {k: data[k] for k in _LEGACY_OVERRIDE_KEYS if k in data}
        if not flat:
            return data
        rest = {k: v for k, v in data.items() if k not in flat}
        existing = rest.get("overrides") or {}
        if isinstance(existing, TopologyOverride):
            existing = existing.model_dump(exclude_none=True)
        rest["overrides"] = {**flat, **existing}
        return rest

    @field_validator("project_number")
    @classmethod
    def strip_project_number(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("project_number must not be blank")
        return stripped
