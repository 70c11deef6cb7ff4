"""Maintenance Bounded Context - Value Objects.

Cleaning events, query filters and the aggregated figures derived from them.
All validation occurs at construction time via Pydantic.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from domain.addressing.value_objects import SectionType
from domain.topology.value_objects import DEFAULT_VESSEL_TAG, Project, Topology

_LEGACY_CABLE_ID = re.compile(r"^cable-(\d+)$")
_DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes; convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class CleaningMethod(str, Enum):
    """Tool used to clean a section."""

    ROPE = "rope"
    SCRAPER = "scraper"
    SCRAPER_ROPE = "scraper-rope"
    SCUE = "scue"
    KNIFE = "knife"


class AgeBucket(str, Enum):
    """Ordinal risk tier of days since a section was last cleaned."""

    NEVER = "never"
    FRESH = "fresh"
    FOUR_PLUS = "4plus"
    SEVEN_PLUS = "7plus"
    TEN_PLUS = "10plus"
    FOURTEEN_PLUS = "14plus"


# ---------------------------------------------------------------------------
# CleaningEvent
# ---------------------------------------------------------------------------
class CleaningEvent(BaseModel):
    """One recorded cleaning pass over a span of sections (Value Object).

    Invariants:
        CE-1: streamer_id >= 1
        CE-2: section indices >= 0 (0-based, inclusive, within section_type)
        CE-3: cleaned_at is timezone-aware (naive input is taken as UTC)
        CE-4: cleaning_count >= 1

    Ordering of start/end is NOT enforced here: a reversed range reaching the
    aggregator covers no sections. Legacy ``cable_id`` values ("cable-<n>",
    0-based) are accepted in place of ``streamer_id``.
    """

    id: int
    streamer_id: int = Field(
        ge=1, validation_alias=AliasChoices("streamer_id", "streamerId")
    )
    section_index_start: int = Field(
        ge=0, validation_alias=AliasChoices("section_index_start", "sectionIndexStart")
    )
    section_index_end: int = Field(
        ge=0, validation_alias=AliasChoices("section_index_end", "sectionIndexEnd")
    )
    section_type: SectionType = Field(
        default=SectionType.ACTIVE,
        validation_alias=AliasChoices("section_type", "sectionType"),
    )
    cleaning_method: CleaningMethod = Field(
        validation_alias=AliasChoices("cleaning_method", "cleaningMethod")
    )
    cleaned_at: datetime = Field(
        validation_alias=AliasChoices("cleaned_at", "cleanedAt")
    )
    cleaning_count: int = Field(
        default=1, ge=1, validation_alias=AliasChoices("cleaning_count", "cleaningCount")
    )
    project_number: str | None = Field(
        default=None, validation_alias=AliasChoices("project_number", "projectNumber")
    )
    vessel_tag: str = Field(
        default=DEFAULT_VESSEL_TAG, validation_alias=AliasChoices("vessel_tag", "vesselTag")
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def convert_legacy_cable_id(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        cable_id = data.get("cable_id", data.get("cableId"))
        if cable_id is None or "streamer_id" in data or "streamerId" in data:
            return data
        match = _LEGACY_CABLE_ID.match(str(cable_id))
        if match is None:
            raise ValueError(f"Unrecognised cable_id: {cable_id!r}")
        rest = {k: v for k, v in data.items() if k not in ("cable_id", "cableId")}
        rest["streamer_id"] = int(match.group(1)) + 1
        return rest

    @field_validator("cleaned_at")
    @classmethod
    def normalize_cleaned_at(cls, v: datetime) -> datetime:
        return as_utc(v)

    @field_validator("project_number")
    @classmethod
    def blank_project_is_global(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        return v or None

    @property
    def is_global(self) -> bool:
        """True for events recorded outside any project scope."""
        return self.project_number is None

    @property
    def section_count(self) -> int:
        """Number of sections covered (0 for a reversed range)."""
        return max(0, self.section_index_end - self.section_index_start + 1)


# ---------------------------------------------------------------------------
# EventFilter
# ---------------------------------------------------------------------------
class EventFilter(BaseModel):
    """Scope and date window applied to an event query (Value Object).

    Project scoping:
        project_number=None -> no project scoping (every event matches)
        project_number="P1" -> only events of P1; global-scope events are a
                               distinct scope and match only if include_global

    Date bounds are inclusive. A ``date`` bound compares calendar days (UTC);
    a ``datetime`` bound compares instants. A missing bound is unbounded.
    """

    project_number: str | None = None
    start: datetime | date | None = None
    end: datetime | date | None = None
    vessel_tag: str | None = None
    include_global: bool = False

    model_config = ConfigDict(frozen=True)

    @field_validator("start", "end", mode="before")
    @classmethod
    def parse_date_only_bound(cls, v: Any) -> Any:
        # "YYYY-MM-DD" is a calendar-day bound, not midnight UTC
        if isinstance(v, str) and _DATE_ONLY.match(v.strip()):
            return date.fromisoformat(v.strip())
        return v

    @field_validator("start", "end")
    @classmethod
    def normalize_bound(cls, v: datetime | date | None) -> datetime | date | None:
        if isinstance(v, datetime):
            return as_utc(v)
        return v

    @field_validator("project_number", "vessel_tag")
    @classmethod
    def blank_is_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None


# ---------------------------------------------------------------------------
# Aggregates
# ---------------------------------------------------------------------------
class Stats(BaseModel):
    """Summary figures over the events matching a filter (Value Object).

    Coverage ratios (cleaned / available) are left to the caller.
    """

    total_events: int = Field(ge=0)
    total_sections: int = Field(ge=0)  # Summed span lengths, overlaps counted twice
    total_distance_m: int = Field(ge=0)
    unique_cleaned_sections: int = Field(ge=0)
    active_cleaned_sections: int = Field(ge=0)
    tail_cleaned_sections: int = Field(ge=0)
    by_method_distance: dict[CleaningMethod, int] = Field(default_factory=dict)
    last_cleaning: datetime | None = None
    total_available_active: int = Field(ge=0)
    total_available_tail: int = Field(ge=0)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_partition_counts(self) -> "Stats":
        if self.active_cleaned_sections + self.tail_cleaned_sections != self.unique_cleaned_sections:
            raise ValueError("active + tail cleaned sections must equal unique cleaned sections")
        return self


class StreamerDeployment(BaseModel):
    """Deployment record of one streamer within a project."""

    streamer_id: int = Field(ge=1, validation_alias=AliasChoices("streamer_id", "streamerId"))
    deployment_date: date | None = Field(
        default=None, validation_alias=AliasChoices("deployment_date", "deploymentDate")
    )
    is_coated: bool | None = Field(
        default=None, validation_alias=AliasChoices("is_coated", "isCoated")
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class StreamerSummary(BaseModel):
    """Per-streamer digest shown alongside the heatmap."""

    streamer_id: int
    last_cleaned: datetime | None
    days_to_first_cleaning: int | None
    coating_label: str
    event_count: int
    has_deployment_date: bool

    model_config = ConfigDict(frozen=True)


class ValidationResult(BaseModel):
    """Outcome of validating a proposed event against topology bounds.

    ``max_streamer`` and ``max_section`` are 1-based inclusive upper bounds.
    """

    valid: bool
    max_streamer: int
    max_section: int
    message: str | None = None

    model_config = ConfigDict(frozen=True)


class MaintenanceSnapshot(BaseModel):
    """Consistent read of everything the engine needs for one request."""

    defaults: Topology
    projects: tuple[Project, ...] = ()
    events: tuple[CleaningEvent, ...] = ()

    model_config = ConfigDict(frozen=True)
