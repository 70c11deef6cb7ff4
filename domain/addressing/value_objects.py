"""Addressing Bounded Context - Value Objects.

Section partitions, equipment-box (EB) module positions and section ranges.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SectionType(str, Enum):
    """Partition a section index belongs to."""

    ACTIVE = "active"
    TAIL = "tail"


class ModulePosition(BaseModel):
    """Equipment box sitting after a given active section (Value Object).

    Invariants:
        MP-1: section_number >= 1 (1-based position within the active range)
        MP-2: number >= 1
    """

    number: int = Field(ge=1)  # EB number shown on labels
    section_number: int = Field(ge=1)  # 1-based active section position
    kind: str = "regular"  # "first", "regular" or "last"

    model_config = ConfigDict(frozen=True)

    @property
    def section_index(self) -> int:
        """0-based active section index of this position."""
        return self.section_number - 1


class SectionRange(BaseModel):
    """Inclusive, ordered 0-based section range within one partition.

    Invariants:
        SR-1: start >= 0
        SR-2: start <= end
    """

    start: int = Field(ge=0)
    end: int = Field(ge=0)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_order(self) -> "SectionRange":
        if self.start > self.end:
            raise ValueError(f"Invalid range ordering: start={self.start} > end={self.end}")
        return self

    def __len__(self) -> int:
        return self.end - self.start + 1

    def indices(self) -> range:
        return range(self.start, self.end + 1)


class RangeSplit(BaseModel):
    """A global section range split into its active and tail parts."""

    active: SectionRange | None = None
    tail: SectionRange | None = None  # Tail-relative indices

    model_config = ConfigDict(frozen=True)

    def is_empty(self) -> bool:
        return self.active is None and self.tail is None


class RangeCheck(BaseModel):
    """Outcome of checking a range against one partition."""

    valid: bool
    message: str | None = None

    model_config = ConfigDict(frozen=True)
