"""Environment-driven settings for the global topology defaults.

Values come from ``STREAMER_*`` environment variables or a local ``.env``
file; anything unset falls back to the built-in fleet defaults.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from domain.topology.value_objects import DEFAULT_TOPOLOGY, DEFAULT_VESSEL_TAG, Topology


class MaintenanceSettings(BaseSettings):
    """Global defaults applied when no project override exists."""

    num_streamers: int = Field(default=DEFAULT_TOPOLOGY.num_streamers, ge=1)
    sections_per_streamer: int = Field(
        default=DEFAULT_TOPOLOGY.sections_per_streamer, ge=1
    )
    section_length_m: int = Field(default=DEFAULT_TOPOLOGY.section_length_m, gt=0)
    module_frequency: int = Field(default=DEFAULT_TOPOLOGY.module_frequency, ge=1)
    channels_per_section: int = Field(
        default=DEFAULT_TOPOLOGY.channels_per_section, ge=1
    )
    use_rope_for_tail: bool = DEFAULT_TOPOLOGY.use_rope_for_tail
    vessel_tag: str = DEFAULT_VESSEL_TAG

    model_config = SettingsConfigDict(
        env_prefix="STREAMER_",
        env_file=".env",
        extra="ignore",
    )

    def topology(self) -> Topology:
        return Topology(
            num_streamers=self.num_streamers,
            sections_per_streamer=self.sections_per_streamer,
            section_length_m=self.section_length_m,
            module_frequency=self.module_frequency,
            channels_per_section=self.channels_per_section,
            use_rope_for_tail=self.use_rope_for_tail,
        )
