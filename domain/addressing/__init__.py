"""Addressing Bounded Context.

Responsible for naming and locating positions along a streamer:
- Value Objects: SectionType, ModulePosition, SectionRange, RangeSplit
- Services: section_label, channel_range, module_positions, eb_range
"""
