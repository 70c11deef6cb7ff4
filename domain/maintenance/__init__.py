"""Maintenance Bounded Context.

Responsible for cleaning history and what it says about the spread:
- Value Objects: CleaningEvent, EventFilter, Stats, ValidationResult
- Services: last_cleaned_map, age_bucket, compute_stats, validate
"""
