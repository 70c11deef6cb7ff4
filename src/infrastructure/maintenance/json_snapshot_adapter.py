"""JSON snapshot adapter for MaintenanceSnapshotRepository.

Loads a consistent snapshot of projects and cleaning events from a JSON
export (camelCase keys, as produced by the maintenance API) and returns a
domain MaintenanceSnapshot Value Object.

Document shape:
    {
      "config":   {"numCables": 12, "sectionsPerCable": 107, ...},   # optional
      "projects": [{"projectNumber": "P1", ...}, ...],
      "events":   [{"id": 1, "streamerId": 3, ...}, ...]
    }

Lifecycle:
1) Check existence, extension allowlist, symlinks and size budget
2) Parse JSON
3) Merge "config" onto the adapter's global defaults
4) Validate projects (any invalid project rejects the snapshot)
5) Validate events (invalid events are skipped with a warning)
6) Return MaintenanceSnapshot
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from domain.maintenance.errors import SnapshotError
from domain.maintenance.value_objects import CleaningEvent, MaintenanceSnapshot
from domain.topology.value_objects import (
    DEFAULT_TOPOLOGY,
    Project,
    Topology,
    TopologyOverride,
)

# Module-level logger (reused across all calls)
logger = logging.getLogger(__name__)

_ALLOWED_SUFFIXES = (".json",)


class JsonSnapshotAdapter:
    """Infrastructure adapter for loading maintenance snapshots from JSON.

    Parameters
    ----------
    defaults: Topology | None
        Global defaults the document's "config" block is merged onto.
        Falls back to DEFAULT_TOPOLOGY.
    max_bytes: int | None
        Optional size budget; larger files raise SnapshotError before parsing.
    """

    def __init__(
        self, defaults: Topology | None = None, max_bytes: int | None = None
    ) -> None:
        self.defaults = defaults or DEFAULT_TOPOLOGY
        self.max_bytes = max_bytes

    def load_snapshot(self, source: Path | str) -> MaintenanceSnapshot:
        """Load and validate a snapshot document.

        Raises:
            FileNotFoundError: If the file does not exist
            SnapshotError: If the file is rejected, unparseable or malformed
        """
        path = Path(source)

        if not path.exists():
            raise FileNotFoundError(str(path))

        if path.suffix.lower() not in _ALLOWED_SUFFIXES:
            raise SnapshotError(f"Unsupported file extension: {path.suffix}")

        try:
            if path.is_symlink():
                raise SnapshotError("Symlinks are not permitted")
            st = path.stat()
            if st.st_size == 0:
                raise SnapshotError("Empty file")
            if self.max_bytes is not None and st.st_size > self.max_bytes:
                raise SnapshotError(
                    f"File size {st.st_size}B exceeds budget {self.max_bytes}B"
                )
            raw = path.read_text(encoding="utf-8")
        except OSError as e:
            # Log only the filename, never the absolute path
            logger.error(
                "Failed to read %s (errno=%s, strerror=%s)",
                path.name,
                getattr(e, "errno", "unknown"),
                getattr(e, "strerror", "unknown"),
            )
            raise
        except UnicodeDecodeError as e:
            logger.error("Failed to decode %s as UTF-8 (byte offset %d)", path.name, e.start)
            raise SnapshotError(f"Invalid UTF-8 at byte {e.start}") from e

        try:
            document = json.loads(raw)
        except json.JSONDecodeError as e:
            raise SnapshotError(f"Invalid JSON: {e.msg} (line {e.lineno})") from e

        snapshot = self.parse_document(document, name=path.name)
        logger.debug(
            "Snapshot %s: %d project(s), %d event(s)",
            path.name,
            len(snapshot.projects),
            len(snapshot.events),
        )
        return snapshot

    def parse_document(self, document: Any, name: str = "<memory>") -> MaintenanceSnapshot:
        """Build a snapshot from an already-decoded document."""
        if not isinstance(document, dict):
            raise SnapshotError("Snapshot document must be a JSON object")

        defaults = self._merge_config(document.get("config"))
        projects = self._parse_projects(document.get("projects", []))
        events = self._parse_events(document.get("events", []), name)

        return MaintenanceSnapshot(
            defaults=defaults, projects=tuple(projects), events=tuple(events)
        )

    def _merge_config(self, config: Any) -> Topology:
        if config is None:
            return self.defaults
        if not isinstance(config, dict):
            raise SnapshotError("'config' must be an object")
        try:
            override = TopologyOverride.model_validate(config)
        except ValidationError as e:
            raise SnapshotError(f"Invalid config: {e.error_count()} error(s)") from e
        return override.apply(self.defaults)

    def _parse_projects(self, records: Any) -> list[Project]:
        if not isinstance(records, list):
            raise SnapshotError("'projects' must be a list")
        projects: list[Project] = []
        seen: set[str] = set()
        for position, record in enumerate(records):
            try:
                project = Project.model_validate(record)
            except ValidationError as e:
                raise SnapshotError(f"Invalid project at index {position}") from e
            if project.project_number in seen:
                raise SnapshotError(
                    f"Duplicate project number: {project.project_number!r}"
                )
            seen.add(project.project_number)
            projects.append(project)
        return projects

    def _parse_events(self, records: Any, name: str) -> list[CleaningEvent]:
        if not isinstance(records, list):
            raise SnapshotError("'events' must be a list")
        events: list[CleaningEvent] = []
        skipped = 0
        for record in records:
            try:
                events.append(CleaningEvent.model_validate(record))
            except ValidationError as e:
                skipped += 1
                logger.debug("Snapshot %s: skipping event: %s", name, e.errors()[0]["msg"])
        if skipped:
            logger.warning(
                "Snapshot %s: skipped %d invalid event record(s)", name, skipped
            )
        return events
