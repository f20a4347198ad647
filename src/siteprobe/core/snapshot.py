"""Loading site analysis snapshots and request logs from JSON files."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from siteprobe.core.models import SiteAnalysisResult

log = logging.getLogger(__name__)


class SnapshotError(Exception):
    """Raised when a snapshot file cannot be read or is not a JSON object."""


def read_json(path: Path) -> object:
    """Read and decode a JSON file."""
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SnapshotError(f"Cannot read {path}: {e}") from e
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise SnapshotError(f"Invalid JSON in {path}: {e}") from e


def snapshot_from_data(data: object) -> SiteAnalysisResult:
    """Build a snapshot from decoded JSON, filling missing fields with defaults."""
    if not isinstance(data, dict):
        raise SnapshotError(
            f"Snapshot must be a JSON object, got {type(data).__name__}"
        )
    return SiteAnalysisResult.from_dict(data)


def load_snapshot(path: Path) -> SiteAnalysisResult:
    """Load a SiteAnalysisResult from a JSON file.

    Raises:
        SnapshotError: If the file is unreadable, not JSON, or not an object.
    """
    snapshot = snapshot_from_data(read_json(path))
    log.debug(
        "Loaded snapshot %s: %d detections, %d endpoints",
        path, len(snapshot.anti_bot_detections),
        len(snapshot.intercepted_requests.endpoints),
    )
    return snapshot
