"""Stage names and event records for the per-upload ingestion timeline."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum


class IngestionStage(str, Enum):
    """Ordered stages of one upload ingestion."""

    PARSING = "parsing"
    MAPPING = "mapping"
    NORMALIZING = "normalizing"
    HASHING = "hashing"
    FILTERING = "filtering"
    PERSISTING = "persisting"
    DONE = "done"
    FAILED = "failed"


def domain_build_stage_event(
    stage: IngestionStage,
    status: str,
    details: dict[str, object] | None = None,
) -> dict[str, object]:
    """Record one stage transition with a UTC timestamp.

    Args:
        stage: Stage the event belongs to.
        status: `started`, `completed`, `failed` or `success`.
        details: Optional counters or error description.

    Returns:
        dict[str, object]: JSON-serializable event; `details` only when given.
    """

    stage_event: dict[str, object] = {
        "stage": IngestionStage(stage).value,
        "status": status,
        "at_utc": datetime.now(timezone.utc).isoformat(),
    }
    if details:
        stage_event["details"] = dict(details)
    return stage_event
