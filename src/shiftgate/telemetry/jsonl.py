"""Append eligibility evaluations as structured JSON lines."""

from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import datetime
from pathlib import Path
from typing import Any

from shiftgate.scheduling import EligibilityResult


def append_jsonl(path: str | Path, record: Mapping[str, Any]) -> None:
    """Append a JSON record as a single line, creating parent directories as needed."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as handle:
        json.dump(record, handle, ensure_ascii=False, separators=(",", ":"))
        handle.write("\n")


def append_evaluation(
    path: str | Path,
    result: EligibilityResult,
    *,
    now: datetime,
    zone: str,
    worker_id: str | None = None,
    roster: str | None = None,
) -> dict[str, Any]:
    """Record one evaluation together with the inputs that identify it."""
    record: dict[str, Any] = {
        "evaluated_at": now.isoformat(),
        "zone": zone,
        "worker_id": worker_id,
        "roster": roster,
    }
    record.update(result.to_record())
    append_jsonl(path, record)
    return record


__all__ = ["append_jsonl", "append_evaluation"]
