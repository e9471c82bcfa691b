"""Roster loading utilities (YAML metadata + optional CSV tables)."""

from __future__ import annotations

from pathlib import Path
from typing import Any, cast

import pandas as pd
import yaml

from shiftgate.config.models import RosterConfig

__all__ = ["load_roster", "read_csv"]

_TABLES = ("exemptions", "absences", "checkins")


def read_csv(path: Path) -> pd.DataFrame:
    """Load a CSV file with every column kept as text (IDs and dates stay verbatim)."""
    return pd.read_csv(path, dtype=str)


def _resolve_path(root: Path, value: str | None) -> Path | None:
    if value is None:
        return None
    path = Path(value)
    if not path.is_absolute():
        path = root / path
    if not path.exists():
        raise FileNotFoundError(path)
    return path


def _as_optional_string(value: object) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    if pd.isna(cast("Any", value)):
        return None
    return str(value)


def _table_rows(path: Path) -> list[dict[str, object]]:
    rows: list[dict[str, object]] = []
    for raw in read_csv(path).to_dict(orient="records"):
        row: dict[str, object] = {}
        for key, value in raw.items():
            normalised = _as_optional_string(value)
            if normalised is not None:
                row[str(key).strip()] = normalised
        rows.append(row)
    return rows


def load_roster(yaml_path: str | Path) -> RosterConfig:
    """Load a roster from ``roster.yaml`` and the CSV tables it references.

    Notes
    -----
    * ``data.exemptions`` / ``data.absences`` / ``data.checkins`` point at CSV
      files relative to the YAML file; their rows are appended to any inline
      table of the same name.
    * Blank CSV cells are dropped so model defaults apply.
    * Invalid configuration (unknown zone, malformed shift time, overnight shift,
      unknown day code) fails here with a pydantic ``ValidationError``.
    """
    base_path = Path(yaml_path).resolve()
    with base_path.open("r", encoding="utf-8") as handle:
        meta = yaml.safe_load(handle) or {}
    if not isinstance(meta, dict):
        raise ValueError(f"Roster file {base_path} must contain a mapping at the top level")
    root = base_path.parent
    data_section = meta.pop("data", None) or {}

    payload: dict[str, Any] = dict(meta)
    for table in _TABLES:
        inline = list(payload.get(table) or [])
        path = _resolve_path(root, data_section.get(table))
        if path is not None:
            inline.extend(_table_rows(path))
        payload[table] = inline
    return RosterConfig.model_validate(payload)
