"""プロジェクトの JSON シリアライズ。

キーは snake_case、色は {"r", "g", "b"} か null、日時は ISO 8601（UTCオフセット付き）。
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

from color_matcher.domain.color import RGB
from color_matcher.domain.project import ColorHistoryEntry, ColorProject
from color_matcher.errors import ProjectFormatError


def rgb_to_dict(color: RGB | None) -> dict[str, int] | None:
    if color is None:
        return None
    return {"r": color.r, "g": color.g, "b": color.b}


def rgb_from_dict(data: Any) -> RGB | None:
    if data is None:
        return None
    if not isinstance(data, dict):
        raise ProjectFormatError(f"Color must be an object or null, got {data!r}")
    try:
        return RGB(data["r"], data["g"], data["b"])
    except KeyError as exc:
        raise ProjectFormatError(f"Color is missing channel {exc}") from exc
    except ValueError as exc:
        raise ProjectFormatError(str(exc)) from exc


def _datetime_to_str(value: datetime) -> str:
    return value.isoformat()


def _datetime_from_str(value: Any) -> datetime:
    if not isinstance(value, str):
        raise ProjectFormatError(f"Timestamp must be a string, got {value!r}")
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as exc:
        raise ProjectFormatError(f"Invalid timestamp: {value!r}") from exc
    if parsed.tzinfo is None:
        # オフセットなしは UTC とみなす
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _optional_str(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ProjectFormatError(f"'{key}' must be a string or null, got {value!r}")
    return value


def entry_to_dict(entry: ColorHistoryEntry) -> dict[str, Any]:
    return {
        "id": entry.id,
        "reference_color": rgb_to_dict(entry.reference_color),
        "sample_color": rgb_to_dict(entry.sample_color),
        "delta_e": entry.delta_e,
        "tint_recommendation": entry.tint_recommendation,
        "is_accepted": entry.is_accepted,
        "created_at": _datetime_to_str(entry.created_at),
        "notes": entry.notes,
    }


def entry_from_dict(data: Any) -> ColorHistoryEntry:
    if not isinstance(data, dict):
        raise ProjectFormatError(f"History entry must be an object, got {data!r}")
    entry_id = data.get("id")
    if not isinstance(entry_id, str) or not entry_id:
        raise ProjectFormatError("History entry is missing 'id'")
    delta_e = data.get("delta_e", 0.0)
    if isinstance(delta_e, bool) or not isinstance(delta_e, (int, float)):
        raise ProjectFormatError(f"'delta_e' must be a number, got {delta_e!r}")
    is_accepted = data.get("is_accepted", False)
    if not isinstance(is_accepted, bool):
        raise ProjectFormatError(f"'is_accepted' must be a boolean, got {is_accepted!r}")

    return ColorHistoryEntry(
        id=entry_id,
        reference_color=rgb_from_dict(data.get("reference_color")),
        sample_color=rgb_from_dict(data.get("sample_color")),
        delta_e=float(delta_e),
        tint_recommendation=_optional_str(data, "tint_recommendation"),
        is_accepted=is_accepted,
        created_at=_datetime_from_str(data.get("created_at")),
        notes=_optional_str(data, "notes"),
    )


def project_to_dict(project: ColorProject) -> dict[str, Any]:
    return {
        "id": project.id,
        "name": project.name,
        "description": project.description,
        "reference_color": rgb_to_dict(project.reference_color),
        "sample_color": rgb_to_dict(project.sample_color),
        "created_at": _datetime_to_str(project.created_at),
        "modified_at": _datetime_to_str(project.modified_at),
        "color_history": [entry_to_dict(e) for e in project.color_history],
        "metadata": dict(project.metadata),
    }


def project_from_dict(data: Any) -> ColorProject:
    """dict からプロジェクトを復元。構造・値の不正は ProjectFormatError。"""
    if not isinstance(data, dict):
        raise ProjectFormatError("Project JSON must be an object")
    project_id = data.get("id")
    if not isinstance(project_id, str) or not project_id:
        raise ProjectFormatError("Project is missing 'id'")

    history = data.get("color_history", [])
    if not isinstance(history, list):
        raise ProjectFormatError("'color_history' must be a list")
    metadata = data.get("metadata", {})
    if not isinstance(metadata, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in metadata.items()
    ):
        raise ProjectFormatError("'metadata' must map strings to strings")

    return ColorProject(
        id=project_id,
        name=_optional_str(data, "name"),
        description=_optional_str(data, "description"),
        reference_color=rgb_from_dict(data.get("reference_color")),
        sample_color=rgb_from_dict(data.get("sample_color")),
        created_at=_datetime_from_str(data.get("created_at")),
        modified_at=_datetime_from_str(data.get("modified_at")),
        color_history=[entry_from_dict(e) for e in history],
        metadata=dict(metadata),
    )


def dumps_project(project: ColorProject) -> str:
    return json.dumps(project_to_dict(project), indent=2, ensure_ascii=False)


def loads_project(text: str) -> ColorProject:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ProjectFormatError(f"Invalid project JSON: {exc}") from exc
    return project_from_dict(data)
