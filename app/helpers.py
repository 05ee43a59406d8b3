from __future__ import annotations

from typing import Any, Iterable, Mapping

import pandas as pd

from scholartrack.domain.models import AppStatus, ScholarshipApplication
from scholartrack.state.tracker import applications_frame

EMPTY_NOTES_TEXT = "No additional notes provided for this scholarship."
ALL_STATUSES_LABEL = "All Applications"
MAP_LAYER_ID = "applications"


def notes_text(app: ScholarshipApplication) -> str:
    return app.notes.strip() or EMPTY_NOTES_TEXT


def deadline_text(app: ScholarshipApplication) -> str:
    return f"Deadline: {app.deadline}"


def status_badge(status: AppStatus) -> str:
    return f":{_badge_color(status)}-background[{status.label}]"


def status_filter_options() -> list[str]:
    return [ALL_STATUSES_LABEL, *(status.label for status in AppStatus)]


def status_from_filter_label(label: str) -> AppStatus | None:
    if label == ALL_STATUSES_LABEL:
        return None
    return AppStatus.parse(label)


def map_points_frame(apps: Iterable[ScholarshipApplication]) -> pd.DataFrame:
    frame = applications_frame(apps)
    located = frame[(frame["latitude"] != 0.0) & (frame["longitude"] != 0.0)].copy()
    located["rgba"] = located["color"].apply(hex_to_rgba)
    return located.reset_index(drop=True)


def selected_marker_id(selection: Mapping[str, Any] | None, layer_id: str = MAP_LAYER_ID) -> str | None:
    """Id of the clicked marker in a pydeck chart selection, if any.

    Streamlit reports picked rows as `{"objects": {layer_id: [row, ...]}}`.
    """
    if not selection:
        return None
    rows = (selection.get("objects") or {}).get(layer_id) or []
    if not rows or rows[0].get("id") is None:
        return None
    return str(rows[0]["id"])


def hex_to_rgba(hex_color: str, alpha: int = 220) -> list[int]:
    stripped = hex_color.lstrip("#")
    if len(stripped) != 6:
        raise ValueError(f"Expected a #RRGGBB color, received {hex_color!r}.")
    return [int(stripped[index : index + 2], 16) for index in (0, 2, 4)] + [alpha]


def _badge_color(status: AppStatus) -> str:
    return {
        AppStatus.SUBMITTED: "blue",
        AppStatus.PENDING: "orange",
        AppStatus.APPROVED: "green",
        AppStatus.DECLINED: "red",
    }[status]
