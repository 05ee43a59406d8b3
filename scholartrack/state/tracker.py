from __future__ import annotations

from typing import Any, Iterable, Sequence

import pandas as pd

from scholartrack.domain.models import AppStatus, ScholarshipApplication

FRAME_COLUMNS = [
    "id",
    "name",
    "provider",
    "deadline",
    "status",
    "color",
    "notes",
    "latitude",
    "longitude",
]


def filter_by_status(
    apps: Iterable[ScholarshipApplication], status: AppStatus | None
) -> list[ScholarshipApplication]:
    if status is None:
        return list(apps)
    return [app for app in apps if app.status == status]


def dashboard_counts(apps: Sequence[ScholarshipApplication]) -> dict[str, Any]:
    """Dashboard totals plus the raw per-status breakdown under "by_status".

    "pending" also counts submitted applications, so the breakdown lives in its
    own mapping and always sums to "total".
    """
    by_status = {status: 0 for status in AppStatus}
    for app in apps:
        by_status[app.status] += 1

    return {
        "pending": by_status[AppStatus.PENDING] + by_status[AppStatus.SUBMITTED],
        "approved": by_status[AppStatus.APPROVED],
        "total": len(apps),
        "by_status": {status.name.lower(): count for status, count in by_status.items()},
    }


def applications_frame(apps: Iterable[ScholarshipApplication]) -> pd.DataFrame:
    rows = [
        {
            "id": app.id,
            "name": app.name,
            "provider": app.provider,
            "deadline": app.deadline,
            "status": app.status.label,
            "color": app.status.color,
            "notes": app.notes,
            "latitude": app.latitude,
            "longitude": app.longitude,
        }
        for app in apps
    ]
    if not rows:
        return pd.DataFrame(columns=FRAME_COLUMNS)
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)
