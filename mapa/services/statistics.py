"""
Usage statistics shown on the dashboard.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from mapa.services.repository import PatientRepository, ReportRepository


def describe_last_access(last: Optional[datetime], now: datetime) -> Optional[str]:
    """Human label for the previous access; None on first access."""
    if last is None:
        return None
    days = (now - last).days
    if days <= 0:
        return "today"
    if days == 1:
        return "yesterday"
    return f"{days} days ago"


class StatisticsService:

    def __init__(self, patients: PatientRepository, reports: ReportRepository):
        self.patients = patients
        self.reports = reports
        self._last_access: Optional[datetime] = None

    def snapshot(self, now: Optional[datetime] = None) -> Dict[str, Any]:
        """Current counters; records this call as the new last access."""
        now = now or datetime.now(timezone.utc)
        previous = self._last_access
        self._last_access = now
        return {
            "patients_count": self.patients.count(),
            "reports_count": self.reports.count(),
            "last_access": previous.isoformat() if previous else None,
            "last_access_label": describe_last_access(previous, now),
        }
