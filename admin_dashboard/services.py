from __future__ import annotations

from typing import Any

from admin_dashboard.apis import ActivityApi, AdminApi
from admin_dashboard.http import RequestClient
from admin_dashboard.models import (
    Activity,
    ActivityStat,
    AuditEntry,
    DashboardStats,
    GrowthPoint,
    UserSummary,
)


def _as_records(payload: Any) -> list[dict[str, Any]]:
    if not isinstance(payload, list):
        return []
    return [item for item in payload if isinstance(item, dict)]


class DashboardService:
    def __init__(
        self,
        request_client: RequestClient,
        admin_api: AdminApi,
        activity_api: ActivityApi,
        refresh_interval_ms: int,
        activity_limit: int,
    ):
        self._request_client = request_client
        self._admin_api = admin_api
        self._activity_api = activity_api
        self._refresh_interval_ms = refresh_interval_ms
        self._activity_limit = activity_limit

    @property
    def refresh_interval_ms(self) -> int:
        return self._refresh_interval_ms

    def load_stats(self) -> DashboardStats:
        payload = self._admin_api.get_stats()
        return DashboardStats.from_dict(payload if isinstance(payload, dict) else {})

    def load_audits(self) -> list[AuditEntry]:
        return [AuditEntry.from_dict(item) for item in _as_records(self._admin_api.list_audits())]

    def delete_audit(self, user_id: int) -> None:
        self._admin_api.delete_audit(user_id)

    def load_users(self) -> list[UserSummary]:
        return [UserSummary.from_dict(item) for item in _as_records(self._admin_api.list_users())]

    def delete_user(self, user_id: int) -> None:
        self._admin_api.delete_user(user_id)

    def load_activities(self) -> list[Activity]:
        payload = self._activity_api.list_activities(self._activity_limit)
        return [Activity.from_dict(item) for item in _as_records(payload)]

    def load_activity_stats(self) -> list[ActivityStat]:
        payload = self._activity_api.get_activity_stats()
        return [ActivityStat.from_dict(item) for item in _as_records(payload)]

    def load_user_growth(self) -> list[GrowthPoint]:
        payload = self._activity_api.get_user_growth()
        return [GrowthPoint.from_dict(item) for item in _as_records(payload)]

    def logout(self) -> None:
        self._request_client.logout()
