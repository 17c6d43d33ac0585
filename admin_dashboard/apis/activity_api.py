from __future__ import annotations

from typing import Any
from urllib.parse import urlencode

from admin_dashboard.http import RequestClient


class ActivityApi:
    activities_path = "/admin/activities"
    activity_stats_path = "/admin/activity-stats"
    user_growth_path = "/admin/user-growth"

    def __init__(self, request_client: RequestClient):
        self._request_client = request_client

    def list_activities(self, limit: int | None = None) -> list[dict[str, Any]]:
        path = self.activities_path
        if limit is not None:
            if limit <= 0:
                raise ValueError("Activity limit must be greater than 0")
            path = f"{path}?{urlencode({'limit': limit})}"
        return self._request_client.request(path).payload

    def get_activity_stats(self) -> list[dict[str, Any]]:
        return self._request_client.request(self.activity_stats_path).payload

    def get_user_growth(self) -> list[dict[str, Any]]:
        return self._request_client.request(self.user_growth_path).payload
