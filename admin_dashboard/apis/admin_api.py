from __future__ import annotations

from typing import Any

from admin_dashboard.http import RequestClient
from admin_dashboard.models import HttpMethod


class AdminApi:
    stats_path = "/admin/stats"
    audits_path = "/admin/audits"
    audit_path_template = "/admin/audit/{user_id}"
    users_path = "/admin/users"
    user_path_template = "/admin/user/{user_id}"

    def __init__(self, request_client: RequestClient):
        self._request_client = request_client

    def get_stats(self) -> dict[str, Any]:
        return self._request_client.request(self.stats_path).payload

    def list_audits(self) -> list[dict[str, Any]]:
        return self._request_client.request(self.audits_path).payload

    def delete_audit(self, user_id: int) -> Any:
        path = self.audit_path_template.format(user_id=user_id)
        return self._request_client.request(path, HttpMethod.DELETE).payload

    def list_users(self) -> list[dict[str, Any]]:
        return self._request_client.request(self.users_path).payload

    def delete_user(self, user_id: int) -> Any:
        path = self.user_path_template.format(user_id=user_id)
        return self._request_client.request(path, HttpMethod.DELETE).payload
