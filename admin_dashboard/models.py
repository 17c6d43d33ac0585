from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


DEFAULT_NOTIFICATION_DURATION_MS = 5000


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


class Severity(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Endpoint:
    path: str
    method: HttpMethod = HttpMethod.GET
    body: Any = None
    headers: dict[str, str] | None = None


@dataclass(frozen=True)
class Success:
    payload: Any


@dataclass(frozen=True)
class AuthRequired:
    message: str = "Session expired. Please log in again."


@dataclass(frozen=True)
class Forbidden:
    message: str = "Access denied. Admin privileges required."


@dataclass(frozen=True)
class Failure:
    message: str
    status_code: int | None = None


ResponseOutcome = Union[Success, AuthRequired, Forbidden, Failure]


@dataclass(frozen=True)
class Notification:
    message: str
    severity: Severity = Severity.INFO
    duration_ms: int = DEFAULT_NOTIFICATION_DURATION_MS


def _as_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


@dataclass(frozen=True)
class DashboardStats:
    total_users: int
    total_recovery: int
    total_audits: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DashboardStats":
        return cls(
            total_users=_as_int(data.get("total_users")),
            total_recovery=_as_int(data.get("total_recovery")),
            total_audits=_as_int(data.get("total_audits")),
        )


@dataclass(frozen=True)
class AuditEntry:
    user_id: int
    username: str | None = None
    victory: str | None = None
    defeat: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AuditEntry":
        return cls(
            user_id=_as_int(data.get("user_id")),
            username=data.get("username"),
            victory=data.get("victory"),
            defeat=data.get("defeat"),
            updated_at=data.get("updated_at"),
        )


@dataclass(frozen=True)
class UserSummary:
    id: int
    username: str
    email: str = ""
    role: str = "user"
    total_score: int = 0
    post_count: int = 0
    last_active: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UserSummary":
        return cls(
            id=_as_int(data.get("id")),
            username=str(data.get("username") or ""),
            email=str(data.get("email") or ""),
            role=str(data.get("role") or "user"),
            total_score=_as_int(data.get("total_score")),
            post_count=_as_int(data.get("post_count")),
            last_active=data.get("last_active"),
        )


@dataclass(frozen=True)
class Activity:
    action: str
    username: str | None = None
    timestamp: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Activity":
        return cls(
            action=str(data.get("action") or ""),
            username=data.get("username"),
            timestamp=data.get("timestamp"),
        )


@dataclass(frozen=True)
class ActivityStat:
    action: str
    count: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ActivityStat":
        return cls(action=str(data.get("action") or ""), count=_as_int(data.get("count")))


@dataclass(frozen=True)
class GrowthPoint:
    date: str
    signups: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GrowthPoint":
        # signups comes back as a string from COUNT(*) on some backends
        return cls(date=str(data.get("date") or ""), signups=_as_int(data.get("signups")))
