"""Formatting helpers shared by the dashboard views.

Everything here is pure: records in, display strings and bar geometry out.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from admin_dashboard.models import Activity, ActivityStat, GrowthPoint, UserSummary

PREVIEW_LENGTH = 50
ACTIVITY_STATS_LIMIT = 10
NO_DATA = "No data"
DEFAULT_ACTIVITY_ICON = "\U0001F4CC"

ACTIVITY_ICONS = {
    "user_signup": "\U0001F464",
    "user_login": "\U0001F511",
    "recovery_log_updated": "\U0001F4A4",
    "arena_post_created": "\U0001F4DD",
    "audit_updated": "\U0001F4CA",
    "pushups_score_updated": "\U0001F4AA",
    "situps_score_updated": "\U0001F3C3",
    "squats_score_updated": "\U0001F9B5",
    "steps_score_updated": "\U0001F45F",
    "addictions_score_updated": "\U0001F3AF",
    "admin_audit_deleted": "\U0001F5D1\uFE0F",
    "admin_user_deleted": "\u26A0\uFE0F",
    "verification_email_sent": "\U0001F4E7",
}

ACTIVITY_DESCRIPTIONS = {
    "user_signup": "signed up",
    "user_login": "logged in",
    "recovery_log_updated": "updated recovery log",
    "arena_post_created": "posted to arena",
    "audit_updated": "updated audit",
    "pushups_score_updated": "logged pushups",
    "situps_score_updated": "logged situps",
    "squats_score_updated": "logged squats",
    "steps_score_updated": "logged steps",
    "addictions_score_updated": "updated addiction score",
    "admin_audit_deleted": "deleted an audit",
    "admin_user_deleted": "deleted a user",
    "verification_email_sent": "verification email sent",
}


@dataclass(frozen=True)
class Bar:
    label: str
    value: int
    ratio: float
    tooltip: str = ""


def format_count(value: int) -> str:
    return f"{value:,}"


def preview(text: str | None, limit: int = PREVIEW_LENGTH) -> str:
    if not text:
        return NO_DATA
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


def _parse_timestamp(value: str) -> datetime:
    # fromisoformat only accepts a trailing "Z" from Python 3.11 on
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def format_timestamp(value: str | None) -> str:
    if not value:
        return ""
    try:
        return _parse_timestamp(value).astimezone().strftime("%Y-%m-%d %H:%M:%S")
    except ValueError:
        return value


def format_date(value: str | None) -> str:
    if not value:
        return ""
    try:
        return _parse_timestamp(value).strftime("%Y-%m-%d")
    except ValueError:
        return value


def activity_icon(action: str) -> str:
    return ACTIVITY_ICONS.get(action, DEFAULT_ACTIVITY_ICON)


def activity_description(activity: Activity) -> str:
    return ACTIVITY_DESCRIPTIONS.get(activity.action, activity.action)


def activity_line(activity: Activity) -> str:
    return f"{activity.username or 'System'} {activity_description(activity)}"


def last_active_caption(user: UserSummary) -> str:
    if not user.last_active:
        return "Never active"
    return f"Last active: {format_timestamp(user.last_active)}"


def user_caption(user: UserSummary) -> str:
    return f"{user.email} • Score: {user.total_score} • Posts: {user.post_count}"


def activity_stat_bars(stats: list[ActivityStat], limit: int = ACTIVITY_STATS_LIMIT) -> list[Bar]:
    if not stats:
        return []
    max_count = max(stat.count for stat in stats)
    return [
        Bar(
            label=stat.action.replace("_", " "),
            value=stat.count,
            ratio=stat.count / max_count if max_count > 0 else 0.0,
        )
        for stat in stats[:limit]
    ]


def growth_bars(points: list[GrowthPoint]) -> list[Bar]:
    if not points:
        return []
    max_signups = max(point.signups for point in points)
    bars = []
    for point in points:
        try:
            day = str(_parse_timestamp(point.date).day)
        except ValueError:
            day = point.date
        bars.append(
            Bar(
                label=day,
                value=point.signups,
                ratio=point.signups / max_signups if max_signups > 0 else 0.0,
                tooltip=f"{format_date(point.date)}: {point.signups} signups",
            )
        )
    return bars
