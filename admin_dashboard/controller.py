from __future__ import annotations

import logging
from typing import Any, Callable

from admin_dashboard.models import Severity
from admin_dashboard.notifier import Notifier
from admin_dashboard.scheduler import RefreshScheduler
from admin_dashboard.services import DashboardService

logger = logging.getLogger(__name__)

SECTIONS = ("dashboard", "users", "analytics")


class DashboardController:
    """Loads data for the view, runs deletes and drives auto refresh.

    ``view`` renders results. Every ``render_*`` method receives ``None``
    when its load failed so the widget can show a placeholder; one failed
    widget never blocks the others. ``runner`` executes blocking service
    calls off the UI thread (see ``BackgroundRunner``).
    """

    def __init__(
        self,
        service: DashboardService,
        notifier: Notifier,
        scheduler: RefreshScheduler,
        runner,
        view,
        login_url: str,
    ):
        self._service = service
        self._notifier = notifier
        self._scheduler = scheduler
        self._runner = runner
        self._view = view
        self._login_url = login_url
        self._signed_out = False

    @property
    def signed_out(self) -> bool:
        return self._signed_out

    def show_section(self, section: str) -> None:
        if section not in SECTIONS:
            raise ValueError(f"Unknown section: {section}")

        self._view.show_section(section)
        if section == "dashboard":
            self.load_stats()
            self.load_audits()
            self.load_activities()
        elif section == "users":
            self.load_users()
        else:
            self.load_activity_stats()
            self.load_user_growth()

    def load_stats(self) -> None:
        self._load(self._service.load_stats, self._view.render_stats, "load stats")

    def load_audits(self) -> None:
        self._load(self._service.load_audits, self._view.render_audits, "load audits")

    def load_users(self) -> None:
        self._load(self._service.load_users, self._view.render_users, "load users")

    def load_activities(self) -> None:
        self._load(self._service.load_activities, self._view.render_activities, "load activities")

    def load_activity_stats(self) -> None:
        self._load(
            self._service.load_activity_stats,
            self._view.render_activity_stats,
            "load activity stats",
        )

    def load_user_growth(self) -> None:
        self._load(self._service.load_user_growth, self._view.render_user_growth, "load user growth")

    def delete_audit(self, user_id: int) -> None:
        if not self._view.confirm(
            "Are you sure you want to delete this audit? This action cannot be undone."
        ):
            return

        def on_deleted(_):
            self._notifier.notify("Audit deleted successfully", Severity.SUCCESS)
            self.load_audits()

        self._runner.run(
            lambda: self._service.delete_audit(user_id),
            on_success=on_deleted,
            description=f"delete audit {user_id}",
        )

    def delete_user(self, user_id: int, username: str) -> None:
        if not self._view.confirm(
            f'Are you sure you want to delete user "{username}"? '
            "This will permanently delete all their data."
        ):
            return

        def on_deleted(_):
            self._notifier.notify(f'User "{username}" deleted successfully', Severity.SUCCESS)
            self.load_users()
            self.load_stats()

        self._runner.run(
            lambda: self._service.delete_user(user_id),
            on_success=on_deleted,
            description=f"delete user {user_id}",
        )

    def refresh(self) -> None:
        self.load_stats()
        self.load_activities()

    def start_auto_refresh(self) -> None:
        self._scheduler.start(self.refresh, self._service.refresh_interval_ms)

    def stop_auto_refresh(self) -> None:
        self._scheduler.stop()

    def logout(self) -> None:
        self.stop_auto_refresh()
        self._runner.run(self._service.logout, description="log out")

    def redirect_to_login(self) -> None:
        self.stop_auto_refresh()
        if self._signed_out:
            return
        self._signed_out = True
        logger.info("Redirecting to login: %s", self._login_url)
        self._view.open_login(self._login_url)

    def resume(self) -> None:
        """Reload everything after the user signed in again."""
        self._signed_out = False
        self.show_section("dashboard")
        self.start_auto_refresh()

    def _load(
        self,
        call: Callable[[], Any],
        render: Callable[[Any], None],
        description: str,
    ) -> None:
        self._runner.run(
            call,
            on_success=render,
            on_error=lambda _: render(None),
            description=description,
        )
