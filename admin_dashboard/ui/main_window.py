from __future__ import annotations

import logging
from tkinter import messagebox
import webbrowser

import customtkinter as ctk

from admin_dashboard import presenters
from admin_dashboard.apis import ActivityApi, AdminApi
from admin_dashboard.config import AppSettings, ConfigurationError
from admin_dashboard.controller import DashboardController
from admin_dashboard.http import RequestClient
from admin_dashboard.logging_utils import configure_logging
from admin_dashboard.models import (
	Activity,
	ActivityStat,
	AuditEntry,
	DashboardStats,
	GrowthPoint,
	UserSummary,
)
from admin_dashboard.notifier import Notifier
from admin_dashboard.runner import BackgroundRunner
from admin_dashboard.scheduler import RefreshScheduler
from admin_dashboard.services import DashboardService
from admin_dashboard.ui.toast import ToastBanner

logger = logging.getLogger(__name__)

MUTED = ("gray40", "gray60")
DANGER = "#d14343"
PLACEHOLDER = "—"


class MainWindow(ctk.CTk):
	def __init__(self, settings: AppSettings):
		super().__init__()
		self._settings = settings
		self.title("Admin Dashboard")
		self.geometry("1200x820")
		self.minsize(980, 680)

		self._notifier = Notifier(
			self,
			lambda notification: ToastBanner(self, notification),
			duration_ms=settings.notification_duration_ms,
		)
		self._scheduler = RefreshScheduler(self)
		self._scheduler.bind_to(self)
		self._request_client = RequestClient(
			settings,
			self._notifier,
			self,
			on_login_required=self._redirect_to_login,
		)
		self._service = build_service(settings, self._request_client)
		self._controller = DashboardController(
			service=self._service,
			notifier=self._notifier,
			scheduler=self._scheduler,
			runner=BackgroundRunner(self),
			view=self,
			login_url=settings.login_url,
		)

		self.grid_columnconfigure(1, weight=1)
		self.grid_rowconfigure(1, weight=1)

		self._build_header()
		self._build_sidebar()

		self._sections: dict[str, ctk.CTkFrame] = {
			"dashboard": self._build_dashboard_section(),
			"users": self._build_users_section(),
			"analytics": self._build_analytics_section(),
		}
		self._signed_out_frame = self._build_signed_out_frame()

		self.protocol("WM_DELETE_WINDOW", self._on_close)

		self._controller.show_section("dashboard")
		self._controller.start_auto_refresh()
		logger.info("Admin dashboard initialized")

	def _build_header(self):
		header = ctk.CTkFrame(self, corner_radius=0)
		header.grid(row=0, column=0, columnspan=2, sticky="ew")

		ctk.CTkLabel(
			header,
			text="Admin Dashboard",
			font=ctk.CTkFont(size=20, weight="bold"),
		).pack(side="left", padx=16, pady=12)

		self._status_label = ctk.CTkLabel(header, text=self._settings.base_url, text_color=MUTED)
		self._status_label.pack(side="left", padx=12)

		ctk.CTkButton(header, text="Log out", width=90, command=self._controller.logout).pack(
			side="right", padx=(6, 16), pady=12
		)
		ctk.CTkButton(header, text="Refresh", width=90, command=self._refresh_current).pack(
			side="right", padx=6, pady=12
		)

	def _build_sidebar(self):
		sidebar = ctk.CTkFrame(self, width=180, corner_radius=0)
		sidebar.grid(row=1, column=0, sticky="ns")

		self._nav_buttons: dict[str, ctk.CTkButton] = {}
		for section, title in (("dashboard", "Dashboard"), ("users", "Users"), ("analytics", "Analytics")):
			button = ctk.CTkButton(
				sidebar,
				text=title,
				fg_color="transparent",
				anchor="w",
				command=lambda name=section: self._controller.show_section(name),
			)
			button.pack(fill="x", padx=12, pady=(12 if section == "dashboard" else 4, 4))
			self._nav_buttons[section] = button

	def _build_dashboard_section(self) -> ctk.CTkFrame:
		frame = ctk.CTkFrame(self, fg_color="transparent")
		frame.grid_columnconfigure(0, weight=3)
		frame.grid_columnconfigure(1, weight=2)
		frame.grid_rowconfigure(1, weight=1)

		cards = ctk.CTkFrame(frame, fg_color="transparent")
		cards.grid(row=0, column=0, columnspan=2, sticky="ew", pady=(0, 12))
		self._stat_labels: dict[str, ctk.CTkLabel] = {}
		for index, (key, title) in enumerate(
			(("total_users", "Total Users"), ("total_recovery", "Recovery Logs"), ("total_audits", "Audits"))
		):
			cards.grid_columnconfigure(index, weight=1)
			card = ctk.CTkFrame(cards)
			card.grid(row=0, column=index, sticky="ew", padx=6)
			ctk.CTkLabel(card, text=title, text_color=MUTED).pack(anchor="w", padx=16, pady=(12, 0))
			value = ctk.CTkLabel(card, text=PLACEHOLDER, font=ctk.CTkFont(size=28, weight="bold"))
			value.pack(anchor="w", padx=16, pady=(0, 12))
			self._stat_labels[key] = value

		self._audit_table = ctk.CTkScrollableFrame(frame, label_text="Audit Logs")
		self._audit_table.grid(row=1, column=0, sticky="nsew", padx=(6, 6))
		for column, weight in enumerate((2, 3, 3, 2, 1)):
			self._audit_table.grid_columnconfigure(column, weight=weight)

		self._activity_feed = ctk.CTkScrollableFrame(frame, label_text="Recent Activity")
		self._activity_feed.grid(row=1, column=1, sticky="nsew", padx=(6, 6))
		return frame

	def _build_users_section(self) -> ctk.CTkFrame:
		frame = ctk.CTkFrame(self, fg_color="transparent")
		self._moderation_list = ctk.CTkScrollableFrame(frame, label_text="User Moderation")
		self._moderation_list.pack(fill="both", expand=True, padx=6)
		return frame

	def _build_analytics_section(self) -> ctk.CTkFrame:
		frame = ctk.CTkFrame(self, fg_color="transparent")
		frame.grid_columnconfigure(0, weight=1)
		frame.grid_columnconfigure(1, weight=1)
		frame.grid_rowconfigure(0, weight=1)

		self._activity_stats_chart = ctk.CTkScrollableFrame(frame, label_text="Activity Breakdown")
		self._activity_stats_chart.grid(row=0, column=0, sticky="nsew", padx=6)

		self._user_growth_chart = ctk.CTkFrame(frame)
		self._user_growth_chart.grid(row=0, column=1, sticky="nsew", padx=6)
		return frame

	def _build_signed_out_frame(self) -> ctk.CTkFrame:
		frame = ctk.CTkFrame(self, fg_color="transparent")
		ctk.CTkLabel(
			frame,
			text="Your session has ended",
			font=ctk.CTkFont(size=20, weight="bold"),
		).pack(pady=(80, 8))
		self._signed_out_hint = ctk.CTkLabel(frame, text="", text_color=MUTED, justify="center")
		self._signed_out_hint.pack(pady=8)
		ctk.CTkButton(
			frame,
			text="Open login page",
			command=lambda: webbrowser.open(self._settings.login_url),
		).pack(pady=6)
		ctk.CTkButton(frame, text="Reconnect", command=self._reconnect).pack(pady=6)
		return frame

	def show_section(self, section: str):
		self._current_section = section
		self._signed_out_frame.grid_forget()
		for name, frame in self._sections.items():
			if name == section:
				frame.grid(row=1, column=1, sticky="nsew", padx=12, pady=12)
			else:
				frame.grid_forget()
		for name, button in self._nav_buttons.items():
			button.configure(fg_color=("gray75", "gray25") if name == section else "transparent")

	def confirm(self, message: str) -> bool:
		return messagebox.askyesno("Please confirm", message, parent=self)

	def open_login(self, login_url: str):
		for frame in self._sections.values():
			frame.grid_forget()
		self._signed_out_hint.configure(
			text=(
				f"Sign in at {login_url}\n"
				"then update ADMIN_SESSION_COOKIE and reconnect."
			)
		)
		self._signed_out_frame.grid(row=1, column=1, sticky="nsew", padx=12, pady=12)
		webbrowser.open(login_url)

	def render_stats(self, stats: DashboardStats | None):
		for key, label in self._stat_labels.items():
			if stats is None:
				label.configure(text=PLACEHOLDER)
			else:
				label.configure(text=presenters.format_count(getattr(stats, key)))

	def render_audits(self, audits: list[AuditEntry] | None):
		table = self._audit_table
		self._clear(table)
		for column, title in enumerate(("User", "Victory", "Defeat", "Updated", "")):
			ctk.CTkLabel(table, text=title, text_color=MUTED, anchor="w").grid(
				row=0, column=column, sticky="ew", padx=6, pady=(0, 6)
			)

		if audits is None:
			self._empty_row(table, "Failed to load audit logs", columnspan=5, color=DANGER)
			return
		if not audits:
			self._empty_row(table, "No audit logs found", columnspan=5)
			return

		for row, audit in enumerate(audits, start=1):
			ctk.CTkLabel(
				table,
				text=f"{audit.username or 'User'}\nID: {audit.user_id}",
				anchor="w",
				justify="left",
			).grid(row=row, column=0, sticky="ew", padx=6, pady=4)
			for column, text in ((1, audit.victory), (2, audit.defeat)):
				ctk.CTkLabel(
					table,
					text=presenters.preview(text),
					text_color=MUTED if not text else None,
					anchor="w",
					justify="left",
					wraplength=220,
				).grid(row=row, column=column, sticky="ew", padx=6, pady=4)
			ctk.CTkLabel(table, text=presenters.format_timestamp(audit.updated_at), anchor="w").grid(
				row=row, column=3, sticky="ew", padx=6, pady=4
			)
			ctk.CTkButton(
				table,
				text="Delete",
				width=70,
				fg_color=DANGER,
				command=lambda user_id=audit.user_id: self._controller.delete_audit(user_id),
			).grid(row=row, column=4, padx=6, pady=4)

	def render_users(self, users: list[UserSummary] | None):
		container = self._moderation_list
		self._clear(container)
		if users is None:
			self._empty_row(container, "Failed to load users", color=DANGER)
			return
		if not users:
			self._empty_row(container, "No users found")
			return

		for user in users:
			box = ctk.CTkFrame(container)
			box.pack(fill="x", padx=4, pady=4)

			details = ctk.CTkFrame(box, fg_color="transparent")
			details.pack(side="left", fill="x", expand=True, padx=12, pady=8)
			title = f"{user.username}  [Admin]" if user.is_admin else user.username
			ctk.CTkLabel(details, text=title, font=ctk.CTkFont(weight="bold"), anchor="w").pack(fill="x")
			ctk.CTkLabel(details, text=presenters.user_caption(user), text_color=MUTED, anchor="w").pack(fill="x")
			ctk.CTkLabel(
				details,
				text=presenters.last_active_caption(user),
				text_color=MUTED,
				anchor="w",
			).pack(fill="x")

			if user.is_admin:
				ctk.CTkLabel(box, text="Protected", text_color=MUTED).pack(side="right", padx=12)
			else:
				ctk.CTkButton(
					box,
					text="Delete",
					width=70,
					fg_color=DANGER,
					command=lambda u=user: self._controller.delete_user(u.id, u.username),
				).pack(side="right", padx=12)

	def render_activities(self, activities: list[Activity] | None):
		feed = self._activity_feed
		self._clear(feed)
		if activities is None:
			self._empty_row(feed, "Failed to load activities", color=DANGER)
			return
		if not activities:
			self._empty_row(feed, "No recent activities")
			return

		for activity in activities:
			item = ctk.CTkFrame(feed, fg_color="transparent")
			item.pack(fill="x", padx=4, pady=4)
			ctk.CTkLabel(item, text=presenters.activity_icon(activity.action), font=ctk.CTkFont(size=18)).pack(
				side="left", padx=(4, 10)
			)
			text = ctk.CTkFrame(item, fg_color="transparent")
			text.pack(side="left", fill="x", expand=True)
			ctk.CTkLabel(text, text=presenters.activity_line(activity), anchor="w").pack(fill="x")
			ctk.CTkLabel(
				text,
				text=presenters.format_timestamp(activity.timestamp),
				text_color=MUTED,
				anchor="w",
			).pack(fill="x")

	def render_activity_stats(self, stats: list[ActivityStat] | None):
		chart = self._activity_stats_chart
		self._clear(chart)
		if stats is None:
			self._empty_row(chart, "Failed to load activity stats", color=DANGER)
			return
		if not stats:
			self._empty_row(chart, presenters.NO_DATA)
			return

		for bar in presenters.activity_stat_bars(stats):
			row = ctk.CTkFrame(chart)
			row.pack(fill="x", padx=4, pady=4)
			ctk.CTkLabel(row, text=bar.label, anchor="w").pack(fill="x", padx=10, pady=(6, 0))
			progress = ctk.CTkProgressBar(row, height=6)
			progress.set(bar.ratio)
			progress.pack(side="left", fill="x", expand=True, padx=10, pady=(2, 8))
			ctk.CTkLabel(row, text=str(bar.value), font=ctk.CTkFont(weight="bold")).pack(
				side="right", padx=(10, 12)
			)

	def render_user_growth(self, points: list[GrowthPoint] | None):
		chart = self._user_growth_chart
		self._clear(chart)
		ctk.CTkLabel(chart, text="User Growth").grid(row=0, column=0, columnspan=max(1, len(points or [])), pady=6)
		if points is None:
			ctk.CTkLabel(chart, text="Failed to load user growth", text_color=DANGER).grid(row=1, column=0, pady=20)
			return
		if not points:
			ctk.CTkLabel(chart, text=presenters.NO_DATA, text_color=MUTED).grid(row=1, column=0, pady=20)
			return

		for column, bar in enumerate(presenters.growth_bars(points)):
			chart.grid_columnconfigure(column, weight=1)
			progress = ctk.CTkProgressBar(chart, orientation="vertical", width=10, height=120)
			progress.set(bar.ratio)
			progress.grid(row=1, column=column, padx=2, pady=(6, 2))
			progress.bind("<Enter>", lambda _event, tip=bar.tooltip: self._status_label.configure(text=tip))
			progress.bind("<Leave>", lambda _event: self._status_label.configure(text=self._settings.base_url))
			ctk.CTkLabel(chart, text=bar.label, text_color=MUTED, font=ctk.CTkFont(size=10)).grid(
				row=2, column=column
			)

	def _redirect_to_login(self):
		self._controller.redirect_to_login()

	def _reconnect(self):
		self._controller.resume()

	def _refresh_current(self):
		self._controller.show_section(getattr(self, "_current_section", "dashboard"))

	def _on_close(self):
		self._controller.stop_auto_refresh()
		self._notifier.clear()
		self._request_client.close()
		self.destroy()

	@staticmethod
	def _clear(container):
		for child in container.winfo_children():
			child.destroy()

	@staticmethod
	def _empty_row(container, text: str, columnspan: int = 1, color=MUTED):
		label = ctk.CTkLabel(container, text=text, text_color=color)
		if columnspan > 1:
			label.grid(row=1, column=0, columnspan=columnspan, pady=20)
		else:
			label.pack(pady=20)


def build_service(settings: AppSettings, request_client: RequestClient) -> DashboardService:
	return DashboardService(
		request_client=request_client,
		admin_api=AdminApi(request_client),
		activity_api=ActivityApi(request_client),
		refresh_interval_ms=settings.refresh_interval_ms,
		activity_limit=settings.activity_limit,
	)


def run_app() -> None:
	ctk.set_appearance_mode("System")
	ctk.set_default_color_theme("blue")

	try:
		settings = AppSettings.from_env()
	except ConfigurationError as exc:
		configure_logging()
		logger.error("Configuration error: %s", exc)
		app = ctk.CTk()
		app.title("Admin Dashboard - Configuration Error")
		app.geometry("760x360")
		message = ctk.CTkTextbox(app)
		message.pack(fill="both", expand=True, padx=16, pady=16)
		message.insert(
			"1.0",
			"Configuration error. Fix the environment variables and restart:\n\n"
			f"{exc}\n\n"
			"Recognized:\n"
			"- ADMIN_API_BASE_URL\n"
			"- ADMIN_DEBUG_MODE\n"
			"- ADMIN_REFRESH_INTERVAL\n"
			"- ADMIN_SESSION_COOKIE\n",
		)
		app.mainloop()
		return

	configure_logging(debug=settings.debug_mode)
	window = MainWindow(settings)
	window.mainloop()
