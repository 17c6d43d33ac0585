from __future__ import annotations

import customtkinter as ctk

from admin_dashboard.models import Notification, Severity
from admin_dashboard.notifier import EXIT_TRANSITION_MS

SEVERITY_COLORS = {
	Severity.INFO: "#3b82f6",
	Severity.SUCCESS: "#2e9d5b",
	Severity.ERROR: "#d14343",
}

ENTER_TRANSITION_MS = 300
FRAME_MS = 15
MARGIN = 20
TRAVEL = 420


class ToastBanner(ctk.CTkFrame):
	"""Top-right banner that slides in on show() and out on begin_exit()."""

	def __init__(self, master, notification: Notification):
		super().__init__(
			master,
			corner_radius=8,
			fg_color=SEVERITY_COLORS.get(notification.severity, SEVERITY_COLORS[Severity.INFO]),
		)
		self._animation_id = None
		self._label = ctk.CTkLabel(
			self,
			text=notification.message,
			text_color="white",
			wraplength=360,
			justify="left",
		)
		self._label.pack(padx=20, pady=15)

	def show(self):
		self.lift()
		self._slide(TRAVEL, -MARGIN, ENTER_TRANSITION_MS)

	def begin_exit(self):
		self._slide(-MARGIN, TRAVEL, EXIT_TRANSITION_MS)

	def destroy(self):
		self._cancel_animation()
		super().destroy()

	def _slide(self, start: int, end: int, duration_ms: int):
		self._cancel_animation()
		steps = max(1, duration_ms // FRAME_MS)
		self._step(0, steps, start, end)

	def _step(self, index: int, steps: int, start: int, end: int):
		x = start + (end - start) * index / steps
		self.place(relx=1.0, x=int(x), y=MARGIN, anchor="ne")
		if index >= steps:
			self._animation_id = None
			return
		self._animation_id = self.after(FRAME_MS, lambda: self._step(index + 1, steps, start, end))

	def _cancel_animation(self):
		if self._animation_id is not None:
			self.after_cancel(self._animation_id)
			self._animation_id = None
