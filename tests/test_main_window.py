from unittest.mock import MagicMock, patch

import pytest

pytest.importorskip("tkinter")
pytest.importorskip("customtkinter")

from admin_dashboard.models import ActivityStat  # noqa: E402
from admin_dashboard.presenters import NO_DATA  # noqa: E402
from admin_dashboard.ui import main_window  # noqa: E402
from admin_dashboard.ui.main_window import DANGER, MUTED, MainWindow  # noqa: E402


class TestChartRendering:
    """Tests for the analytics chart placeholders."""

    def test_empty_activity_stats_show_no_data(self):
        """An empty stats list renders the no-data placeholder."""
        view = MagicMock()
        with patch.object(main_window, "ctk") as ctk:
            MainWindow.render_activity_stats(view, [])

        view._empty_row.assert_called_once_with(view._activity_stats_chart, NO_DATA)
        ctk.CTkFrame.assert_not_called()

    def test_failed_activity_stats_show_error(self):
        """A failed load renders the error placeholder."""
        view = MagicMock()
        with patch.object(main_window, "ctk"):
            MainWindow.render_activity_stats(view, None)

        view._empty_row.assert_called_once_with(
            view._activity_stats_chart, "Failed to load activity stats", color=DANGER
        )

    def test_activity_stats_render_rows(self):
        """Stats render one row per bar and no placeholder."""
        view = MagicMock()
        with patch.object(main_window, "ctk") as ctk:
            MainWindow.render_activity_stats(view, [ActivityStat("user_login", 3)])

        view._empty_row.assert_not_called()
        ctk.CTkFrame.assert_called_once_with(view._activity_stats_chart)

    def test_empty_user_growth_shows_no_data(self):
        """An empty growth series renders the no-data label instead of bars."""
        view = MagicMock()
        with patch.object(main_window, "ctk") as ctk:
            MainWindow.render_user_growth(view, [])

        texts = [call.kwargs.get("text") for call in ctk.CTkLabel.call_args_list]
        assert texts == ["User Growth", NO_DATA]
        assert ctk.CTkLabel.call_args_list[1].kwargs["text_color"] == MUTED
        ctk.CTkProgressBar.assert_not_called()
