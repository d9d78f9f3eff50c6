"""Dashboard tab composition."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.widgets import TabPane

from model.schema import ResourceSchema
from ui.widgets import DashboardPanel
import ui.ids as ids


def compose_dashboard_tab(schemas: list[ResourceSchema]) -> ComposeResult:
    """Compose the dashboard tab.

    Yields:
        The dashboard TabPane
    """
    with TabPane("Dashboard", id=ids.tab_id(ids.DASHBOARD)):
        yield DashboardPanel(schemas, id=ids.DASHBOARD_VIEW)
