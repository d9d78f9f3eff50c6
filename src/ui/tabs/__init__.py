"""Tab modules for the console."""

from ui.tabs.dashboard import compose_dashboard_tab
from ui.tabs.resources import compose_resource_tab

__all__ = [
    "compose_dashboard_tab",
    "compose_resource_tab",
]
