"""Custom Textual widgets for the console.

This package contains all custom widgets organized by domain.
"""

from ui.widgets.dashboard import DashboardPanel, ResourceCard
from ui.widgets.pagination import PaginationBar
from ui.widgets.resource_list import ResourceListView

__all__ = [
    # Dashboard widgets
    "DashboardPanel",
    "ResourceCard",
    # List widgets
    "PaginationBar",
    "ResourceListView",
]
