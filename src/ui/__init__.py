"""UI module containing widgets, modals, styles, and tab compositions."""

from ui.widgets import (
    DashboardPanel,
    PaginationBar,
    ResourceCard,
    ResourceListView,
)
from ui.modals import (
    ConfirmGate,
    ConfirmModal,
    LoadingOverlay,
    ModalRequest,
    OverlayHandle,
    ResourceModal,
)
from ui.tabs import compose_dashboard_tab, compose_resource_tab
from ui import ids

__all__ = [
    # Widgets
    "DashboardPanel",
    "PaginationBar",
    "ResourceCard",
    "ResourceListView",
    # Modals
    "ConfirmGate",
    "ConfirmModal",
    "LoadingOverlay",
    "ModalRequest",
    "OverlayHandle",
    "ResourceModal",
    # Tab composers
    "compose_dashboard_tab",
    "compose_resource_tab",
]
