"""Resource tab composition: one TabPane holding a ResourceListView."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.widgets import TabPane

from controller.pacing import DEFAULT_PACING, Pacing
from gateway import DataGateway, UserInfoSource
from ui.widgets import ResourceListView
import ui.ids as ids


def compose_resource_tab(
    gateway: DataGateway,
    user_info: UserInfoSource | None,
    page_size: int,
    pacing: Pacing = DEFAULT_PACING,
) -> ComposeResult:
    """Compose the tab for one resource.

    Args:
        gateway: Gateway bound to the resource's endpoint
        user_info: Session user source for auto-filled fields
        page_size: Initial rows per page
        pacing: UX latencies

    Yields:
        The resource TabPane
    """
    schema = gateway.schema
    with TabPane(schema.title, id=ids.tab_id(schema.name)):
        yield ResourceListView(gateway, user_info=user_info, page_size=page_size, pacing=pacing)
