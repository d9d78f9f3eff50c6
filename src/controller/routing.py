"""Message routing: deliver modal and dashboard messages to the right list."""

from __future__ import annotations

import logging
from typing import Callable

from textual import on
from textual.css.query import NoMatches
from textual.widgets import TabbedContent

from controller.messages import (
    NavigateTo,
    RecordDeleted,
    RecordSaved,
    RecordUpdated,
    RefreshTable,
)
from ui.ids import css
from ui.widgets import DashboardPanel, ResourceListView
import ui.ids as ids

log = logging.getLogger(__name__)


class ResourceEventsMixin:
    """Mixin for app-level resource message handlers."""

    # Expected from App class
    query_one: Callable

    def list_view(self, resource: str) -> ResourceListView | None:
        try:
            return self.query_one(css(ids.list_view_id(resource)), ResourceListView)
        except NoMatches:
            log.warning(f"No list view for resource '{resource}'")
            return None

    @on(RefreshTable)
    def route_refresh(self, message: RefreshTable) -> None:
        log.info(message.event_name)
        view = self.list_view(message.resource)
        if view is not None:
            view.reload()

    @on(RecordSaved)
    def route_saved(self, message: RecordSaved) -> None:
        log.info(message.event_name)
        view = self.list_view(message.resource)
        if view is not None:
            view.controller.add_record(message.record)

    @on(RecordUpdated)
    def route_updated(self, message: RecordUpdated) -> None:
        log.info(message.event_name)
        view = self.list_view(message.resource)
        if view is not None:
            view.controller.update_record(message.record)

    @on(RecordDeleted)
    def route_deleted(self, message: RecordDeleted) -> None:
        log.info(f"{message.event_name}: {message.record_id}")
        view = self.list_view(message.resource)
        if view is not None:
            view.controller.remove_record(message.record_id)
            self._update_count(message.resource, len(view.controller.state.all))

    @on(NavigateTo)
    def route_navigate(self, message: NavigateTo) -> None:
        """Activate the target tab; open a record when data carries an id."""
        log.info(f"{message.event_name}: {message.view}")
        view = self.list_view(message.view)
        if view is None:
            return
        self.query_one(css(ids.MAIN_TABS), TabbedContent).active = ids.tab_id(message.view)
        record_id = message.data.get("id")
        if record_id:
            view.open_record(str(record_id), view_only=bool(message.data.get("view_only")))

    @on(ResourceListView.Loaded)
    def route_loaded(self, message: ResourceListView.Loaded) -> None:
        self._update_count(message.resource, message.total)

    def _update_count(self, resource: str, total: int) -> None:
        try:
            self.query_one(css(ids.DASHBOARD_VIEW), DashboardPanel).set_count(resource, total)
        except NoMatches:
            log.debug("dashboard not found")
