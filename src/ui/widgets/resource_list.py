"""Resource list widget: ResourceListView.

One instance per resource tab. It is the ListView the
ResourceListController renders into, and it opens ResourceModal screens
for add/view/edit.
"""

from __future__ import annotations

import logging

from textual import on
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.widgets import Button, DataTable, Input, Select, Static

from constants import DEFAULT_PAGE_SIZE, PAGE_SIZES
from controller.list_controller import PageInfo, ResourceListController
from controller.messages import deleted_for
from controller.pacing import DEFAULT_PACING, Pacing
from gateway import DataGateway, UserInfoSource
from model.schema import ModalMode, Record
from ui.helpers import column_labels, format_status_counts, row_cells, select_options
from ui.ids import css
from ui.modals import ConfirmGate, ModalRequest, ResourceModal
from ui.widgets.pagination import PaginationBar
import ui.ids as ids

log = logging.getLogger(__name__)


class ResourceListView(Vertical):
    """Search/filter toolbar, records table and pagination for one resource."""

    class Loaded(Message):
        """Posted after every load, so the dashboard can update its counts."""

        def __init__(self, resource: str, total: int) -> None:
            super().__init__()
            self.resource = resource
            self.total = total

    def __init__(
        self,
        gateway: DataGateway,
        user_info: UserInfoSource | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        pacing: Pacing = DEFAULT_PACING,
    ) -> None:
        super().__init__(id=ids.list_view_id(gateway.schema.name), classes="resource-list")
        self.gateway = gateway
        self.schema = gateway.schema
        self.user_info = user_info
        self.pacing = pacing
        self.controller = ResourceListController(gateway, self, page_size=page_size, pacing=pacing)

    def compose(self) -> ComposeResult:
        schema = self.schema
        with Horizontal(id=ids.LIST_TOOLBAR):
            yield Input(placeholder=f"Search {schema.title.lower()}...", id=ids.SEARCH_INPUT)
            for name in schema.filterable:
                yield Select(
                    [], prompt=f"All {schema.label_for(name)}", id=ids.filter_id(name)
                )
            yield Select(
                [(f"{size} / page", size) for size in PAGE_SIZES],
                value=self.controller.state.page_size,
                allow_blank=False,
                id=ids.PAGE_SIZE_SELECT,
            )
            yield Button("Refresh", id=ids.REFRESH_BTN)
            yield Button("Reset", id=ids.RESET_BTN)
            if schema.actions.create:
                yield Button("Add", id=ids.ADD_BTN, variant="success")
        if schema.status_field:
            yield Static("", id=ids.STATUS_COUNTS)
        yield Static("", id=ids.LIST_PLACEHOLDER)
        yield DataTable(id=ids.RECORDS_TABLE, cursor_type="row", zebra_stripes=True)
        with Horizontal(classes="row-actions"):
            yield Button("View", id=ids.VIEW_BTN)
            if schema.actions.update:
                yield Button("Edit", id=ids.EDIT_BTN, variant="primary")
            if schema.actions.delete:
                yield Button("Delete", id=ids.DELETE_BTN, variant="error")
        yield PaginationBar(id=ids.PAGINATION_BAR)

    def on_mount(self) -> None:
        self.query_one(css(ids.RECORDS_TABLE), DataTable).add_columns(*column_labels(self.schema))
        self.reload()

    def reload(self) -> None:
        """Re-fetch in the background; overlapping reloads are last-writer-wins."""
        self.run_worker(self._reload(), group=f"load-{self.schema.name}")

    async def _reload(self) -> None:
        await self.controller.refresh()
        self.post_message(self.Loaded(self.schema.name, len(self.controller.state.all)))

    # =========================================================================
    # ListView
    # =========================================================================

    def show_placeholder(self, message: str) -> None:
        placeholder = self.query_one(css(ids.LIST_PLACEHOLDER), Static)
        placeholder.update(message)
        placeholder.display = True
        self.query_one(css(ids.RECORDS_TABLE), DataTable).display = False

    def render_rows(self, rows: list[Record]) -> None:
        table = self.query_one(css(ids.RECORDS_TABLE), DataTable)
        table.clear()
        seen: set[str] = set()
        for record in rows:
            key = self.controller.state.identity_of(record)
            table.add_row(*row_cells(self.schema, record), key=key if key not in seen else None)
            seen.add(key)
        table.display = True
        self.query_one(css(ids.LIST_PLACEHOLDER), Static).display = False

    def render_empty(self, message: str) -> None:
        self.query_one(css(ids.RECORDS_TABLE), DataTable).clear()
        self.show_placeholder(message)

    def render_pagination(self, info: PageInfo) -> None:
        self.query_one(css(ids.PAGINATION_BAR), PaginationBar).update_info(info)

    def render_status_counts(self, counts: dict[str, int]) -> None:
        self.query_one(css(ids.STATUS_COUNTS), Static).update(format_status_counts(counts))

    def set_filter_options(self, options: dict[str, list[str]]) -> None:
        for name, values in options.items():
            select = self.query_one(css(ids.filter_id(name)), Select)
            with select.prevent(Select.Changed):
                select.set_options(select_options(values))

    def set_filter_values(self, filters: dict[str, str]) -> None:
        search = self.query_one(css(ids.SEARCH_INPUT), Input)
        with search.prevent(Input.Changed):
            search.value = filters.get("search", "")
        for name in self.schema.filterable:
            select = self.query_one(css(ids.filter_id(name)), Select)
            value = filters.get(name, "")
            with select.prevent(Select.Changed):
                if value:
                    select.value = value
                else:
                    select.clear()

    # =========================================================================
    # Toolbar events
    # =========================================================================

    @on(Input.Changed, css(ids.SEARCH_INPUT))
    def on_search_changed(self, event: Input.Changed) -> None:
        event.stop()
        self.controller.search_keystroke(event.value)

    @on(Input.Submitted, css(ids.SEARCH_INPUT))
    def on_search_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.run_worker(self.controller.search_submitted(event.value))

    @on(Select.Changed)
    def on_toolbar_select(self, event: Select.Changed) -> None:
        event.stop()
        select_id = event.select.id or ""
        if select_id == ids.PAGE_SIZE_SELECT:
            if isinstance(event.value, int):
                self.controller.set_page_size(event.value)
            return
        name = select_id.removeprefix(ids.filter_id(""))
        if name in self.schema.filterable:
            value = event.value if isinstance(event.value, str) else ""
            self.run_worker(self.controller.set_filter(name, value))

    @on(Button.Pressed, css(ids.REFRESH_BTN))
    def on_refresh_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.reload()

    @on(Button.Pressed, css(ids.RESET_BTN))
    def on_reset_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.run_worker(self.controller.reset_filters())

    @on(PaginationBar.PageSelected)
    def on_page_selected(self, event: PaginationBar.PageSelected) -> None:
        event.stop()
        self.controller.go_to_page(event.page)

    # =========================================================================
    # Record actions
    # =========================================================================

    def selected_id(self) -> str | None:
        table = self.query_one(css(ids.RECORDS_TABLE), DataTable)
        if table.row_count == 0:
            return None
        row_key, _ = table.coordinate_to_cell_key(table.cursor_coordinate)
        return row_key.value

    def open_create(self) -> None:
        self._push_modal(ModalRequest.create())

    def open_record(self, record_id: str, view_only: bool = False) -> None:
        mode = ModalMode.VIEW_ONLY if view_only or not self.schema.actions.update else ModalMode.EDIT
        if self.schema.actions.get:
            self._push_modal(ModalRequest(mode, record_id=record_id))
            return
        # No per-record endpoint: open with the row we already have
        record = next(
            (r for r in self.controller.state.all if self.controller.state.identity_of(r) == record_id),
            None,
        )
        if record is None:
            self.notify(f"{self.schema.label_for(self.schema.identity_field)} {record_id} not found.", severity="error")
            return
        self._push_modal(ModalRequest(mode, record=record))

    def _push_modal(self, request: ModalRequest) -> None:
        self.app.push_screen(
            ResourceModal(self.gateway, request, user_info=self.user_info, pacing=self.pacing)
        )

    @on(Button.Pressed, css(ids.ADD_BTN))
    def on_add_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.open_create()

    @on(Button.Pressed, css(ids.VIEW_BTN))
    def on_view_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        record_id = self.selected_id()
        if record_id:
            self.open_record(record_id, view_only=True)

    @on(Button.Pressed, css(ids.EDIT_BTN))
    def on_edit_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        record_id = self.selected_id()
        if record_id:
            self.open_record(record_id)

    @on(DataTable.RowSelected)
    def on_row_selected(self, event: DataTable.RowSelected) -> None:
        event.stop()
        if event.row_key.value:
            self.open_record(event.row_key.value)

    @on(Button.Pressed, css(ids.DELETE_BTN))
    def on_delete_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        record_id = self.selected_id()
        if record_id:
            self.run_worker(self._delete(record_id))

    async def _delete(self, record_id: str) -> None:
        label = self.schema.label_for(self.schema.identity_field)
        confirmed = await ConfirmGate(self.app).confirm(
            "delete", "Delete record?", f"Are you sure you want to delete {label} {record_id}?"
        )
        if confirmed and await self.controller.delete_record(record_id):
            self.post_message(deleted_for(self.schema, record_id))
