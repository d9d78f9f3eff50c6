"""ResourceListController: fetch, filter, paginate and render one collection.

The controller owns a ListState and drives a ListView. It never talks to a
modal; modals reach it only through messages routed by the app
(RefreshTable -> refresh(), RecordSaved -> add_record(), ...).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from constants import DEFAULT_PAGE_SIZE, LARGE_COLLECTION_THRESHOLD
from controller.pacing import DEFAULT_PACING, Debouncer, Pacing, pause
from gateway import DataGateway, GatewayError
from model.list_state import ListState
from model.schema import SEARCH, Record

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageInfo:
    """What the pagination bar shows."""

    page: int
    pages: int
    window: list[int | None]
    results: str
    page_size: int

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.pages


class ListView(Protocol):
    def show_placeholder(self, message: str) -> None: ...

    def render_rows(self, rows: list[Record]) -> None: ...

    def render_empty(self, message: str) -> None: ...

    def render_pagination(self, info: PageInfo) -> None: ...

    def render_status_counts(self, counts: dict[str, int]) -> None: ...

    def set_filter_options(self, options: dict[str, list[str]]) -> None: ...

    def set_filter_values(self, filters: dict[str, str]) -> None: ...

    def notify(self, message: str, severity: str = "information") -> None: ...


class ResourceListController:
    """Presents a filtered, paginated view of one resource collection."""

    def __init__(
        self,
        gateway: DataGateway,
        view: ListView,
        page_size: int = DEFAULT_PAGE_SIZE,
        pacing: Pacing = DEFAULT_PACING,
    ) -> None:
        self.gateway = gateway
        self.schema = gateway.schema
        self.view = view
        self.pacing = pacing
        self.state = ListState(self.schema, page_size=page_size)
        self.loading = False
        self.load_failed = False
        self._search = Debouncer(pacing.search_debounce, self._apply_search)

    # =========================================================================
    # Fetching
    # =========================================================================

    async def load(self) -> None:
        """Fetch the whole collection and re-render.

        Not guarded against re-entry: overlapping loads resolve
        last-writer-wins. On failure the list is emptied and the user told.
        """
        self.loading = True
        self.view.show_placeholder(f"Loading {self.schema.title.lower()}...")
        try:
            records = await self.gateway.fetch_all()
        except GatewayError as e:
            log.error(f"{self.schema.name}: load failed: {e}")
            self.load_failed = True
            self.state.replace_all([])
            self.view.notify(
                f"Could not load {self.schema.title.lower()}. {e.user_message}", severity="error"
            )
        else:
            log.info(f"{self.schema.name}: loaded {len(records)} records")
            self.load_failed = False
            self.state.replace_all(records)
        finally:
            self.loading = False
        self._rebuild_filter_options()
        self.render()

    async def refresh(self) -> None:
        await self.load()

    async def delete_record(self, record_id: str) -> bool:
        """Delete on the server, then drop the record locally.

        Returns:
            True if the server confirmed the removal
        """
        try:
            await self.gateway.delete(record_id)
        except GatewayError as e:
            log.error(f"{self.schema.name}: delete {record_id} failed: {e}")
            self.view.notify(e.user_message, severity="error")
            return False
        self.remove_record(record_id)
        self.view.notify(f"{self.schema.label_for(self.schema.identity_field)} {record_id} deleted.")
        return True

    # =========================================================================
    # Filtering
    # =========================================================================

    def search_keystroke(self, value: str) -> None:
        """Debounced search: only the last keystroke in a quiet period applies."""
        self._search.trigger(value)

    async def search_submitted(self, value: str) -> None:
        """Enter in the search box: apply now and drop any pending keystroke."""
        await self._search.flush(value)

    async def set_filter(self, name: str, value: str) -> None:
        if name == SEARCH:
            self.search_keystroke(value)
            return
        self.state.set_filter(name, value)
        await self.apply_filters()

    async def _apply_search(self, value: str) -> None:
        self.state.set_filter(SEARCH, value)
        await self.apply_filters()

    async def apply_filters(self) -> None:
        if len(self.state.all) > LARGE_COLLECTION_THRESHOLD:
            self.view.show_placeholder("Applying filters...")
            await pause(self.pacing.filter_placeholder)
        self.state.apply_filters()
        self.render()

    async def reset_filters(self) -> None:
        self._search.cancel()
        self.view.show_placeholder("Resetting filters...")
        await pause(self.pacing.reset_placeholder)
        self.state.reset_filters()
        self.view.set_filter_values(self.state.filters)
        self.render()

    def _rebuild_filter_options(self) -> None:
        options = self.state.filter_options()
        cleared = self.state.prune_filters(options)
        if cleared:
            log.debug(f"{self.schema.name}: cleared stale filters {cleared}")
        self.view.set_filter_options(options)
        self.view.set_filter_values(self.state.filters)

    # =========================================================================
    # Pagination
    # =========================================================================

    def go_to_page(self, page: int) -> bool:
        if not self.state.go_to_page(page):
            return False
        self.render()
        return True

    def set_page_size(self, page_size: int) -> None:
        self.state.set_page_size(page_size)
        self.render()

    # =========================================================================
    # Mutations from modal messages
    # =========================================================================

    def add_record(self, record: Record) -> None:
        self._search.cancel()
        self.state.add_record(record)
        self._rebuild_filter_options()
        self.render()

    def update_record(self, record: Record) -> None:
        if not self.state.update_record(record):
            log.debug(f"{self.schema.name}: update for unknown record {self.state.identity_of(record)}")
        self._rebuild_filter_options()
        self.render()

    def remove_record(self, record_id: str) -> None:
        self.state.remove_record(record_id)
        self._rebuild_filter_options()
        self.render()

    # =========================================================================
    # Rendering
    # =========================================================================

    def empty_message(self) -> str:
        if self.load_failed:
            return f"Could not load {self.schema.title.lower()}. Press Refresh to try again."
        if not self.state.has_active_filters:
            return f"No {self.schema.title.lower()} found."
        term = self.state.search_term
        if term:
            return f'No results found for "{term}".'
        return "No results match the selected filters."

    def page_info(self) -> PageInfo:
        return PageInfo(
            page=self.state.current_page,
            pages=self.state.pages,
            window=self.state.page_window(),
            results=self.state.results_info(),
            page_size=self.state.page_size,
        )

    def render(self) -> None:
        rows = self.state.visible_rows()
        if rows:
            self.view.render_rows(rows)
        else:
            self.view.render_empty(self.empty_message())
        self.view.render_pagination(self.page_info())
        if self.schema.status_field:
            self.view.render_status_counts(self.state.status_counts())
