"""Main TUI application for civic-console."""

import logging
import os
from pathlib import Path

import httpx
from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.css.query import NoMatches
from textual.widgets import Footer, Static, TabbedContent

from config import ConsoleConfig
from constants import APP_NAME, APP_VERSION
from controller import (
    ModalStack,
    NavigateTo,
    RecordDeleted,
    RecordSaved,
    RecordUpdated,
    RefreshTable,
)
from controller.routing import ResourceEventsMixin
from controller.pacing import DEFAULT_PACING, Pacing
from gateway import DataGateway, UserInfoSource
from model.resources import REGISTRY
from ui import ResourceListView, compose_dashboard_tab, compose_resource_tab
from ui.ids import css
import ui.ids as ids


# Set up logging to XDG state directory
def _get_log_path() -> Path:
    """Get the log file path using XDG Base Directory spec."""
    xdg_state = os.environ.get("XDG_STATE_HOME", str(Path.home() / ".local" / "state"))
    log_dir = Path(xdg_state) / APP_NAME
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir / f"{APP_NAME}.log"

logging.basicConfig(
    filename=str(_get_log_path()),
    level=logging.DEBUG,
    format="%(asctime)s - %(levelname)s - %(message)s",
)
log = logging.getLogger(__name__)

APP_CSS = (Path(__file__).parent / "ui" / "styles.css").read_text()


class CivicConsole(ResourceEventsMixin, App):
    """TUI for managing a municipal office's public records."""

    TITLE = "Civic Console"
    ENABLE_COMMAND_PALETTE = False
    CSS = APP_CSS

    BINDINGS = [
        Binding("ctrl+r", "refresh", "Refresh", show=True),
        Binding("ctrl+n", "add_record", "Add", show=True),
        Binding("ctrl+q", "quit", "Quit", show=True),
    ]

    def __init__(
        self,
        settings: ConsoleConfig | None = None,
        initial_resource: str | None = None,
        client: httpx.AsyncClient | None = None,
        pacing: Pacing = DEFAULT_PACING,
    ) -> None:
        super().__init__()
        self.settings = settings or ConsoleConfig()
        self.initial_resource = initial_resource
        self.pacing = pacing
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            timeout=self.settings.timeout, verify=self.settings.verify_tls
        )
        self.modal_stack = ModalStack(on_change=self._set_scroll_lock)
        self.user_info = UserInfoSource(
            self.client,
            self.settings.base_url,
            self.settings.user_info_path,
            timeout=self.settings.timeout,
        )
        self.gateways = {
            name: DataGateway(
                schema,
                self.client,
                self.settings.base_url,
                endpoint=self.settings.endpoint_for(name),
                timeout=self.settings.timeout,
            )
            for name, schema in REGISTRY.items()
        }

    def compose(self) -> ComposeResult:
        log.info(f"compose() called, backend {self.settings.base_url}")
        yield Static(f"{self.TITLE} v{APP_VERSION}  |  {self.settings.base_url}", id=ids.HEADER_TITLE)
        initial = ids.tab_id(self.initial_resource or ids.DASHBOARD)
        with TabbedContent(id=ids.MAIN_TABS, initial=initial):
            yield from compose_dashboard_tab(list(REGISTRY.values()))
            for gateway in self.gateways.values():
                yield from compose_resource_tab(
                    gateway, self.user_info, self.settings.page_size, self.pacing
                )
        yield Footer()

    async def on_unmount(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    # =========================================================================
    # Mixin Handler Forwarding
    # =========================================================================
    # Textual's @on decorator only registers handlers defined on the class itself,
    # not on mixins. These forwarding handlers route bus messages to the mixin.

    @on(RefreshTable)
    def _forward_refresh(self, message: RefreshTable) -> None:
        self.route_refresh(message)

    @on(RecordSaved)
    def _forward_saved(self, message: RecordSaved) -> None:
        self.route_saved(message)

    @on(RecordUpdated)
    def _forward_updated(self, message: RecordUpdated) -> None:
        self.route_updated(message)

    @on(RecordDeleted)
    def _forward_deleted(self, message: RecordDeleted) -> None:
        self.route_deleted(message)

    @on(NavigateTo)
    def _forward_navigate(self, message: NavigateTo) -> None:
        self.route_navigate(message)

    @on(ResourceListView.Loaded)
    def _forward_loaded(self, message: ResourceListView.Loaded) -> None:
        self.route_loaded(message)

    # =========================================================================
    # Actions
    # =========================================================================

    def _set_scroll_lock(self, locked: bool) -> None:
        """Freeze the main screen's scrolling while any modal is open."""
        if self.screen_stack:
            self.screen_stack[0].set_class(locked, "-scroll-locked")

    def _active_resource(self) -> str | None:
        try:
            active = self.query_one(css(ids.MAIN_TABS), TabbedContent).active
        except NoMatches:
            return None
        resource = active.removeprefix(ids.tab_id(""))
        return resource if resource in self.gateways else None

    def action_refresh(self) -> None:
        resource = self._active_resource()
        view = self.list_view(resource) if resource else None
        if view is not None:
            view.reload()

    def action_add_record(self) -> None:
        resource = self._active_resource()
        view = self.list_view(resource) if resource else None
        if view is not None and view.schema.actions.create:
            view.open_create()
