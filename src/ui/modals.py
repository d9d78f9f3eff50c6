"""Modal screens: the record form, confirmation prompts, and the loading overlay."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TypeVar

from textual import events, on
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, LoadingIndicator, Select, Static, TextArea

from controller.modal_controller import Preview, ResourceModalController
from controller.pacing import DEFAULT_PACING, Pacing
from gateway import DataGateway, UserInfoSource
from model.schema import FormField, ModalMode, Record
from ui.ids import css
import ui.ids as ids

log = logging.getLogger(__name__)

ResultT = TypeVar("ResultT")


class StackedModal(ModalScreen[ResultT]):
    """A modal screen that holds the app's modal-stack lock while mounted."""

    def on_mount(self) -> None:
        stack = getattr(self.app, "modal_stack", None)
        if stack is not None:
            stack.push(self)

    def on_unmount(self) -> None:
        stack = getattr(self.app, "modal_stack", None)
        if stack is not None:
            stack.pop(self)


# =============================================================================
# Confirmation
# =============================================================================


class ConfirmModal(StackedModal[bool]):
    """Yes/no prompt ("discard entries?", "sure to save?")."""

    BINDINGS = [("escape", "decline", "No")]

    def __init__(self, kind: str, title: str, message: str) -> None:
        super().__init__()
        self.kind = kind
        self.title_text = title
        self.message = message

    def compose(self) -> ComposeResult:
        with Vertical(id=ids.CONFIRM_DIALOG, classes=f"confirm-{self.kind}"):
            yield Label(self.title_text, classes="dialog-title")
            yield Static(self.message, id=ids.CONFIRM_MESSAGE)
            with Horizontal(classes="dialog-buttons"):
                yield Button("No", id=ids.CONFIRM_NO_BTN, variant="default")
                yield Button("Yes", id=ids.CONFIRM_YES_BTN, variant="primary")

    def on_mount(self) -> None:
        self.query_one(css(ids.CONFIRM_NO_BTN), Button).focus()

    def action_decline(self) -> None:
        self.dismiss(False)

    @on(Button.Pressed, css(ids.CONFIRM_NO_BTN))
    def on_no(self, event: Button.Pressed) -> None:
        event.stop()
        self.dismiss(False)

    @on(Button.Pressed, css(ids.CONFIRM_YES_BTN))
    def on_yes(self, event: Button.Pressed) -> None:
        event.stop()
        self.dismiss(True)


class ConfirmGate:
    """Asks yes/no through ConfirmModal; at most one open dialog per kind."""

    def __init__(self, app: App) -> None:
        self.app = app
        self._open: dict[str, ConfirmModal] = {}

    async def confirm(self, kind: str, title: str, message: str) -> bool:
        existing = self._open.pop(kind, None)
        if existing is not None and self.app.screen is existing:
            existing.dismiss(False)

        answer: asyncio.Future[bool] = asyncio.get_running_loop().create_future()

        def resolve(result: bool | None) -> None:
            if not answer.done():
                answer.set_result(bool(result))

        modal = ConfirmModal(kind, title, message)
        self._open[kind] = modal
        self.app.push_screen(modal, callback=resolve)
        try:
            return await answer
        finally:
            if self._open.get(kind) is modal:
                del self._open[kind]


# =============================================================================
# Loading overlay
# =============================================================================


class LoadingOverlay(StackedModal[None]):
    """Blocking spinner shown while a write is in flight."""

    def __init__(self, message: str) -> None:
        super().__init__()
        self.message = message

    def compose(self) -> ComposeResult:
        with Vertical(id=ids.LOADING_DIALOG):
            yield LoadingIndicator()
            yield Static(self.message, id=ids.LOADING_MESSAGE)


class OverlayHandle:
    """show()/hide() over a LoadingOverlay screen."""

    def __init__(self, app: App) -> None:
        self.app = app
        self._screen: LoadingOverlay | None = None

    def show(self, message: str) -> None:
        self.hide()
        self._screen = LoadingOverlay(message)
        self.app.push_screen(self._screen)

    def hide(self) -> None:
        screen, self._screen = self._screen, None
        if screen is not None and self.app.screen is screen:
            self.app.pop_screen()


# =============================================================================
# Record modal
# =============================================================================


@dataclass(frozen=True)
class ModalRequest:
    """How a ResourceModal should open."""

    mode: ModalMode
    record_id: str | None = None
    record: Record | None = None

    @classmethod
    def create(cls) -> ModalRequest:
        return cls(ModalMode.CREATE)


class ResourceModal(StackedModal[bool]):
    """Create/edit/view form for one record of any resource.

    The screen is a thin ModalView; ResourceModalController does the work.
    Dismisses with True once a write succeeded, False otherwise.
    """

    BINDINGS = [("escape", "close", "Close")]

    def __init__(
        self,
        gateway: DataGateway,
        request: ModalRequest,
        user_info: UserInfoSource | None = None,
        pacing: Pacing = DEFAULT_PACING,
    ) -> None:
        super().__init__()
        self.gateway = gateway
        self.schema = gateway.schema
        self.request = request
        self.user_info = user_info
        self.pacing = pacing
        self.controller: ResourceModalController | None = None
        self._read_only = request.mode is ModalMode.VIEW_ONLY

    def compose(self) -> ComposeResult:
        verb = {ModalMode.CREATE: "Add", ModalMode.EDIT: "Edit", ModalMode.VIEW_ONLY: "View"}
        title = f"{verb[self.request.mode]} {self.schema.event_noun.capitalize()}"
        with Vertical(id=ids.RECORD_MODAL):
            with Horizontal(classes="modal-header"):
                yield Label(title, id=ids.MODAL_TITLE)
                yield Button("x", id=ids.CLOSE_BTN, classes="close-x")
            with VerticalScroll(id=ids.MODAL_FORM):
                for f in self.schema.fields:
                    yield Label(f"{f.label}{' *' if f.required else ''}", classes="field-label")
                    yield self._field_widget(f)
                if self.schema.file is not None:
                    yield Label(self.schema.file.label, classes="field-label")
                    with Horizontal(classes="file-row"):
                        yield Input(placeholder="Path to file...", id=ids.FILE_INPUT)
                        yield Button("Attach", id=ids.ATTACH_BTN, variant="primary")
                        yield Button("Remove", id=ids.REMOVE_FILE_BTN)
                    yield Static("No file attached", id=ids.FILE_PREVIEW)
            yield Static("", id=ids.MODAL_ERROR)
            with Horizontal(id=ids.MODAL_BUTTONS):
                yield Button("Cancel", id=ids.CANCEL_BTN)
                yield Button("Save", id=ids.SAVE_BTN, variant="success", disabled=True)

    def _field_widget(self, f: FormField) -> Input | TextArea | Select:
        disabled = not self._field_writable(f)
        if f.kind == "textarea":
            return TextArea(id=ids.field_id(f.name), disabled=disabled)
        if f.kind == "select":
            return Select(
                [(choice, choice) for choice in f.choices],
                prompt=f"Select {f.label}",
                id=ids.field_id(f.name),
                disabled=disabled,
            )
        placeholder = f.placeholder or ("YYYY-MM-DD" if f.is_date else "")
        return Input(
            placeholder=placeholder,
            max_length=f.max_length or 0,
            password=f.kind == "password",
            id=ids.field_id(f.name),
            disabled=disabled,
        )

    def _field_writable(self, f: FormField) -> bool:
        return not self._read_only and f.is_writable(self.request.mode)

    def on_mount(self) -> None:
        self.query_one(css(ids.MODAL_ERROR), Static).display = False
        self.controller = ResourceModalController(
            self.gateway,
            view=self,
            gate=ConfirmGate(self.app),
            overlay=OverlayHandle(self.app),
            emit=self.app.post_message,
            acknowledge=self.app.notify,
            dispose=lambda: self.dismiss(True),
            user_info=self.user_info,
            pacing=self.pacing,
        )
        self.run_worker(self._open(), group="modal")

    async def _open(self) -> None:
        request = self.request
        if request.mode is ModalMode.CREATE:
            await self.controller.open_create()
        elif request.record is not None:
            await self.controller.open_with_data(
                request.record, view_only=request.mode is ModalMode.VIEW_ONLY
            )
        else:
            await self.controller.open_record(
                request.record_id or "", view_only=request.mode is ModalMode.VIEW_ONLY
            )

    # =========================================================================
    # ModalView
    # =========================================================================

    def show(self) -> None:
        self.query_one(css(ids.RECORD_MODAL)).display = True

    def hide(self) -> None:
        self.query_one(css(ids.RECORD_MODAL)).display = False

    def populate(self, values: dict[str, str]) -> None:
        for name, value in values.items():
            widget = self.query_one(css(ids.field_id(name)))
            if isinstance(widget, TextArea):
                widget.load_text(value)
            elif isinstance(widget, Select):
                if value in self.schema.field(name).choices:
                    widget.value = value
                    continue
                if value:
                    log.debug(f"{self.schema.name}: {name}={value!r} is not a known choice")
                # Blanking an unknown server value is not a user edit
                with widget.prevent(Select.Changed):
                    widget.clear()
            else:
                widget.value = value

    def set_save_enabled(self, enabled: bool) -> None:
        self.query_one(css(ids.SAVE_BTN), Button).disabled = not enabled

    def set_read_only(self, read_only: bool) -> None:
        self._read_only = read_only
        for f in self.schema.fields:
            self.query_one(css(ids.field_id(f.name))).disabled = not self._field_writable(f)
        if self.schema.file is not None:
            for widget_id in (ids.FILE_INPUT, ids.ATTACH_BTN, ids.REMOVE_FILE_BTN):
                self.query_one(css(widget_id)).disabled = read_only
        self.query_one(css(ids.SAVE_BTN), Button).display = not read_only
        self.query_one(css(ids.CANCEL_BTN), Button).label = "Close" if read_only else "Cancel"

    def show_error(self, message: str) -> None:
        error = self.query_one(css(ids.MODAL_ERROR), Static)
        error.update(message)
        error.display = True

    def clear_error(self) -> None:
        error = self.query_one(css(ids.MODAL_ERROR), Static)
        error.update("")
        error.display = False

    def show_preview(self, preview: Preview | None) -> None:
        if self.schema.file is None:
            return
        label = self.query_one(css(ids.FILE_PREVIEW), Static)
        if preview is None:
            label.update("No file attached")
        else:
            origin = "New file" if preview.local else "Current file"
            label.update(f"{origin}: {preview.name} ({preview.mime_type or 'unknown'})\n{preview.token}")

    def clear_file_input(self) -> None:
        self.query_one(css(ids.FILE_INPUT), Input).value = ""

    def focus_first_editable(self) -> None:
        for f in self.schema.fields:
            widget = self.query_one(css(ids.field_id(f.name)))
            if not widget.disabled:
                widget.focus()
                return
        self.query_one(css(ids.CANCEL_BTN), Button).focus()

    # =========================================================================
    # Events
    # =========================================================================

    def _field_name(self, widget_id: str | None) -> str | None:
        prefix = ids.field_id("")
        if widget_id and widget_id.startswith(prefix):
            return widget_id[len(prefix):]
        return None

    @on(Input.Changed)
    def on_field_input(self, event: Input.Changed) -> None:
        name = self._field_name(event.input.id)
        if name and self.controller:
            self.controller.set_field(name, event.value)

    @on(TextArea.Changed)
    def on_field_text(self, event: TextArea.Changed) -> None:
        name = self._field_name(event.text_area.id)
        if name and self.controller:
            self.controller.set_field(name, event.text_area.text)

    @on(Select.Changed)
    def on_field_select(self, event: Select.Changed) -> None:
        name = self._field_name(event.select.id)
        if name and self.controller:
            value = event.value if isinstance(event.value, str) else ""
            self.controller.set_field(name, value)

    @on(Button.Pressed, css(ids.SAVE_BTN))
    def on_save(self, event: Button.Pressed) -> None:
        event.stop()
        self.run_worker(self.controller.submit(), group="modal")

    @on(Button.Pressed, f"{css(ids.CANCEL_BTN)}, {css(ids.CLOSE_BTN)}")
    def on_cancel(self, event: Button.Pressed) -> None:
        event.stop()
        self.action_close()

    @on(Button.Pressed, css(ids.ATTACH_BTN))
    def on_attach(self, event: Button.Pressed) -> None:
        event.stop()
        self._attach_from_input()

    @on(Input.Submitted, css(ids.FILE_INPUT))
    def on_file_submitted(self, event: Input.Submitted) -> None:
        self._attach_from_input()

    @on(Button.Pressed, css(ids.REMOVE_FILE_BTN))
    def on_remove_file(self, event: Button.Pressed) -> None:
        event.stop()
        self.controller.remove_file()

    def _attach_from_input(self) -> None:
        value = self.query_one(css(ids.FILE_INPUT), Input).value.strip()
        if value:
            self.controller.attach_file(Path(value).expanduser())

    def on_click(self, event: events.Click) -> None:
        # Click on the dimmed backdrop, outside the dialog
        widget, _ = self.get_widget_at(event.screen_x, event.screen_y)
        if widget is self:
            self.action_close()

    def action_close(self) -> None:
        if self.controller is not None:
            self.run_worker(self.controller.request_close(), group="modal")
