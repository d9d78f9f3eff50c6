"""Pagination widget: PaginationBar."""

from __future__ import annotations

from textual import on
from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.message import Message
from textual.widgets import Button, Static

from controller.list_controller import PageInfo
from ui.ids import css
import ui.ids as ids


class PaginationBar(Horizontal):
    """Prev / windowed page numbers / next, plus the "1-10 of 42" label."""

    class PageSelected(Message):
        def __init__(self, page: int) -> None:
            super().__init__()
            self.page = page

    def __init__(self, id: str | None = None) -> None:
        super().__init__(id=id)
        self.info: PageInfo | None = None

    def compose(self) -> ComposeResult:
        yield Button("‹ Prev", id=ids.PREV_PAGE_BTN, disabled=True)
        yield Horizontal(id=ids.PAGE_BUTTONS)
        yield Button("Next ›", id=ids.NEXT_PAGE_BTN, disabled=True)
        yield Static("1-0 of 0", id=ids.RESULTS_INFO)

    def update_info(self, info: PageInfo) -> None:
        self.info = info
        self.query_one(css(ids.PREV_PAGE_BTN), Button).disabled = not info.has_previous
        self.query_one(css(ids.NEXT_PAGE_BTN), Button).disabled = not info.has_next
        self.query_one(css(ids.RESULTS_INFO), Static).update(info.results)

        buttons = self.query_one(css(ids.PAGE_BUTTONS), Horizontal)
        buttons.remove_children()
        widgets = []
        for page in info.window:
            if page is None:
                widgets.append(Static("…", classes="page-ellipsis"))
                continue
            button = Button(str(page), name=str(page), classes="page-btn")
            if page == info.page:
                button.add_class("-current")
            widgets.append(button)
        buttons.mount(*widgets)

    @on(Button.Pressed, css(ids.PREV_PAGE_BTN))
    def on_prev(self, event: Button.Pressed) -> None:
        event.stop()
        if self.info is not None:
            self.post_message(self.PageSelected(self.info.page - 1))

    @on(Button.Pressed, css(ids.NEXT_PAGE_BTN))
    def on_next(self, event: Button.Pressed) -> None:
        event.stop()
        if self.info is not None:
            self.post_message(self.PageSelected(self.info.page + 1))

    @on(Button.Pressed, ".page-btn")
    def on_page(self, event: Button.Pressed) -> None:
        event.stop()
        self.post_message(self.PageSelected(int(event.button.name)))
