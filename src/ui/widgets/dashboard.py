"""Dashboard widgets: ResourceCard, DashboardPanel."""

from __future__ import annotations

from textual import on
from textual.app import ComposeResult
from textual.containers import Container, Grid, Vertical
from textual.widgets import Button, Label, Static

from controller.messages import NavigateTo
from model.schema import ResourceSchema


class ResourceCard(Container):
    """Record count for one resource plus a button that navigates to its tab."""

    def __init__(self, schema: ResourceSchema) -> None:
        super().__init__(id=f"card-{schema.name}", classes="resource-card")
        self.schema = schema

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Label(self.schema.title, classes="card-title")
            yield Static("…", classes="card-count")
            yield Button("Manage", classes="card-btn", variant="primary")

    def set_count(self, total: int) -> None:
        self.query_one(".card-count", Static).update(str(total))

    @on(Button.Pressed, ".card-btn")
    def on_manage_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.post_message(
            NavigateTo(self.schema.name, title=self.schema.title, component="ResourceListView")
        )


class DashboardPanel(Container):
    """Overview of every resource; counts arrive as list views finish loading."""

    def __init__(self, schemas: list[ResourceSchema], id: str | None = None) -> None:
        super().__init__(id=id)
        self.schemas = schemas

    def compose(self) -> ComposeResult:
        yield Label("Overview", classes="section-label")
        with Grid(classes="card-grid"):
            for schema in self.schemas:
                yield ResourceCard(schema)

    def set_count(self, resource: str, total: int) -> None:
        for card in self.query(ResourceCard):
            if card.schema.name == resource:
                card.set_count(total)
