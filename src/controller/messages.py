"""Typed event bus: the only channel between list views and record modals.

Each message keeps the browser-era event name in `event_name` so logs and
tests can refer to "refresh-services-table" and friends. Messages bubble;
the app routes them to the list view whose resource matches.
"""

from __future__ import annotations

from typing import Any

from textual.message import Message

from model.schema import Record, ResourceSchema


class ResourceMessage(Message):
    """Base for messages addressed to one resource's list."""

    def __init__(self, resource: str) -> None:
        super().__init__()
        self.resource = resource

    @property
    def event_name(self) -> str:
        raise NotImplementedError


class RefreshTable(ResourceMessage):
    """Ask the list to re-fetch its collection."""

    @property
    def event_name(self) -> str:
        return f"refresh-{self.resource}-table"


class RecordSaved(ResourceMessage):
    """A create was acknowledged by the server."""

    def __init__(self, resource: str, event_noun: str, record: Record) -> None:
        super().__init__(resource)
        self.event_noun = event_noun
        self.record = record

    @property
    def event_name(self) -> str:
        return f"{self.event_noun}-saved"


class RecordUpdated(ResourceMessage):
    """An edit was acknowledged by the server."""

    def __init__(self, resource: str, event_noun: str, record: Record) -> None:
        super().__init__(resource)
        self.event_noun = event_noun
        self.record = record

    @property
    def event_name(self) -> str:
        return f"{self.event_noun}-updated"


class RecordDeleted(ResourceMessage):
    def __init__(self, resource: str, event_noun: str, record_id: str) -> None:
        super().__init__(resource)
        self.event_noun = event_noun
        self.record_id = record_id

    @property
    def event_name(self) -> str:
        return f"{self.event_noun}-deleted"


class NavigateTo(Message):
    """Switch the console to another view, optionally opening a record."""

    event_name = "navigate-to"

    def __init__(
        self, view: str, title: str = "", component: str = "", data: dict[str, Any] | None = None
    ) -> None:
        super().__init__()
        self.view = view
        self.title = title
        self.component = component
        self.data = data or {}


def refresh_for(schema: ResourceSchema) -> RefreshTable:
    return RefreshTable(schema.name)


def saved_for(schema: ResourceSchema, record: Record) -> RecordSaved:
    return RecordSaved(schema.name, schema.event_noun, record)


def updated_for(schema: ResourceSchema, record: Record) -> RecordUpdated:
    return RecordUpdated(schema.name, schema.event_noun, record)


def deleted_for(schema: ResourceSchema, record_id: str) -> RecordDeleted:
    return RecordDeleted(schema.name, schema.event_noun, record_id)
