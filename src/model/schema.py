"""Resource schema descriptors.

Every manageable resource (officials, services, ordinances, ...) is the same
list/modal workflow with different field names. Instead of one list widget
and one modal per resource, the controllers take a ResourceSchema that
describes everything resource-specific:

    ResourceSchema
    ├── endpoint + Actions        which URL, which "action" values
    ├── identity_field            e.g. "serviceId"
    ├── fields: FormField...      form inputs, labels, validation rules
    ├── searchable / filterable   what the FilterEngine looks at
    └── file: FileField | None    the single optional attachment

FormField vs FileField
----------------------
- FormField: a scalar value in the record (text, textarea, select, date).
  `writable` says in which modal modes it accepts input, `auto` names a
  session/user-info key (or AUTO_TODAY) that fills it without user input.
- FileField: the one binary a modal may carry. It knows its multipart name,
  the record key holding the server path, and its MIME/size limits.

Usage:

    services = ResourceSchema(
        name="services",
        title="Services",
        endpoint="php_folder/manageService.php",
        identity_field="serviceId",
        event_noun="service",
        fields=(service_id, service_title, ...),
        searchable=("serviceTitle", "serviceDepartment"),
        filterable=("serviceDepartment",),
    )

    services.refresh_event        # "refresh-services-table"
    services.saved_event          # "service-saved"
    services.required_fields(ModalMode.EDIT)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

Record = dict[str, Any]

# Pseudo user-info key: fill with today's date when the modal opens
AUTO_TODAY = "@today"

SEARCH = "search"


class ModalMode(Enum):
    """Which kind of transaction a modal is mediating."""

    CREATE = "create"
    EDIT = "edit"
    VIEW_ONLY = "view-only"


CREATE_AND_EDIT = frozenset({ModalMode.CREATE, ModalMode.EDIT})
CREATE_ONLY = frozenset({ModalMode.CREATE})
EDIT_ONLY = frozenset({ModalMode.EDIT})
NEVER = frozenset()


@dataclass(frozen=True)
class FormField:
    """A scalar form input bound to one record key."""

    name: str
    label: str
    kind: str = "text"  # text | textarea | select | date | password
    required: bool = True
    choices: tuple[str, ...] = ()
    writable: frozenset[ModalMode] = CREATE_AND_EDIT
    auto: str | None = None
    auto_modes: frozenset[ModalMode] = CREATE_AND_EDIT
    max_length: int | None = None
    column: bool = False
    placeholder: str = ""

    def is_writable(self, mode: ModalMode) -> bool:
        return mode in self.writable

    def auto_fills(self, mode: ModalMode) -> bool:
        """Whether this field is filled from the session source in `mode`."""
        return self.auto is not None and mode in self.auto_modes

    @property
    def is_date(self) -> bool:
        return self.kind == "date"


@dataclass(frozen=True)
class FileField:
    """The single binary attachment a resource form may carry."""

    name: str  # multipart form name
    label: str
    path_key: str  # record key holding the server-side path
    mime_types: frozenset[str]
    max_bytes: int
    required_on_create: bool = False
    writable: frozenset[ModalMode] = CREATE_AND_EDIT
    # Send the current server path back with updates that carry no new upload
    resend_path: bool = False

    @property
    def max_megabytes(self) -> int:
        return self.max_bytes // (1024 * 1024)


@dataclass(frozen=True)
class Actions:
    """Values of the `action` discriminator understood by one endpoint.

    None means the endpoint does not support the operation.
    """

    fetch: str = "fetchdata"
    get: str | None = None
    next_id: str | None = "getNextID"
    create: str | None = "save"
    update: str | None = "update"
    delete: str | None = None


@dataclass(frozen=True)
class ResourceSchema:
    """Everything resource-specific about one list/modal pair."""

    name: str
    title: str
    endpoint: str
    identity_field: str
    event_noun: str
    fields: tuple[FormField, ...]
    searchable: tuple[str, ...]
    filterable: tuple[str, ...] = ()
    file: FileField | None = None
    actions: Actions = Actions()
    list_keys: tuple[str, ...] = ()
    record_keys: tuple[str, ...] = ("data",)
    id_param: str | None = None
    next_id_key: str | None = None
    id_prefix: str = ""
    status_field: str | None = None
    # (record key, form key) pairs for endpoints that read and write under different names
    aliases: tuple[tuple[str, str], ...] = ()
    json_delete: bool = False

    # =========================================================================
    # Event names
    # =========================================================================

    @property
    def refresh_event(self) -> str:
        return f"refresh-{self.name}-table"

    @property
    def saved_event(self) -> str:
        return f"{self.event_noun}-saved"

    @property
    def updated_event(self) -> str:
        return f"{self.event_noun}-updated"

    @property
    def deleted_event(self) -> str:
        return f"{self.event_noun}-deleted"

    # =========================================================================
    # Field lookups
    # =========================================================================

    def field(self, name: str) -> FormField:
        """Return the FormField called `name`.

        Raises:
            KeyError: if the schema has no such field
        """
        for f in self.fields:
            if f.name == name:
                return f
        raise KeyError(f"{self.name} has no field {name!r}")

    @property
    def tracked_fields(self) -> tuple[str, ...]:
        """Field names compared by change detection."""
        return tuple(f.name for f in self.fields)

    @property
    def user_fields(self) -> tuple[str, ...]:
        """Fields a user types into when creating (not auto-filled, not the id)."""
        return tuple(
            f.name
            for f in self.fields
            if f.auto is None
            and f.name != self.identity_field
            and f.is_writable(ModalMode.CREATE)
        )

    @property
    def date_fields(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields if f.is_date)

    @property
    def column_fields(self) -> tuple[str, ...]:
        """Table columns: identity first, then fields flagged as columns."""
        cols = [self.identity_field]
        cols += [f.name for f in self.fields if f.column and f.name != self.identity_field]
        return tuple(cols)

    @property
    def id_request_key(self) -> str:
        """Request key used to pass a record id to the endpoint."""
        return self.id_param or self.identity_field

    @property
    def collection_keys(self) -> tuple[str, ...]:
        """Envelope keys that may hold the fetched collection, in order."""
        return self.list_keys + ("data", "records")

    def canonical(self, record: Record) -> Record:
        """Copy aliased record keys onto the form keys the schema uses."""
        if not self.aliases:
            return record
        record = dict(record)
        for source, target in self.aliases:
            if source in record and target not in record:
                record[target] = record[source]
        return record

    @property
    def filter_keys(self) -> tuple[str, ...]:
        return (SEARCH,) + self.filterable

    def required_fields(self, mode: ModalMode) -> list[FormField]:
        """Required fields that must be present when submitting in `mode`."""
        return [
            f
            for f in self.fields
            if f.required
            and (f.is_writable(mode) or f.auto_fills(mode) or f.name == self.identity_field)
        ]

    def label_for(self, name: str) -> str:
        try:
            return self.field(name).label
        except KeyError:
            return name
