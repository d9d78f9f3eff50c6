"""ModalState: one record's create/edit lifecycle.

State machine (phases):

    CLOSED ─► POPULATING ─► EDITABLE ─┬─► CLOSED            (no changes / discard)
                                      └─► CONFIRMING ─┬─► EDITABLE   (declined)
                                                      ├─► CLOSED     (discard confirmed)
                                                      └─► SUBMITTING ─┬─► CLOSED    (success)
                                                                      └─► EDITABLE  (recovery)

CLOSED is both the initial and the terminal phase; once a modal has been
closed from any other phase it is disposed and cannot be reopened.
"""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path, PurePosixPath

from model.filtering import normalize
from model.schema import ModalMode, Record, ResourceSchema


class InvalidTransition(Exception):
    """Raised when the modal state machine is asked for a move it does not allow."""


class ReadOnlyField(Exception):
    """Raised when a field is written in a mode where it is not writable."""


class ModalPhase(Enum):
    CLOSED = "closed"
    POPULATING = "populating"
    EDITABLE = "editable"
    CONFIRMING = "confirming"
    SUBMITTING = "submitting"


ALLOWED_TRANSITIONS: dict[ModalPhase, frozenset[ModalPhase]] = {
    ModalPhase.CLOSED: frozenset({ModalPhase.POPULATING}),
    ModalPhase.POPULATING: frozenset({ModalPhase.EDITABLE, ModalPhase.CLOSED}),
    ModalPhase.EDITABLE: frozenset({ModalPhase.CONFIRMING, ModalPhase.CLOSED}),
    ModalPhase.CONFIRMING: frozenset(
        {ModalPhase.EDITABLE, ModalPhase.SUBMITTING, ModalPhase.CLOSED}
    ),
    ModalPhase.SUBMITTING: frozenset({ModalPhase.EDITABLE, ModalPhase.CLOSED}),
}


@dataclass(frozen=True)
class FileRef:
    """A binary attachment: either a local file the user picked or a server asset."""

    name: str
    mime_type: str = ""
    size: int = 0
    path: Path | None = None
    server_path: str | None = None

    @property
    def is_local(self) -> bool:
        return self.path is not None

    @classmethod
    def from_path(cls, path: Path) -> FileRef:
        """Describe a local file. Raises OSError if it cannot be stat'ed."""
        mime_type, _ = mimetypes.guess_type(path.name)
        return cls(
            name=path.name,
            mime_type=mime_type or "application/octet-stream",
            size=path.stat().st_size,
            path=path,
        )

    @classmethod
    def remote(cls, server_path: str) -> FileRef:
        name = PurePosixPath(server_path.replace("\\", "/")).name or server_path
        mime_type, _ = mimetypes.guess_type(name)
        return cls(name=name, mime_type=mime_type or "", server_path=server_path)


@dataclass
class RecoverySnapshot:
    """Draft + attachment saved before submit, so a failure can reopen intact."""

    draft: dict[str, str]
    file: FileRef | None
    error_message: str | None = None


@dataclass
class ModalState:
    schema: ResourceSchema
    mode: ModalMode
    original: Record | None = None
    draft: dict[str, str] = field(default_factory=dict)
    baseline: dict[str, str] = field(default_factory=dict)
    pending_file: FileRef | None = None
    existing_file: FileRef | None = None
    recovery: RecoverySnapshot | None = None
    phase: ModalPhase = ModalPhase.CLOSED
    disposed: bool = False

    # =========================================================================
    # Phase machine
    # =========================================================================

    def transition(self, phase: ModalPhase) -> None:
        if self.disposed:
            raise InvalidTransition(f"Modal already disposed (asked for {phase.value})")
        if phase not in ALLOWED_TRANSITIONS[self.phase]:
            raise InvalidTransition(f"{self.phase.value} -> {phase.value} is not allowed")
        self.phase = phase
        if phase is ModalPhase.CLOSED:
            self.disposed = True

    # =========================================================================
    # Population
    # =========================================================================

    def load(self, record: Record | None) -> None:
        """Fill draft and baseline from `record` (None for a blank create form)."""
        self.original = dict(record) if record is not None else None
        source = record or {}
        self.draft = {name: normalize(source.get(name)) for name in self.schema.tracked_fields}
        self.baseline = dict(self.draft)
        self.pending_file = None
        self.existing_file = None
        if self.schema.file and record is not None:
            server_path = normalize(record.get(self.schema.file.path_key))
            if server_path:
                self.existing_file = FileRef.remote(server_path)

    def merge_auxiliary(self, values: dict[str, str]) -> list[str]:
        """Fill empty fields from a session source without counting them as changes.

        Returns the names of the fields that were filled.
        """
        filled = []
        if self.mode is ModalMode.VIEW_ONLY:
            return filled
        for name, value in values.items():
            if name not in self.draft or self.draft[name]:
                continue
            self.draft[name] = normalize(value)
            self.baseline[name] = self.draft[name]
            filled.append(name)
        return filled

    # =========================================================================
    # Editing
    # =========================================================================

    def is_writable(self, name: str) -> bool:
        if self.mode is ModalMode.VIEW_ONLY:
            return False
        return self.schema.field(name).is_writable(self.mode)

    def can_attach(self) -> bool:
        file_field = self.schema.file
        return (
            file_field is not None
            and self.mode is not ModalMode.VIEW_ONLY
            and self.mode in file_field.writable
        )

    def set_value(self, name: str, value: str) -> None:
        if not self.is_writable(name):
            raise ReadOnlyField(f"{name} is not writable in {self.mode.value} mode")
        self.draft[name] = value

    def stage_file(self, ref: FileRef) -> FileRef | None:
        """Stage `ref` as the pending attachment; returns the one it replaced."""
        previous, self.pending_file = self.pending_file, ref
        return previous

    def clear_file(self) -> FileRef | None:
        previous, self.pending_file = self.pending_file, None
        return previous

    # =========================================================================
    # Change detection
    # =========================================================================

    def changed_fields(self) -> list[str]:
        return [
            name
            for name in self.schema.tracked_fields
            if normalize(self.draft.get(name)) != self.baseline.get(name, "")
        ]

    def has_changes(self) -> bool:
        return bool(self.changed_fields()) or self.pending_file is not None

    def has_user_input(self) -> bool:
        """Whether a create form holds anything the user typed or attached."""
        if self.pending_file is not None:
            return True
        return any(normalize(self.draft.get(name)) for name in self.schema.user_fields)

    def is_dirty(self) -> bool:
        """Whether closing now would lose something."""
        if self.mode is ModalMode.VIEW_ONLY:
            return False
        if self.mode is ModalMode.CREATE:
            return self.has_user_input()
        return self.has_changes()

    def can_save(self) -> bool:
        if self.mode is ModalMode.VIEW_ONLY or self.phase is not ModalPhase.EDITABLE:
            return False
        if self.mode is ModalMode.CREATE:
            return True
        return self.has_changes()

    # =========================================================================
    # Recovery
    # =========================================================================

    def snapshot(self) -> RecoverySnapshot:
        self.recovery = RecoverySnapshot(draft=dict(self.draft), file=self.pending_file)
        return self.recovery

    def restore(self, error_message: str) -> RecoverySnapshot:
        """Put the pre-submit draft back and record why the submit failed."""
        if self.recovery is None:
            raise InvalidTransition("No recovery snapshot to restore")
        self.draft = dict(self.recovery.draft)
        self.pending_file = self.recovery.file
        self.recovery.error_message = error_message
        return self.recovery

    def reset(self) -> None:
        """Drop the draft back to the loaded record (or blank, in create mode)."""
        self.draft = dict(self.baseline)
        self.pending_file = None
