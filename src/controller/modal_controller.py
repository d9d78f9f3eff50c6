"""ResourceModalController: one create/edit transaction that never loses input.

Flow:
    open_*()  -> POPULATING: fetch record / next id, fill the form
              -> EDITABLE:   user edits, Save gated by change detection
    request_close() with changes -> CONFIRMING ("discard entries?")
    submit()  -> validation -> CONFIRMING ("sure to save?")
              -> SUBMITTING: snapshot draft, hide form, show overlay, write
              -> success: emit messages, acknowledge, dispose
              -> failure: restore snapshot, show form + error, EDITABLE again

The controller owns no widgets. It drives a ModalView, asks a
ConfirmationGate yes/no questions, and shows a TransientOverlay while the
write is in flight.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Protocol

from textual.message import Message

from controller.messages import refresh_for, saved_for, updated_for
from controller.pacing import DEFAULT_PACING, Pacing, pause
from controller.validators import (
    ValidationError,
    check_lengths,
    require_fields,
    to_server_timestamp,
    validate_file,
)
from gateway import DataGateway, GatewayError, UserInfoSource, resolve_url
from model.modal_state import FileRef, ModalPhase, ModalState, ReadOnlyField
from model.schema import AUTO_TODAY, ModalMode, Record

log = logging.getLogger(__name__)

CONFIRM_CANCEL = "cancel"
CONFIRM_SAVE = "save"


@dataclass(frozen=True)
class Preview:
    """Something the modal can show for an attachment."""

    token: str
    name: str
    mime_type: str
    local: bool


class PreviewCache:
    """Issues preview tokens for staged files and revokes superseded ones.

    At most one local token is live at a time; server assets need no
    revocation and are resolved against the base URL.
    """

    def __init__(self, base_url: str) -> None:
        self.base_url = base_url
        self.active: Preview | None = None
        self.revoked: list[str] = []

    def for_local(self, ref: FileRef) -> Preview:
        token = Path(ref.path).resolve().as_uri()
        if self.active is not None and self.active.token == token:
            return self.active
        self.revoke()
        self.active = Preview(token, ref.name, ref.mime_type, local=True)
        return self.active

    def for_server(self, ref: FileRef) -> Preview:
        return Preview(
            resolve_url(self.base_url, ref.server_path or ref.name),
            ref.name,
            ref.mime_type,
            local=False,
        )

    def revoke(self) -> None:
        if self.active is not None:
            self.revoked.append(self.active.token)
            self.active = None


class ModalView(Protocol):
    def show(self) -> None: ...

    def hide(self) -> None: ...

    def populate(self, values: dict[str, str]) -> None: ...

    def set_save_enabled(self, enabled: bool) -> None: ...

    def set_read_only(self, read_only: bool) -> None: ...

    def show_error(self, message: str) -> None: ...

    def clear_error(self) -> None: ...

    def show_preview(self, preview: Preview | None) -> None: ...

    def clear_file_input(self) -> None: ...

    def focus_first_editable(self) -> None: ...


class ConfirmationGate(Protocol):
    async def confirm(self, kind: str, title: str, message: str) -> bool: ...


class TransientOverlay(Protocol):
    def show(self, message: str) -> None: ...

    def hide(self) -> None: ...


class ResourceModalController:
    """Mediates one record's create/edit/view transaction."""

    def __init__(
        self,
        gateway: DataGateway,
        view: ModalView,
        gate: ConfirmationGate,
        overlay: TransientOverlay,
        emit: Callable[[Message], object],
        acknowledge: Callable[[str], object],
        dispose: Callable[[], object],
        user_info: UserInfoSource | None = None,
        pacing: Pacing = DEFAULT_PACING,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.gateway = gateway
        self.schema = gateway.schema
        self.view = view
        self.gate = gate
        self.overlay = overlay
        self.emit = emit
        self.acknowledge = acknowledge
        self.dispose = dispose
        self.user_info = user_info
        self.pacing = pacing
        self.clock = clock
        self.previews = PreviewCache(gateway.base_url)
        self.state: ModalState | None = None
        self._aux_task: asyncio.Task | None = None

    @property
    def phase(self) -> ModalPhase:
        return self.state.phase if self.state else ModalPhase.CLOSED

    @property
    def noun(self) -> str:
        return self.schema.event_noun.capitalize()

    # =========================================================================
    # Opening
    # =========================================================================

    async def open_create(self) -> None:
        await self._open(ModalMode.CREATE, None)

    async def open_record(self, record_id: str, view_only: bool = False) -> None:
        """Open pre-bound to a server record, fetching it first."""
        await self._open(ModalMode.VIEW_ONLY if view_only else ModalMode.EDIT, None, record_id)

    async def open_with_data(self, record: Record, view_only: bool = False) -> None:
        """Open with caller-supplied data, skipping the fetch."""
        mode = ModalMode.VIEW_ONLY if view_only else ModalMode.EDIT
        await self._open(mode, self.schema.canonical(record))

    async def _open(
        self, mode: ModalMode, record: Record | None, record_id: str | None = None
    ) -> None:
        state = self.state = ModalState(self.schema, mode)
        state.transition(ModalPhase.POPULATING)
        self.view.show()
        self.view.set_read_only(mode is ModalMode.VIEW_ONLY)

        if record_id is not None:
            try:
                record = await self.gateway.get_by_id(record_id)
            except GatewayError as e:
                log.error(f"{self.schema.name}: could not fetch {record_id}: {e}")
                # Nothing trustworthy to edit; fall back to a read-only form
                state.mode = ModalMode.VIEW_ONLY
                self.view.set_read_only(True)
                self.view.show_error(f"Failed to load {self.noun.lower()}. {e.user_message}")
        state.load(record)

        if mode is ModalMode.CREATE and self.schema.actions.next_id:
            await self._assign_next_id(state)

        self.view.populate(dict(state.draft))
        if state.existing_file is not None:
            self.view.show_preview(self.previews.for_server(state.existing_file))
        state.transition(ModalPhase.EDITABLE)
        self._update_save()
        self.view.focus_first_editable()

        if any(f.auto_fills(state.mode) for f in self.schema.fields):
            self._aux_task = asyncio.get_running_loop().create_task(self._fill_auxiliary(state))

    async def _assign_next_id(self, state: ModalState) -> None:
        label = self.schema.label_for(self.schema.identity_field)
        try:
            new_id = await self.gateway.next_id()
        except GatewayError as e:
            log.error(f"{self.schema.name}: next id failed: {e}")
            if not self.schema.id_prefix:
                self.view.show_error(f"Failed to load {label}.")
                return
            millis = str(int(self.clock().timestamp() * 1000))
            new_id = f"{self.schema.id_prefix}-{millis[-6:]}"
            self.view.show_error(f"Could not get {label} from server. Using temporary ID.")
        state.merge_auxiliary({self.schema.identity_field: new_id})

    async def _fill_auxiliary(self, state: ModalState) -> None:
        """Merge session-owned values (operator id, department, today) into the form."""
        await pause(self.pacing.aux_fill)
        fields = [f for f in self.schema.fields if f.auto_fills(state.mode)]
        info: dict[str, str] = {}
        if self.user_info is not None and any(f.auto != AUTO_TODAY for f in fields):
            try:
                info = await self.user_info.fetch()
            except GatewayError as e:
                log.warning(f"user info unavailable: {e}")
        values = {}
        for f in fields:
            if f.auto == AUTO_TODAY:
                values[f.name] = self.clock().strftime("%Y-%m-%d")
            elif f.auto in info:
                values[f.name] = info[f.auto]
        if state is not self.state or state.disposed:
            return
        filled = state.merge_auxiliary(values)
        if filled:
            log.debug(f"{self.schema.name}: auto-filled {filled}")
            self.view.populate({name: state.draft[name] for name in filled})
        self._update_save()

    async def wait_for_auxiliary(self) -> None:
        if self._aux_task is not None and not self._aux_task.done():
            await self._aux_task

    # =========================================================================
    # Editing
    # =========================================================================

    def set_field(self, name: str, value: str) -> None:
        """Record user input. Echoes of the current value are ignored."""
        state = self.state
        if state is None or state.phase is not ModalPhase.EDITABLE:
            return
        if state.draft.get(name) == value:
            return
        state.set_value(name, value)
        self._update_save()

    def attach_file(self, path: Path) -> bool:
        """Validate and stage a picked file.

        Returns:
            True if the file was staged; False if it was rejected (the error
            is shown and the rest of the draft is untouched)
        """
        state = self.state
        if state is None or state.phase is not ModalPhase.EDITABLE:
            return False
        if not state.can_attach():
            raise ReadOnlyField(f"{self.schema.name} takes no attachment in {state.mode.value} mode")
        try:
            validate_file(path, self.schema.file)
        except ValidationError as e:
            log.info(f"{self.schema.name}: rejected {path}: {e}")
            self.view.clear_file_input()
            self.view.show_error(str(e))
            return False
        ref = FileRef.from_path(path)
        state.stage_file(ref)
        self.view.clear_error()
        self.view.show_preview(self.previews.for_local(ref))
        self._update_save()
        return True

    def remove_file(self) -> None:
        state = self.state
        if state is None or state.phase is not ModalPhase.EDITABLE:
            return
        state.clear_file()
        self.previews.revoke()
        self.view.clear_file_input()
        self._show_current_preview()
        self._update_save()

    def _show_current_preview(self) -> None:
        state = self.state
        if state.pending_file is not None:
            self.view.show_preview(self.previews.for_local(state.pending_file))
        elif state.existing_file is not None:
            self.view.show_preview(self.previews.for_server(state.existing_file))
        else:
            self.view.show_preview(None)

    def _update_save(self) -> None:
        if self.state is not None:
            self.view.set_save_enabled(self.state.can_save())

    # =========================================================================
    # Closing
    # =========================================================================

    async def request_close(self) -> bool:
        """Cancel, close button, backdrop and Escape all land here.

        Returns:
            True if the modal closed
        """
        state = self.state
        if state is None or state.phase is not ModalPhase.EDITABLE:
            return False
        if not state.is_dirty():
            self._finish()
            return True
        state.transition(ModalPhase.CONFIRMING)
        discard = await self.gate.confirm(
            CONFIRM_CANCEL,
            "Discard entries?",
            "Are you sure to cancel additional entries? Your changes will be lost.",
        )
        if not discard:
            state.transition(ModalPhase.EDITABLE)
            self.view.focus_first_editable()
            return False
        state.reset()
        self._finish()
        return True

    def _finish(self) -> None:
        self.state.transition(ModalPhase.CLOSED)
        if self._aux_task is not None:
            self._aux_task.cancel()
        self.previews.revoke()
        self.view.hide()
        self.dispose()

    # =========================================================================
    # Submitting
    # =========================================================================

    def validation_errors(self) -> list[str]:
        state = self.state
        errors = require_fields(state.draft, self.schema.required_fields(state.mode))
        errors += check_lengths(state.draft, self.schema.fields)
        file_field = self.schema.file
        if (
            file_field is not None
            and file_field.required_on_create
            and state.mode is ModalMode.CREATE
            and state.pending_file is None
        ):
            errors.append(f"{file_field.label} is required.")
        return errors

    def submission_fields(self) -> dict[str, str]:
        """Fields sent with the write; date fields become server timestamps.

        Raises:
            ValidationError: if a date field holds something unparseable
        """
        state = self.state
        now = self.clock()
        fields = {}
        for f in self.schema.fields:
            if not (
                f.is_writable(state.mode)
                or f.auto_fills(state.mode)
                or f.name == self.schema.identity_field
            ):
                continue
            value = state.draft.get(f.name, "")
            fields[f.name] = to_server_timestamp(value, now) if f.is_date else value
        file_field = self.schema.file
        if (
            file_field is not None
            and file_field.resend_path
            and state.mode is ModalMode.EDIT
            and state.existing_file is not None
        ):
            fields[file_field.path_key] = state.existing_file.server_path or ""
        return fields

    async def submit(self) -> bool:
        """Validate, confirm, write. Returns True once the server accepted it."""
        state = self.state
        if state is None or not state.can_save():
            return False
        await self.wait_for_auxiliary()

        errors = self.validation_errors()
        try:
            fields = self.submission_fields()
        except ValidationError as e:
            errors += e.messages
        if errors:
            self.view.show_error("\n".join(errors))
            return False
        self.view.clear_error()

        state.transition(ModalPhase.CONFIRMING)
        confirmed = await self.gate.confirm(
            CONFIRM_SAVE,
            "Save changes?",
            f"Are you sure you want to save this {self.schema.event_noun}?",
        )
        if not confirmed:
            state.transition(ModalPhase.EDITABLE)
            return False

        state.snapshot()
        state.transition(ModalPhase.SUBMITTING)
        self.view.hide()
        self.overlay.show(f"Saving {self.schema.event_noun}...")
        try:
            if state.mode is ModalMode.CREATE:
                body = await self.gateway.create(fields, state.pending_file)
            else:
                body = await self.gateway.update(fields, state.pending_file)
        except GatewayError as e:
            log.error(f"{self.schema.name}: submit failed: {e}")
            self.overlay.hide()
            self._recover(e.user_message)
            return False

        self.overlay.hide()
        record = self._saved_record(fields, body)
        if state.mode is ModalMode.CREATE:
            self.emit(saved_for(self.schema, record))
        else:
            self.emit(updated_for(self.schema, record))
        self.emit(refresh_for(self.schema))
        self.acknowledge(f"{self.noun} saved successfully.")
        state.transition(ModalPhase.CLOSED)
        self.previews.revoke()
        self.dispose()
        return True

    def _recover(self, message: str) -> None:
        """Bring the form back exactly as it was before submit, plus the error."""
        state = self.state
        recovery = state.restore(message)
        state.transition(ModalPhase.EDITABLE)
        self.view.show()
        self.view.populate(dict(recovery.draft))
        self._show_current_preview()
        self.view.show_error(message)
        self._update_save()

    def _saved_record(self, fields: dict[str, str], body: dict) -> Record:
        record: Record = {**(self.state.original or {}), **fields}
        data = body.get("data")
        if isinstance(data, dict):
            record.update(data)
        file_field = self.schema.file
        if file_field is not None and body.get(file_field.path_key):
            record[file_field.path_key] = body[file_field.path_key]
        return record

