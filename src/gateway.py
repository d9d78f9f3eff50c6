"""DataGateway: the request/response seam to the PHP endpoints.

Every endpoint is a single URL taking a discriminating `action` field and
answering with a JSON envelope:

    {"success": true, "message": "...", "data" | "records" | "<list key>": [...]}

Reads go out as JSON bodies, writes as multipart form data so an attachment
can ride along. All responses pass through parse_envelope(), which turns
every failure into a GatewayError subclass:

- TransportError: the request never completed (network down, timeout)
- ProtocolError: the body is not a JSON object
- BusinessError: the server answered success=false
- AttachmentError: the staged file vanished or became unreadable before upload

Each carries a terse `user_message` for the UI; str() holds the detail
that goes to the log.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any
from urllib.parse import urljoin

import httpx

from constants import DEFAULT_TIMEOUT, DEFAULT_USER_INFO_PATH
from model.modal_state import FileRef
from model.schema import Record, ResourceSchema

log = logging.getLogger(__name__)

GENERIC_FAILURE = "An error occurred while updating."


class GatewayError(Exception):
    """Base class for gateway failures."""

    default_message = GENERIC_FAILURE

    def __init__(self, detail: str, user_message: str | None = None) -> None:
        super().__init__(detail)
        self.user_message = user_message or self.default_message


class TransportError(GatewayError):
    default_message = "Failed to update. Check your internet or server."


class ProtocolError(GatewayError):
    default_message = "Server returned invalid response. Check backend."


class BusinessError(GatewayError):
    """success=false; `user_message` is the server's own message when it sent one."""


class AttachmentError(GatewayError):
    default_message = "The attached file could not be read. Please attach it again."


def parse_envelope(response: httpx.Response) -> dict[str, Any]:
    """Decode a response body and check its `success` flag.

    Raises:
        ProtocolError: body is not a JSON object
        BusinessError: envelope says success=false
    """
    try:
        body = response.json()
    except ValueError as e:
        raise ProtocolError(
            f"{response.request.url} returned non-JSON (HTTP {response.status_code}): "
            f"{response.text[:500]!r}"
        ) from e
    if not isinstance(body, dict):
        raise ProtocolError(f"{response.request.url} returned {type(body).__name__}, not an object")
    if not body.get("success"):
        message = str(body.get("message") or "").strip()
        raise BusinessError(
            f"{response.request.url} reported failure: {message or '(no message)'}",
            message or None,
        )
    return body


def resolve_url(base_url: str, path: str) -> str:
    """Join an endpoint or asset path onto the console's base URL."""
    if not base_url.endswith("/"):
        base_url += "/"
    return urljoin(base_url, path.replace("\\", "/").removeprefix("./"))


class DataGateway:
    """Typed access to one resource endpoint."""

    def __init__(
        self,
        schema: ResourceSchema,
        client: httpx.AsyncClient,
        base_url: str,
        endpoint: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.schema = schema
        self.client = client
        self.base_url = base_url
        self.url = resolve_url(base_url, endpoint or schema.endpoint)
        self.timeout = timeout

    # =========================================================================
    # Transport
    # =========================================================================

    async def _post(self, **kwargs: Any) -> dict[str, Any]:
        try:
            response = await self.client.post(self.url, timeout=self.timeout, **kwargs)
        except httpx.TimeoutException as e:
            raise TransportError(f"POST {self.url} timed out after {self.timeout}s") from e
        except httpx.TransportError as e:
            raise TransportError(f"POST {self.url} failed: {e!r}") from e
        log.debug(f"POST {self.url} -> HTTP {response.status_code}")
        return parse_envelope(response)

    def _action(self, name: str) -> str:
        action = getattr(self.schema.actions, name)
        if action is None:
            raise NotImplementedError(f"{self.schema.name} endpoint has no {name} action")
        return action

    async def _write(
        self, action: str, fields: dict[str, str], file: FileRef | None
    ) -> dict[str, Any]:
        data = {"action": action, **fields}
        if file is None or not file.is_local:
            return await self._post(data=data)
        file_field = self.schema.file
        if file_field is None:
            raise ValueError(f"{self.schema.name} does not take attachments")
        # Read up front so the request body is complete before it is sent
        try:
            content = Path(file.path).read_bytes()
        except OSError as e:
            raise AttachmentError(f"cannot read attachment {file.path}: {e}") from e
        files = {file_field.name: (file.name, content, file.mime_type)}
        return await self._post(data=data, files=files)

    # =========================================================================
    # Operations
    # =========================================================================

    async def fetch_all(self) -> list[Record]:
        """Fetch the whole collection.

        The collection sits under the first of schema.collection_keys that
        holds a list; a missing collection is an empty one.
        """
        body = await self._post(json={"action": self._action("fetch")})
        for key in self.schema.collection_keys:
            value = body.get(key)
            if isinstance(value, list):
                return [self.schema.canonical(r) for r in value if isinstance(r, dict)]
        log.warning(f"{self.url}: no collection under {self.schema.collection_keys}")
        return []

    async def get_by_id(self, record_id: str) -> Record:
        body = await self._post(
            json={"action": self._action("get"), self.schema.id_request_key: record_id}
        )
        for key in self.schema.record_keys:
            record = body.get(key)
            if isinstance(record, dict):
                return self.schema.canonical(record)
        raise ProtocolError(f"{self.url}: {self.schema.actions.get} returned no record")

    async def next_id(self) -> str:
        """Ask the server for the identity of the next record to create."""
        body = await self._post(data={"action": self._action("next_id")})
        key = self.schema.next_id_key or self.schema.identity_field
        value = body.get(key)
        if value is None and isinstance(body.get("data"), dict):
            value = body["data"].get(key)
        if value is None or str(value).strip() == "":
            raise ProtocolError(f"{self.url}: next id response has no {key!r}")
        return str(value)

    async def create(self, fields: dict[str, str], file: FileRef | None = None) -> dict[str, Any]:
        return await self._write(self._action("create"), fields, file)

    async def update(self, fields: dict[str, str], file: FileRef | None = None) -> dict[str, Any]:
        id_param = self.schema.id_param
        if id_param and id_param not in fields:
            # Endpoints keyed by a separate id parameter locate the row by it
            fields = {**fields, id_param: fields.get(self.schema.identity_field, "")}
        return await self._write(self._action("update"), fields, file)

    async def delete(self, record_id: str) -> dict[str, Any]:
        body = {"action": self._action("delete"), self.schema.id_request_key: record_id}
        if self.schema.json_delete:
            return await self._post(json=body)
        return await self._post(data=body)


class UserInfoSource:
    """The logged-in user's details, used to auto-fill operator fields.

    The endpoint answers {"success": true, "data": {"user_id": ..., "user_dept": ...}}.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str,
        path: str = DEFAULT_USER_INFO_PATH,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.client = client
        self.url = resolve_url(base_url, path)
        self.timeout = timeout

    async def fetch(self) -> dict[str, str]:
        try:
            response = await self.client.get(self.url, timeout=self.timeout)
        except httpx.TransportError as e:
            raise TransportError(f"GET {self.url} failed: {e!r}") from e
        body = parse_envelope(response)
        data = body.get("data")
        if not isinstance(data, dict):
            raise ProtocolError(f"{self.url}: user info has no data object")
        return {key: "" if value is None else str(value) for key, value in data.items()}
