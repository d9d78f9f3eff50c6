"""Shared fixtures for civic-console tests."""

import json
import re
from collections import deque
from urllib.parse import parse_qsl

import httpx
import pytest

from controller.list_controller import PageInfo, ResourceListController
from controller.modal_controller import Preview, ResourceModalController
from controller.pacing import Pacing
from gateway import DataGateway, UserInfoSource
from model.resources import OFFICIALS, REPORTS, SERVICES

BASE_URL = "http://civic.test/"

# Tiny but real file signatures; only the extension matters for MIME checks
PDF_BYTES = b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n1 0 obj\n<<>>\nendobj\ntrailer\n<<>>\n%%EOF\n"
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


# =============================================================================
# Fake backend
# =============================================================================

_MULTIPART_FIELD = re.compile(
    rb'name="([^"]+)"(?:; filename="([^"]*)")?\r\n(?:[^\r\n]+\r\n)*\r\n(.*?)\r\n--', re.DOTALL
)


def request_fields(request: httpx.Request) -> dict[str, str]:
    """Decode a JSON, urlencoded or multipart request body into {name: value}.

    Multipart file parts appear as "<name>" -> "@<filename>".
    """
    content_type = request.headers.get("content-type", "")
    body = request.read()
    if not body:
        return {}
    if content_type.startswith("application/json"):
        return {k: str(v) for k, v in json.loads(body).items()}
    if content_type.startswith("application/x-www-form-urlencoded"):
        return dict(parse_qsl(body.decode()))
    if content_type.startswith("multipart/form-data"):
        fields = {}
        for name, filename, value in _MULTIPART_FIELD.findall(body):
            if filename:
                fields[name.decode()] = "@" + filename.decode()
            else:
                fields[name.decode()] = value.decode()
        return fields
    return {}


class FakeBackend:
    """Scripted PHP backend for httpx.MockTransport.

    Responses are queued per (path, action). A dict becomes a JSON body, a
    str a raw body, an exception is raised from the transport. The last
    queued response repeats.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str | None], deque] = {}
        self.requests: list[tuple[str, str | None, dict[str, str]]] = []

    def on(self, path: str, action: str | None, *responses) -> None:
        self.routes[(path, action)] = deque(responses)

    def calls(self, path: str, action: str | None = None) -> list[dict[str, str]]:
        return [f for p, a, f in self.requests if p == path and (action is None or a == action)]

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path.lstrip("/")
        fields = request_fields(request)
        action = fields.get("action")
        self.requests.append((path, action, fields))
        queue = self.routes.get((path, action))
        if not queue:
            return httpx.Response(404, text=f"no route for {path} {action}")
        response = queue.popleft() if len(queue) > 1 else queue[0]
        if isinstance(response, Exception):
            raise response
        if isinstance(response, str):
            return httpx.Response(200, text=response)
        return httpx.Response(200, json=response)


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def client(backend):
    return httpx.AsyncClient(transport=httpx.MockTransport(backend.handler))


@pytest.fixture
def make_gateway(client):
    def make(schema):
        return DataGateway(schema, client, BASE_URL, timeout=5.0)

    return make


@pytest.fixture
def user_info(client):
    return UserInfoSource(client, BASE_URL, timeout=5.0)


# =============================================================================
# Fake views
# =============================================================================


class FakeListView:
    """Records what the list controller renders."""

    def __init__(self) -> None:
        self.rows: list[dict] = []
        self.empty_message: str | None = None
        self.page_info: PageInfo | None = None
        self.status_counts: dict[str, int] = {}
        self.options: dict[str, list[str]] = {}
        self.filter_values: dict[str, str] = {}
        self.placeholders: list[str] = []
        self.placeholder_visible = False
        self.notifications: list[tuple[str, str]] = []

    def show_placeholder(self, message):
        self.placeholders.append(message)
        self.placeholder_visible = True

    def render_rows(self, rows):
        self.rows = list(rows)
        self.empty_message = None
        self.placeholder_visible = False

    def render_empty(self, message):
        self.rows = []
        self.empty_message = message
        self.placeholder_visible = False

    def render_pagination(self, info):
        self.page_info = info

    def render_status_counts(self, counts):
        self.status_counts = counts

    def set_filter_options(self, options):
        self.options = options

    def set_filter_values(self, filters):
        self.filter_values = dict(filters)

    def notify(self, message, severity="information"):
        self.notifications.append((message, severity))


class FakeModalView:
    """Records what the modal controller shows."""

    def __init__(self) -> None:
        self.visible = False
        self.values: dict[str, str] = {}
        self.save_enabled = False
        self.read_only = False
        self.error: str | None = None
        self.preview: Preview | None = None
        self.file_input_cleared = 0
        self.focus_count = 0
        self.hide_count = 0

    def show(self):
        self.visible = True

    def hide(self):
        self.visible = False
        self.hide_count += 1

    def populate(self, values):
        self.values.update(values)

    def set_save_enabled(self, enabled):
        self.save_enabled = enabled

    def set_read_only(self, read_only):
        self.read_only = read_only

    def show_error(self, message):
        self.error = message

    def clear_error(self):
        self.error = None

    def show_preview(self, preview):
        self.preview = preview

    def clear_file_input(self):
        self.file_input_cleared += 1

    def focus_first_editable(self):
        self.focus_count += 1


class FakeGate:
    """Answers confirmations from a script (default: yes)."""

    def __init__(self, *answers: bool) -> None:
        self.answers = deque(answers)
        self.prompts: list[tuple[str, str, str]] = []

    async def confirm(self, kind, title, message):
        self.prompts.append((kind, title, message))
        return self.answers.popleft() if self.answers else True

    @property
    def kinds(self) -> list[str]:
        return [kind for kind, _, _ in self.prompts]


class FakeOverlay:
    def __init__(self) -> None:
        self.visible = False
        self.messages: list[str] = []

    def show(self, message):
        self.visible = True
        self.messages.append(message)

    def hide(self):
        self.visible = False


class ModalHarness:
    """A ResourceModalController wired to fakes, plus what it emitted."""

    def __init__(self, gateway, user_info=None, answers=(), clock=None) -> None:
        self.view = FakeModalView()
        self.gate = FakeGate(*answers)
        self.overlay = FakeOverlay()
        self.emitted = []
        self.acknowledged = []
        self.disposed = 0
        kwargs = {"clock": clock} if clock else {}
        self.controller = ResourceModalController(
            gateway,
            self.view,
            self.gate,
            self.overlay,
            emit=self.emitted.append,
            acknowledge=self.acknowledged.append,
            dispose=self._dispose,
            user_info=user_info,
            pacing=Pacing.instant(),
            **kwargs,
        )

    def _dispose(self):
        self.disposed += 1

    @property
    def event_names(self) -> list[str]:
        return [m.event_name for m in self.emitted]


@pytest.fixture
def list_view():
    return FakeListView()


@pytest.fixture
def make_list_controller(make_gateway, list_view):
    def make(schema, page_size=10, pacing=None):
        return ResourceListController(
            make_gateway(schema), list_view, page_size=page_size, pacing=pacing or Pacing.instant()
        )

    return make


@pytest.fixture
def make_modal(make_gateway):
    def make(schema, user_info=None, answers=(), clock=None):
        return ModalHarness(make_gateway(schema), user_info=user_info, answers=answers, clock=clock)

    return make


# =============================================================================
# Sample records
# =============================================================================


def official(n: int, name: str, position: str = "Councilor") -> dict:
    return {"employeeId": f"EMP-{n:03d}", "name": name, "position": position, "dept": None}


@pytest.fixture
def twelve_officials():
    """12 officials; exactly two have "maria" in their name."""
    names = [
        "Maria Santos", "Jose Rizal", "Andres Bonifacio", "Ana Maria Cruz",
        "Juan Dela Cruz", "Pedro Penduko", "Liza Soberano", "Carlos Garcia",
        "Ramon Magsaysay", "Elena Reyes", "Miguel Torres", "Sofia Lim",
    ]
    records = [official(i + 1, name) for i, name in enumerate(names)]
    records[0]["position"] = "Municipal Mayor"
    records[1]["position"] = "Vice Mayor"
    return records


@pytest.fixture
def day_care_service():
    return {
        "serviceId": "SRV-0007",
        "serviceTitle": "Day Care",
        "serviceDepartment": "Social Welfare",
        "processDuration": "3 working days",
        "serviceDescription": "Early childhood care for working parents.",
        "serviceRequirements": "Birth Certificate",
        "serviceWhoCanAvail": "Residents with children aged 3-5",
        "servicePicPath": "uploads/services/daycare.jpg",
    }


@pytest.fixture
def pdf_file(tmp_path):
    path = tmp_path / "q3-report.pdf"
    path.write_bytes(PDF_BYTES)
    return path


@pytest.fixture
def png_file(tmp_path):
    path = tmp_path / "portrait.png"
    path.write_bytes(PNG_BYTES)
    return path


