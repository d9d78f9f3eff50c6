"""Tests for ResourceListController against a fake backend and view."""

import asyncio

import httpx
import pytest
import pytest_asyncio

from controller.pacing import Pacing
from model.resources import FAMCOM, FEEDBACKS, OFFICIALS, REPORTS, USERS

OFFICIALS_URL = OFFICIALS.endpoint


def ok(records):
    return {"success": True, "data": records}


@pytest_asyncio.fixture
async def loaded(backend, make_list_controller, twelve_officials):
    backend.on(OFFICIALS_URL, "fetchdata", ok(twelve_officials))
    controller = make_list_controller(OFFICIALS)
    await controller.load()
    return controller


class TestLoad:
    """Test fetching and first render."""

    @pytest.mark.asyncio
    async def test_first_page_rendered(self, loaded, list_view):
        assert len(list_view.rows) == 10
        assert list_view.page_info.results == "1-10 of 12"
        assert list_view.page_info.window == [1, 2]
        assert list_view.placeholders == ["Loading head officials..."]
        assert not list_view.placeholder_visible
        assert not loaded.loading

    @pytest.mark.asyncio
    async def test_filter_options_built(self, loaded, list_view):
        assert list_view.options == {"position": ["Councilor", "Municipal Mayor", "Vice Mayor"]}

    @pytest.mark.asyncio
    async def test_failure_empties_list_and_notifies(self, backend, make_list_controller, list_view):
        backend.on(OFFICIALS_URL, "fetchdata", httpx.ConnectError("connection refused"))
        controller = make_list_controller(OFFICIALS)
        await controller.load()
        assert list_view.rows == []
        assert list_view.empty_message == (
            "Could not load head officials. Press Refresh to try again."
        )
        message, severity = list_view.notifications[-1]
        assert severity == "error"
        assert "Check your internet or server" in message

    @pytest.mark.asyncio
    async def test_business_failure_keeps_server_message(
        self, backend, make_list_controller, list_view
    ):
        backend.on(OFFICIALS_URL, "fetchdata", {"success": False, "message": "Session expired"})
        controller = make_list_controller(OFFICIALS)
        await controller.load()
        assert "Session expired" in list_view.notifications[-1][0]

    @pytest.mark.asyncio
    async def test_failure_during_search_is_labeled_as_failure(
        self, backend, loaded, list_view
    ):
        await loaded.search_submitted("maria")
        backend.on(OFFICIALS_URL, "fetchdata", httpx.ReadTimeout("timed out"))
        await loaded.refresh()
        assert list_view.rows == []
        assert list_view.empty_message == (
            "Could not load head officials. Press Refresh to try again."
        )

        await loaded.search_submitted("zzz")
        assert list_view.empty_message.startswith("Could not load")

    @pytest.mark.asyncio
    async def test_successful_reload_clears_failure(self, backend, loaded, list_view):
        backend.on(OFFICIALS_URL, "fetchdata", httpx.ConnectError("connection refused"))
        await loaded.refresh()
        assert loaded.load_failed
        backend.on(OFFICIALS_URL, "fetchdata", ok([]))
        await loaded.refresh()
        assert not loaded.load_failed
        assert list_view.empty_message == "No head officials found."

    @pytest.mark.asyncio
    async def test_reload_keeps_active_search(self, backend, loaded, list_view, twelve_officials):
        await loaded.search_submitted("maria")
        backend.on(
            OFFICIALS_URL, "fetchdata",
            ok(twelve_officials + [{"employeeId": "EMP-013", "name": "Maria Clara"}]),
        )
        await loaded.refresh()
        assert [r["name"] for r in list_view.rows] == [
            "Maria Santos", "Ana Maria Cruz", "Maria Clara",
        ]

    @pytest.mark.asyncio
    async def test_reload_clears_vanished_dropdown_value(
        self, backend, loaded, list_view, twelve_officials
    ):
        await loaded.set_filter("position", "Vice Mayor")
        assert len(list_view.rows) == 1
        backend.on(OFFICIALS_URL, "fetchdata", ok(twelve_officials[2:]))
        await loaded.refresh()
        assert list_view.filter_values["position"] == ""
        assert len(list_view.rows) == 10


class TestSearch:
    """Test search and the debounce."""

    @pytest.mark.asyncio
    async def test_submitted_search(self, loaded, list_view):
        """Typing "maria" and pressing Enter shows exactly the two matches."""
        await loaded.search_submitted("maria")
        assert [r["name"] for r in list_view.rows] == ["Maria Santos", "Ana Maria Cruz"]
        assert list_view.page_info.results == "1-2 of 2"
        assert list_view.page_info.pages == 1

    @pytest.mark.asyncio
    async def test_no_match_message_quotes_term(self, loaded, list_view):
        await loaded.search_submitted("zzz")
        assert list_view.empty_message == 'No results found for "zzz".'
        assert list_view.page_info.results == "1-0 of 0"

    @pytest.mark.asyncio
    async def test_dropdown_only_message(self, loaded, list_view):
        await loaded.set_filter("position", "Governor")
        assert list_view.empty_message == "No results match the selected filters."

    @pytest.mark.asyncio
    async def test_keystrokes_coalesce(
        self, backend, make_list_controller, list_view, twelve_officials
    ):
        """Only the last keystroke in a quiet period is applied."""
        backend.on(OFFICIALS_URL, "fetchdata", ok(twelve_officials))
        controller = make_list_controller(OFFICIALS, pacing=Pacing(search_debounce=0.05))
        await controller.load()
        applied = []
        original = controller._apply_search

        async def spy(value):
            applied.append(value)
            await original(value)

        controller._search.callback = spy
        for term in ("m", "ma", "mar", "mari", "maria"):
            controller.search_keystroke(term)
        assert len(list_view.rows) == 10
        await asyncio.sleep(0.2)
        assert applied == ["maria"]
        assert len(list_view.rows) == 2

    @pytest.mark.asyncio
    async def test_enter_cancels_pending_keystroke(
        self, backend, make_list_controller, list_view, twelve_officials
    ):
        backend.on(OFFICIALS_URL, "fetchdata", ok(twelve_officials))
        controller = make_list_controller(OFFICIALS, pacing=Pacing(search_debounce=0.05))
        await controller.load()
        controller.search_keystroke("jose")
        await controller.search_submitted("maria")
        await asyncio.sleep(0.2)
        assert controller.state.search_term == "maria"
        assert len(list_view.rows) == 2

    @pytest.mark.asyncio
    async def test_reset_restores_everything(self, loaded, list_view):
        await loaded.search_submitted("maria")
        await loaded.reset_filters()
        assert len(list_view.rows) == 10
        assert list_view.filter_values == {"search": "", "position": ""}
        assert "Resetting filters..." in list_view.placeholders

    @pytest.mark.asyncio
    async def test_large_collection_shows_applying_placeholder(
        self, backend, make_list_controller, list_view
    ):
        records = [{"employeeId": f"EMP-{i:03d}", "name": f"Official {i}"} for i in range(150)]
        backend.on(OFFICIALS_URL, "fetchdata", ok(records))
        controller = make_list_controller(OFFICIALS)
        await controller.load()
        await controller.search_submitted("Official 14")
        assert "Applying filters..." in list_view.placeholders
        # "Official 14" and "Official 140".."Official 149"
        assert list_view.page_info.results == "1-10 of 11"


class TestPaging:
    """Test page navigation."""

    @pytest.mark.asyncio
    async def test_second_page(self, loaded, list_view):
        assert loaded.go_to_page(2)
        assert [r["name"] for r in list_view.rows] == ["Miguel Torres", "Sofia Lim"]
        assert list_view.page_info.results == "11-12 of 12"
        assert list_view.page_info.has_previous
        assert not list_view.page_info.has_next

    @pytest.mark.asyncio
    async def test_out_of_range_is_a_noop(self, loaded, list_view):
        before = list_view.page_info
        assert not loaded.go_to_page(5)
        assert list_view.page_info is before

    @pytest.mark.asyncio
    async def test_page_size(self, loaded, list_view):
        loaded.go_to_page(2)
        loaded.set_page_size(5)
        assert list_view.page_info.page == 1
        assert list_view.page_info.pages == 3


class TestMutations:
    """Test records arriving from modal messages."""

    @pytest.mark.asyncio
    async def test_saved_record_prepended(self, loaded, list_view):
        await loaded.search_submitted("maria")
        loaded.add_record({"employeeId": "EMP-013", "name": "Nora Aunor", "position": "Governor"})
        assert list_view.rows[0]["name"] == "Nora Aunor"
        assert list_view.page_info.results == "1-10 of 13"
        assert "Governor" in list_view.options["position"]

    @pytest.mark.asyncio
    async def test_updated_record_replaced_in_place(self, loaded, list_view):
        loaded.update_record({"employeeId": "EMP-002", "name": "Jose P. Rizal"})
        assert list_view.rows[1]["name"] == "Jose P. Rizal"
        assert list_view.rows[1]["position"] == "Vice Mayor"

    @pytest.mark.asyncio
    async def test_delete(self, backend, loaded, list_view):
        backend.on(OFFICIALS_URL, "delete", {"success": True, "message": "Deleted"})
        assert await loaded.delete_record("EMP-001")
        assert backend.calls(OFFICIALS_URL, "delete") == [
            {"action": "delete", "official_id": "EMP-001"}
        ]
        assert list_view.page_info.results == "1-10 of 11"
        assert list_view.notifications[-1] == ("Employee ID EMP-001 deleted.", "information")

    @pytest.mark.asyncio
    async def test_failed_delete_keeps_record(self, backend, loaded, list_view):
        backend.on(OFFICIALS_URL, "delete", {"success": False, "message": "Record is in use"})
        assert not await loaded.delete_record("EMP-001")
        assert loaded.state.total == 12
        assert list_view.notifications[-1] == ("Record is in use", "error")


class TestStatusCounts:
    """Test the status summary for reports."""

    @pytest.mark.asyncio
    async def test_counts_rendered(self, backend, make_list_controller, list_view):
        backend.on(REPORTS.endpoint, "fetchdata", ok([
            {"reportId": "RPT-1", "title": "Q1", "status": "Approved"},
            {"reportId": "RPT-2", "title": "Q2", "status": "Pending"},
        ]))
        controller = make_list_controller(REPORTS)
        await controller.load()
        assert list_view.status_counts == {"Approved": 1, "Pending": 1, "total": 2}


class TestMoreResources:
    """Test loading the family & community, feedback and user lists."""

    @pytest.mark.asyncio
    async def test_famcom_officials(self, backend, make_list_controller, list_view):
        backend.on(FAMCOM.endpoint, "fetchdata", ok([
            {"id": 2, "employeeId": 2, "name": "Rosa Aquino", "position": "Barangay Captain",
             "picture": "/uploads/FamilyCommunityOfficialsPictures/rosa.png", "dept": "fc"},
            {"id": 1, "employeeId": 1, "name": "Ben Tan", "position": "Kagawad",
             "picture": "", "dept": "fc"},
        ]))
        controller = make_list_controller(FAMCOM)
        await controller.load()
        assert [r["name"] for r in list_view.rows] == ["Rosa Aquino", "Ben Tan"]
        assert list_view.options == {"position": ["Barangay Captain", "Kagawad"]}
        assert backend.calls(OFFICIALS.endpoint) == []

    @pytest.mark.asyncio
    async def test_feedbacks(self, backend, make_list_controller, list_view):
        backend.on(FEEDBACKS.endpoint, "fetchdata", ok([
            {"feedback_id": "7", "feedback_baranggay": "Poblacion", "feedback_satisfaction": "5",
             "feedback_visit": "Business permit", "feedback_looking": "Yes",
             "feedback_recommend": "Faster queue", "feedback_date": "2026-10-01"},
            {"feedback_id": "6", "feedback_baranggay": "San Roque", "feedback_satisfaction": "3",
             "feedback_visit": "Cedula", "feedback_looking": "No",
             "feedback_recommend": "More staff", "feedback_date": "2026-09-28"},
        ]))
        controller = make_list_controller(FEEDBACKS)
        await controller.load()
        assert len(list_view.rows) == 2
        assert list_view.options["feedback_satisfaction"] == ["3", "5"]

        await controller.set_filter("feedback_baranggay", "San Roque")
        assert [r["feedback_id"] for r in list_view.rows] == ["6"]

    @pytest.mark.asyncio
    async def test_users_read_under_form_names(self, backend, make_list_controller, list_view):
        backend.on(USERS.endpoint, "fetchdata", {"success": True, "users": [
            {"userId": "3", "userType": "DepartmentAdmin", "userDept": "Health Services",
             "username": "health.head", "userHandler": "Dr. Lina Ramos", "password": "x"},
        ]})
        controller = make_list_controller(USERS)
        await controller.load()
        user = list_view.rows[0]
        assert user["department"] == "Health Services"
        assert user["handlerName"] == "Dr. Lina Ramos"
        assert list_view.options["department"] == ["Health Services"]

        await controller.search_submitted("ramos")
        assert len(list_view.rows) == 1

    @pytest.mark.asyncio
    async def test_user_delete_is_json(self, backend, make_list_controller, list_view):
        backend.on(USERS.endpoint, "fetchdata", {"success": True, "users": [
            {"userId": "3", "userType": "Administrator", "userDept": "Education",
             "username": "admin", "userHandler": "Admin", "password": "x"},
        ]})
        backend.on(USERS.endpoint, "delete", {"success": True, "message": "User deleted successfully."})
        controller = make_list_controller(USERS)
        await controller.load()
        assert await controller.delete_record("3")
        assert backend.calls(USERS.endpoint, "delete") == [{"action": "delete", "userId": "3"}]
        assert list_view.rows == []
