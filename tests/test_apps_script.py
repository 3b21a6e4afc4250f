"""Tests for the Apps Script adapter."""

import json
from unittest.mock import MagicMock

import pytest
import requests

from vacacal.adapters.apps_script import (
    POST_HEADERS,
    AppsScriptAdapter,
    MissingEndpointError,
    ParseFailure,
    RemoteDataError,
    RemoteError,
    TransportFailure,
)
from vacacal.config import Config, ErrorMode
from vacacal.core.holidays import HOLIDAYS
from vacacal.core.vacation import Employee, VacationType

ENDPOINT = "https://script.example.com/macros/s/abc/exec"


def make_response(payload=None, status: int = 200, text: str | None = None) -> MagicMock:
    """Fake requests.Response. Pass text to simulate a non-JSON body."""
    resp = MagicMock()
    resp.status_code = status
    resp.ok = 200 <= status < 400
    if text is not None:
        resp.text = text
        resp.json.side_effect = requests.exceptions.JSONDecodeError("Expecting value", text, 0)
    else:
        resp.text = json.dumps(payload)
        resp.json.return_value = payload
    return resp


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def fixed_ids():
    return lambda prefix: f"{prefix}_fixed"


@pytest.fixture
def make_adapter(session, fixed_ids):
    def _make(mode: ErrorMode = ErrorMode.RESILIENT, endpoint: str = ENDPOINT) -> AppsScriptAdapter:
        config = Config(endpoint_url=endpoint, error_mode=mode, request_timeout=5)
        return AppsScriptAdapter(config, session=session, id_factory=fixed_ids)
    return _make


def _posted_body(session) -> dict:
    return json.loads(session.post.call_args.kwargs["data"].decode("utf-8"))


class TestQueries:
    def test_fetch_employees_sends_action(self, make_adapter, session):
        session.get.return_value = make_response([{"id": "e1", "name": "Kim"}])

        employees = make_adapter().fetch_employees()

        assert employees == [Employee(id="e1", name="Kim")]
        session.get.assert_called_once_with(ENDPOINT, params={"action": "getEmployees"}, timeout=5)

    def test_fetch_vacations(self, make_adapter, session):
        session.get.return_value = make_response(
            [
                {"id": "v1", "employeeId": "e1", "date": "2025-05-05", "type": "연차", "cost": 1},
                {"id": "v2", "employeeId": "e1", "date": "2025-05-06", "type": "오후반차", "cost": 0.5},
            ]
        )

        vacations = make_adapter().fetch_vacations()

        assert [v.id for v in vacations] == ["v1", "v2"]
        assert vacations[1].type is VacationType.HALF_DAY_PM
        assert session.get.call_args.kwargs["params"] == {"action": "getVacations"}

    def test_malformed_records_are_skipped(self, make_adapter, session):
        session.get.return_value = make_response(
            [{"id": "v1", "employeeId": "e1", "date": "2025-05-05", "type": "연차"}, {"date": "2025-05-06"}, "junk"]
        )
        assert [v.id for v in make_adapter().fetch_vacations()] == ["v1"]

    def test_list_holidays_has_no_network(self, make_adapter, session):
        assert make_adapter().list_holidays() == list(HOLIDAYS)
        session.get.assert_not_called()
        session.post.assert_not_called()


class TestResilientMode:
    def test_non_success_status_gives_empty(self, make_adapter, session):
        session.get.return_value = make_response(status=500, payload=None)
        assert make_adapter().fetch_employees() == []

    def test_network_error_gives_empty(self, make_adapter, session):
        session.get.side_effect = requests.ConnectionError("unreachable")
        assert make_adapter().fetch_vacations() == []

    def test_html_body_gives_empty(self, make_adapter, session):
        session.get.return_value = make_response(text="<!DOCTYPE html><html>Sign in</html>")
        assert make_adapter().fetch_employees() == []

    def test_error_field_gives_empty(self, make_adapter, session):
        session.get.return_value = make_response({"error": "Sheet not found"})
        assert make_adapter().fetch_employees() == []

    def test_non_list_answer_gives_empty(self, make_adapter, session):
        session.get.return_value = make_response({"status": "ok"})
        assert make_adapter().fetch_vacations() == []

    def test_missing_endpoint_gives_empty(self, make_adapter, session):
        assert make_adapter(endpoint="").fetch_employees() == []
        session.get.assert_not_called()

    def test_mutation_failure_not_raised(self, make_adapter, session):
        session.post.return_value = make_response({"error": "locked"})
        make_adapter().delete_vacation("v1")
        session.post.assert_called_once()

    def test_delete_unknown_id_does_not_raise(self, make_adapter, session):
        session.post.return_value = make_response(status=404, payload=None)
        make_adapter().delete_vacation("does-not-exist")
        make_adapter().delete_employee("does-not-exist")

    def test_failure_is_logged(self, make_adapter, session, caplog):
        session.get.return_value = make_response(status=503, payload=None)
        make_adapter().fetch_employees()
        assert "getEmployees failed" in caplog.text


class TestStrictMode:
    def test_status_raises_transport_failure(self, make_adapter, session):
        session.get.return_value = make_response(status=502, payload=None)
        with pytest.raises(TransportFailure, match="502"):
            make_adapter(ErrorMode.STRICT).fetch_employees()

    def test_network_error_raises_transport_failure(self, make_adapter, session):
        session.post.side_effect = requests.Timeout("slow")
        with pytest.raises(TransportFailure):
            make_adapter(ErrorMode.STRICT).delete_employee("e1")

    def test_html_raises_parse_failure(self, make_adapter, session):
        session.get.return_value = make_response(text="<html>Sign in</html>")
        with pytest.raises(ParseFailure):
            make_adapter(ErrorMode.STRICT).fetch_vacations()

    def test_error_field_raises_remote_error(self, make_adapter, session):
        session.post.return_value = make_response({"error": "Sheet not found"})
        with pytest.raises(RemoteError, match="Sheet not found"):
            make_adapter(ErrorMode.STRICT).create_vacation("e1", "2025-05-05", VacationType.FULL_DAY)

    def test_missing_endpoint_raises(self, make_adapter):
        with pytest.raises(MissingEndpointError):
            make_adapter(ErrorMode.STRICT, endpoint="").fetch_employees()

    def test_errors_share_a_base(self):
        for exc in (MissingEndpointError, TransportFailure, ParseFailure, RemoteError):
            assert issubclass(exc, RemoteDataError)


class TestMutations:
    def test_create_vacation_payload(self, make_adapter, session):
        session.post.return_value = make_response({"success": True})

        entry = make_adapter().create_vacation("e1", "2025-05-05", VacationType.QUARTER_DAY)

        assert entry.id == "vac_fixed"
        assert entry.cost == 0.25
        assert _posted_body(session) == {
            "action": "addVacation",
            "payload": {
                "id": "vac_fixed",
                "employeeId": "e1",
                "date": "2025-05-05",
                "type": "반반차",
                "cost": 0.25,
            },
        }
        assert session.post.call_args.kwargs["headers"] == POST_HEADERS

    def test_create_vacation_cost_follows_type(self, make_adapter, session):
        session.post.return_value = make_response({"success": True})
        adapter = make_adapter()
        for vtype, cost in [(VacationType.FULL_DAY, 1.0), (VacationType.HALF_DAY_AM, 0.5)]:
            adapter.create_vacation("e1", "2025-05-05", vtype)
            assert _posted_body(session)["payload"]["cost"] == cost

    def test_delete_vacation(self, make_adapter, session):
        session.post.return_value = make_response({"success": True})
        make_adapter().delete_vacation("v1")
        assert _posted_body(session) == {"action": "removeVacation", "id": "v1"}

    def test_save_and_update_employee_use_same_action(self, make_adapter, session):
        session.post.return_value = make_response({"success": True})
        adapter = make_adapter()

        adapter.create_employee(Employee("e1", "Kim"))
        created = _posted_body(session)
        adapter.update_employee(Employee("e1", "Kim Minji"))
        updated = _posted_body(session)

        assert created == {"action": "saveEmployee", "payload": {"id": "e1", "name": "Kim"}}
        assert updated == {"action": "saveEmployee", "payload": {"id": "e1", "name": "Kim Minji"}}

    def test_delete_employee(self, make_adapter, session):
        session.post.return_value = make_response({"success": True})
        make_adapter().delete_employee("e1")
        assert _posted_body(session) == {"action": "deleteEmployee", "id": "e1"}
