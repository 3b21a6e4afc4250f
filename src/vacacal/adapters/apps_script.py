"""Apps Script adapter - HTTP client for the spreadsheet-backed web app."""

import json
import logging
from datetime import date

import requests

from vacacal.config import Config, ErrorMode
from vacacal.core.holidays import list_holidays
from vacacal.core.vacation import (
    Employee,
    Holiday,
    IdFactory,
    VacationEntry,
    VacationType,
    timestamp_token_id,
)

logger = logging.getLogger(__name__)

# The web app rejects CORS preflights, so JSON goes out as plain text
POST_HEADERS = {"Content-Type": "text/plain;charset=utf-8"}


class RemoteDataError(Exception):
    """Base class for failures talking to the remote endpoint."""

    pass


class MissingEndpointError(RemoteDataError):
    """Raised when no endpoint URL is configured."""

    pass


class TransportFailure(RemoteDataError):
    """Network unreachable or a non-success HTTP status."""

    pass


class ParseFailure(RemoteDataError):
    """Response body is not the JSON we expected (often an HTML login page)."""

    pass


class RemoteError(RemoteDataError):
    """Well-formed response carrying an application-level error."""

    pass


class AppsScriptAdapter:
    """
    Spreadsheet web app adapter.

    Implements VacationRepository protocol. Every operation is a single request
    to one endpoint, told apart by its `action` field. No business logic - just I/O.

    The error mode is fixed per instance: in resilient mode queries fall back to
    empty lists and mutation failures are logged; in strict mode all of them raise.
    """

    def __init__(
        self,
        config: Config,
        session: requests.Session | None = None,
        id_factory: IdFactory = timestamp_token_id,
    ):
        self.config = config
        self.endpoint_url = config.endpoint_url
        self.error_mode = config.error_mode
        self.timeout = config.request_timeout
        self.id_factory = id_factory
        self._session = session or requests.Session()

    @property
    def strict(self) -> bool:
        return self.error_mode == ErrorMode.STRICT

    def _request(self, params: dict[str, str] | None = None, body: dict | None = None):
        """Send one request and return the decoded JSON answer."""
        if not self.endpoint_url:
            raise MissingEndpointError("Endpoint URL is not configured. Set VACACAL_ENDPOINT_URL.")

        try:
            if body is None:
                resp = self._session.get(self.endpoint_url, params=params, timeout=self.timeout)
            else:
                resp = self._session.post(
                    self.endpoint_url,
                    params=params,
                    data=json.dumps(body, ensure_ascii=False).encode("utf-8"),
                    headers=POST_HEADERS,
                    timeout=self.timeout,
                )
        except requests.RequestException as e:
            raise TransportFailure(f"Request failed: {e}") from e

        if not resp.ok:
            raise TransportFailure(f"Server responded with status {resp.status_code}")

        try:
            data = resp.json()
        except requests.exceptions.JSONDecodeError as e:
            logger.debug(f"Unparseable response body: {resp.text[:200]!r}")
            raise ParseFailure(
                "Response is not valid JSON. Check the web app's access permissions."
            ) from e

        if isinstance(data, dict) and data.get("error"):
            raise RemoteError(str(data["error"]))

        return data

    def _query(self, action: str, **params: str) -> list:
        """Run a read action. Resilient mode turns failures into an empty list."""
        try:
            data = self._request({"action": action, **params})
            if not isinstance(data, list):
                raise ParseFailure(f"Expected a list from '{action}', got {type(data).__name__}")
            return data
        except RemoteDataError as e:
            if self.strict:
                raise
            logger.error(f"{action} failed: {e}")
            return []

    def _mutate(self, body: dict) -> None:
        """Run a write action. Resilient mode logs failures without raising."""
        try:
            self._request(body=body)
        except RemoteDataError as e:
            if self.strict:
                raise
            logger.error(f"{body['action']} failed: {e}")

    def fetch_employees(self) -> list[Employee]:
        """Fetch all employees."""
        employees = []
        for item in self._query("getEmployees"):
            try:
                employees.append(Employee.from_api(item))
            except (KeyError, TypeError, AttributeError) as e:
                logger.warning(f"Skipping malformed employee record {item!r}: {e}")
        return employees

    def fetch_vacations(self) -> list[VacationEntry]:
        """Fetch all vacation entries."""
        vacations = []
        for item in self._query("getVacations"):
            try:
                vacations.append(VacationEntry.from_api(item))
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                logger.warning(f"Skipping malformed vacation record {item!r}: {e}")
        return vacations

    def list_holidays(self) -> list[Holiday]:
        """Return the static holiday table."""
        return list_holidays()

    def create_employee(self, employee: Employee) -> None:
        """Save an employee. The backend overwrites a record with the same id."""
        self._mutate({"action": "saveEmployee", "payload": employee.to_payload()})

    def update_employee(self, employee: Employee) -> None:
        """Update an employee (same call as create)."""
        self.create_employee(employee)

    def delete_employee(self, employee_id: str) -> None:
        self._mutate({"action": "deleteEmployee", "id": employee_id})

    def create_vacation(
        self,
        employee_id: str,
        vacation_date: date | str,
        vacation_type: VacationType | str,
    ) -> VacationEntry:
        """Create a vacation entry with a fresh id and the table cost for its type."""
        entry = VacationEntry.create(employee_id, vacation_date, vacation_type, self.id_factory)
        self._mutate({"action": "addVacation", "payload": entry.to_payload()})
        return entry

    def delete_vacation(self, vacation_id: str) -> None:
        self._mutate({"action": "removeVacation", "id": vacation_id})
