"""Cloud Firestore record store over the REST API.

Documents live in one collection; every employee field is stored as a
``stringValue``. The document key is the employee identifier.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from employee_editor.errors import StoreError
from employee_editor.form.types import Employee
from employee_editor.store.base import require_new, require_persisted

logger = logging.getLogger(__name__)

FAILURE_MESSAGES = {
    "list": "Failed to retrieve employees from the record store",
    "create": "Failed to add employee to the record store",
    "update": "Failed to update employee in the record store",
    "ping": "Record store is unreachable",
}

PAGE_SIZE = 300
MALFORMED_MESSAGE = "Record store returned a malformed response"


def encode_fields(employee: Employee) -> dict[str, Any]:
    """Encode a record body as Firestore typed values."""
    return {
        key: {"stringValue": value}
        for key, value in employee.to_mapping(include_id=False).items()
    }


def decode_value(value: dict[str, Any]) -> str:
    """Decode a Firestore typed value to text."""
    if "stringValue" in value:
        return value["stringValue"]
    if "integerValue" in value:
        # integers arrive as strings on the wire
        return str(value["integerValue"])
    if "doubleValue" in value:
        number = float(value["doubleValue"])
        return str(int(number)) if number.is_integer() else str(number)
    if "booleanValue" in value:
        return "true" if value["booleanValue"] else "false"
    return ""


def decode_document(document: dict[str, Any]) -> Employee:
    """Decode a Firestore document resource into an Employee."""
    employee_id = document["name"].rsplit("/", 1)[-1]
    data = {key: decode_value(value) for key, value in document.get("fields", {}).items()}
    return Employee.from_mapping(data, employee_id=employee_id)


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return f"Record store returned HTTP {response.status_code}"


def _json_body(operation: str, response: httpx.Response) -> dict[str, Any]:
    try:
        body = response.json()
    except ValueError as exc:
        logger.error("Firestore %s returned a non-JSON body", operation)
        raise StoreError(MALFORMED_MESSAGE, operation) from exc
    if not isinstance(body, dict):
        raise StoreError(MALFORMED_MESSAGE, operation)
    return body


class FirestoreGateway:
    """Record store gateway backed by a Firestore collection."""

    store_name = "firestore"

    def __init__(
        self,
        project_id: str,
        collection: str = "employees",
        database: str = "(default)",
        api_key: str = "",
        base_url: str = "https://firestore.googleapis.com/v1",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize gateway.

        Args:
            project_id: Google Cloud project holding the database.
            collection: Collection id of the employee documents.
            database: Firestore database id.
            api_key: Web API key sent as the ``key`` query parameter.
            base_url: REST endpoint root.
            timeout: Per-request timeout in seconds.
            transport: Custom transport (tests pass httpx.MockTransport).
        """
        if not project_id:
            raise ValueError("FIRESTORE_PROJECT_ID is required for the firestore store")
        self.collection = collection
        documents_url = (
            f"{base_url.rstrip('/')}/projects/{project_id}/databases/{database}/documents"
        )
        self._client = httpx.AsyncClient(
            base_url=documents_url,
            timeout=timeout,
            params={"key": api_key} if api_key else None,
            transport=transport,
        )

    async def _request(
        self,
        operation: str,
        method: str,
        url: str,
        **kwargs: Any,
    ) -> httpx.Response:
        try:
            response = await self._client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            message = _error_message(exc.response)
            logger.error("Firestore %s failed: %s", operation, message)
            raise StoreError(message, operation) from exc
        except httpx.HTTPError as exc:
            message = str(exc) or FAILURE_MESSAGES[operation]
            logger.error("Firestore %s failed: %s", operation, message)
            raise StoreError(message, operation) from exc
        return response

    async def list_employees(self) -> list[Employee]:
        employees: list[Employee] = []
        params: dict[str, Any] = {"pageSize": PAGE_SIZE}
        while True:
            response = await self._request(
                "list", "GET", f"/{self.collection}", params=params
            )
            body = _json_body("list", response)
            try:
                employees.extend(
                    decode_document(doc) for doc in body.get("documents", [])
                )
            except (KeyError, TypeError, AttributeError) as exc:
                logger.error("Firestore list returned a malformed document: %r", exc)
                raise StoreError(MALFORMED_MESSAGE, "list") from exc
            next_token = body.get("nextPageToken")
            if not next_token:
                return employees
            params = {"pageSize": PAGE_SIZE, "pageToken": next_token}

    async def create_employee(self, employee: Employee) -> str:
        require_new(employee)
        response = await self._request(
            "create",
            "POST",
            f"/{self.collection}",
            json={"fields": encode_fields(employee)},
        )
        name = _json_body("create", response).get("name")
        if not isinstance(name, str):
            raise StoreError(MALFORMED_MESSAGE, "create")
        return name.rsplit("/", 1)[-1]

    async def update_employee(self, employee: Employee) -> None:
        require_persisted(employee)
        # exists precondition: PATCH would otherwise create the document
        await self._request(
            "update",
            "PATCH",
            f"/{self.collection}/{employee.id}",
            params={"currentDocument.exists": "true"},
            json={"fields": encode_fields(employee)},
        )

    async def ping(self) -> None:
        await self._request("ping", "GET", f"/{self.collection}", params={"pageSize": 1})

    async def aclose(self) -> None:
        await self._client.aclose()
