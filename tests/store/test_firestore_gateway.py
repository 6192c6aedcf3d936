"""Tests for the Firestore REST record store.

The REST API is replaced with httpx.MockTransport; requests are checked
against the documented Firestore resource shapes.
"""

import json

import httpx
import pytest

from employee_editor.errors import StoreError
from employee_editor.form.types import Employee
from employee_editor.store.firestore import (
    FirestoreGateway,
    decode_document,
    decode_value,
    encode_fields,
)

BASE_URL = "https://firestore.test/v1"
DOC_PREFIX = "projects/demo/databases/(default)/documents/employees"


def document(doc_id: str, **fields) -> dict:
    return {
        "name": f"{DOC_PREFIX}/{doc_id}",
        "fields": {key: {"stringValue": value} for key, value in fields.items()},
    }


def make_gateway(handler, **kwargs) -> FirestoreGateway:
    return FirestoreGateway(
        project_id="demo",
        base_url=BASE_URL,
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


class TestCodec:
    """Test Firestore value encoding."""

    def test_encode_fields(self, ana):
        """Every field except the id is sent as a stringValue."""
        fields = encode_fields(ana)

        assert fields["hourlyWage"] == {"stringValue": "10"}
        assert fields["paymentMethod"] == {"stringValue": "cash"}
        assert "id" not in fields
        assert len(fields) == 8

    @pytest.mark.parametrize(
        "value,expected",
        [
            ({"stringValue": "Ana"}, "Ana"),
            ({"integerValue": "12"}, "12"),
            ({"doubleValue": 10.0}, "10"),
            ({"doubleValue": 12.5}, "12.5"),
            ({"booleanValue": True}, "true"),
            ({"nullValue": None}, ""),
        ],
    )
    def test_decode_value(self, value, expected):
        """Typed values decode to text."""
        assert decode_value(value) == expected

    def test_decode_document(self):
        """The document key becomes the employee id."""
        employee = decode_document(document("abc", name="Ana", fnpfNo="F1"))

        assert employee.id == "abc"
        assert employee.name == "Ana"
        assert employee.fnpf_no == "F1"
        assert employee.branch == "labasa"


class TestFirestoreGateway:
    """Test REST calls."""

    async def test_list_follows_pages(self):
        """List walks nextPageToken until exhausted."""
        seen_tokens = []

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "GET"
            assert request.url.path.endswith("/documents/employees")
            token = request.url.params.get("pageToken")
            seen_tokens.append(token)
            if token is None:
                return httpx.Response(
                    200,
                    json={"documents": [document("1", name="Ana")], "nextPageToken": "p2"},
                )
            return httpx.Response(200, json={"documents": [document("2", name="Ben")]})

        gateway = make_gateway(handler)

        employees = await gateway.list_employees()

        assert [(e.id, e.name) for e in employees] == [("1", "Ana"), ("2", "Ben")]
        assert seen_tokens == [None, "p2"]

    async def test_list_empty_collection(self):
        """An empty collection has no documents key."""
        gateway = make_gateway(lambda request: httpx.Response(200, json={}))

        assert await gateway.list_employees() == []

    async def test_list_error_message_surfaced(self):
        """The store's error message is passed through unchanged."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                403,
                json={"error": {"code": 403, "message": "Missing or insufficient permissions."}},
            )

        gateway = make_gateway(handler)

        with pytest.raises(StoreError) as exc_info:
            await gateway.list_employees()

        assert exc_info.value.message == "Missing or insufficient permissions."
        assert exc_info.value.operation == "list"

    async def test_transport_error(self):
        """Network failures become StoreError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("network down", request=request)

        gateway = make_gateway(handler)

        with pytest.raises(StoreError, match="network down"):
            await gateway.list_employees()

    async def test_error_without_json_body(self):
        """Non-JSON error bodies report the status code."""
        gateway = make_gateway(lambda request: httpx.Response(500, text="oops"))

        with pytest.raises(StoreError, match="HTTP 500"):
            await gateway.list_employees()

    async def test_list_non_json_success_body(self):
        """A 2xx body that is not JSON becomes StoreError."""
        gateway = make_gateway(lambda request: httpx.Response(200, text="<html>"))

        with pytest.raises(StoreError, match="malformed") as exc_info:
            await gateway.list_employees()

        assert exc_info.value.operation == "list"

    async def test_list_document_without_name(self):
        """A document missing its resource name becomes StoreError."""
        gateway = make_gateway(
            lambda request: httpx.Response(
                200, json={"documents": [{"fields": {"name": {"stringValue": "Ana"}}}]}
            )
        )

        with pytest.raises(StoreError, match="malformed"):
            await gateway.list_employees()

    async def test_create_response_without_name(self):
        """A create response without the new document name becomes StoreError."""
        gateway = make_gateway(lambda request: httpx.Response(200, json={}))

        with pytest.raises(StoreError, match="malformed"):
            await gateway.create_employee(Employee(name="Cy"))

    async def test_ping(self):
        """Ping reads at most one document."""
        sizes = []

        def handler(request: httpx.Request) -> httpx.Response:
            sizes.append(request.url.params.get("pageSize"))
            return httpx.Response(200, json={})

        await make_gateway(handler).ping()

        assert sizes == ["1"]

    async def test_ping_failure(self):
        """An unreachable store fails the ping."""
        gateway = make_gateway(lambda request: httpx.Response(503, json={}))

        with pytest.raises(StoreError) as exc_info:
            await gateway.ping()

        assert exc_info.value.operation == "ping"

    async def test_create(self):
        """Create posts the fields and returns the assigned key."""
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["method"] = request.method
            captured["path"] = request.url.path
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, json=document("newid", name="Cy"))

        gateway = make_gateway(handler)

        employee_id = await gateway.create_employee(Employee(name="Cy"))

        assert employee_id == "newid"
        assert captured["method"] == "POST"
        assert captured["path"].endswith("/documents/employees")
        assert captured["body"]["fields"]["name"] == {"stringValue": "Cy"}

    async def test_create_rejects_id(self, ana):
        """Records that already have an id are not posted."""
        gateway = make_gateway(lambda request: pytest.fail("no request expected"))

        with pytest.raises(StoreError):
            await gateway.create_employee(ana)

    async def test_update(self, ana):
        """Update patches the document with an exists precondition."""
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["method"] = request.method
            captured["path"] = request.url.path
            captured["exists"] = request.url.params.get("currentDocument.exists")
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, json=document("1", name="Ana"))

        gateway = make_gateway(handler)

        await gateway.update_employee(ana)

        assert captured["method"] == "PATCH"
        assert captured["path"].endswith("/documents/employees/1")
        assert captured["exists"] == "true"
        assert captured["body"]["fields"]["fnpfNo"] == {"stringValue": "F1"}

    async def test_update_missing_document(self, ana):
        """A missing document fails instead of being created."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                404,
                json={"error": {"code": 404, "message": "No document to update"}},
            )

        gateway = make_gateway(handler)

        with pytest.raises(StoreError, match="No document to update"):
            await gateway.update_employee(ana)

    async def test_api_key_sent(self):
        """The API key rides along as the key query parameter."""
        keys = []

        def handler(request: httpx.Request) -> httpx.Response:
            keys.append(request.url.params.get("key"))
            return httpx.Response(200, json={})

        gateway = make_gateway(handler, api_key="secret")

        await gateway.list_employees()

        assert keys == ["secret"]

    def test_requires_project(self):
        """A project id is mandatory."""
        with pytest.raises(ValueError):
            FirestoreGateway(project_id="")
