"""Base protocol for record store gateways.

All gateways must implement the RecordStoreGateway protocol. The form flow
uses a gateway without knowing which store is behind it.
"""

from __future__ import annotations

from typing import Protocol

from employee_editor.errors import StoreError
from employee_editor.form.types import Employee


class RecordStoreGateway(Protocol):
    """Protocol for the employee record store.

    Each call is a single best-effort round trip: no retries, no caching and
    no transactions. Every failure surfaces as StoreError.
    """

    store_name: str

    async def list_employees(self) -> list[Employee]:
        """Fetch every record in the collection, in store order."""
        ...

    async def create_employee(self, employee: Employee) -> str:
        """Insert a record without identifier.

        Returns:
            The identifier the store assigned.
        """
        ...

    async def update_employee(self, employee: Employee) -> None:
        """Overwrite every field of the record with the same identifier."""
        ...

    async def ping(self) -> None:
        """Cheap reachability check; raises StoreError when unreachable."""
        ...

    async def aclose(self) -> None:
        """Release any connections held by the gateway."""
        ...


def require_new(employee: Employee, operation: str = "create") -> None:
    """Reject records that already carry an identifier."""
    if employee.is_persisted:
        raise StoreError(
            f"Employee {employee.id} already exists; new records must not carry an id",
            operation,
        )


def require_persisted(employee: Employee, operation: str = "update") -> None:
    """Reject records without an identifier."""
    if not employee.is_persisted:
        raise StoreError("Employee id is required for updates", operation)
