"""In-memory record store for development and testing."""

from __future__ import annotations

import asyncio
import uuid
from dataclasses import replace

from employee_editor.errors import StoreError
from employee_editor.form.types import Employee
from employee_editor.store.base import require_new, require_persisted


class InMemoryGateway:
    """Dict-backed record store.

    Keeps insertion order, assigns hex identifiers, and can be told to fail
    or stall the next call of an operation so flows can be exercised without
    a network.
    """

    store_name = "memory"

    def __init__(
        self,
        employees: list[Employee] | None = None,
        delay_seconds: float = 0.0,
    ):
        """Initialize store.

        Args:
            employees: Seed records; each must already carry an id.
            delay_seconds: Sleep before every call (simulates latency).
        """
        self.delay_seconds = delay_seconds
        self._records: dict[str, Employee] = {}
        self._failures: dict[str, str] = {}
        self.calls: list[tuple[str, Employee | None]] = []
        for employee in employees or []:
            require_persisted(employee, "seed")
            self._records[employee.id] = employee

    def fail_next(self, operation: str, message: str) -> None:
        """Make the next call of an operation raise StoreError(message).

        Args:
            operation: "list", "create", "update" or "ping".
        """
        if operation not in ("list", "create", "update", "ping"):
            raise ValueError(f"Unknown operation '{operation}'")
        self._failures[operation] = message

    async def _enter(self, operation: str, employee: Employee | None = None) -> None:
        self.calls.append((operation, employee))
        if self.delay_seconds:
            await asyncio.sleep(self.delay_seconds)
        message = self._failures.pop(operation, None)
        if message is not None:
            raise StoreError(message, operation)

    async def list_employees(self) -> list[Employee]:
        await self._enter("list")
        return list(self._records.values())

    async def create_employee(self, employee: Employee) -> str:
        await self._enter("create", employee)
        require_new(employee)
        employee_id = uuid.uuid4().hex
        self._records[employee_id] = replace(employee, id=employee_id)
        return employee_id

    async def update_employee(self, employee: Employee) -> None:
        await self._enter("update", employee)
        require_persisted(employee)
        if employee.id not in self._records:
            raise StoreError(f"Employee {employee.id} not found", "update")
        self._records[employee.id] = employee

    async def ping(self) -> None:
        await self._enter("ping")

    async def aclose(self) -> None:
        return None

    def get(self, employee_id: str) -> Employee | None:
        """Direct read for tests and seeding scripts."""
        return self._records.get(employee_id)
