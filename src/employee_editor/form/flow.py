"""Form synchronization flow for the change-employee screen.

One flow instance lives for one visit to the screen. It owns the loaded
employee list, the selected identifier and the draft, and keeps them
consistent:

    activate -> list_employees -> (seed draft from navigation id) -> READY
    select   -> reseed draft from the chosen record
    change   -> edit one draft field
    submit   -> validate -> update_employee -> DONE (navigate away)
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, TypeVar

from employee_editor.errors import InvalidTransitionError, StoreError, ValidationError
from employee_editor.form.notifications import NotificationChannel
from employee_editor.form.state_machine import FormEvent, FormState, FormStateMachine, transition
from employee_editor.form.types import Employee, EmployeeDraft
from employee_editor.form.validation import validate_draft

if TYPE_CHECKING:
    from employee_editor.store.base import RecordStoreGateway

logger = logging.getLogger(__name__)

T = TypeVar("T")

EMPLOYEE_LISTING_ROUTE = "/employees/information"
UPDATE_SUCCESS_MESSAGE = "Employee updated successfully"
LOAD_FAILURE_MESSAGE = "Failed to fetch employees"
NO_SELECTION_MESSAGE = "Please select an employee"


class Navigator(Protocol):
    """Presentation-layer hook for leaving the screen."""

    def navigate(self, target: str) -> None:
        ...


class RecordingNavigator:
    """Navigator that remembers where the flow asked to go."""

    def __init__(self) -> None:
        self.history: list[str] = []

    def navigate(self, target: str) -> None:
        self.history.append(target)

    @property
    def current(self) -> str | None:
        return self.history[-1] if self.history else None


@dataclass(frozen=True)
class SelectOption:
    """Entry in the employee selector."""

    id: str
    name: str


class EmployeeFormFlow:
    """Keeps the selector, navigation id, loaded list and draft in sync.

    Store and validation failures never escape: they are published on the
    notification channel and the form stays usable.
    """

    def __init__(
        self,
        gateway: RecordStoreGateway,
        notifications: NotificationChannel | None = None,
        navigator: Navigator | None = None,
        timeout: float | None = 10.0,
    ):
        """Initialize flow.

        Args:
            gateway: Record store used for list and update calls.
            notifications: Channel for success/error messages.
            navigator: Receives the listing route after a successful save.
            timeout: Seconds before a store call is abandoned; None waits forever.
        """
        self._gateway = gateway
        self.notifications = notifications or NotificationChannel()
        self.navigator: Navigator = navigator or RecordingNavigator()
        self.timeout = timeout

        self._state = FormState.IDLE
        self._employees: list[Employee] = []
        self._draft = EmployeeDraft()
        self._selected_id: str | None = None
        self._in_flight = False

    # ------------------------------------------------------------------
    # Presentation-layer view
    # ------------------------------------------------------------------

    @property
    def state(self) -> FormState:
        return self._state

    @property
    def busy(self) -> bool:
        """True while a submit is in flight."""
        return self._in_flight

    @property
    def draft(self) -> EmployeeDraft:
        return self._draft.copy()

    @property
    def selected_id(self) -> str | None:
        return self._selected_id

    @property
    def employees(self) -> list[Employee]:
        return list(self._employees)

    @property
    def options(self) -> list[SelectOption]:
        return [SelectOption(id=e.id, name=e.name) for e in self._employees]

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def activate(self, employee_id: str | None = None) -> None:
        """Load the employee list and pre-select the navigation id, if any.

        The navigation id is kept as the selection even when no record
        matches (the draft then stays at its defaults). A failed load is
        reported and leaves the list empty; the form still becomes ready.
        """
        self._apply(FormEvent.ACTIVATE)
        if employee_id:
            self._selected_id = employee_id
        try:
            employees = await self._call("list", self._gateway.list_employees())
        except StoreError as exc:
            self._employees = []
            self.notifications.error(exc.message or LOAD_FAILURE_MESSAGE)
            self._apply(FormEvent.LOAD_FAILED)
            return

        self._employees = list(employees)
        if employee_id:
            self._seed(employee_id)
        self._apply(FormEvent.LOAD_SUCCEEDED)

    def select(self, employee_id: str) -> bool:
        """Load another record into the draft, discarding unsaved edits.

        Returns False (and changes nothing) if the id is not in the list.
        """
        self._require_editable("select")
        return self._seed(employee_id)

    def change(self, field_name: str, value: Any) -> None:
        """Edit one draft field (attribute name or wire key)."""
        self._require_editable("change")
        self._draft.set(field_name, value)

    def change_many(self, changes: Mapping[str, Any]) -> None:
        """Edit several draft fields at once.

        Either every field is applied or, if any name is unknown, none is.
        """
        self._require_editable("change")
        draft = self._draft.copy()
        for field_name, value in changes.items():
            draft.set(field_name, value)
        self._draft = draft

    async def submit(self) -> bool:
        """Validate the draft and write it back over the selected record.

        Returns True once the store accepted the update. A submit issued
        while another is in flight is ignored.
        """
        if self._in_flight:
            logger.debug("Submit ignored: update already in flight")
            return False
        if self._state != FormState.READY:
            raise InvalidTransitionError(self._state.value, FormEvent.SUBMIT.value)

        try:
            validate_draft(self._draft)
            if not self._selected_id:
                raise ValidationError(NO_SELECTION_MESSAGE)
        except ValidationError as exc:
            self.notifications.error(exc.message)
            return False

        record = self._draft.with_id(self._selected_id)
        self._in_flight = True
        self._apply(FormEvent.SUBMIT)
        try:
            await self._call("update", self._gateway.update_employee(record))
        except StoreError as exc:
            self._apply(FormEvent.SAVE_FAILED)
            self.notifications.error(exc.message)
            return False
        finally:
            self._in_flight = False

        self._employees = [record if e.id == record.id else e for e in self._employees]
        self._apply(FormEvent.SAVE_SUCCEEDED)
        self.notifications.success(UPDATE_SUCCESS_MESSAGE)
        self.navigator.navigate(EMPLOYEE_LISTING_ROUTE)
        return True

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _apply(self, event: FormEvent) -> None:
        new_state = transition(self._state, event)
        logger.debug("Form %s --%s--> %s", self._state.value, event.value, new_state.value)
        self._state = new_state

    def _require_editable(self, action: str) -> None:
        if not FormStateMachine.can_edit(self._state):
            raise InvalidTransitionError(
                self._state.value, action, "form is not ready for edits"
            )

    def _seed(self, employee_id: str) -> bool:
        employee = next((e for e in self._employees if e.id == employee_id), None)
        if employee is None:
            logger.debug("Employee %s not in loaded list", employee_id)
            return False
        self._selected_id = employee.id
        self._draft = employee.to_draft()
        return True

    async def _call(self, operation: str, call: Awaitable[T]) -> T:
        if self.timeout is None:
            return await call
        try:
            return await asyncio.wait_for(call, self.timeout)
        except asyncio.TimeoutError:
            logger.error("Store %s timed out after %ss", operation, self.timeout)
            raise StoreError(
                f"Request timed out after {self.timeout:g} seconds", operation
            ) from None
