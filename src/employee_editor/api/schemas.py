"""Pydantic schemas for API request/response models.

JSON bodies use the same camelCase keys as the record store documents.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from employee_editor.form.types import Employee, EmployeeDraft


class CamelModel(BaseModel):
    """Base schema with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# Employee schemas
# ============================================================================


class EmployeeFields(CamelModel):
    """Editable employee fields."""

    name: str = ""
    position: str = ""
    hourly_wage: str = ""
    fnpf_no: str = ""
    bank_code: str = ""
    bank_account_number: str = ""
    payment_method: str = "cash"
    branch: str = "labasa"

    @classmethod
    def from_draft(cls, draft: EmployeeDraft) -> "EmployeeFields":
        return cls(**draft.to_mapping())

    def to_draft(self) -> EmployeeDraft:
        return EmployeeDraft(**self.model_dump())


class EmployeeResponse(EmployeeFields):
    """Schema for an employee record."""

    id: str

    @classmethod
    def from_employee(cls, employee: Employee) -> "EmployeeResponse":
        return cls(**employee.to_mapping())


class EmployeeListResponse(CamelModel):
    """Schema for listing employees."""

    items: list[EmployeeResponse]
    total: int


class EmployeeCreate(EmployeeFields):
    """Schema for adding an employee."""


class EmployeeCreated(CamelModel):
    """Schema for the identifier assigned to a new employee."""

    id: str


# ============================================================================
# Form session schemas
# ============================================================================


class FormSessionCreate(CamelModel):
    """Schema for opening the edit screen, optionally for one employee."""

    employee_id: str | None = None


class SelectionUpdate(CamelModel):
    """Schema for choosing the employee to edit."""

    employee_id: str


class SelectOptionResponse(CamelModel):
    """Schema for one selector entry."""

    id: str
    name: str


class NotificationResponse(CamelModel):
    """Schema for a success/error message."""

    kind: str
    title: str
    text: str
    created_at: datetime


class FormSessionResponse(CamelModel):
    """Schema for the current state of an edit screen."""

    session_id: str
    state: str
    busy: bool
    selected_id: str | None = None
    draft: EmployeeFields
    options: list[SelectOptionResponse]
    notifications: list[NotificationResponse]
    redirect_to: str | None = None
    saved: bool | None = None


# ============================================================================
# Error schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Schema for error responses."""

    detail: str
    code: str | None = None
