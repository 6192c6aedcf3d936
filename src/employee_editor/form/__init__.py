"""Employee form: draft types, validation, state machine and flow."""

from employee_editor.form.flow import (
    EMPLOYEE_LISTING_ROUTE,
    EmployeeFormFlow,
    Navigator,
    RecordingNavigator,
    SelectOption,
)
from employee_editor.form.notifications import (
    Notification,
    NotificationChannel,
    NotificationCollector,
    NotificationKind,
)
from employee_editor.form.state_machine import FormEvent, FormState, FormStateMachine, transition
from employee_editor.form.types import Branch, Employee, EmployeeDraft, PaymentMethod
from employee_editor.form.validation import RULES, ValidationRule, validate_draft

__all__ = [
    "EMPLOYEE_LISTING_ROUTE",
    "EmployeeFormFlow",
    "Navigator",
    "RecordingNavigator",
    "SelectOption",
    "Notification",
    "NotificationChannel",
    "NotificationCollector",
    "NotificationKind",
    "FormEvent",
    "FormState",
    "FormStateMachine",
    "transition",
    "Branch",
    "Employee",
    "EmployeeDraft",
    "PaymentMethod",
    "RULES",
    "ValidationRule",
    "validate_draft",
]
