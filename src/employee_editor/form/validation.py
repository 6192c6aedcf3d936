"""Save-time validation rules for employee drafts.

Rules are evaluated in order and the first failing rule's message wins.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Callable

from employee_editor.errors import ValidationError
from employee_editor.form.types import Branch, EmployeeDraft, PaymentMethod

REQUIRED_FIELDS_MESSAGE = "Please fill in all required fields"
BANK_DETAILS_MESSAGE = "Bank details required for online payments"
HOURLY_WAGE_MESSAGE = "Hourly wage must be a non-negative number"
PAYMENT_METHOD_MESSAGE = "Payment method must be cash or online"
BRANCH_MESSAGE = "Branch must be labasa or suva"


@dataclass(frozen=True)
class ValidationRule:
    """A predicate that must hold for a draft, and the message when it does not."""

    name: str
    check: Callable[[EmployeeDraft], bool]
    message: str


def _filled(value: str) -> bool:
    return bool(value and value.strip())


def _has_required_fields(draft: EmployeeDraft) -> bool:
    return all(
        _filled(value)
        for value in (draft.name, draft.position, draft.hourly_wage, draft.fnpf_no)
    )


def _has_bank_details(draft: EmployeeDraft) -> bool:
    if draft.payment_method != PaymentMethod.ONLINE.value:
        return True
    return _filled(draft.bank_code) and _filled(draft.bank_account_number)


def _has_valid_wage(draft: EmployeeDraft) -> bool:
    try:
        wage = Decimal(draft.hourly_wage.strip())
    except InvalidOperation:
        return False
    return wage.is_finite() and wage >= 0


RULES: tuple[ValidationRule, ...] = (
    ValidationRule("required_fields", _has_required_fields, REQUIRED_FIELDS_MESSAGE),
    ValidationRule("bank_details", _has_bank_details, BANK_DETAILS_MESSAGE),
    ValidationRule("hourly_wage", _has_valid_wage, HOURLY_WAGE_MESSAGE),
    ValidationRule(
        "payment_method",
        lambda d: d.payment_method in {m.value for m in PaymentMethod},
        PAYMENT_METHOD_MESSAGE,
    ),
    ValidationRule(
        "branch",
        lambda d: d.branch in {b.value for b in Branch},
        BRANCH_MESSAGE,
    ),
)


def first_violation(
    draft: EmployeeDraft, rules: tuple[ValidationRule, ...] = RULES
) -> ValidationRule | None:
    """Return the first rule the draft breaks, or None."""
    for rule in rules:
        if not rule.check(draft):
            return rule
    return None


def validate_draft(
    draft: EmployeeDraft, rules: tuple[ValidationRule, ...] = RULES
) -> None:
    """Raise ValidationError with the first failing rule's message."""
    rule = first_violation(draft, rules)
    if rule is not None:
        raise ValidationError(rule.message)
