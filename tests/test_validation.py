"""Tests for draft validation rules."""

import pytest

from employee_editor.errors import ValidationError
from employee_editor.form.types import EmployeeDraft
from employee_editor.form.validation import (
    BANK_DETAILS_MESSAGE,
    BRANCH_MESSAGE,
    HOURLY_WAGE_MESSAGE,
    PAYMENT_METHOD_MESSAGE,
    REQUIRED_FIELDS_MESSAGE,
    first_violation,
    validate_draft,
)


def valid_draft(**overrides) -> EmployeeDraft:
    draft = EmployeeDraft(
        name="Ana",
        position="Clerk",
        hourly_wage="10",
        fnpf_no="F1",
        payment_method="cash",
        branch="suva",
    )
    for key, value in overrides.items():
        draft.set(key, value)
    return draft


class TestRequiredFields:
    """Name, position, hourly wage and FNPF number are always required."""

    @pytest.mark.parametrize("field", ["name", "position", "hourly_wage", "fnpf_no"])
    def test_missing_required_field(self, field):
        """Each blank required field fails with the same message."""
        with pytest.raises(ValidationError) as exc_info:
            validate_draft(valid_draft(**{field: ""}))
        assert exc_info.value.message == REQUIRED_FIELDS_MESSAGE

    def test_whitespace_counts_as_blank(self):
        """A whitespace-only name is not filled in."""
        assert first_violation(valid_draft(name="   ")).message == REQUIRED_FIELDS_MESSAGE

    def test_default_draft_fails(self):
        """A fresh draft is missing everything."""
        assert first_violation(EmployeeDraft()).message == REQUIRED_FIELDS_MESSAGE


class TestBankDetails:
    """Bank details are required only for online payment."""

    @pytest.mark.parametrize(
        "bank_code,account",
        [("", "0012345"), ("BSP", ""), ("", "")],
    )
    def test_online_requires_bank_details(self, bank_code, account):
        """Online payment with any bank field empty fails."""
        draft = valid_draft(
            payment_method="online", bank_code=bank_code, bank_account_number=account
        )
        with pytest.raises(ValidationError) as exc_info:
            validate_draft(draft)
        assert exc_info.value.message == BANK_DETAILS_MESSAGE

    def test_online_with_bank_details_passes(self):
        """Online payment with both bank fields passes."""
        validate_draft(
            valid_draft(payment_method="online", bank_code="BSP", bank_account_number="1")
        )

    def test_cash_ignores_bank_details(self):
        """Cash payment may leave bank fields empty."""
        assert first_violation(valid_draft(bank_code="", bank_account_number="")) is None

    def test_required_fields_win_over_bank_details(self):
        """First failing rule wins."""
        draft = valid_draft(name="", payment_method="online")
        assert first_violation(draft).message == REQUIRED_FIELDS_MESSAGE


class TestValueRules:
    """Wage and enum checks."""

    @pytest.mark.parametrize("wage", ["abc", "-1", "NaN", "Infinity"])
    def test_invalid_wage(self, wage):
        """Hourly wage must parse as a non-negative finite decimal."""
        assert first_violation(valid_draft(hourly_wage=wage)).message == HOURLY_WAGE_MESSAGE

    @pytest.mark.parametrize("wage", ["0", "10", "12.75", " 8.5 "])
    def test_valid_wage(self, wage):
        """Zero and decimals are accepted."""
        assert first_violation(valid_draft(hourly_wage=wage)) is None

    def test_unknown_payment_method(self):
        """Payment method must be cash or online."""
        draft = valid_draft(payment_method="cheque")
        assert first_violation(draft).message == PAYMENT_METHOD_MESSAGE

    def test_unknown_branch(self):
        """Branch must be labasa or suva."""
        assert first_violation(valid_draft(branch="nadi")).message == BRANCH_MESSAGE
