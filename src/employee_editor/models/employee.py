"""Employee document model."""

from __future__ import annotations

import uuid

from sqlalchemy import CheckConstraint, String
from sqlalchemy.orm import Mapped, mapped_column

from employee_editor.form.types import Employee, EmployeeDraft
from employee_editor.models.base import Base, TimestampMixin


def _new_id() -> str:
    return uuid.uuid4().hex


class EmployeeDocument(Base, TimestampMixin):
    """One employee record in the SQL-backed store."""

    __tablename__ = "employees"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String, nullable=False, default="")
    position: Mapped[str] = mapped_column(String, nullable=False, default="")
    # stored as text, as entered on the form
    hourly_wage: Mapped[str] = mapped_column(String, nullable=False, default="")
    fnpf_no: Mapped[str] = mapped_column(String, nullable=False, default="")
    bank_code: Mapped[str] = mapped_column(String, nullable=False, default="")
    bank_account_number: Mapped[str] = mapped_column(String, nullable=False, default="")
    payment_method: Mapped[str] = mapped_column(String, nullable=False, default="cash")
    branch: Mapped[str] = mapped_column(String, nullable=False, default="labasa")

    __table_args__ = (
        CheckConstraint(
            "payment_method IN ('cash', 'online')",
            name="employees_payment_method_check",
        ),
        CheckConstraint(
            "branch IN ('labasa', 'suva')",
            name="employees_branch_check",
        ),
    )

    def to_employee(self) -> Employee:
        """Convert row to a domain record."""
        return Employee(
            id=self.id,
            name=self.name,
            position=self.position,
            hourly_wage=self.hourly_wage,
            fnpf_no=self.fnpf_no,
            bank_code=self.bank_code,
            bank_account_number=self.bank_account_number,
            payment_method=self.payment_method,
            branch=self.branch,
        )

    def apply(self, draft: EmployeeDraft) -> None:
        """Overwrite every field from a draft."""
        self.name = draft.name
        self.position = draft.position
        self.hourly_wage = draft.hourly_wage
        self.fnpf_no = draft.fnpf_no
        self.bank_code = draft.bank_code
        self.bank_account_number = draft.bank_account_number
        self.payment_method = draft.payment_method
        self.branch = draft.branch
