"""Employee record and draft types.

Records cross the store boundary as plain field mappings keyed by the wire
names below (``hourlyWage``, ``fnpfNo``, ...). Inside the package they are
dataclasses with snake_case attributes.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from enum import Enum
from typing import Any, Mapping

from employee_editor.errors import UnknownFieldError


class PaymentMethod(str, Enum):
    """How an employee's wages are paid out."""

    CASH = "cash"
    ONLINE = "online"


class Branch(str, Enum):
    """Branch an employee works at."""

    LABASA = "labasa"
    SUVA = "suva"


# attribute name -> wire key, in form order
WIRE_KEYS: dict[str, str] = {
    "name": "name",
    "position": "position",
    "hourly_wage": "hourlyWage",
    "fnpf_no": "fnpfNo",
    "bank_code": "bankCode",
    "bank_account_number": "bankAccountNumber",
    "payment_method": "paymentMethod",
    "branch": "branch",
}

ATTRIBUTE_NAMES: dict[str, str] = {wire: attr for attr, wire in WIRE_KEYS.items()}

ID_KEY = "id"


def resolve_field(field_name: str) -> str:
    """Map a wire key or attribute name to the draft attribute name."""
    if field_name in WIRE_KEYS:
        return field_name
    if field_name in ATTRIBUTE_NAMES:
        return ATTRIBUTE_NAMES[field_name]
    raise UnknownFieldError(field_name)


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


@dataclass
class EmployeeDraft:
    """Editable, not-yet-persisted copy of an employee record.

    Values are free text; nothing is checked until save time.
    """

    name: str = ""
    position: str = ""
    hourly_wage: str = ""
    fnpf_no: str = ""
    bank_code: str = ""
    bank_account_number: str = ""
    payment_method: str = PaymentMethod.CASH.value
    branch: str = Branch.LABASA.value

    def set(self, field_name: str, value: Any) -> None:
        """Set one field by attribute name or wire key."""
        setattr(self, resolve_field(field_name), _as_text(value))

    def copy(self) -> EmployeeDraft:
        return replace(self)

    def with_id(self, employee_id: str) -> Employee:
        """Merge the draft with an identifier into a full record."""
        return Employee(id=employee_id, **asdict(self))

    def to_mapping(self) -> dict[str, str]:
        """Wire-keyed field mapping (no identifier)."""
        return {WIRE_KEYS[f.name]: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> EmployeeDraft:
        """Build a draft from wire keys.

        Missing keys keep their defaults; keys that are not employee fields
        (the identifier, store bookkeeping) are ignored.
        """
        draft = cls()
        for key, value in data.items():
            if key in ATTRIBUTE_NAMES or key in WIRE_KEYS:
                draft.set(key, value)
        return draft


@dataclass(frozen=True)
class Employee:
    """Employee record as held by the record store."""

    id: str = ""
    name: str = ""
    position: str = ""
    hourly_wage: str = ""
    fnpf_no: str = ""
    bank_code: str = ""
    bank_account_number: str = ""
    payment_method: str = PaymentMethod.CASH.value
    branch: str = Branch.LABASA.value

    @property
    def is_persisted(self) -> bool:
        """True once the store has assigned an identifier."""
        return bool(self.id)

    def to_draft(self) -> EmployeeDraft:
        """Shallow copy of every field except the identifier."""
        data = asdict(self)
        data.pop(ID_KEY)
        return EmployeeDraft(**data)

    def to_mapping(self, include_id: bool = True) -> dict[str, str]:
        """Serialize to a wire-keyed field mapping."""
        data = self.to_draft().to_mapping()
        if include_id:
            return {ID_KEY: self.id, **data}
        return data

    @classmethod
    def from_mapping(
        cls, data: Mapping[str, Any], employee_id: str | None = None
    ) -> Employee:
        """Build a record from a wire-keyed mapping.

        Keys that are not employee fields are ignored. ``employee_id`` overrides any
        ``id`` key in the mapping (document stores keep the key outside the
        document body).
        """
        draft = EmployeeDraft.from_mapping(data)
        if employee_id is None:
            employee_id = _as_text(data.get(ID_KEY))
        return draft.with_id(employee_id)
