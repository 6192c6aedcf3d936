"""SQLAlchemy ORM models."""

from employee_editor.models.base import Base, TimestampMixin
from employee_editor.models.employee import EmployeeDocument

__all__ = ["Base", "TimestampMixin", "EmployeeDocument"]
