"""SQL record store using SQLAlchemy async sessions."""

from __future__ import annotations

import logging

from sqlalchemy import select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from employee_editor.database import create_session_factory, create_tables, session_scope
from employee_editor.errors import StoreError
from employee_editor.form.types import Employee
from employee_editor.models import EmployeeDocument
from employee_editor.store.base import require_new, require_persisted

logger = logging.getLogger(__name__)


class SqlGateway:
    """Record store gateway backed by the ``employees`` table.

    Each call runs in its own session; update replaces every column of the
    row in one commit.
    """

    store_name = "sql"

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        engine: AsyncEngine | None = None,
    ):
        self._session_factory = session_factory
        self._engine = engine

    @classmethod
    def from_engine(cls, engine: AsyncEngine) -> SqlGateway:
        """Build a gateway that owns (and disposes) the engine."""
        return cls(create_session_factory(engine), engine=engine)

    async def list_employees(self) -> list[Employee]:
        try:
            async with session_scope(self._session_factory) as session:
                result = await session.execute(select(EmployeeDocument))
                return [row.to_employee() for row in result.scalars().all()]
        except SQLAlchemyError as exc:
            logger.exception("Listing employees failed")
            raise StoreError(str(exc), "list") from exc

    async def create_employee(self, employee: Employee) -> str:
        require_new(employee)
        row = EmployeeDocument()
        row.apply(employee.to_draft())
        try:
            async with session_scope(self._session_factory) as session:
                session.add(row)
                await session.flush()
                return row.id
        except SQLAlchemyError as exc:
            logger.exception("Creating employee failed")
            raise StoreError(str(exc), "create") from exc

    async def update_employee(self, employee: Employee) -> None:
        require_persisted(employee)
        try:
            async with session_scope(self._session_factory) as session:
                row = await session.get(EmployeeDocument, employee.id)
                if row is None:
                    raise StoreError(f"Employee {employee.id} not found", "update")
                row.apply(employee.to_draft())
        except SQLAlchemyError as exc:
            logger.exception("Updating employee %s failed", employee.id)
            raise StoreError(str(exc), "update") from exc

    async def ping(self) -> None:
        try:
            async with self._session_factory() as session:
                await session.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            logger.exception("Record store ping failed")
            raise StoreError(str(exc), "ping") from exc

    async def create_schema(self) -> None:
        """Create the employees table when the gateway owns its engine."""
        if self._engine is not None:
            await create_tables(self._engine)

    async def aclose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
