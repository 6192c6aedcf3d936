"""Pytest fixtures for employee editor tests."""

from __future__ import annotations

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from employee_editor.api.app import create_app
from employee_editor.config import Settings
from employee_editor.form import (
    EmployeeFormFlow,
    NotificationChannel,
    NotificationCollector,
    RecordingNavigator,
)
from employee_editor.form.types import Employee
from employee_editor.store import InMemoryGateway


def make_settings(**overrides) -> Settings:
    """Build settings without reading the environment."""
    values = dict(
        store_backend="memory",
        firestore_project_id="",
        firestore_database="(default)",
        firestore_api_key="",
        firestore_base_url="https://firestore.googleapis.com/v1",
        employee_collection="employees",
        database_url="sqlite+aiosqlite:///:memory:",
        request_timeout_seconds=1.0,
        host="127.0.0.1",
        port=8000,
        debug=False,
        log_level="INFO",
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def ana() -> Employee:
    """Cash-paid clerk at the Suva branch."""
    return Employee(
        id="1",
        name="Ana",
        position="Clerk",
        hourly_wage="10",
        fnpf_no="F1",
        bank_code="",
        bank_account_number="",
        payment_method="cash",
        branch="suva",
    )


@pytest.fixture
def ben() -> Employee:
    """Online-paid supervisor at the Labasa branch."""
    return Employee(
        id="2",
        name="Ben",
        position="Supervisor",
        hourly_wage="14.50",
        fnpf_no="F2",
        bank_code="BSP",
        bank_account_number="0012345",
        payment_method="online",
        branch="labasa",
    )


@pytest.fixture
def gateway(ana: Employee, ben: Employee) -> InMemoryGateway:
    """In-memory store seeded with Ana and Ben."""
    return InMemoryGateway([ana, ben])


@pytest.fixture
def collector() -> NotificationCollector:
    return NotificationCollector()


@pytest.fixture
def navigator() -> RecordingNavigator:
    return RecordingNavigator()


@pytest.fixture
def flow(
    gateway: InMemoryGateway,
    collector: NotificationCollector,
    navigator: RecordingNavigator,
) -> EmployeeFormFlow:
    """Form flow wired to the seeded store, not yet activated."""
    channel = NotificationChannel()
    channel.subscribe(collector)
    return EmployeeFormFlow(gateway, notifications=channel, navigator=navigator, timeout=1.0)


@pytest.fixture
async def client(gateway: InMemoryGateway) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for API testing."""
    app = create_app(gateway=gateway, settings=make_settings())
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
