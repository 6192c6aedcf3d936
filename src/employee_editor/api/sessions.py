"""In-process registry of open edit screens."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field

from employee_editor.errors import EditorError
from employee_editor.form import (
    EmployeeFormFlow,
    NotificationChannel,
    NotificationCollector,
    RecordingNavigator,
)
from employee_editor.store.base import RecordStoreGateway


class SessionNotFoundError(EditorError):
    """Raised when a form session id is unknown or already closed."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Form session '{session_id}' not found")


@dataclass
class FormSession:
    """One visit to the edit screen."""

    session_id: str
    flow: EmployeeFormFlow
    collector: NotificationCollector = field(default_factory=NotificationCollector)
    navigator: RecordingNavigator = field(default_factory=RecordingNavigator)


class FormSessionRegistry:
    """Creates, looks up and closes form sessions.

    Sessions live in memory; they do not survive a restart.
    """

    def __init__(self, gateway: RecordStoreGateway, timeout: float | None = 10.0):
        self._gateway = gateway
        self._timeout = timeout
        self._sessions: dict[str, FormSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    async def open(self, employee_id: str | None = None) -> FormSession:
        """Create a session and activate its flow."""
        channel = NotificationChannel()
        collector = NotificationCollector()
        channel.subscribe(collector)
        navigator = RecordingNavigator()
        flow = EmployeeFormFlow(
            self._gateway,
            notifications=channel,
            navigator=navigator,
            timeout=self._timeout,
        )
        session = FormSession(
            session_id=uuid.uuid4().hex,
            flow=flow,
            collector=collector,
            navigator=navigator,
        )
        self._sessions[session.session_id] = session
        await flow.activate(employee_id)
        return session

    def get(self, session_id: str) -> FormSession:
        try:
            return self._sessions[session_id]
        except KeyError:
            raise SessionNotFoundError(session_id) from None

    def close(self, session_id: str) -> None:
        if self._sessions.pop(session_id, None) is None:
            raise SessionNotFoundError(session_id)
